"""
Prompt building for batched document translation.

The request payload is a JSON object mapping unit index to text. Instructions
explain the payload, list which entries are serialized rich text, and describe
how rich-text node trees are flattened into Markdown while translating.
"""

from __future__ import annotations

import json

RICH_TEXT_RULES = """Entries listed as RICH TEXT are JSON-serialized editor node trees,
not plain text.
For each of them, return the translated content as Markdown:
   - "h1" ... "h6" -> "#" ... "######" headings
   - "p" -> a paragraph separated by a blank line
   - "ul" / "ol" with "li" / "lic" children -> "- item" / "1. item" lists
   - "blockquote" -> lines prefixed with "> "
   - "code_block" -> a fenced code block using its "lang"; copy "value" unchanged
   - "a" -> [link text](url), keeping "url" unchanged
   - text nodes with "bold" -> **text**, "italic" -> _text_, "code" -> `text`
   - "break" -> a line break, "hr" -> "---", "img" -> ![alt](url)
   Translate only human-readable text. Never translate attribute names, URLs,
   image sources or code content."""


def build_system_prompt(
    source_name: str,
    target_name: str,
    rich_text_indices: list[int] | None = None,
) -> str:
    """
    Build the instructions for one batched translation request.

    Args:
        source_name: Source language name.
        target_name: Target language name.
        rich_text_indices: Indices of entries holding serialized rich text.

    Returns:
        System prompt string.
    """
    prompt = f"""You are a professional translator for website content.
You receive a JSON object whose keys are entry numbers and whose values are texts in {source_name}.
Translate every value from {source_name} to {target_name} while:

1. Returning a JSON object with exactly the same keys, each mapped to its translation
2. Never adding, removing, merging or renaming keys
3. Preserving Markdown formatting, line breaks, placeholders and special characters
4. Keeping URLs, file paths, code and brand names unchanged
5. Ensuring the translation reads naturally in {target_name}"""

    if rich_text_indices:
        listed = ", ".join(str(i) for i in rich_text_indices)
        prompt += f"\n\nRICH TEXT entries: {listed}\n{RICH_TEXT_RULES}"

    return prompt + "\n\nProvide only the JSON object without any explanations or notes."


def build_user_prompt(payload: dict[str, str]) -> str:
    """Serialize the request payload."""
    return json.dumps(payload, ensure_ascii=False, indent=2)
