"""
Response-shape contract for batched translation.

For a request of N units the service must answer with a JSON object holding
exactly the keys ``"0"`` .. ``"N-1"``, each mapped to a string. The contract is
a pydantic model generated per request: its JSON schema is handed to the
service as a structured-output constraint, and the same model validates the
reply.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, create_model

from translate_cms_ai.errors import ResponseContractError

CONTRACT_NAME = "translations"


class ResponseContract:
    """Required keys and validation for one batched request."""

    def __init__(self, size: int):
        """
        Args:
            size: Number of units in the request.
        """
        if size < 1:
            raise ValueError("A response contract needs at least one key")
        self.keys = [str(i) for i in range(size)]
        fields: dict[str, Any] = {
            f"entry_{key}": (StrictStr, Field(alias=key)) for key in self.keys
        }
        self.model: type[BaseModel] = create_model(
            "TranslationResponse",
            __config__=ConfigDict(extra="forbid"),
            **fields,
        )

    @property
    def json_schema(self) -> dict[str, Any]:
        """JSON schema requiring every key as a string and no extra keys."""
        return self.model.model_json_schema(by_alias=True)

    def parse(self, content: str) -> dict[int, str]:
        """
        Validate a service reply and key it by unit index.

        Raises:
            ResponseContractError: If the reply is not JSON, misses a key, has
                an extra key, or maps a key to a non-string.
        """
        try:
            instance = self.model.model_validate_json(content)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()[:10]
            )
            raise ResponseContractError(f"Response violates contract: {problems}") from e

        data = instance.model_dump(by_alias=True)
        return {int(key): data[key] for key in self.keys}
