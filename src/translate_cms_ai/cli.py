"""
CLI for translate-cms-ai.

Provides commands for translating CMS documents into other locales,
checking which translations exist, and reviewing machine-translated fields.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from translate_cms_ai.config import Settings, create_default_config, load_config
from translate_cms_ai.errors import ConfigurationError, TranslateCMSError
from translate_cms_ai.logging_config import setup_logging
from translate_cms_ai.orchestrator import EditingContext, LocaleProgress
from translate_cms_ai.provenance import FieldChangedEvent, ProvenanceTracker
from translate_cms_ai.publish import ContentStore, serialize_document

app = typer.Typer(
    name="translate-cms",
    help="Schema-aware multi-locale translation for CMS content.",
    add_completion=False,
)

console = Console()


def _display_config(settings: Settings, config_path: Path | None) -> None:
    """Display the configuration being used."""
    config_source = str(config_path) if config_path else "default (config.yaml or built-in)"

    config_table = Table(show_header=False, box=None, padding=(0, 2))
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Value", style="green")

    config_table.add_row("Config file", config_source)
    config_table.add_row("Project", settings.project.name)
    config_table.add_row("Content dir", str(settings.paths.content_dir))
    config_table.add_row("Schema file", str(settings.paths.schema_file))
    config_table.add_row("", "")
    config_table.add_row("[bold]Translation Settings[/bold]", "")
    config_table.add_row("  Provider", settings.translation.provider.value)
    config_table.add_row("  Model", settings.translation.model)
    config_table.add_row("  Locale batch size", str(settings.translation.locale_batch_size))
    config_table.add_row(
        "  API key", "configured" if settings.translation.api_key else "[red]not set[/red]"
    )
    config_table.add_row("", "")
    config_table.add_row("[bold]Publishing[/bold]", "")
    if settings.github.configured:
        config_table.add_row(
            "  GitHub", f"{settings.github.owner}/{settings.github.repo}@{settings.github.branch}"
        )
    else:
        config_table.add_row("  GitHub", "[yellow]not configured (local only)[/yellow]")

    console.print(
        Panel(config_table, title="[bold blue]translate-cms-ai[/bold blue]", border_style="blue")
    )


def get_settings(config_path: Path | None = None) -> Settings:
    """Load settings from config file or defaults, and set up logging."""
    try:
        if config_path and config_path.exists():
            settings = load_config(config_path)
        else:
            settings = load_config()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1) from None

    setup_logging(settings.logging)
    return settings


def get_store(settings: Settings) -> ContentStore:
    """Get content store instance."""
    return ContentStore(settings.paths.content_dir, settings.collections, settings.locale_table())


def _relative_path(store: ContentStore, collection: str, file: Path) -> str:
    """Path of a file inside its collection folder, or its bare name if outside."""
    try:
        return file.resolve().relative_to(store.folder(collection)).as_posix()
    except ValueError:
        return file.name


@app.command()
def init(
    output_path: Path = typer.Option(
        Path("config.yaml"),
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """Generate a default configuration file."""
    if output_path.exists():
        overwrite = typer.confirm(f"{output_path} already exists. Overwrite?")
        if not overwrite:
            raise typer.Abort()

    create_default_config(output_path)
    console.print(f"[green]Created config file: {output_path}[/green]")
    console.print("\nEdit the file and set your API keys, then run:")
    console.print("  translate-cms translate content/pages/home.mdx --collection page")


@app.command()
def locales(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List configured locales."""
    settings = get_settings(config)
    table_data = settings.locale_table()

    table = Table(title="Locales")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Native name")
    table.add_column("Default", justify="center")

    for locale in table_data:
        is_default = locale.code == table_data.default.code
        table.add_row(
            locale.code,
            locale.name,
            locale.native_name,
            "[green]yes[/green]" if is_default else "",
        )

    console.print(table)


@app.command()
def collections(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List schema collections and their translatable fields."""
    from translate_cms_ai.schema import SchemaIndex, should_translate

    settings = get_settings(config)
    try:
        schema = SchemaIndex.from_file(settings.paths.schema_file)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    table = Table(title="Collections")
    table.add_column("Name", style="cyan")
    table.add_column("Label")
    table.add_column("Folder")
    table.add_column("Fields", justify="right")
    table.add_column("Translatable", style="green")

    for name in schema.collection_names:
        collection = schema.collection(name)
        translatable = [f.name for f in collection.fields if should_translate(f)]
        table.add_row(
            name,
            collection.label or "",
            settings.collections.get(name, "[red]not mapped[/red]"),
            str(len(collection.fields)),
            ", ".join(translatable) or "[dim]-[/dim]",
        )

    console.print(table)


@app.command()
def translate(
    document_file: Path = typer.Argument(..., help="Document to translate"),
    collection: str = typer.Option(..., "--collection", "-C", help="Collection of the document"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
    source: str | None = typer.Option(
        None, "--source", "-s", help="Source locale (default: from document path)"
    ),
    target: list[str] | None = typer.Option(
        None, "--target", "-t", help="Target locale; repeat for several (default: all others)"
    ),
    publish: bool = typer.Option(
        True, "--publish/--no-publish", help="Write translated documents"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show translatable units without calling the service"
    ),
) -> None:
    """Translate a document into other locales."""
    settings = get_settings(config)
    store = get_store(settings)

    if not document_file.exists():
        console.print(f"[red]Document not found: {document_file}[/red]")
        raise typer.Exit(1)

    try:
        if source:
            store.locales.require(source)
        document = store.read_document(document_file)
        relative_path = _relative_path(store, collection, document_file)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    context = EditingContext(
        document=document,
        collection=collection,
        relative_path=relative_path,
        source_locale=source,
    )

    if dry_run:
        _show_units(settings, context)
        return

    _display_config(settings, config)

    from translate_cms_ai.pipeline import TranslationPipeline

    locale_table = settings.locale_table()
    targets = target or locale_table.targets_for(context.resolve_source(locale_table))

    async def run_pipeline() -> None:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(f"Translating {relative_path}", total=len(targets))

            def on_progress(info: LocaleProgress) -> None:
                status = "[green]done[/green]" if info.succeeded else "[red]failed[/red]"
                progress.update(
                    task,
                    completed=info.completed,
                    total=info.total,
                    description=f"{info.locale}: {status}",
                )

            try:
                pipeline = TranslationPipeline.from_settings(
                    settings, progress_callback=on_progress
                )
            except ConfigurationError as e:
                progress.stop()
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(1) from None

            try:
                outcome = await pipeline.run(context, targets, publish=publish)
            except TranslateCMSError as e:
                progress.stop()
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(1) from None
            finally:
                await pipeline.close()

        results = outcome.results
        table = Table(title=f"Translations of {relative_path}")
        table.add_column("Locale", style="cyan")
        table.add_column("Status")
        table.add_column("Details")

        for item in results.succeeded:
            table.add_row(
                item.locale, "[green]translated[/green]", f"{item.units_translated} units"
            )
        for locale in results.failed:
            table.add_row(locale, "[red]failed[/red]", results.errors.get(locale, ""))
        console.print(table)

        report = outcome.report
        if report is not None:
            for path in report.paths:
                console.print(f"[green]Saved {path}[/green]")
            for conflict in report.conflicts:
                console.print(f"[yellow]Skipped {conflict.locale}: {conflict.path} exists[/yellow]")
            for failure in report.failures:
                console.print(
                    f"[red]Failed to write {failure.locale}: {failure.path}: {failure.error}[/red]"
                )
            if report.committed:
                console.print(f"[green]Committed as {report.commit_sha}[/green]")
            elif report.error:
                console.print(f"[yellow]Remote commit failed: {report.error}[/yellow]")
        elif publish and not results.succeeded:
            console.print("[yellow]Nothing to publish[/yellow]")

        if results.failed or (report is not None and report.failures):
            raise typer.Exit(1)

    asyncio.run(run_pipeline())
    console.print("\n[bold green]Done![/bold green]")


def _show_units(settings: Settings, context: EditingContext) -> None:
    """Print the units that would be sent for translation."""
    from translate_cms_ai.schema import SchemaIndex
    from translate_cms_ai.walker import collect

    try:
        schema = SchemaIndex.from_file(settings.paths.schema_file)
        units = collect(context.document, schema.get_schema(context.collection))
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if not units:
        console.print("[yellow]No translatable fields[/yellow]")
        return

    table = Table(title=f"Translatable units ({len(units)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Path", style="cyan")
    table.add_column("Kind")
    table.add_column("Text")

    for unit in units:
        text = unit.text if len(unit.text) <= 60 else unit.text[:57] + "..."
        table.add_row(
            str(unit.index),
            unit.path,
            "rich-text" if unit.is_rich_text else "scalar",
            text,
        )

    console.print(table)


@app.command()
def check(
    paths: list[str] = typer.Argument(..., help="Document paths relative to the collection folder"),
    collection: str = typer.Option(..., "--collection", "-C", help="Collection of the documents"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Show which locales a document already exists in."""
    settings = get_settings(config)
    store = get_store(settings)
    locale_codes = settings.locale_table().codes

    checks = store.check_many([(collection, path) for path in paths])
    if not checks:
        console.print("[yellow]No valid documents to check[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Translations in {collection}")
    table.add_column("Document", style="cyan")
    for code in locale_codes:
        table.add_column(code, justify="center")

    for result in checks:
        existing = {info.locale for info in result.translations}
        table.add_row(
            result.name,
            *(
                "[green]✓[/green]" if code in existing else "[dim]-[/dim]"
                for code in locale_codes
            ),
        )

    console.print(table)


@app.command()
def review(
    document_file: Path = typer.Argument(..., help="Translated document to review"),
    field: str | None = typer.Option(
        None, "--field", "-f", help="Field path to edit, e.g. blocks[0].headline"
    ),
    value: str | None = typer.Option(None, "--value", "-v", help="New value for the field"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """List machine-translated fields, or edit one and mark it reviewed."""
    settings = get_settings(config)
    store = get_store(settings)
    tracker = ProvenanceTracker()

    if not document_file.exists():
        console.print(f"[red]Document not found: {document_file}[/red]")
        raise typer.Exit(1)

    try:
        document = store.read_document(document_file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if field is None:
        pending = tracker.pending_review(document)
        if not pending:
            console.print("[green]No machine-translated fields pending review[/green]")
            return
        console.print(
            Panel(
                "\n".join(pending),
                title=f"Pending review ({len(pending)})",
                border_style="yellow",
            )
        )
        return

    if value is None:
        console.print("[red]Specify --value together with --field[/red]")
        raise typer.Exit(1)

    try:
        edited = tracker.handle(document, FieldChangedEvent(path=field, value=value))
    except (KeyError, ValueError) as e:
        console.print(f"[red]Cannot edit {field}: {e}[/red]")
        raise typer.Exit(1) from None

    # Review edits update the document in place
    document_file.write_text(serialize_document(edited, document_file), encoding="utf-8")
    console.print(f"[green]Updated {field} in {document_file}[/green]")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
