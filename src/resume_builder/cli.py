"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from resume_builder.config import load_config
from resume_builder.editor import EditorSession
from resume_builder.errors import PathError, ResumeValidationError
from resume_builder.models.resume import LIST_ITEM_MODELS
from resume_builder.pipeline.layout import Layout
from resume_builder.pipeline.suggestions import SuggestionKind
from resume_builder.storage.local_store import LocalStore
from resume_builder.templates.registry import default_registry
from resume_builder.themes import ALL_THEMES, BULLET_STYLES, DIVIDER_STYLES, LAYOUT_OPTIONS

app = typer.Typer(
    name="resume-builder",
    help="Structured resume editor with themes, layouts and print/RTF/DOCX export",
    no_args_is_help=True,
)
console = Console()

EXPORT_FORMATS = ("pdf", "html", "rtf", "docx")
STYLE_FIELDS = (
    "font_family", "font_size", "font_weight", "color",
    "icon", "custom_icon", "bullet_style", "divider_style",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _session() -> EditorSession:
    config = load_config()
    return EditorSession(store=LocalStore(config.storage.resolved_db_path), config=config)


def _parse_value(raw: str, as_text: bool):
    """Booleans, null, lists and objects are read as JSON; anything else stays text."""
    if as_text:
        return raw
    if raw in ("true", "false", "null") or raw[:1] in ("[", "{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw
    return raw


@app.command()
def show(
    path: str = typer.Argument("", help="Dotted path, e.g. experience.0 (default: whole document)"),
) -> None:
    """Show the document, or the value at a path, plus section visibility."""
    session = _session()
    value = session.get(path) if path else session.tree
    console.print_json(json.dumps(value, ensure_ascii=False))
    if path:
        return

    rendered = session.render()
    table = Table(title=f"Layout: {rendered.layout} / spacing: {rendered.spacing}")
    table.add_column("Section")
    table.add_column("Bucket")
    table.add_column("Template")
    for section in rendered.sections:
        table.add_row(section.title, section.bucket, section.template_id or "default")
    console.print(table)
    if not session.has_content():
        console.print("[dim]The resume is empty. Start with `set personal_info.full_name ...`.[/dim]")
    if not session.is_complete():
        console.print("[yellow]Full name and email are required before export.[/yellow]")


@app.command("set")
def set_value(
    path: str = typer.Argument(help="Dotted path, e.g. personal_info.email"),
    value: str = typer.Argument(help="New value (true/false/null and JSON lists/objects are parsed)"),
    text: bool = typer.Option(False, "--text", help="Store the value as text without parsing"),
) -> None:
    """Set one field of the document."""
    session = _session()
    try:
        session.set(path, _parse_value(value, text))
    except PathError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{path} updated[/green]")


@app.command()
def add(
    section: str = typer.Argument(help=f"One of: {', '.join(LIST_ITEM_MODELS)}"),
    fields: list[str] = typer.Argument(None, help="field=value pairs"),
) -> None:
    """Add a record to a list section."""
    if section not in LIST_ITEM_MODELS:
        console.print(f"[red]Unknown section: {section}[/red]")
        raise typer.Exit(1)
    values = {}
    for pair in fields or []:
        name, sep, raw = pair.partition("=")
        if not sep:
            console.print(f"[red]Expected field=value, got: {pair}[/red]")
            raise typer.Exit(1)
        values[name] = _parse_value(raw, as_text=False)

    session = _session()
    try:
        item_id = session.add_item(section, **values)
    except PathError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Added {section} record {item_id}[/green]")


@app.command()
def remove(
    section: str = typer.Argument(help="List path, e.g. experience"),
    index: int = typer.Argument(help="Zero-based position"),
) -> None:
    """Remove a record from a list section."""
    session = _session()
    before = session.get(section)
    session.remove_at(section, index)
    if session.get(section) == before:
        console.print(f"[yellow]Nothing to remove at {section}[{index}][/yellow]")
    else:
        console.print(f"[green]Removed {section}[{index}][/green]")


@app.command()
def move(
    section: str = typer.Argument(help="List path, e.g. experience"),
    from_index: int = typer.Argument(help="Current position"),
    to_index: int = typer.Argument(help="New position"),
) -> None:
    """Move a record within a list section."""
    session = _session()
    session.move(section, from_index, to_index)
    console.print(f"[green]{section}: {from_index} -> {to_index}[/green]")


@app.command()
def themes() -> None:
    """List available themes."""
    table = Table(title="Themes")
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Layout")
    table.add_column("Description")
    for theme in ALL_THEMES.values():
        table.add_row(theme.id, theme.name, theme.layout, theme.description)
    console.print(table)


@app.command()
def theme(theme_id: str = typer.Argument(help="Theme id (see `themes`)")) -> None:
    """Apply a theme's colors, layout, spacing and typography."""
    session = _session()
    try:
        options = session.apply_theme(theme_id)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(
        f"[green]Applied {theme_id}[/green] (layout {options.layout}, spacing {options.spacing})"
    )


@app.command()
def layout(
    name: str = typer.Argument(None, help=f"One of: {', '.join(l.value for l in Layout)}"),
) -> None:
    """Show or change the layout."""
    if name is None:
        for key, description in LAYOUT_OPTIONS.items():
            console.print(f"  [bold]{key}[/bold]: {description}")
        return
    session = _session()
    try:
        session.set_layout(name)
    except PathError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Layout set to {name}[/green]")


@app.command()
def template(
    section: str = typer.Argument(None, help="Section key, or 'complete' for a full-page template"),
    template_id: str = typer.Argument("default", help="Template id, or 'default'"),
) -> None:
    """List templates, or choose one for a section."""
    if section is None:
        for entry in default_registry:
            console.print(f"  [bold]{entry.id.value}[/bold] ({entry.category}): {entry.description}")
        return
    session = _session()
    session.set_template(section, template_id)
    if template_id != "default" and default_registry.resolve(section, session.template_config) is None:
        console.print(f"[yellow]{template_id} does not apply to {section}; built-in rendering is used[/yellow]")
    else:
        console.print(f"[green]{section} uses {template_id}[/green]")


@app.command()
def style(
    section: str = typer.Argument(help="Section key, e.g. experience"),
    field: str = typer.Argument(help=f"One of: {', '.join(STYLE_FIELDS)}"),
    value: str = typer.Argument("", help="New value; empty restores the theme default"),
) -> None:
    """Override one style attribute of a section."""
    if field not in STYLE_FIELDS:
        console.print(f"[red]Unknown style field: {field}[/red]")
        raise typer.Exit(1)
    if field == "bullet_style":
        value = BULLET_STYLES.get(value, value)
    if field == "divider_style" and value and value not in DIVIDER_STYLES:
        console.print(f"[yellow]Unknown divider {value}; 'simple' will be used[/yellow]")
    session = _session()
    session.set_section_style(section, field, value)
    console.print(f"[green]{section}.{field} = {value or '(theme default)'}[/green]")


@app.command()
def export(
    fmt: str = typer.Argument("pdf", help=f"One of: {', '.join(EXPORT_FORMATS)}"),
    output_dir: Path = typer.Option(None, "--output-dir", "-o", help="Output directory"),
) -> None:
    """Export the resume for printing or word processors."""
    if fmt not in EXPORT_FORMATS:
        console.print(f"[red]Unknown format: {fmt}[/red]")
        raise typer.Exit(1)
    session = _session()
    exporter = {
        "pdf": session.export_pdf,
        "html": session.export_html,
        "rtf": session.export_rtf,
        "docx": session.export_docx,
    }[fmt]
    try:
        with console.status(f"Exporting {fmt.upper()}..."):
            path = exporter(output_dir)
    except ResumeValidationError as e:
        console.print(Panel(str(e), title="Cannot export", border_style="red"))
        raise typer.Exit(1)
    console.print(f"[green]Saved: {path}[/green]")


@app.command()
def image(
    file: Path = typer.Argument(help="Image file (PNG, JPEG, WEBP, GIF)"),
    target: str = typer.Option(
        "personal_info.profile_image", "--target", help="Field to store the image in"
    ),
) -> None:
    """Attach a profile or signature image."""
    session = _session()
    error = asyncio.run(session.upload_profile_image(file, target))
    if error:
        console.print(f"[red]{error}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Image stored in {target}[/green]")


@app.command()
def suggest(
    kind: SuggestionKind = typer.Argument(help="What to generate"),
    target: str = typer.Argument(help="Field to fill, e.g. experience.0.description or skills"),
) -> None:
    """Generate text with Claude and write it into a field."""
    session = _session()
    with console.status("Generating suggestion..."):
        error = asyncio.run(session.request_suggestion(kind, target))
    if error:
        console.print(f"[red]{error}[/red]")
        raise typer.Exit(1)
    value = session.get(target)
    if isinstance(value, list):
        value = ", ".join(item.get("name", "") for item in value)
    console.print(Panel(str(value), title=f"{target}", border_style="blue"))


if __name__ == "__main__":
    app()
