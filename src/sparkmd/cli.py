"""sparkmd command line."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sparkmd.config import get_settings
from sparkmd.parser import FileParser, ParsedFile

app = typer.Typer(name="sparkmd", help="Inspect the Spark command protocol in markdown documents.", add_completion=False)
_parser = FileParser()


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _dump(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _render_parsed(parsed: ParsedFile, console: Console) -> None:
    console.print(f"[bold]{escape(parsed.path)}[/bold]")
    if parsed.frontmatter:
        console.print(f"frontmatter: {escape(', '.join(sorted(parsed.frontmatter)))}")

    commands = Table(title="Commands", show_edge=False)
    for column in ("Line", "Status", "Command", "Mentions"):
        commands.add_column(column)
    for command in parsed.commands:
        mentions = " ".join(mention.raw for mention in command.mentions)
        commands.add_row(str(command.line), command.status.value, escape(command.text), escape(mentions))
    console.print(commands)

    chats = Table(title="Inline chats", show_edge=False)
    for column in ("Lines", "Status", "Id", "Message"):
        chats.add_column(column)
    for chat in parsed.inline_chats:
        message = chat.user_message if chat.user_message is not None else (chat.ai_response or "")
        chats.add_row(f"{chat.start_line}-{chat.end_line}", chat.status.value, chat.id, escape(message))
    console.print(chats)


@app.command("parse")
def parse_command(
    path: Path = typer.Argument(..., help="Markdown document to parse"),
    as_json: bool = typer.Option(False, "--json", help="Print the parse result as JSON"),
) -> None:
    """Show commands, inline chats and frontmatter detected in one document."""

    get_settings()
    try:
        parsed = _parser.parse_path(path)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Cannot read {path}: {exc}", err=True)
        raise typer.Exit(1) from exc

    if as_json:
        _dump(asdict(parsed))
        return
    _render_parsed(parsed, _console())


@app.command("scan")
def scan_command(
    vault: Path = typer.Argument(..., help="Vault folder to scan"),
    as_json: bool = typer.Option(False, "--json", help="Print pending work as JSON"),
) -> None:
    """List documents with pending commands or inline chats."""

    settings = get_settings(vault)
    if not vault.is_dir():
        typer.echo(f"Not a directory: {vault}", err=True)
        raise typer.Exit(1)

    rows: list[dict[str, object]] = []
    for path in sorted(vault.rglob("*.md")):
        relative = path.relative_to(vault)
        if relative.parts and relative.parts[0] == settings.state_dir:
            continue
        try:
            parsed = _parser.parse_path(path)
        except (OSError, UnicodeDecodeError):
            continue
        commands = _parser.pending_commands(parsed)
        chats = _parser.pending_inline_chats(parsed)
        if commands or chats:
            rows.append({"path": relative.as_posix(), "commands": len(commands), "inline_chats": len(chats)})

    if as_json:
        _dump(rows)
        return
    table = Table(title="Pending work", show_edge=False)
    for column in ("File", "Commands", "Inline chats"):
        table.add_column(column)
    for row in rows:
        table.add_row(escape(str(row["path"])), str(row["commands"]), str(row["inline_chats"]))
    _console().print(table)


def main() -> None:
    app()
