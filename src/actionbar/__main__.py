"""CLI entry point for actionbar."""

from __future__ import annotations

import sys

if sys.version_info < (3, 12):  # noqa: UP036
    print("Error: actionbar requires Python 3.12 or higher.")
    print(f"You are running Python {sys.version_info.major}.{sys.version_info.minor}")
    sys.exit(1)

import json  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

import click  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from actionbar.config import ActionbarConfig, ConfigError  # noqa: E402
from actionbar.debug_log import (  # noqa: E402
    export_logs_to_file,
    iter_log_lines,
    setup_debug_logging,
)
from actionbar.dialog import ActionsDialog  # noqa: E402
from actionbar.matching import score_action  # noqa: E402
from actionbar.models import SectionHeader, SectionStyle  # noqa: E402
from actionbar.paths import get_config_path, get_debug_log_path  # noqa: E402
from actionbar.protocol import ActionsFileError, load_protocol_actions  # noqa: E402
from actionbar.shortcuts import format_shortcut_hint, parse_shortcut_keycaps  # noqa: E402
from actionbar.version import get_actionbar_version  # noqa: E402

_STYLE_CHOICES = [style.value for style in SectionStyle]


@dataclass(slots=True)
class CliState:
    config_path: Path | None

    def load_config(self) -> ActionbarConfig:
        try:
            return ActionbarConfig.load(self.config_path)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc


def _dump_debug_log() -> None:
    for line in iter_log_lines():
        click.echo(line, err=True)


def _export_debug_log() -> None:
    path = get_debug_log_path()
    count = export_logs_to_file(path)
    click.echo(f"Wrote {count} log entries to {path}", err=True)


@click.group()
@click.version_option(version=get_actionbar_version(), prog_name="actionbar")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file to use instead of the user config.toml",
)
@click.option("--debug", is_flag=True, help="Print captured debug logs to stderr on exit")
@click.option(
    "--export-log",
    is_flag=True,
    help="Write captured debug logs to debug.log in the data directory on exit",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, debug: bool, export_log: bool) -> None:
    """Rank, group and select contextual actions."""
    if debug or export_log:
        setup_debug_logging()
    if debug:
        ctx.call_on_close(_dump_debug_log)
    if export_log:
        ctx.call_on_close(_export_debug_log)
    ctx.obj = CliState(config_path=config_path)


def _row_payload(dialog: ActionsDialog, query_lower: str) -> list[dict[str, Any]]:
    payload: list[dict[str, Any]] = []
    for row_index, row in enumerate(dialog.rows):
        if isinstance(row, SectionHeader):
            payload.append({"row": row_index, "kind": "header", "label": row.label})
            continue
        action = dialog.actions[dialog.survivors[row.index]]
        payload.append(
            {
                "row": row_index,
                "kind": "item",
                "survivor": row.index,
                "id": action.id,
                "title": action.title,
                "section": action.section,
                "shortcut": action.shortcut,
                "score": score_action(action, query_lower),
                "selected": row_index == dialog.selected_index,
            }
        )
    return payload


def _print_table(dialog: ActionsDialog, rows: list[dict[str, Any]]) -> None:
    console = Console()
    if not rows:
        console.print(f"[dim]{dialog.empty_state_message()}[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Row", justify="right")
    table.add_column("")
    table.add_column("Action")
    table.add_column("Shortcut")
    table.add_column("Score", justify="right")
    for row in rows:
        if row["kind"] == "header":
            table.add_row(str(row["row"]), "", f"[bold]{row['label']}[/bold]", "", "")
            continue
        table.add_row(
            str(row["row"]),
            "›" if row["selected"] else "",
            row["title"],
            row["shortcut"] or "",
            str(row["score"]),
        )
    console.print(table)


@cli.command()
@click.argument("actions_file", type=click.Path(path_type=Path, dir_okay=False))
@click.option("--query", "-q", default="", help="Search text typed into the dialog")
@click.option(
    "--style",
    type=click.Choice(_STYLE_CHOICES),
    default=None,
    help="Section style (defaults to the dialog's configured style)",
)
@click.option("--dialog", "dialog_name", default=None, help="Dialog config name (e.g. ai, notes)")
@click.option("--select", "select_row", type=int, default=0, help="Requested cursor row")
@click.option("--json", "as_json", is_flag=True, help="Print rows as JSON")
@click.pass_obj
def rank(
    state: CliState,
    actions_file: Path,
    query: str,
    style: str | None,
    dialog_name: str | None,
    select_row: int,
    as_json: bool,
) -> None:
    """Rank and group the actions in ACTIONS_FILE (a JSON array) for a query."""
    config = state.load_config()
    try:
        items = load_protocol_actions(actions_file)
    except ActionsFileError as exc:
        raise click.ClickException(str(exc)) from exc

    dialog_config = config.dialog_config(dialog_name or config.general.default_dialog)
    if style is not None:
        dialog_config = dialog_config.model_copy(update={"section_style": SectionStyle(style)})

    dialog = ActionsDialog(config=dialog_config, page_jump=config.general.page_jump)
    dialog.set_protocol_actions(items)
    dialog.set_query(query)
    dialog.select_row(select_row)

    rows = _row_payload(dialog, query.lower())
    if as_json:
        document = {
            "query": query,
            "style": dialog_config.section_style.value,
            "selected": dialog.selected_index,
            "selected_id": dialog.selected_action_id(),
            "rows": rows,
        }
        click.echo(json.dumps(document, ensure_ascii=False, indent=2))
        return
    _print_table(dialog, rows)


@cli.command()
@click.argument("shortcuts", nargs=-1, required=True)
def hint(shortcuts: tuple[str, ...]) -> None:
    """Format raw shortcut specs such as cmd+shift+c."""
    for raw in shortcuts:
        formatted = format_shortcut_hint(raw)
        keycaps = " ".join(parse_shortcut_keycaps(formatted))
        click.echo(f"{raw}\t{formatted}\t{keycaps}")


@cli.command("config")
@click.option("--path", "show_path", is_flag=True, help="Only print the config file location")
@click.pass_obj
def config_command(state: CliState, show_path: bool) -> None:
    """Print the effective configuration as TOML."""
    if show_path:
        click.echo(str(state.config_path or get_config_path()))
        return
    click.echo(state.load_config().to_toml(), nl=False)


if __name__ == "__main__":
    cli()
