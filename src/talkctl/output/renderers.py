"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from talkctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from talkctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "setup" and result.data.get("user_id"):
        return str(result.data["user_id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="talk.ok")
    op = Text(f"  {result.op}", style="talk.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="talk.key")
    if isinstance(value, (dict, list)):
        v = Text(json.dumps(value, separators=(",", ":")))
    elif key == "id" or key.endswith("_id"):
        v = Text(str(value), style="talk.id")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if isinstance(v, list):
            v = " -> ".join(str(item) for item in v)
        console.print(f"    {k}: {v}")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="talk.error")
    op = Text(f"  {result.op}", style="talk.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.detail.get("step"):
        console.print(Text(f"  failed during: {err.detail['step']}", style="dim"))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))
        _render_meta(console, result)


# ── Operation renderers ───────────────────────────────────────────────


def _render_setup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the progress report of a completed installation."""
    d = result.data
    console.print("Settings created.")
    if d.get("user_id"):
        console.print(Text.assemble("User ", (str(d["user_id"]), "talk.id"), " created."))
    if d.get("schema_stamped"):
        console.print(f"Schema stamped at {d.get('schema_revision')}.")
    else:
        for revision in d.get("migrations", []):
            console.print(f"Migration {revision} applied.")
    console.print(Text("Talk is now installed!", style="talk.ok"))
    lock = d.get("install_lock_env", "TALK_INSTALL_LOCK")
    console.print(
        Text(
            f"To prevent this command from running again, set {lock}=TRUE",
            style="talk.hint",
        )
    )
    if verbose:
        console.print()
        _field(console, "settings", d.get("settings", {}))
        _render_meta(console, result)


def _render_migrate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render ``migrate`` and ``migrate --check`` results."""
    _status_line(console, result)
    d = result.data
    if "pending" in d:
        _field(console, "current", d.get("current") or "none")
        _field(console, "head", d.get("head"))
        _field(console, "pending_count", d.get("pending_count", 0))
        for item in d["pending"]:
            console.print(
                Text.assemble(f"    {item['revision']}  ", (item["description"], "dim"))
            )
        return

    if d.get("message"):
        _field(console, "message", d["message"])
    if d.get("stamped"):
        console.print(f"  Schema stamped at {d.get('current')}.")
    else:
        for revision in d.get("applied", []):
            console.print(f"  Migration {revision} applied.")
    _field(console, "current", d.get("current"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "setup": _render_setup,
    "migrate": _render_migrate,
}
