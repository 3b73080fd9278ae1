"""Typer CLI application — dump, inspect, kinds, version."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

import matlit
from matlit.config import Settings
from matlit.contracts.common import (
    InputFormatError,
    SerializeError,
    Target,
)
from matlit.contracts.responses import DumpResult
from matlit.engine.dispatcher import (
    error_envelope,
    exit_code_for,
    print_response,
    serialize_error_envelope,
    success_envelope,
)
from matlit.engine.serializer import describe, serialize_value
from matlit.observe.events import EventEmitter, Timer

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

_MAIN_HELP = """\
Serialize nested data (JSON, YAML, NPY, Excel) into MATLAB-style assignment statements.

**Recommended workflow:**  inspect → dump

1. `matlit inspect -f cfg.json`  — see how every node is classified
2. `matlit dump -f cfg.json -n cfg --raw`  — print the literal text
3. `matlit dump -f cfg.json -n cfg --out cfg.m --backup`  — write it to a file

**Every command** (except `dump --raw`) returns a JSON `ResponseEnvelope`:
`{"ok": bool, "command": "...", "result": {...}, "errors": [...], "warnings": [...], "metrics": {"duration_ms": N}}`

**Exit codes:** 0=success, 10=validation, 20=input format, 40=cyclic value, 50=io, 70=unsupported, 90=internal

Defaults for `--name`, `--backup` and `--events` can be set in `matlit.yaml` in the working directory.
"""

_KINDS = [
    {"kind": "record", "python": "dict / Mapping", "emits": "name.field = ...; per field"},
    {"kind": "record_array", "python": "list of dicts", "emits": "name(i).field = ...; per element"},
    {"kind": "numeric", "python": "bool, int, float, numeric ndarray, nested lists of numbers", "emits": "name = [ ... ];"},
    {"kind": "text", "python": "str, unicode/bytes ndarray", "emits": "name = '...';"},
    {"kind": "collection", "python": "matlit.Cell, object ndarray, other lists", "emits": "name = { ... };"},
]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(matlit.__version__)
        raise typer.Exit()


app = typer.Typer(
    name="matlit",
    help=_MAIN_HELP,
    no_args_is_help=True,
    rich_markup_mode="markdown",
)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Print version and exit.", is_eager=True)
    ] = False,
) -> None:
    if version:
        _version_callback(True)


# Type aliases for common options
FilePath = Annotated[str, typer.Option("--file", "-f", help="Path to a .json/.yaml/.npy/.xlsx data file")]
NameOpt = Annotated[Optional[str], typer.Option("--name", "-n", help="Root variable name (default: config 'name', else the file stem)")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _emit(envelope, code=None):
    print_response(envelope)
    raise typer.Exit(code if code is not None else exit_code_for(envelope))


def _load_settings_or_emit(cmd: str) -> Settings:
    try:
        return Settings.load_from_dir(Path.cwd())
    except (ValueError, OSError) as e:
        env = error_envelope(cmd, "ERR_CONFIG_INVALID", str(e))
        _emit(env)


def _load_value_or_emit(file: str, cmd: str, target: Target) -> Any:
    """Load the input file, or emit an error envelope."""
    from matlit.io.loaders import load_value

    try:
        return load_value(file)
    except FileNotFoundError:
        env = error_envelope(cmd, "ERR_FILE_NOT_FOUND", f"File not found: {file}", target=target)
        _emit(env)
    except InputFormatError as e:
        env = error_envelope(cmd, "ERR_INPUT_INVALID", str(e), target=target)
        _emit(env)


def _resolve_name(name: str | None, settings: Settings, file: str) -> str:
    return name or settings.name or Path(file).stem


# ---------------------------------------------------------------------------
# matlit version
# ---------------------------------------------------------------------------
@app.command()
def version():
    """Print the matlit version.

    Example: `matlit version`
    """
    env = success_envelope("version", {"version": matlit.__version__})
    _emit(env)


# ---------------------------------------------------------------------------
# matlit kinds
# ---------------------------------------------------------------------------
@app.command()
def kinds():
    """List the value kinds matlit can serialize and how Python values map onto them.

    Example: `matlit kinds`
    """
    env = success_envelope("kinds", _KINDS)
    _emit(env)


# ---------------------------------------------------------------------------
# matlit dump
# ---------------------------------------------------------------------------
@app.command("dump")
def dump_cmd(
    file: FilePath,
    name: NameOpt = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write the literal text to this file instead of the envelope")] = None,
    backup: Annotated[Optional[bool], typer.Option("--backup/--no-backup", help="Back up an existing --out file before overwriting")] = None,
    raw: Annotated[bool, typer.Option("--raw", help="Print only the literal text (no JSON envelope)")] = False,
    events: Annotated[Optional[bool], typer.Option("--events/--no-events", help="Emit NDJSON lifecycle events on stderr")] = None,
):
    """Serialize a data file to MATLAB-style assignment statements.

    Records become `name.field = ...;` lines, lists of records become
    `name(i)...` blocks, numeric data becomes `[ ... ]` matrices, strings
    become quoted literals and mixed grids become `{ ... }` cell literals.
    A grid whose entries have different kinds is skipped with a
    `WARN_MIXED_COLLECTION` warning.

    Example: `matlit dump -f cfg.json -n cfg --raw`

    Example: `matlit dump -f cfg.yaml -n cfg --out cfg.m --backup`

    See also: `matlit inspect` to check classification first.
    """
    from matlit.io.fileops import backup as backup_file
    from matlit.io.fileops import write_literal

    settings = _load_settings_or_emit("dump")
    root = _resolve_name(name, settings, file)
    target = Target(file=file, name=root, out=out)
    emitter = EventEmitter("dump", enabled=settings.events if events is None else events)
    do_backup = settings.backup if backup is None else backup

    with Timer() as t:
        emitter.emit("start", {"file": file, "name": root})
        value = _load_value_or_emit(file, "dump", target)
        try:
            serialized = serialize_value(root, value)
        except SerializeError as e:
            emitter.emit("error", {"code": e.code, "name": e.name})
            env = serialize_error_envelope("dump", e, target=target)
            _emit(env)
            return
        for w in serialized.warnings:
            emitter.emit("warning", w.model_dump())

        result = DumpResult(name=root, line_count=serialized.line_count)
        if out:
            out_path = Path(out)
            try:
                if do_backup and out_path.exists():
                    result.backup_path = backup_file(out_path)
                write_literal(out_path, serialized.text)
            except OSError as e:
                env = error_envelope("dump", "ERR_IO_WRITE", str(e), target=target)
                _emit(env)
                return
            result.out = str(out_path)
        else:
            result.text = serialized.text
        emitter.emit("done", {"lines": serialized.line_count, "warnings": len(serialized.warnings)})

    if raw and not out:
        sys.stdout.write(serialized.text)
        for w in serialized.warnings:
            typer.echo(f"warning: {w.message}", err=True)
        raise typer.Exit(0)

    env = success_envelope(
        "dump",
        result.model_dump(),
        target=target,
        warnings=serialized.warnings,
        duration_ms=t.elapsed_ms,
    )
    _emit(env)


# ---------------------------------------------------------------------------
# matlit inspect
# ---------------------------------------------------------------------------
@app.command("inspect")
def inspect_cmd(
    file: FilePath,
    name: NameOpt = None,
):
    """Show how each node of a data file is classified.

    Lists every node in emission order with its qualified name, kind,
    2-D shape, and subtype (numeric element type, or the shared entry kind
    of a collection; `mixed` means the collection would be skipped).

    Example: `matlit inspect -f cfg.json -n cfg`
    """
    settings = _load_settings_or_emit("inspect")
    root = _resolve_name(name, settings, file)
    target = Target(file=file, name=root)

    with Timer() as t:
        value = _load_value_or_emit(file, "inspect", target)
        try:
            nodes = describe(root, value)
        except SerializeError as e:
            env = serialize_error_envelope("inspect", e, target=target)
            _emit(env)
            return

    env = success_envelope(
        "inspect",
        [n.model_dump() for n in nodes],
        target=target,
        duration_ms=t.elapsed_ms,
    )
    _emit(env)
