"""Serialize nested values to MATLAB-style assignment statements.

Every node becomes one or more lines addressed by its qualified name:

    cfg.alpha = 0.5;
    cfg.layers = [16 32 64];
    cfg.label = 'run-a';
    cfg.runs(1).seed = 1;
    cfg.runs(2).seed = 2;

Output is appended to a single list of lines and joined once.
Unsupported kinds, over-rank arrays and cycles abort the whole call.
A collection with mixed kinds is skipped with a warning.
"""

from __future__ import annotations

from typing import Any

from matlit.contracts.common import UnsupportedTypeError, WarningDetail
from matlit.contracts.responses import NodeMeta, SerializeResult
from matlit.engine.literals import (
    INDENT,
    field_name,
    format_scalar,
    format_text,
    indexed_name,
    matrix_rows,
)
from matlit.engine.values import (
    Kind,
    as_cell,
    as_matrix,
    check_acyclic,
    classify,
    numeric_subtype,
    text_rows,
)


def serialize(name: str, value: Any) -> str:
    """Return the literal text for ``value`` assigned to ``name``."""
    return serialize_value(name, value).text


def serialize_value(name: str, value: Any) -> SerializeResult:
    """Serialize ``value`` and collect non-fatal warnings alongside the text."""
    check_acyclic(value, name)
    lines: list[str] = []
    warnings: list[WarningDetail] = []
    _emit(name, value, lines, warnings)
    text = "".join(f"{line}\n" for line in lines)
    return SerializeResult(name=name, text=text, warnings=warnings, line_count=len(lines))


def _emit(name: str, value: Any, lines: list[str], warnings: list[WarningDetail]) -> None:
    kind = classify(value)
    if kind is Kind.RECORD:
        _emit_record(name, value, lines, warnings)
    elif kind is Kind.RECORD_ARRAY:
        if len(value) == 1:
            _emit_record(name, value[0], lines, warnings)
        else:
            for i, element in enumerate(value, start=1):
                _emit(indexed_name(name, i), element, lines, warnings)
    elif kind is Kind.NUMERIC:
        _emit_matrix(name, value, lines)
    elif kind is Kind.TEXT:
        _emit_text(name, value, lines)
    elif kind is Kind.COLLECTION:
        _emit_collection(name, value, lines, warnings)
    else:
        raise UnsupportedTypeError(
            f"Unsupported value of type {type(value).__name__} at {name}", name=name
        )


def _emit_record(name: str, record: Any, lines: list[str], warnings: list[WarningDetail]) -> None:
    for label, child in record.items():
        _emit(field_name(name, label), child, lines, warnings)


def _emit_matrix(name: str, value: Any, lines: list[str]) -> None:
    arr = as_matrix(value, name)
    if arr.size == 0:
        lines.append(f"{name} = [];")
        return
    rows = matrix_rows(arr)
    if arr.shape == (1, 1):
        lines.append(f"{name} = {rows[0]};")
    elif len(rows) == 1:
        lines.append(f"{name} = [{rows[0]}];")
    else:
        lines.append(f"{name} = [")
        lines.extend(f"{INDENT}{row}" for row in rows)
        lines.append("];")


def _emit_text(name: str, value: Any, lines: list[str]) -> None:
    rows = text_rows(value, name)
    if len(rows) <= 1:
        lines.append(f"{name} = {format_text(rows[0] if rows else '')};")
        return
    lines.append(f"{name} = ")
    lines.extend(f"{INDENT}{format_text(row)}" for row in rows)


def _emit_collection(name: str, value: Any, lines: list[str], warnings: list[WarningDetail]) -> None:
    cell = as_cell(value, name)
    if cell.size == 0:
        lines.append(f"{name} = {{}};")
        return

    kinds = [classify(entry) for entry in cell]
    if any(k is not kinds[0] for k in kinds):
        found = sorted({k.value for k in kinds})
        warnings.append(WarningDetail(
            code="WARN_MIXED_COLLECTION",
            message=f"Different kinds of elements in collection {name}: {', '.join(found)}",
            path=name,
        ))
        return

    rows = [[format_scalar(entry, name) for entry in row] for row in cell.rows]
    if cell.shape == (1, 1):
        lines.append(f"{name} = {{ {rows[0][0]} }};")
        return
    lines.append(f"{name} = {{")
    last = len(rows) - 1
    for i, row in enumerate(rows):
        sep = "," if i < last else ""
        lines.append(f"{INDENT}{', '.join(row)}{sep}")
    lines.append("};")


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------

def describe(name: str, value: Any) -> list[NodeMeta]:
    """List the classified nodes of ``value`` in emission order.

    Unsupported nodes are reported rather than raised.
    """
    check_acyclic(value, name)
    nodes: list[NodeMeta] = []
    _describe(name, value, nodes)
    return nodes


def _describe(name: str, value: Any, nodes: list[NodeMeta]) -> None:
    kind = classify(value)
    if kind is Kind.RECORD:
        nodes.append(NodeMeta(name=name, kind=kind.value, shape=[1, 1]))
        for label, child in value.items():
            _describe(field_name(name, label), child, nodes)
    elif kind is Kind.RECORD_ARRAY:
        if len(value) == 1:
            _describe(name, value[0], nodes)
            return
        nodes.append(NodeMeta(name=name, kind=kind.value, shape=[1, len(value)]))
        for i, element in enumerate(value, start=1):
            _describe(indexed_name(name, i), element, nodes)
    elif kind is Kind.NUMERIC:
        arr = as_matrix(value, name)
        nodes.append(NodeMeta(
            name=name, kind=kind.value, shape=list(arr.shape), subtype=numeric_subtype(arr),
        ))
    elif kind is Kind.TEXT:
        rows = text_rows(value, name)
        width = max((len(row) for row in rows), default=0)
        nodes.append(NodeMeta(name=name, kind=kind.value, shape=[len(rows), width]))
    elif kind is Kind.COLLECTION:
        cell = as_cell(value, name)
        entry_kinds = {classify(entry).value for entry in cell}
        if len(entry_kinds) == 1:
            subtype = entry_kinds.pop()
        else:
            subtype = "mixed" if entry_kinds else None
        nodes.append(NodeMeta(name=name, kind=kind.value, shape=list(cell.shape), subtype=subtype))
    else:
        nodes.append(NodeMeta(name=name, kind=kind.value, subtype=type(value).__name__))
