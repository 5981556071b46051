"""Deterministic CLI output helpers."""

from __future__ import annotations

import json
from typing import Iterable

SCHEMA_VERSION = "v1"


def emit_output(
    *,
    command: str,
    payload: dict,
    json_output: bool,
    output_sink=print,
    human_lines: Iterable[str] = (),
) -> None:
    """Emit deterministic CLI output.

    JSON output is a single line wrapped in a versioned envelope; human output
    is one sink call per line.
    """
    if json_output:
        envelope = {
            "schema_version": SCHEMA_VERSION,
            "command": command,
            "data": payload,
        }
        output_sink(
            json.dumps(
                envelope,
                sort_keys=True,
                separators=(",", ":"),
                ensure_ascii=True,
            )
        )
        return
    for line in human_lines:
        output_sink(line)


def human_line(command: str, **fields: object) -> str:
    """Format ``command: key=value ...`` with fields in keyword order.

    String values containing whitespace or ``=`` are quoted with ``repr``.
    """
    parts = []
    for key, value in fields.items():
        if isinstance(value, str) and (not value or any(ch.isspace() or ch == "=" for ch in value)):
            value = repr(value)
        parts.append(f"{key}={value}")
    return f"{command}: {' '.join(parts)}"
