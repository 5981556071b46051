"""Normalize command - print the UID of each identifier."""

from __future__ import annotations

from argparse import Namespace

from unify.commands.output import emit_output
from unify.core.identity import normalize
from unify.errors import ValidationError
from unify.settings import Settings


def run_normalize(
    args: Namespace,
    *,
    settings: Settings | None = None,
    output_sink=print,
) -> int:
    """Normalize every identifier in ``args.identifiers``."""
    settings = settings or Settings()
    identifiers = list(getattr(args, "identifiers", None) or [])
    if not identifiers:
        raise ValidationError("at least one identifier is required")

    fold_diacritics = settings.fold_diacritics and not getattr(args, "no_diacritics", False)
    show_tags = getattr(args, "tags", False) and settings.record_tags
    json_output = getattr(args, "json", False)

    items: list[dict] = []
    human_lines: list[str] = []
    for identifier in identifiers:
        tags: list[str] = []
        uid = normalize(identifier, tags, fold_diacritics=fold_diacritics)
        item: dict = {"identifier": identifier, "uid": uid}
        if show_tags:
            item["tags"] = tags
        items.append(item)

        if show_tags:
            human_lines.append(f"{uid}\t{' '.join(tags)}".rstrip())
        else:
            human_lines.append(uid)

    payload = {
        "fold_diacritics": fold_diacritics,
        "count": len(items),
        "items": items,
    }
    emit_output(
        command="normalize",
        payload=payload,
        json_output=json_output,
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
