"""Lookup and index commands - resolve keys against a scanned file tree."""

from __future__ import annotations

from argparse import Namespace
import logging
from pathlib import Path

from unify.commands.output import emit_output, human_line
from unify.errors import IOFailure, UnresolvedKeys, ValidationError
from unify.infrastructure.index import AssetIndex
from unify.infrastructure.scanner import TreeScanner
from unify.settings import Settings

logger = logging.getLogger(__name__)


def build_index(args: Namespace, settings: Settings) -> tuple[Path, AssetIndex]:
    """Scan ``args.root`` into a fresh index."""
    root = Path(args.root)
    if not root.is_dir():
        raise IOFailure(f"Root directory does not exist: {root}")

    extensions = list(getattr(args, "ext", None) or settings.extensions)
    scanner = TreeScanner(
        [root],
        extensions=extensions,
        exclude_patterns=list(getattr(args, "exclude", None) or []),
        ignore_hidden=settings.ignore_hidden,
    )
    index = AssetIndex(fold_diacritics=settings.fold_diacritics)
    count = index.add_tree(root, scanner=scanner)
    logger.info("Indexed %d files (%d UIDs) under %s", count, len(index), root)
    return root, index


def run_lookup(
    args: Namespace,
    *,
    settings: Settings | None = None,
    output_sink=print,
) -> int:
    """Resolve every key in ``args.keys`` against the tree at ``args.root``."""
    settings = settings or Settings()
    keys = list(getattr(args, "keys", None) or [])
    if not keys:
        raise ValidationError("at least one key is required")
    json_output = getattr(args, "json", False)

    root, index = build_index(args, settings)

    items: list[dict] = []
    human_lines: list[str] = []
    unresolved = 0
    for key in keys:
        original = index.lookup(key)
        if original is None:
            unresolved += 1
        item: dict = {"key": key, "original": original}
        if settings.record_tags:
            item["tags"] = index.tags_for(key)
        items.append(item)
        human_lines.append(
            human_line("lookup", key=key, original=original if original is not None else "-")
        )

    payload = {
        "root": str(root),
        "indexed": len(index),
        "resolved": len(keys) - unresolved,
        "unresolved": unresolved,
        "items": items,
    }
    emit_output(
        command="lookup",
        payload=payload,
        json_output=json_output,
        output_sink=output_sink,
        human_lines=human_lines,
    )
    if unresolved:
        return UnresolvedKeys.exit_code
    return 0


def run_index(
    args: Namespace,
    *,
    settings: Settings | None = None,
    output_sink=print,
) -> int:
    """List every UID in the tree at ``args.root`` and report collisions."""
    settings = settings or Settings()
    json_output = getattr(args, "json", False)

    root, index = build_index(args, settings)
    entries = index.items()
    collisions = index.collisions()

    human_lines = [f"{uid}\t{original}" for uid, original in entries]
    for uid, originals in collisions.items():
        human_lines.append(human_line("collision", uid=uid, originals=len(originals)))
    human_lines.append(
        human_line("index", root=str(root), uids=len(entries), collisions=len(collisions))
    )

    payload = {
        "root": str(root),
        "entries": [{"uid": uid, "original": original} for uid, original in entries],
        "collisions": collisions,
    }
    emit_output(
        command="index",
        payload=payload,
        json_output=json_output,
        output_sink=output_sink,
        human_lines=human_lines,
    )
    return 0
