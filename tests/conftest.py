"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from unify.core.identity import tables


# Relative file paths of the sample asset tree, mirroring a game data layout
ASSET_TREE_FILES = (
    "local/file.txt",
    "data/game/icon.png",
    "songs/main_theme.ogg",
    "game.zip/json #win32/inventory.json",
    "game.zip/logos #win32/big.webp",
    "game.zip/logos #mobile/small.png",
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep user settings and environment overrides out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("UNIFY_FOLD_DIACRITICS", raising=False)
    monkeypatch.delenv("UNIFY_IGNORE_HIDDEN", raising=False)
    return home


@pytest.fixture
def asset_tree(tmp_path: Path) -> Path:
    """Build the sample asset tree and return its root directory."""
    root = tmp_path / "assets"
    for rel in ASSET_TREE_FILES:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("stub")
    return root


@pytest.fixture
def config_file(tmp_path: Path):
    """Return a writer for a JSON settings file."""

    def write(text: str) -> Path:
        path = tmp_path / "settings.json"
        path.write_text(text)
        return path

    return write


@pytest.fixture
def reset_tables():
    tables._reset_tables()
    yield
    tables._reset_tables()
