"""Integration tests for CLI JSON and stable output."""

from __future__ import annotations

from argparse import Namespace
import json
from pathlib import Path

import pytest

from unify.cli import main
from unify.commands.lookup import run_index, run_lookup
from unify.commands.normalize import run_normalize
from unify.commands.output import human_line
from unify.errors import IOFailure, ValidationError
from unify.settings import Settings


def _capture_output() -> tuple[list[str], callable]:
    lines: list[str] = []

    def sink(value: str) -> None:
        lines.append(value)

    return lines, sink


def _json(lines: list[str]) -> dict:
    assert len(lines) == 1
    return json.loads(lines[0])


class TestNormalizeCommand:
    def test_human_output(self) -> None:
        lines, sink = _capture_output()
        code = main(["normalize", "folder\\asset", "mesh/Main Character"], output_sink=sink)
        assert code == 0
        assert lines == ["asset-folder", "character-main-mesh"]

    def test_human_output_with_tags(self) -> None:
        lines, sink = _capture_output()
        main(
            ["normalize", "--tags", "splash #mobile/logo #win32=always.png", "a/b"],
            output_sink=sink,
        )
        assert lines == ["logo-splash\t#mobile #win32=always", "a-b"]

    def test_json_envelope(self) -> None:
        lines, sink = _capture_output()
        main(["normalize", "--json", "--tags", "logos #win32/big.webp"], output_sink=sink)
        payload = _json(lines)
        assert payload["schema_version"] == "v1"
        assert payload["command"] == "normalize"
        assert payload["data"] == {
            "count": 1,
            "fold_diacritics": True,
            "items": [
                {"identifier": "logos #win32/big.webp", "uid": "big-logo", "tags": ["#win32"]}
            ],
        }

    def test_no_diacritics_flag(self) -> None:
        lines, sink = _capture_output()
        main(["normalize", "--no-diacritics", "wàlk"], output_sink=sink)
        assert lines == ["wàlk"]

    def test_config_disables_diacritics(self, config_file) -> None:
        path = config_file('{"fold_diacritics": false}')
        lines, sink = _capture_output()
        main(["--config", str(path), "normalize", "wàlk"], output_sink=sink)
        assert lines == ["wàlk"]

    def test_run_normalize_requires_identifiers(self) -> None:
        with pytest.raises(ValidationError):
            run_normalize(Namespace(identifiers=[]), settings=Settings())


class TestLookupCommand:
    def test_resolves_keys(self, asset_tree: Path) -> None:
        lines, sink = _capture_output()
        code = main(
            ["lookup", str(asset_tree), "songs/main-theme", "icon-game"],
            output_sink=sink,
        )
        assert code == 0
        assert lines == [
            "lookup: key=songs/main-theme original=./assets/songs/main_theme.ogg",
            "lookup: key=icon-game original=./assets/data/game/icon.png",
        ]

    def test_unresolved_key_exit_code(self, asset_tree: Path) -> None:
        lines, sink = _capture_output()
        code = main(
            ["lookup", "--json", str(asset_tree), "logos-big", "nothing/here"],
            output_sink=sink,
        )
        assert code == 4
        data = _json(lines)["data"]
        assert data["resolved"] == 1
        assert data["unresolved"] == 1
        assert data["items"][0] == {
            "key": "logos-big",
            "original": "./assets/game.zip/logos #win32/big.webp",
            "tags": ["#win32"],
        }
        assert data["items"][1]["original"] is None

    def test_extension_filter(self, asset_tree: Path) -> None:
        lines, sink = _capture_output()
        code = main(
            ["lookup", "--ext", "png", str(asset_tree), "local/file"],
            output_sink=sink,
        )
        assert code == 4
        assert lines == ["lookup: key=local/file original=-"]

    def test_missing_root(self, tmp_path: Path, capsys) -> None:
        lines, sink = _capture_output()
        code = main(["lookup", str(tmp_path / "missing"), "a"], output_sink=sink)
        assert code == 3
        assert lines == []
        assert "does not exist" in capsys.readouterr().err

    def test_run_lookup_raises_for_missing_root(self, tmp_path: Path) -> None:
        args = Namespace(root=tmp_path / "missing", keys=["a"], json=False)
        with pytest.raises(IOFailure):
            run_lookup(args, settings=Settings())


class TestIndexCommand:
    def test_lists_entries_and_collisions(self, tmp_path: Path) -> None:
        root = tmp_path / "library"
        for rel in ("a/music/theme.ogg", "b/music/theme.wav", "ui/logo.png"):
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("stub")

        lines, sink = _capture_output()
        code = run_index(Namespace(root=root, json=True), settings=Settings(), output_sink=sink)

        assert code == 0
        data = _json(lines)["data"]
        assert data["entries"] == [
            {"uid": "logo-ui", "original": "./library/ui/logo.png"},
            {"uid": "music-theme", "original": "./library/b/music/theme.wav"},
        ]
        assert data["collisions"] == {
            "music-theme": ["./library/a/music/theme.ogg", "./library/b/music/theme.wav"]
        }

    def test_human_summary(self, asset_tree: Path) -> None:
        lines, sink = _capture_output()
        main(["index", str(asset_tree)], output_sink=sink)
        assert len(lines) == 7
        assert "main-song-theme\t./assets/songs/main_theme.ogg" in lines
        assert lines[-1].endswith("uids=6 collisions=0")


class TestEntryPoint:
    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 1
        assert "usage: unify" in capsys.readouterr().out

    def test_invalid_config_exit_code(self, config_file, capsys) -> None:
        path = config_file('{"bogus": true}')
        assert main(["--config", str(path), "normalize", "a"]) == 2
        assert "Unknown settings: bogus" in capsys.readouterr().err

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert capsys.readouterr().out.startswith("unify ")


def test_human_line_quotes_values_with_spaces() -> None:
    assert human_line("lookup", key="a b", n=2) == "lookup: key='a b' n=2"
    assert human_line("lookup", key="") == "lookup: key=''"
