"""Tests for ``buildpick choose`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from buildpick.cli import main

if TYPE_CHECKING:
    from pathlib import Path

CHROME_64 = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/64.0.3282.140 Safari/537.36"
)
FIREFOX_40 = "Mozilla/5.0 (Windows NT 6.1; WOW64; rv:40.0) Gecko/20100101 Firefox/40.1"

_BUILDS = [
    {"name": "esm-bundled", "basePath": "/esm-bundled/", "browserCapabilities": ["es2018", "modules"]},
    {"name": "es6-bundled", "browserCapabilities": ["es2015"]},
    {"name": "es5-bundled"},
]


def _write_manifest(tmp_path: Path, builds: list[dict[str, object]] | None = None) -> Path:
    f = tmp_path / "polymer.json"
    f.write_text(json.dumps({"builds": _BUILDS if builds is None else builds}))
    return f


class TestChooseCommand:
    def test_choose_modern(self, tmp_path: Path) -> None:
        f = _write_manifest(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f), "-u", CHROME_64])

        assert result.exit_code == 0
        assert "esm-bundled" in result.output

    def test_choose_legacy_json(self, tmp_path: Path) -> None:
        f = _write_manifest(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f), "--user-agent", FIREFOX_40, "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["build"] == {"name": "es5-bundled", "base_path": ""}
        assert data["capabilities"] == []

    def test_no_match_exits_nonzero(self, tmp_path: Path) -> None:
        f = _write_manifest(tmp_path, builds=_BUILDS[:2])

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f), "-u", FIREFOX_40])

        assert result.exit_code == 1
        assert "No servable build" in result.output

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        f = tmp_path / "polymer.json"
        f.write_text("{broken")

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f), "-u", CHROME_64])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_user_agent_required(self, tmp_path: Path) -> None:
        f = _write_manifest(tmp_path)

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f)])

        assert result.exit_code != 0

    def test_manifest_from_config(self, tmp_path: Path) -> None:
        _write_manifest(tmp_path)
        config = tmp_path / "buildpick.yaml"
        config.write_text("manifest: polymer.json\n")

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), "choose", "-u", CHROME_64])

        assert result.exit_code == 0
        assert "esm-bundled" in result.output

    def test_manifest_from_url(self) -> None:
        client = AsyncMock()
        response = MagicMock()
        response.text = json.dumps({"builds": _BUILDS})
        response.raise_for_status = MagicMock()
        client.get = AsyncMock(return_value=response)
        client.aclose = AsyncMock()

        runner = CliRunner()
        with patch("buildpick.manifest.client.httpx.AsyncClient", return_value=client):
            result = runner.invoke(
                main,
                ["choose", "https://app.example.com/polymer.json", "-u", CHROME_64, "--json"],
            )

        assert result.exit_code == 0
        client.get.assert_awaited_once_with("polymer.json")
        assert json.loads(result.output)["build"]["name"] == "esm-bundled"

    def test_undecodable_manifest(self, tmp_path: Path) -> None:
        f = tmp_path / "polymer.json"
        f.write_bytes(b'{"builds": [{"name": "\xff"}]}')

        runner = CliRunner()
        result = runner.invoke(main, ["choose", str(f), "-u", CHROME_64])

        assert result.exit_code == 1
        assert "Error" in result.output
