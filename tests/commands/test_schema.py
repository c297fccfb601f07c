"""Tests for the schema and colors CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from folco.cli import cli
from folco.domain.types import FolderColor


@pytest.mark.usefixtures("_isolated_cwd")
class TestSchemaCommand:
    def test_prints_json_schema(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["schema"])
        assert result.exit_code == 0
        schema = json.loads(result.output)
        assert schema["title"] == "CustomizationProfile"
        assert set(schema["properties"]) == {"hsl_mutation", "decal", "overlay"}

    def test_json_envelope(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "schema"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "schema"
        assert "CustomizationProfile" in data["data"]["schema"]


@pytest.mark.usefixtures("_isolated_cwd")
class TestColorsCommand:
    def test_lists_all_colors(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "colors"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["count"] == len(FolderColor)
        names = {item["name"] for item in data["data"]["items"]}
        assert names == {color.value for color in FolderColor}

    def test_human_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["colors"])
        assert result.exit_code == 0
        assert "purple" in result.output
