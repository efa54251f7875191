"""
Tests for the avm1c Command-Line Tool
=====================================

Copyright (c) 2025-2026 AVM1 SDK Contributors
"""

import json

import pytest
from click.testing import CliRunner

from avm1_sdk.cli.avm1c import main
from avm1_sdk.cli.errors import ExitCode


def _write(tmp_path, actions, flow="Simple", name="block.json"):
    path = tmp_path / name
    path.write_text(json.dumps({
        "blocks": [{"label": "0", "actions": actions, "flow": {"type": flow}}]
    }))
    return path


CALL_ACTIONS = [
    {"action": "Push", "values": [
        {"type": "Sint32", "value": 1},
        {"type": "Sint32", "value": 2},
        {"type": "Sint32", "value": 2},
        {"type": "String", "value": "f"},
    ]},
    {"action": "CallFunction"},
]

DYNAMIC_ACTIONS = [
    {"action": "Play"},
    {"action": "Push", "values": [{"type": "Sint32", "value": 5}]},
    {"action": "GetVariable"},
    {"action": "Stop"},
]


class TestAvm1cCLI:
    """Tests for the avm1c CLI tool."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_cli_help(self):
        result = self.runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Translate an AVM1 block" in result.output

    def test_cli_version(self):
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_cli_listing(self, tmp_path):
        path = _write(tmp_path, CALL_ACTIONS)
        result = self.runner.invoke(main, [str(path)])

        assert result.exit_code == 0
        assert '%0 = getvar "f"' in result.output
        assert "%1 = call %0(2, 1)" in result.output
        assert "; Translation of block.json" in result.output

    def test_cli_show_actions(self, tmp_path):
        path = _write(tmp_path, CALL_ACTIONS)
        result = self.runner.invoke(main, [str(path), "--actions"])

        assert result.exit_code == 0
        assert "CallFunction" in result.output

    def test_cli_json(self, tmp_path):
        path = _write(tmp_path, CALL_ACTIONS)
        result = self.runner.invoke(main, [str(path), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [op["op"] for op in data["ops"]] == ["GetVar", "Call"]
        assert data["bailout"] is None

    def test_cli_output_file(self, tmp_path):
        path = _write(tmp_path, CALL_ACTIONS)
        output_file = tmp_path / "out.txt"
        result = self.runner.invoke(main, [str(path), "-o", str(output_file)])

        assert result.exit_code == 0
        assert "call %0(2, 1)" in output_file.read_text()

    def test_cli_bailout_is_reported(self, tmp_path):
        path = _write(tmp_path, DYNAMIC_ACTIONS)
        result = self.runner.invoke(main, [str(path)])

        assert result.exit_code == 0
        assert "%0 = play" in result.output
        assert "%1 =" not in result.output
        assert "; stopped at action #2 (GetVariable)" in result.output

    def test_cli_strict(self, tmp_path):
        path = _write(tmp_path, DYNAMIC_ACTIONS)
        result = self.runner.invoke(main, [str(path), "--strict"])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "too dynamic GetVar(5)" in result.output

    def test_cli_strict_from_env(self, tmp_path):
        path = _write(tmp_path, DYNAMIC_ACTIONS)
        result = self.runner.invoke(main, [str(path)], env={"AVM1_STRICT": "1"})

        assert result.exit_code == ExitCode.BUILD_ERROR

    def test_cli_malformed_block(self, tmp_path):
        path = _write(tmp_path, [{"action": "GetVariable"}])
        result = self.runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "pop from empty stack" in result.output

    def test_cli_bad_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{}")
        result = self.runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Translation error:" in result.output

    def test_cli_non_utf8_document(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"blocks": [\xff]}')
        result = self.runner.invoke(main, [str(path)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "invalid UTF-8" in result.output

    def test_cli_missing_file(self, tmp_path):
        result = self.runner.invoke(main, [str(tmp_path / "missing.json")])

        assert result.exit_code != 0


class TestTranslatorConfig:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        from avm1_sdk.config import TranslatorConfig

        monkeypatch.delenv("AVM1_STRICT", raising=False)
        monkeypatch.delenv("AVM1_WARN_EXTRA_BLOCKS", raising=False)
        config = TranslatorConfig.from_env()

        assert config.strict is False
        assert config.warn_extra_blocks is True

    @pytest.mark.parametrize("raw, expected", [
        ("1", True), ("true", True), ("YES", True),
        ("0", False), ("off", False), ("maybe", False),
    ])
    def test_strict_from_env(self, monkeypatch, raw, expected):
        from avm1_sdk.config import TranslatorConfig

        monkeypatch.setenv("AVM1_STRICT", raw)
        assert TranslatorConfig.from_env().strict is expected

    def test_warn_extra_blocks_from_env(self, monkeypatch):
        from avm1_sdk.config import TranslatorConfig

        monkeypatch.setenv("AVM1_WARN_EXTRA_BLOCKS", "false")
        assert TranslatorConfig.from_env().warn_extra_blocks is False
