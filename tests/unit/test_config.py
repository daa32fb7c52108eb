"""Tests for exprcalc.toml configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from exprcalc.core.config import DEFAULT_MAX_DEPTH, CalcConfig, load_config
from exprcalc.core.ir import FunctionValue, NumberValue


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "exprcalc.toml")
        assert config == CalcConfig()
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.stdlib is True

    def test_missing_section_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "exprcalc.toml"
        path.write_text('[other]\nkey = "value"\n')
        assert load_config(path) == CalcConfig()

    def test_reads_calc_section(self, tmp_path: Path) -> None:
        path = tmp_path / "exprcalc.toml"
        path.write_text(
            """
[calc]
max_depth = 32
stdlib = false

[calc.constants]
tau = 6.5
"""
        )
        config = load_config(path)
        assert config.max_depth == 32
        assert config.stdlib is False
        assert config.constants == {"tau": 6.5}

    def test_malformed_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "exprcalc.toml"
        path.write_text("[calc\nmax_depth = ")
        assert load_config(path) == CalcConfig()

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "exprcalc.toml"
        path.write_text("[calc]\nmax_depth = 0\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestEnvironment:
    def test_stdlib_and_constants(self) -> None:
        env = CalcConfig(constants={"tau": 6.0}).environment()
        assert isinstance(env["sin"], FunctionValue)
        assert env["tau"] == NumberValue(value=6.0)

    def test_constants_override_stdlib(self) -> None:
        env = CalcConfig(constants={"pi": 3.0}).environment()
        assert env["pi"] == NumberValue(value=3.0)

    def test_without_stdlib(self) -> None:
        assert CalcConfig(stdlib=False, constants={"k": 1.0}).environment() == {
            "k": NumberValue(value=1.0)
        }
