"""
Configuration for exprcalc.

Configuration is loaded from the exprcalc.toml [calc] section:

    [calc]
    max_depth = 256
    stdlib = true

    [calc.constants]
    tau = 6.283185307179586
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from exprcalc.core.ir.values import Value

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


class CalcConfig(BaseModel):
    """Compiler and executor settings."""

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=10_000,
        description="Deepest expression nesting accepted by compile and execute",
    )
    stdlib: bool = Field(default=True, description="Bind the built-in math library")
    constants: dict[str, float] = Field(
        default_factory=dict, description="Extra named numbers bound in the environment"
    )

    def environment(self) -> dict[str, Value]:
        """Base environment: built-ins (if enabled) overlaid with constants."""
        from exprcalc.core.ir.values import NumberValue
        from exprcalc.stdlib import default_environment

        env: dict[str, Value] = default_environment() if self.stdlib else {}
        for name, number in self.constants.items():
            env[name] = NumberValue(value=number)
        return env


def load_config(toml_path: Path) -> CalcConfig:
    """
    Load configuration from exprcalc.toml.

    Args:
        toml_path: Path to exprcalc.toml file

    Returns:
        CalcConfig with values from file or defaults
    """
    if not toml_path.exists():
        return CalcConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", toml_path, e)
        return CalcConfig()

    calc_section: dict[str, Any] = data.get("calc", {})
    if not calc_section:
        return CalcConfig()

    return CalcConfig.model_validate(calc_section)
