"""
exprcalc Standard Library

Functions and constants bound into the environment by default:
- math: sin, cos, tan, sqrt, abs, random, pi, e

The executor knows none of these names; they reach it only through the
environment, where caller bindings take precedence.
"""

from __future__ import annotations

from exprcalc.core.ir.values import Value
from exprcalc.stdlib.math import math_environment


def default_environment() -> dict[str, Value]:
    """Fresh environment dict holding every standard library binding."""
    return math_environment()


__all__ = ["default_environment", "math_environment"]
