# -*- coding: utf-8 -*-
"""
Hypothesis profiles for the codec property tests.

Profiles:
- dev    (default locally)  100 examples, random
- ci     (CI env truthy)    300 examples, derandomized
- stress                    2000 examples, derandomized

HYPOTHESIS_PROFILE=dev|ci|stress overrides the automatic choice.
"""
from __future__ import annotations

import os
from typing import Final

from hypothesis import HealthCheck, settings

_SUPPRESS = (HealthCheck.too_slow, HealthCheck.data_too_large)

settings.register_profile("dev", max_examples=100, deadline=None, suppress_health_check=_SUPPRESS)
settings.register_profile(
    "ci", max_examples=300, deadline=None, suppress_health_check=_SUPPRESS, derandomize=True
)
settings.register_profile(
    "stress", max_examples=2000, deadline=None, suppress_health_check=_SUPPRESS, derandomize=True
)


def _env_truthy(name: str) -> bool:
    return (os.getenv(name) or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    return _active


__all__ = ["active_profile"]
