"""
Scheduler parameters.

The weight vector and policy knobs are injected into the memory model rather
than hardcoded, so a deployment can swap them (or a later offline optimizer can
supply tuned ones) without touching the scheduling code.
"""

from __future__ import annotations

import math
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from srs_core.fsrs.constants import (
    DEFAULT_EASY_BONUS,
    DEFAULT_HARD_INTERVAL,
    DEFAULT_MAX_WRITE_ATTEMPTS,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_WEIGHTS,
    WEIGHT_COUNT,
)


class SchedulerParameters(BaseModel):
    """Fixed parameter set consumed by the memory model."""

    model_config = ConfigDict(frozen=True)

    w: tuple[float, ...] = Field(default=DEFAULT_WEIGHTS)
    request_retention: float = Field(default=DEFAULT_REQUEST_RETENTION, gt=0.0, lt=1.0)
    maximum_interval: int = Field(default=DEFAULT_MAXIMUM_INTERVAL, ge=1)
    easy_bonus: float = Field(default=DEFAULT_EASY_BONUS, gt=0.0)
    hard_interval: float = Field(default=DEFAULT_HARD_INTERVAL, gt=0.0)

    @field_validator("w")
    @classmethod
    def _check_weights(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if len(value) != WEIGHT_COUNT:
            raise ValueError(f"expected {WEIGHT_COUNT} weights, got {len(value)}")
        for i, weight in enumerate(value):
            if not math.isfinite(weight):
                raise ValueError(f"weight {i} is not finite: {weight}")
        return value


DEFAULT_PARAMETERS = SchedulerParameters()


def _parse_weights(raw: str) -> tuple[float, ...]:
    return tuple(float(part) for part in raw.split(",") if part.strip())


def load_parameters(env_file: Optional[str] = None) -> SchedulerParameters:
    """
    Build scheduler parameters from the environment.

    Reads SRS_WEIGHTS (comma-separated), SRS_REQUEST_RETENTION and
    SRS_MAXIMUM_INTERVAL; anything unset keeps its default.

    Args:
        env_file: Optional .env path (defaults to python-dotenv's lookup)

    Returns:
        Validated SchedulerParameters
    """
    load_dotenv(env_file)

    overrides = {}
    weights = os.getenv("SRS_WEIGHTS")
    if weights:
        overrides["w"] = _parse_weights(weights)

    retention = os.getenv("SRS_REQUEST_RETENTION")
    if retention:
        overrides["request_retention"] = float(retention)

    maximum_interval = os.getenv("SRS_MAXIMUM_INTERVAL")
    if maximum_interval:
        overrides["maximum_interval"] = int(maximum_interval)

    return SchedulerParameters(**overrides)


def get_max_write_attempts() -> int:
    """Number of compare-and-swap attempts the recorder makes per review."""
    load_dotenv()
    attempts = int(os.getenv("SRS_MAX_WRITE_ATTEMPTS", DEFAULT_MAX_WRITE_ATTEMPTS))
    if attempts < 1:
        raise ValueError("SRS_MAX_WRITE_ATTEMPTS must be at least 1")
    return attempts
