"""Analyzer options for go-design-metrics."""

from __future__ import annotations

import multiprocessing
import os
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.exceptions import ConfigError
from .defaults import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_LOADER,
    ENV_BATCH_SIZE,
    ENV_LOADER,
    ENV_MAX_WORKERS,
    LOADER_NAMES,
    MAX_WORKERS_CAP,
    PATTERN_ALL,
)


def resolve_worker_count(configured: int | None = None) -> int:
    """Resolve the analyzer pool size.

    Args:
        configured: Explicit worker count, or None to derive it from the host

    Returns:
        Number of workers: the configured value or the CPU count, capped at
        MAX_WORKERS_CAP and never below 1
    """
    if configured is not None and configured > 0:
        workers = configured
    else:
        workers = multiprocessing.cpu_count()

    return max(1, min(workers, MAX_WORKERS_CAP))


class AnalyzerOptions(BaseModel):
    """Options for a single module analysis run."""

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(
        default=PATTERN_ALL, description="Package pattern ('./...', '.', or sub-path)"
    )
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE, description="Packages loaded per loader call"
    )
    max_workers: int | None = Field(
        default=None, description="Analyzer pool size (None = derive from CPU count)"
    )
    loader: str = Field(default=DEFAULT_LOADER, description="Package loader name")

    @field_validator("batch_size")
    @classmethod
    def _positive_batch_size(cls, value: int) -> int:
        if value <= 0:
            logger.debug(
                f"Non-positive batch size {value}, using default {DEFAULT_BATCH_SIZE}"
            )
            return DEFAULT_BATCH_SIZE
        return value

    @field_validator("max_workers")
    @classmethod
    def _bounded_workers(cls, value: int | None) -> int | None:
        if value is None or value <= 0:
            return None
        return min(value, MAX_WORKERS_CAP)

    @field_validator("loader")
    @classmethod
    def _known_loader(cls, value: str) -> str:
        if value not in LOADER_NAMES:
            raise ValueError(
                f"unknown loader '{value}' (expected one of: {', '.join(LOADER_NAMES)})"
            )
        return value

    @property
    def workers(self) -> int:
        """Effective analyzer pool size."""
        return resolve_worker_count(self.max_workers)

    @classmethod
    def from_env(cls, **overrides: Any) -> AnalyzerOptions:
        """Build options from environment variables, then explicit overrides.

        Overrides whose value is None are ignored so CLI flags that were not
        given fall through to the environment or the defaults.

        Raises:
            ConfigError: If an environment value or override is invalid
        """
        values: dict[str, Any] = {}

        env_workers = os.environ.get(ENV_MAX_WORKERS)
        if env_workers:
            values["max_workers"] = _parse_int(ENV_MAX_WORKERS, env_workers)

        env_batch = os.environ.get(ENV_BATCH_SIZE)
        if env_batch:
            values["batch_size"] = _parse_int(ENV_BATCH_SIZE, env_batch)

        env_loader = os.environ.get(ENV_LOADER)
        if env_loader:
            values["loader"] = env_loader

        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid analyzer options: {e}") from e


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(
            f"{name} must be an integer, got '{raw}'", context={"variable": name}
        ) from e
