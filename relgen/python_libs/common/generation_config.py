"""
Generation Configuration Management

This module provides the session-level configuration for relational data
generation: the global scale factor applied to every table, the CSV batch size,
the output directory and the Faker locale used by the value providers.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from relgen.python_libs.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100_000

# Environment variable -> config field
ENV_VARIABLES = {
    "RELGEN_SCALE_FACTOR": "scale_factor",
    "RELGEN_BATCH_SIZE": "batch_size",
    "RELGEN_OUTPUT_DIR": "output_dir",
    "RELGEN_LOCALE": "locale",
}


@dataclass(frozen=True)
class GenerationConfig:
    """Configuration for one generation session."""

    scale_factor: float = 1.0
    batch_size: int = DEFAULT_BATCH_SIZE
    output_dir: Path = field(default_factory=lambda: Path("."))
    locale: str = "en_US"

    def __post_init__(self):
        """Validate and normalise values after object creation."""
        scale = self.scale_factor
        if isinstance(scale, bool) or not isinstance(scale, (int, float)):
            raise ConfigurationError(
                f"scale_factor must be a number, got {scale!r}"
            )
        if math.isnan(scale) or math.isinf(scale) or scale < 0:
            raise ConfigurationError(
                f"scale_factor must be a finite non-negative number, got {scale!r}"
            )

        if isinstance(self.batch_size, bool) or not isinstance(self.batch_size, int):
            raise ConfigurationError(
                f"batch_size must be an integer, got {self.batch_size!r}"
            )
        if self.batch_size < 1:
            raise ConfigurationError(
                f"batch_size must be at least 1, got {self.batch_size}"
            )

        if not isinstance(self.output_dir, Path):
            try:
                output_dir = Path(self.output_dir)
            except TypeError:
                raise ConfigurationError(
                    f"output_dir must be a path, got {self.output_dir!r}"
                ) from None
            object.__setattr__(self, "output_dir", output_dir)

        if not isinstance(self.locale, str) or not self.locale.strip():
            raise ConfigurationError(
                f"locale must be a non-empty string, got {self.locale!r}"
            )

    def scaled_rows(self, num_rows: int) -> int:
        """Return the number of rows to generate for a configured row count."""
        return math.floor(num_rows * self.scale_factor)

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "GenerationConfig":
        """Create configuration from dictionary."""
        return cls().with_overrides(config_dict)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "GenerationConfig":
        """Create configuration from RELGEN_* environment variables."""
        environ = os.environ if environ is None else environ

        values: Dict[str, Any] = {}
        for env_name, field_name in ENV_VARIABLES.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            values[field_name] = _coerce(field_name, raw, source=env_name)
            logger.debug(f"Using {env_name}={raw!r} for {field_name}")

        return cls(**values)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "GenerationConfig":
        """Return a new configuration with runtime overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}"
            )

        values = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = _coerce(key, value, source=key)
            values[key] = value

        return replace(self, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "scale_factor": self.scale_factor,
            "batch_size": self.batch_size,
            "output_dir": str(self.output_dir),
            "locale": self.locale,
        }


def _coerce(field_name: str, raw: str, source: str) -> Any:
    """Convert a string setting to the type of its config field."""
    try:
        if field_name == "scale_factor":
            return _parse_scale(raw)
        if field_name == "batch_size":
            return int(raw.replace("_", ""))
    except ValueError:
        raise ConfigurationError(
            f"Invalid value for {source}: {raw!r}"
        ) from None

    if field_name == "output_dir":
        return Path(raw)
    return raw


def _parse_scale(raw: str) -> float:
    """Parse a scale factor written as a decimal or a fraction like '1/10'."""
    if "/" in raw:
        numerator, denominator = raw.split("/", 1)
        denominator_value = float(denominator)
        if denominator_value == 0:
            raise ValueError("zero denominator")
        return float(numerator) / denominator_value
    return float(raw)
