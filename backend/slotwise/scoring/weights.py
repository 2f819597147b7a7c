"""Scoring weights loader."""

import math
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from slotwise.exceptions import WeightsConfigError

_DEFAULT_PATH = Path(__file__).parent / "weights.yaml"

FACTOR_NAMES = (
    "preference_match",
    "load_balance",
    "time_of_day",
    "day_of_week",
    "past_success",
    "participant_satisfaction",
)


class FactorValues(BaseModel):
    """One value in [0, 1] per scoring factor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    preference_match: float = Field(ge=0.0, le=1.0)
    load_balance: float = Field(ge=0.0, le=1.0)
    time_of_day: float = Field(ge=0.0, le=1.0)
    day_of_week: float = Field(ge=0.0, le=1.0)
    past_success: float = Field(ge=0.0, le=1.0)
    participant_satisfaction: float = Field(ge=0.0, le=1.0)

    def value(self, factor: str) -> float:
        return getattr(self, factor)


class ScoringWeights(BaseModel):
    """Weights, neutral defaults and reason thresholds per factor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    weights: FactorValues
    defaults: FactorValues
    reason_thresholds: FactorValues

    @model_validator(mode="after")
    def check_weights_sum(self) -> "ScoringWeights":
        total = sum(self.weights.model_dump().values())
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"Weights sum to {total:.4f}, expected 1.0")
        return self


def load_weights(path: Path | None = None) -> ScoringWeights:
    """Load scoring weights from a YAML file.

    Args:
        path: Optional path to a weights YAML file.
              Defaults to weights.yaml in this directory.

    Returns:
        Parsed and validated ``ScoringWeights``.

    Raises:
        WeightsConfigError: If the file is missing, malformed, or its
            weights do not sum to 1.0.
    """
    config_path = path or _DEFAULT_PATH

    if not config_path.exists():
        raise WeightsConfigError(f"Weights file not found: {config_path}")

    try:
        with open(config_path) as f:
            return ScoringWeights.model_validate(yaml.safe_load(f))
    except yaml.YAMLError as exc:
        raise WeightsConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    except ValidationError as exc:
        raise WeightsConfigError(f"Invalid weights file {config_path}: {exc}") from exc


@lru_cache(maxsize=1)
def default_weights() -> ScoringWeights:
    """Return the packaged weights, parsed once per process."""
    return load_weights()
