"""
Settings for an aodvsim session.
"""

from math import isfinite
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from routing import RoutingMode


class SimulatorSettings(BaseModel):
    """
    Knobs for a RoutingSimulator.

    Attributes
    ----------
    default_mode:
        Routing mode used until the caller switches it. Accepts the enum,
        its value ("hop_count" / "weighted") or a ``weighted`` bool.
    default_weight:
        Weight given to a link when no weight is supplied.
    allow_negative_weights:
        Accept negative link weights. Weighted routing is undefined then.
    node_id_prefix:
        Prefix for auto-assigned node ids ("N" gives N1, N2, ...).
    invalidate_on_mutation:
        Drop the current route whenever the topology changes.
    log_capacity:
        Number of entries kept by the session event log.
    log_level:
        Level for the ``aodvsim`` loggers.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_mode: RoutingMode = RoutingMode.HOP_COUNT
    default_weight: float = 1.0
    allow_negative_weights: bool = False
    node_id_prefix: str = Field(default="N", min_length=1)
    invalidate_on_mutation: bool = True
    log_capacity: int = Field(default=500, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("default_mode", mode="before")
    @classmethod
    def _parse_mode(cls, v: Any) -> RoutingMode:
        return RoutingMode.parse(v)

    @field_validator("default_weight")
    @classmethod
    def _finite_weight(cls, v: float) -> float:
        if not isfinite(v):
            raise ValueError("default_weight must be finite")
        return v

    @model_validator(mode="after")
    def _weight_sign(self) -> "SimulatorSettings":
        if self.default_weight < 0 and not self.allow_negative_weights:
            raise ValueError("default_weight must be non-negative")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulatorSettings":
        """Build settings from a plain dict; unknown keys are rejected."""
        return cls.model_validate(dict(data))
