"""Pydantic schema for configuration validation."""

import hashlib
import json
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from ..engine.fixed_point import MAX_WORD, SCALE, SECONDS_PER_YEAR


class ScheduledRate(BaseModel):
    """A rate change known at startup."""
    rate_per_year: int = Field(ge=0, description="Annual rate scaled by 1e18")
    start_time: int = Field(ge=0, description="Unix seconds when the rate takes effect")

    @field_validator("rate_per_year")
    @classmethod
    def validate_word(cls, v):
        """Rates must fit an unsigned 256-bit word."""
        if v > MAX_WORD:
            raise ValueError("rate_per_year exceeds 256 bits")
        return v


class Rates(BaseModel):
    """Yield rate parameters."""
    base_rate_per_year: int = Field(
        ge=0,
        description="Annual base rate scaled by 1e18 (0.15e18 = 15%)"
    )
    seconds_per_year: int = Field(
        gt=0, default=SECONDS_PER_YEAR,
        description="Divisor converting annual rates to per-second rates"
    )
    scale: int = Field(gt=0, default=SCALE, description="Fixed-point scale of rates and C(t)")
    schedule: List[ScheduledRate] = Field(
        default_factory=list,
        description="Initial rate changes, strictly increasing by start_time"
    )

    @field_validator("base_rate_per_year")
    @classmethod
    def validate_word(cls, v):
        """Rates must fit an unsigned 256-bit word."""
        if v > MAX_WORD:
            raise ValueError("base_rate_per_year exceeds 256 bits")
        return v

    @model_validator(mode='after')
    def validate_schedule_order(self):
        """Ensure scheduled start times strictly increase."""
        starts = [entry.start_time for entry in self.schedule]
        for prev, cur in zip(starts, starts[1:]):
            if cur <= prev:
                raise ValueError(
                    f"Schedule start times must strictly increase, got {prev} then {cur}"
                )
        return self


class Gates(BaseModel):
    """Initial feature gate state."""
    deposits_open: bool = Field(default=True, description="Accept deposits")
    claims_open: bool = Field(default=True, description="Accept claims")
    compound_open: bool = Field(default=True, description="Accept compounding")


class Logging(BaseModel):
    """Logging parameters."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root level for yieldpool loggers"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class PoolConfig(BaseModel):
    """Complete configuration for a yield pool."""
    rates: Rates
    gates: Gates = Field(default_factory=Gates)
    logging: Logging = Field(default_factory=Logging)

    def compute_hash(self) -> str:
        """Compute config hash for reproducibility."""
        config_dict = self.model_dump()
        config_str = json.dumps(config_dict, sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PoolConfig':
        """Create config from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
