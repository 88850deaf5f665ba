"""Pydantic models for world generation parameters."""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.errors import ConfigError
from world.generation.settlements import DEFAULT_NAME_POOL


class WorldConfig(BaseModel):
    """Parameters for settlement and road network generation.

    This Pydantic model validates every field on instantiation. Use
    ``from_dict`` at API boundaries to get a ``ConfigError`` instead of a raw
    ``ValidationError``.
    """

    # Map bounds
    x_range: tuple[float, float] = Field(
        default=(0.0, 800.0), description="[min, max] horizontal bounds"
    )
    y_range: tuple[float, float] = Field(
        default=(0.0, 600.0), description="[min, max] vertical bounds"
    )

    # Settlements
    settlement_count: int = Field(default=100, ge=0, description="Number of settlements")
    name_pool: list[str] = Field(
        default_factory=lambda: list(DEFAULT_NAME_POOL),
        description="Candidate settlement names, drawn with replacement",
    )

    # Road layout
    hub_percent: float = Field(
        default=0.05, gt=0, le=1, description="Share of settlements promoted to hubs"
    )
    mesh_distance_threshold: float = Field(
        default=50.0, ge=0, description="Max distance between directly linked non-hubs"
    )

    # Generation seed
    seed: int | None = Field(default=None, description="Random seed used for generation")

    @field_validator("x_range", "y_range")
    @classmethod
    def validate_range(cls, v: tuple[float, float]) -> tuple[float, float]:
        """Validate that bounds are finite [min, max] pairs with min < max."""
        if not all(math.isfinite(x) for x in v):
            raise ValueError("Range bounds must be finite")
        if v[0] >= v[1]:
            raise ValueError("Range min must be < max")
        return v

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorldConfig":
        """Create a config from a plain mapping.

        Raises:
            ConfigError: If any field fails validation
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            # Flatten Pydantic errors into "field: message" pairs
            error_messages = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                error_messages.append(f"{field}: {error['msg']}")
            raise ConfigError(f"Invalid parameters: {'; '.join(error_messages)}") from e

    @classmethod
    def coerce(cls, config: "WorldConfig | Mapping[str, Any]") -> "WorldConfig":
        """Return ``config`` unchanged if already validated, else validate it."""
        if isinstance(config, cls):
            return config
        if isinstance(config, Mapping):
            return cls.from_dict(config)
        raise ConfigError(f"Unsupported config type: {type(config).__name__}")
