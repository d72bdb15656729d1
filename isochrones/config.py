"""Centralized configuration using Pydantic Settings.

Policy limits, engine access and logging are configured here and
handed explicitly to the services that need them. Limits are frozen:
they are loaded once at process start and never mutated.

Configuration can be overridden via environment variables:
- ISO_LIMITS_MAXIMUM_LOCATIONS=5
- ISO_LIMITS_MAXIMUM_RANGE_TIME_BY_PROFILE='{"foot-walking": 3600}'
- ISO_ENGINE_BASE_URL=http://valhalla:8002
- ISO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import CalculationMethod, RoutingProfileType, TravelRangeType


class IsochronesLimits(BaseSettings):
    """Service policy limits for isochrone requests.

    Environment variables prefixed with ISO_LIMITS_.

    Maximum ranges are in metres for distance and seconds for time.
    Per-profile tables override the defaults; the fast isochrone tables
    fall back to the general ones when not configured.
    """

    model_config = SettingsConfigDict(env_prefix="ISO_LIMITS_", frozen=True)

    maximum_locations: int = Field(2, ge=1)
    maximum_intervals: int = Field(10, ge=0)
    allow_compute_area: bool = True

    maximum_range_distance: int = Field(100000, gt=0)
    maximum_range_time: int = Field(18000, gt=0)
    maximum_range_distance_by_profile: Dict[str, int] = Field(default_factory=dict)
    maximum_range_time_by_profile: Dict[str, int] = Field(default_factory=dict)

    fastisochrones_maximum_range_distance: Optional[int] = Field(None, gt=0)
    fastisochrones_maximum_range_time: Optional[int] = Field(None, gt=0)
    fastisochrones_maximum_range_distance_by_profile: Dict[str, int] = Field(
        default_factory=dict
    )
    fastisochrones_maximum_range_time_by_profile: Dict[str, int] = Field(
        default_factory=dict
    )

    @field_validator(
        "maximum_range_distance_by_profile",
        "maximum_range_time_by_profile",
        "fastisochrones_maximum_range_distance_by_profile",
        "fastisochrones_maximum_range_time_by_profile",
    )
    @classmethod
    def _known_profiles(cls, value: Dict[str, int]) -> Dict[str, int]:
        for name in value:
            if RoutingProfileType.from_string(name) is RoutingProfileType.UNKNOWN:
                raise ValueError(f"unknown routing profile '{name}'")
        return {name.strip().lower(): limit for name, limit in value.items()}

    def maximum_range(
        self,
        profile_type: RoutingProfileType,
        calc_method: CalculationMethod,
        range_type: TravelRangeType,
    ) -> int:
        """Look up the largest range allowed for a traveller.

        Raises:
            ConfigurationError: If the profile cannot be keyed.
        """
        profile = RoutingProfileType(profile_type)
        if profile is RoutingProfileType.UNKNOWN:
            raise ConfigurationError(
                "No range limit for unknown profile",
                setting_name="maximum_range",
            )
        name = profile.profile_name

        if range_type is TravelRangeType.DISTANCE:
            general = self.maximum_range_distance_by_profile.get(
                name, self.maximum_range_distance
            )
            fast_by_profile = self.fastisochrones_maximum_range_distance_by_profile
            fast_default = self.fastisochrones_maximum_range_distance
        else:
            general = self.maximum_range_time_by_profile.get(
                name, self.maximum_range_time
            )
            fast_by_profile = self.fastisochrones_maximum_range_time_by_profile
            fast_default = self.fastisochrones_maximum_range_time

        if calc_method is CalculationMethod.FASTISOCHRONE:
            if name in fast_by_profile:
                return fast_by_profile[name]
            if fast_default is not None:
                return fast_default
        return general


class EngineConfig(BaseSettings):
    """Isochrone engine configuration.

    Environment variables prefixed with ISO_ENGINE_.
    """

    model_config = SettingsConfigDict(env_prefix="ISO_ENGINE_")

    base_url: str = "http://127.0.0.1:8002"
    timeout_seconds: int = Field(60, gt=0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ISO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ISO_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.limits.maximum_locations)
        print(config.engine.base_url)

    Environment variables prefixed with ISO_.
    """

    model_config = SettingsConfigDict(env_prefix="ISO_")

    limits: IsochronesLimits = Field(default_factory=IsochronesLimits)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
