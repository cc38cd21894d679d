"""Configuration loader with Pydantic validation and defaults.

This module loads config/config.yaml, validates all keys, and provides
a typed Settings object with sane defaults if keys are missing.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsConfig(BaseSettings):
    """Force layout constants."""

    repulsion: float = 6000.0       # Pairwise push, divided by distance squared
    spring_k: float = 0.05          # Hooke constant along edges
    ideal_length: float = 100.0     # Target edge length in simulation units
    center_gravity: float = 0.002   # Very weak pull toward the viewport center
    damping: float = 0.8            # Velocity retained per frame
    max_velocity: float = 15.0      # Per-component speed limit
    min_distance_sq: float = 100.0  # Floor on squared distance in repulsion

    # Initial spiral placement
    spiral_base: float = 50.0
    spiral_step: float = 10.0
    spiral_angle: float = 0.5

    @field_validator("damping")
    @classmethod
    def validate_damping(cls, v: float) -> float:
        """Ensure damping is strictly inside (0, 1)."""
        if not 0.0 < v < 1.0:
            raise ValueError("damping must be strictly between 0.0 and 1.0")
        return v

    @field_validator("repulsion", "spring_k", "min_distance_sq", "max_velocity", "ideal_length")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @model_validator(mode="after")
    def validate_gravity(self) -> "PhysicsConfig":
        """Gravity has to stay an order of magnitude below the spring."""
        if self.center_gravity < 0 or self.center_gravity * 10 > self.spring_k:
            raise ValueError("center_gravity must be >= 0 and at least 10x smaller than spring_k")
        return self


class CameraConfig(BaseSettings):
    """Pan/zoom limits."""

    min_zoom: float = 0.3
    max_zoom: float = 3.0
    initial_zoom: float = 1.0
    zoom_step: float = 0.1          # Header zoom buttons
    wheel_factor: float = 1.1       # Mouse wheel zoom per notch
    fit_margin: float = 50.0

    @model_validator(mode="after")
    def validate_bounds(self) -> "CameraConfig":
        if not 0 < self.min_zoom < self.max_zoom:
            raise ValueError("zoom bounds must satisfy 0 < min_zoom < max_zoom")
        if not self.min_zoom <= self.initial_zoom <= self.max_zoom:
            raise ValueError("initial_zoom must lie within [min_zoom, max_zoom]")
        return self


class InteractionConfig(BaseSettings):
    """Pointer handling."""

    click_threshold: float = 4.0    # Max pointer travel (px) still counted as a click
    hit_padding: float = 4.0        # Extra px around node circles for hit testing


class RenderConfig(BaseSettings):
    """Drawing parameters (screen pixels unless noted)."""

    node_radius: float = 20.0
    selected_scale: float = 1.25
    glow_radius: float = 34.0
    label_zoom_threshold: float = 1.0   # Labels always visible above this zoom
    edge_label_offset: float = 5.0
    frame_interval_ms: int = 16
    grid_spacing: float = 40.0


class PathsConfig(BaseSettings):
    """Paths configuration."""

    logs: str = "logs"


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


class Settings(BaseSettings):
    """Main settings class with all configuration sections."""

    model_config = SettingsConfigDict(extra="ignore")

    physics: PhysicsConfig = Field(default_factory=PhysicsConfig)
    camera: CameraConfig = Field(default_factory=CameraConfig)
    interaction: InteractionConfig = Field(default_factory=InteractionConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        Args:
            config_path: Path to config.yaml file

        Returns:
            Settings instance with loaded configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML is invalid
            ValidationError: If configuration doesn't match schema
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**cls._merge_with_defaults(config_dict))

    @classmethod
    def _merge_with_defaults(cls, config_dict: dict) -> dict:
        """Merge config dict with default settings.

        This ensures missing keys get default values from Pydantic models.
        """
        defaults = cls().model_dump()

        def deep_merge(base: dict, override: dict) -> dict:
            """Recursively merge override into base."""
            result = base.copy()
            for key, value in override.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = deep_merge(result[key], value)
                else:
                    result[key] = value
            return result

        return deep_merge(defaults, config_dict)


def get_settings(config_path: str | Path | None = None) -> Settings:
    """Get settings instance, loading from config file or using defaults.

    Args:
        config_path: Optional path to config.yaml. If None, tries config/config.yaml
                     relative to project root, then falls back to defaults.

    Returns:
        Settings instance
    """
    if config_path is None:
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config" / "config.yaml"

    config_path = Path(config_path)
    if config_path.exists():
        return Settings.from_yaml(config_path)

    return Settings()
