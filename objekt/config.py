"""Configuration management for objekt.

Settings cover what the sampling engine itself leaves open:
- seed: seed for the default facade's generators
- fixtures: default parameters for the object randomizer
- pools: default pool overrides per domain (plain data, see RandomConfig.from_dict)

Config resolution order (highest priority first):
1. Programmatic (configure(ObjektSettings(...)))
2. Environment variables (OBJEKT_SEED, OBJEKT_RANDOMIZATION_DEPTH, etc.)
3. Config file (~/.config/objekt/config.json)
4. Hardcoded defaults

Invalid values are logged and ignored, never fatal.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .core.errors import ObjektError
from .core.models.random_config import RandomConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "objekt"
CONFIG_FILE = CONFIG_DIR / "config.json"


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class FixtureDefaults:
    """Defaults for the object randomizer (objekt.fixtures)."""

    collection_size_min: int = 1
    collection_size_max: int = 5
    string_length_min: int = 5
    string_length_max: int = 20
    randomization_depth: int = 3


@dataclass
class ObjektSettings:
    """Top-level objekt settings.

    Examples:
        # Package use - no files needed
        configure(ObjektSettings(seed=42))

        # Default pools from plain data
        settings = ObjektSettings(pools={"integer": {"between": [1, 6]}})
        settings.random_config().integer  # RangePool(lower=1, upper=6)
    """

    seed: int | None = None
    fixtures: FixtureDefaults = field(default_factory=FixtureDefaults)
    pools: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def load(cls) -> "ObjektSettings":
        """Load settings from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        settings = cls()

        # Layer 1: Config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(settings, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("OBJEKT_SEED"):
            try:
                settings.seed = int(val)
            except ValueError:
                logger.warning("Invalid OBJEKT_SEED=%r, ignoring", val)
        for env_var, attr in _FIXTURE_ENV_VARS.items():
            if val := os.environ.get(env_var):
                try:
                    setattr(settings.fixtures, attr, int(val))
                except ValueError:
                    logger.warning("Invalid %s=%r, ignoring", env_var, val)

        _check_fixtures(settings.fixtures)
        return settings

    def save(self) -> None:
        """Save settings to ~/.config/objekt/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "seed": self.seed,
            "fixtures": asdict(self.fixtures),
            "pools": self.pools,
        }

    def random_config(self) -> RandomConfig:
        """Build the RandomConfig described by `pools`.

        Invalid pool settings are logged and replaced by the defaults.
        """
        if not self.pools:
            return RandomConfig()
        try:
            return RandomConfig.from_dict(self.pools)
        except (ObjektError, ValidationError, ValueError, TypeError) as exc:
            logger.warning("Invalid pool settings, using defaults: %s", exc)
            return RandomConfig()


_FIXTURE_ENV_VARS = {
    "OBJEKT_COLLECTION_SIZE_MIN": "collection_size_min",
    "OBJEKT_COLLECTION_SIZE_MAX": "collection_size_max",
    "OBJEKT_STRING_LENGTH_MIN": "string_length_min",
    "OBJEKT_STRING_LENGTH_MAX": "string_length_max",
    "OBJEKT_RANDOMIZATION_DEPTH": "randomization_depth",
}

_FIXTURE_RANGES = (
    ("collection_size_min", "collection_size_max"),
    ("string_length_min", "string_length_max"),
)


def _check_fixtures(fixtures: FixtureDefaults) -> None:
    """Reset out-of-range fixture values to their defaults, with a warning."""
    defaults = FixtureDefaults()
    for low_attr, high_attr in _FIXTURE_RANGES:
        low, high = getattr(fixtures, low_attr), getattr(fixtures, high_attr)
        if not 0 <= low <= high:
            logger.warning(
                "Invalid fixtures range %s=%d, %s=%d (need 0 <= min <= max), "
                "using defaults",
                low_attr,
                low,
                high_attr,
                high,
            )
            setattr(fixtures, low_attr, getattr(defaults, low_attr))
            setattr(fixtures, high_attr, getattr(defaults, high_attr))
    if fixtures.randomization_depth < 0:
        logger.warning(
            "Invalid fixtures.randomization_depth=%d (need >= 0), using default",
            fixtures.randomization_depth,
        )
        fixtures.randomization_depth = defaults.randomization_depth


def _apply_dict(settings: ObjektSettings, data: dict) -> None:
    """Apply a dict of values onto ObjektSettings."""
    if "seed" in data:
        try:
            settings.seed = None if data["seed"] is None else int(data["seed"])
        except (TypeError, ValueError):
            logger.warning("Invalid seed %r in config file, ignoring", data["seed"])
    if "fixtures" in data and isinstance(data["fixtures"], dict):
        for k, v in data["fixtures"].items():
            if not hasattr(settings.fixtures, k):
                logger.warning("Unknown fixtures setting %r, ignoring", k)
                continue
            try:
                setattr(settings.fixtures, k, int(v))
            except (TypeError, ValueError):
                logger.warning("Invalid fixtures.%s=%r, ignoring", k, v)
    if "pools" in data and isinstance(data["pools"], dict):
        settings.pools = {
            k: v for k, v in data["pools"].items() if isinstance(v, dict)
        }


# =============================================================================
# Global config singleton
# =============================================================================

_config: ObjektSettings | None = None


def get_config() -> ObjektSettings:
    """Get the global ObjektSettings instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global settings programmatically.
    """
    global _config
    if _config is None:
        _config = ObjektSettings.load()
    return _config


def configure(settings: ObjektSettings) -> None:
    """Set the global ObjektSettings programmatically.

    The default facade reads settings once; call objekt.reset_default()
    afterwards to rebuild it.
    """
    global _config
    _config = settings


def reset_config() -> None:
    """Reset the global settings (forces reload on next get_config())."""
    global _config
    _config = None
