"""
Configuration management for chinook patrol planning.

This module provides:
- PatrolConfig: the persisted, user-editable settings document
- FilterRules: the parsed monument filter rules derived from it
- An additive deep-merge that upgrades outdated documents in place
- YAML load/save with fallback to defaults on invalid documents

Persisted documents keep unknown keys. Missing keys are filled with
defaults and the upgraded document is written back.
"""

import copy
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Tuple, Union

import yaml

from chinook_patrol.core.types import CargoDropRange, MonumentCategory, MonumentTier

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration document holds invalid values."""


@dataclass(frozen=True)
class FilterRules:
    """
    Monument filter rules.

    Unset fields constrain nothing. Force-allow patterns are checked before
    disallow patterns, category and tier.

    Attributes:
        disallowed_categories: Categories that are never visited
        disallowed_tiers: Tier bitmask; any overlap rejects a monument
        disallow_safe_zones: Whether safe zone monuments are rejected
        disallowed_name_partial: Case-insensitive substrings that reject
        disallowed_name_exact: Case-insensitive full names that reject
        force_allowed_name_partial: Case-insensitive substrings that accept
        force_allowed_name_exact: Case-insensitive full names that accept
    """
    disallowed_categories: FrozenSet[MonumentCategory] = frozenset()
    disallowed_tiers: MonumentTier = MonumentTier.NONE
    disallow_safe_zones: bool = False
    disallowed_name_partial: Tuple[str, ...] = ()
    disallowed_name_exact: Tuple[str, ...] = ()
    force_allowed_name_partial: Tuple[str, ...] = ()
    force_allowed_name_exact: Tuple[str, ...] = ()


@dataclass
class PatrolConfig:
    """
    Persisted plugin configuration.

    Attributes:
        min_crate_drops_per_chinook: Lower bound of crates per chinook
        max_crate_drops_per_chinook: Upper bound of crates per chinook
        disallow_safe_zone_monuments: Skip safe zone monuments
        disallowed_monument_types: Category names (e.g. "Cave")
        disallowed_monument_tiers: Tier names (e.g. "Tier0")
        disallowed_monument_prefabs_partial: Name substrings to reject
        disallowed_monument_prefabs_exact: Full names to reject
        force_allowed_monument_prefabs_partial: Name substrings to always accept
        force_allowed_monument_prefabs_exact: Full names to always accept

    Note:
        Crate counts are only randomized when both bounds exceed 1.

    Example:
        >>> config = PatrolConfig(min_crate_drops_per_chinook=2,
        ...                       max_crate_drops_per_chinook=4)
        >>> config.save_yaml("config/chinook_patrol.yaml")
    """
    min_crate_drops_per_chinook: int = 1
    max_crate_drops_per_chinook: int = 1
    disallow_safe_zone_monuments: bool = True
    disallowed_monument_types: List[str] = field(default_factory=lambda: [
        "Cave",
        "WaterWell",
    ])
    disallowed_monument_tiers: List[str] = field(default_factory=lambda: [
        "Tier0",
    ])
    disallowed_monument_prefabs_partial: List[str] = field(default_factory=list)
    disallowed_monument_prefabs_exact: List[str] = field(default_factory=list)
    force_allowed_monument_prefabs_partial: List[str] = field(default_factory=list)
    force_allowed_monument_prefabs_exact: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for name in ("min_crate_drops_per_chinook", "max_crate_drops_per_chinook"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{name} must be an integer >= 1, got {value!r}")

        if self.min_crate_drops_per_chinook > self.max_crate_drops_per_chinook:
            raise ConfigError(
                f"min_crate_drops_per_chinook ({self.min_crate_drops_per_chinook}) "
                f"exceeds max_crate_drops_per_chinook ({self.max_crate_drops_per_chinook})"
            )

        if not isinstance(self.disallow_safe_zone_monuments, bool):
            raise ConfigError(
                f"disallow_safe_zone_monuments must be a boolean, "
                f"got {self.disallow_safe_zone_monuments!r}"
            )

        for f in fields(self):
            if f.type == List[str]:
                value = getattr(self, f.name)
                # A null list in the document means "no entries"
                if value is None:
                    setattr(self, f.name, [])
                elif not isinstance(value, list):
                    raise ConfigError(f"{f.name} must be a list, got {value!r}")

    @property
    def crate_drop_range(self) -> CargoDropRange:
        return CargoDropRange(
            min=self.min_crate_drops_per_chinook,
            max=self.max_crate_drops_per_chinook,
        )

    def to_filter_rules(self) -> FilterRules:
        """
        Parse category and tier names into filter rules.

        Unknown names are logged and skipped; parsing never fails.

        Returns:
            FilterRules built from this configuration
        """
        categories = set()
        for type_name in self.disallowed_monument_types:
            category = MonumentCategory.parse(type_name)
            if category is None:
                logger.error(f"Invalid monument type: {type_name}")
            else:
                categories.add(category)

        tiers = MonumentTier.NONE
        for tier_name in self.disallowed_monument_tiers:
            tier = MonumentTier.parse(tier_name)
            if tier is None:
                logger.error(f"Invalid monument tier: {tier_name}")
            else:
                tiers |= tier

        return FilterRules(
            disallowed_categories=frozenset(categories),
            disallowed_tiers=tiers,
            disallow_safe_zones=self.disallow_safe_zone_monuments,
            disallowed_name_partial=tuple(self.disallowed_monument_prefabs_partial),
            disallowed_name_exact=tuple(self.disallowed_monument_prefabs_exact),
            force_allowed_name_partial=tuple(self.force_allowed_monument_prefabs_partial),
            force_allowed_name_exact=tuple(self.force_allowed_monument_prefabs_exact),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary suitable for YAML."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatrolConfig":
        """
        Build a configuration from a document, ignoring unknown keys.

        Raises:
            ConfigError: If the document is not a mapping or holds invalid values
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def save_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        write_document(path, self.to_dict())

    @classmethod
    def load_yaml(cls, path: Union[str, Path]) -> "PatrolConfig":
        """Load configuration from YAML file without upgrading it."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data)


def merge_missing_keys(defaults: Dict[str, Any], raw: Dict[str, Any]) -> bool:
    """
    Add keys present in defaults but missing from raw, recursively.

    Existing values are kept, unknown keys in raw are never removed. A raw
    value is only replaced when the default is a mapping and the raw value
    is not.

    Args:
        defaults: Document holding every expected key
        raw: Document loaded from disk, updated in place

    Returns:
        True if raw was modified
    """
    changed = False

    for key, default_value in defaults.items():
        if key not in raw:
            raw[key] = copy.deepcopy(default_value)
            changed = True
            continue

        if isinstance(default_value, dict):
            raw_value = raw[key]
            if not isinstance(raw_value, dict):
                raw[key] = copy.deepcopy(default_value)
                changed = True
            elif merge_missing_keys(default_value, raw_value):
                changed = True

    return changed


def write_document(path: Union[str, Path], data: Dict[str, Any]) -> None:
    """Write a configuration document to YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info(f"Configuration changes saved to {path.name}")


def load_config(path: Union[str, Path]) -> PatrolConfig:
    """
    Load, upgrade and validate the configuration file.

    A missing file is created with defaults. A document missing keys is
    completed with defaults and written back, keeping unknown keys. An
    unreadable or invalid document is reported and replaced by defaults
    in memory; the file on disk is left untouched.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Loaded configuration, or defaults on failure
    """
    path = Path(path)

    if not path.exists():
        logger.warning(f"Configuration file {path.name} not found; creating defaults")
        config = PatrolConfig()
        config.save_yaml(path)
        return config

    try:
        with open(path, 'r') as f:
            raw = yaml.safe_load(f)

        if raw is None:
            raise ConfigError("Configuration document is empty")

        config = PatrolConfig.from_dict(raw)

        if merge_missing_keys(config.to_dict(), raw):
            logger.warning("Configuration appears to be outdated; updating and saving")
            write_document(path, raw)

        return config
    except (OSError, yaml.YAMLError, ConfigError, TypeError) as e:
        logger.error(str(e))
        logger.warning(f"Configuration file {path.name} is invalid; using defaults")
        return PatrolConfig()
