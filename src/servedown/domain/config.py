from __future__ import annotations

"""
Configuration Domain Management.

Defines the typed behavior struct that governs directory traversal and index
resolution, the repository-level configuration wrapper, and loading of
repository configuration files from JSON. Behavior values are validated on
the way in so that nodes never operate on malformed settings.
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from servedown.domain.constants import (
    BEHAVIOR_KEYS,
    DEFAULT_ALLOW_INDEX,
    DEFAULT_CONFIG_CASCADE_WHITELIST,
    DEFAULT_FILE_EXTENSIONS,
    DEFAULT_HIDDEN_FILE_PREFIXES,
    DEFAULT_INDEX_NAME,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Behavior Model
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Behaviors:
    """
    Immutable set of directory-scoped resolution settings.

    Attributes:
        allow_index: Whether a directory may adopt an index file.
        hidden_file_prefixes: Name prefixes excluded from enumeration.
        index_name: Stem of the index file (without extension).
        file_extensions: Allowed content extensions, in index probing order.
        config_cascade_whitelist: Metadata keys pushed down to descendants.
    """
    allow_index: bool = DEFAULT_ALLOW_INDEX
    hidden_file_prefixes: Tuple[str, ...] = tuple(DEFAULT_HIDDEN_FILE_PREFIXES)
    index_name: str = DEFAULT_INDEX_NAME
    file_extensions: Tuple[str, ...] = tuple(DEFAULT_FILE_EXTENSIONS)
    config_cascade_whitelist: Tuple[str, ...] = tuple(DEFAULT_CONFIG_CASCADE_WHITELIST)

    @classmethod
    def from_mapping(
            cls,
            overrides: Optional[Mapping[str, Any]] = None,
            base: Optional["Behaviors"] = None,
    ) -> "Behaviors":
        """
        Merge a mapping of overrides over a base behavior set.

        Args:
            overrides: Partial behavior mapping; None means no overrides.
            base: Behaviors to merge over. Defaults to the documented defaults.

        Returns:
            Behaviors: The validated, merged behavior set.

        Raises:
            TypeError: If a key is unknown or a value has the wrong type.
        """
        merged = (base or cls()).to_dict()
        if overrides is None:
            return cls(**_normalize(merged))

        if not isinstance(overrides, Mapping):
            raise TypeError(
                f"Invalid behaviors type: expected mapping, received {type(overrides).__name__}."
            )

        for key, value in overrides.items():
            if key not in BEHAVIOR_KEYS:
                raise TypeError(f"Unknown behavior '{key}'.")
            merged[key] = value

        return cls(**_normalize(merged))

    def replace(self, **changes: Any) -> "Behaviors":
        """Return a copy with the given behaviors changed (validated)."""
        return Behaviors.from_mapping(changes, base=self)

    def to_dict(self) -> Dict[str, Any]:
        """Export the behaviors as a plain dictionary with list values."""
        return {
            "allow_index": self.allow_index,
            "hidden_file_prefixes": list(self.hidden_file_prefixes),
            "index_name": self.index_name,
            "file_extensions": list(self.file_extensions),
            "config_cascade_whitelist": list(self.config_cascade_whitelist),
        }


BehaviorsLike = Union[Behaviors, Mapping[str, Any], None]


def resolve_behaviors(behaviors: BehaviorsLike) -> Behaviors:
    """Accept either a Behaviors instance or a partial mapping."""
    if isinstance(behaviors, Behaviors):
        return behaviors
    return Behaviors.from_mapping(behaviors)


# -----------------------------------------------------------------------------
# Repository Model
# -----------------------------------------------------------------------------
@dataclass
class RepositoryConfig:
    """
    Repository-wide settings.

    Attributes:
        base_url: Prefix for breadcrumb URLs; empty means relative links.
        title: Explicit root title. None derives it from the root.
        behaviors: Behaviors applied to the root directory.
        extra: Arbitrary user keys with no built-in meaning.
    """
    base_url: str = ""
    title: Optional[str] = None
    behaviors: Behaviors = field(default_factory=Behaviors)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "RepositoryConfig":
        """
        Split a flat configuration mapping into its typed parts.

        Behavior keys go to `behaviors`, `base_url` and `title` to their own
        fields, and every other key lands in `extra`.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Invalid config type: expected mapping, received {type(data).__name__}."
            )

        behavior_overrides = {k: v for k, v in data.items() if k in BEHAVIOR_KEYS}
        extra = {
            k: v for k, v in data.items()
            if k not in BEHAVIOR_KEYS and k not in ("base_url", "title")
        }

        base_url = data.get("base_url") or ""
        if not isinstance(base_url, str):
            raise TypeError(f"Invalid field 'base_url': expected str, received {type(base_url).__name__}.")

        title = data.get("title")
        if title is not None and not isinstance(title, str):
            raise TypeError(f"Invalid field 'title': expected str, received {type(title).__name__}.")

        return cls(
            base_url=base_url,
            title=title,
            behaviors=Behaviors.from_mapping(behavior_overrides),
            extra=extra,
        )

    def with_changes(self, key: str, value: Any) -> "RepositoryConfig":
        """Return a copy of this config with a single key updated."""
        if key in BEHAVIOR_KEYS:
            return dataclasses.replace(self, behaviors=self.behaviors.replace(**{key: value}))
        if key in ("base_url", "title"):
            data = self.to_dict()
            data[key] = value
            return RepositoryConfig.from_mapping(data)
        extra = dict(self.extra)
        extra[key] = value
        return dataclasses.replace(self, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the config back into a single mapping."""
        data: Dict[str, Any] = {"base_url": self.base_url, "title": self.title}
        data.update(self.behaviors.to_dict())
        data.update(self.extra)
        return data


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_repository_config(path: str) -> RepositoryConfig:
    """
    Load repository configuration from a JSON file.

    Missing or corrupted files fall back to defaults. Schema violations in a
    well-formed file are reported as TypeError.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        RepositoryConfig: The loaded configuration or defaults.
    """
    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Returning defaults.")
        return RepositoryConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config from {path}: {e}. Using defaults.")
        return RepositoryConfig()

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file {path}. Using defaults.")
        return RepositoryConfig()

    return RepositoryConfig.from_mapping(data)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE VALIDATION
# -----------------------------------------------------------------------------
def _normalize(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate every behavior value and convert lists to tuples."""
    return {
        "allow_index": _as_bool(values["allow_index"], "allow_index"),
        "hidden_file_prefixes": _as_str_tuple(values["hidden_file_prefixes"], "hidden_file_prefixes"),
        "index_name": _as_str(values["index_name"], "index_name"),
        "file_extensions": _as_extensions(values["file_extensions"]),
        "config_cascade_whitelist": _as_str_tuple(
            values["config_cascade_whitelist"], "config_cascade_whitelist"
        ),
    }


def _as_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise TypeError(f"Invalid field '{field_name}': expected bool, received {type(value).__name__}.")


def _as_str(value: Any, field_name: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise TypeError(f"Invalid field '{field_name}': expected non-empty str, received {value!r}.")


def _as_str_tuple(value: Any, field_name: str) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)) and all(isinstance(x, str) for x in value):
        return tuple(value)
    raise TypeError(f"Invalid field '{field_name}': expected list of str, received {value!r}.")


def _as_extensions(value: Any) -> Tuple[str, ...]:
    """Extensions are stored without the leading dot."""
    exts: List[str] = []
    for ext in _as_str_tuple(value, "file_extensions"):
        ext = ext.strip().lstrip(".")
        if ext and ext not in exts:
            exts.append(ext)
    return tuple(exts)
