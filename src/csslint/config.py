"""Lint configuration: selector sets and the canonical property-group table."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """Raised when a configuration is invalid. Fatal to a single run."""


DEFAULT_STRUCTURAL_SELECTORS = frozenset({"header", "nav", "footer", "aside", "section", "button"})

DEFAULT_GLOBAL_EXCEPTIONS = frozenset({"body", "*", "html", "h1", "h2", "h3", "h4", "h5", "h6"})

# At-rules CSS itself requires before every other rule; exempt from font-face-order.
DEFAULT_FONT_FACE_EXEMPT = frozenset({"charset", "import", "namespace"})


@dataclass(frozen=True)
class PropertyGroup:
    """A named set of properties that belong together in a declaration block."""

    name: str
    properties: frozenset[str]


DEFAULT_PROPERTY_GROUPS: tuple[PropertyGroup, ...] = (
    PropertyGroup(
        "Box Model",
        frozenset({
            "border",
            "border-radius",
            "padding",
            "margin",
            "width",
            "height",
            "box-shadow",
            "box-sizing",
        }),
    ),
    PropertyGroup("Color/Background", frozenset({"background", "background-color", "color"})),
    PropertyGroup(
        "Typography",
        frozenset({
            "font",
            "font-family",
            "font-size",
            "font-weight",
            "text-transform",
            "line-height",
        }),
    ),
    PropertyGroup("Interaction", frozenset({"cursor", "transition", "pointer-events"})),
)

# Accepted spellings for each LintConfig field in mapping / JSON input.
_KEY_ALIASES = {
    "structural_selectors": "structural_selectors",
    "structuralSelectors": "structural_selectors",
    "global_exceptions": "global_exceptions",
    "globalExceptions": "global_exceptions",
    "property_groups": "property_groups",
    "propertyGroups": "property_groups",
    "disabled_rules": "disabled_rules",
    "disabledRules": "disabled_rules",
    "disable": "disabled_rules",
    "font_face_exempt": "font_face_exempt",
    "fontFaceExempt": "font_face_exempt",
}


@dataclass(frozen=True)
class LintConfig:
    """Immutable settings for one analysis run."""

    structural_selectors: frozenset[str] = DEFAULT_STRUCTURAL_SELECTORS
    global_exceptions: frozenset[str] = DEFAULT_GLOBAL_EXCEPTIONS
    property_groups: tuple[PropertyGroup, ...] = DEFAULT_PROPERTY_GROUPS
    disabled_rules: frozenset[str] = field(default_factory=frozenset)
    font_face_exempt: frozenset[str] = DEFAULT_FONT_FACE_EXEMPT

    def __post_init__(self) -> None:
        object.__setattr__(self, "structural_selectors", _lowered(self.structural_selectors))
        object.__setattr__(self, "global_exceptions", _lowered(self.global_exceptions))
        object.__setattr__(
            self, "font_face_exempt", frozenset(name.lower().lstrip("@") for name in self.font_face_exempt)
        )
        if not self.property_groups:
            raise ConfigError("property_groups must contain at least one group")
        seen_names: set[str] = set()
        owner: dict[str, str] = {}
        for group in self.property_groups:
            if not group.name:
                raise ConfigError("Every property group needs a name")
            if group.name in seen_names:
                raise ConfigError(f"Duplicate property group {group.name!r}")
            seen_names.add(group.name)
            if not group.properties:
                raise ConfigError(f"Property group {group.name!r} has no properties")
            for prop in group.properties:
                if prop in owner:
                    raise ConfigError(
                        f"Property {prop!r} appears in both {owner[prop]!r} and {group.name!r}"
                    )
                owner[prop] = group.name

    def group_index(self) -> dict[str, int]:
        """Map each lowercased property name to the index of its group."""
        return {
            prop.lower(): index
            for index, group in enumerate(self.property_groups)
            for prop in group.properties
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LintConfig:
        """Build a config from a mapping, filling unspecified fields with defaults."""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                raise ConfigError(f"Unknown configuration key {key!r}")
            if name == "property_groups":
                kwargs[name] = _groups(value)
            else:
                kwargs[name] = frozenset(_strings(key, value))
        return cls(**kwargs)


def _lowered(names: Iterable[str]) -> frozenset[str]:
    return frozenset(name.lower() for name in names)


def _strings(key: str, value: Any) -> list[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ConfigError(f"{key!r} must be a list of strings")
    items = list(value)
    for item in items:
        if not isinstance(item, str) or not item:
            raise ConfigError(f"{key!r} must contain only non-empty strings, got {item!r}")
    return items


def _groups(value: Any) -> tuple[PropertyGroup, ...]:
    """Parse ``[{"name": ..., "properties": [...]}, ...]`` into groups."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise ConfigError("'property_groups' must be a list of groups")
    groups: list[PropertyGroup] = []
    for entry in value:
        if isinstance(entry, PropertyGroup):
            groups.append(entry)
            continue
        if not isinstance(entry, Mapping) or set(entry) != {"name", "properties"}:
            raise ConfigError(
                f"Property group must have exactly 'name' and 'properties', got {entry!r}"
            )
        name = entry["name"]
        if not isinstance(name, str):
            raise ConfigError(f"Property group name must be a string, got {name!r}")
        props = _strings(f"property_groups[{name}]", entry["properties"])
        groups.append(PropertyGroup(name=name, properties=frozenset(p.lower() for p in props)))
    return tuple(groups)


def load_config(path: str | Path) -> LintConfig:
    """Load a JSON configuration file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    return LintConfig.from_dict(data)
