"""
Hierarchy configuration for the location cascade application.

This module defines the five administrative levels of Rwanda and the static
metadata (field names, labels, messages) the controller and the presentation
layer need for each of them.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError


class Level(IntEnum):
    """
    One rank in the administrative hierarchy.

    Levels are totally ordered from the root: PROVINCE < DISTRICT < SECTOR
    < CELL < VILLAGE.
    """
    PROVINCE = 0
    DISTRICT = 1
    SECTOR = 2
    CELL = 3
    VILLAGE = 4

    @property
    def field_name(self) -> str:
        """Lower-case name used for table columns and submitted dictionaries."""
        return self.name.lower()

    @property
    def label(self) -> str:
        """Human-readable name of the level."""
        return self.name.capitalize()

    @property
    def parent(self) -> Optional['Level']:
        """The level directly above this one, or None at the root."""
        if self is Level.PROVINCE:
            return None
        return Level(self - 1)

    @property
    def child(self) -> Optional['Level']:
        """The level directly below this one, or None at the leaf."""
        if self is Level.VILLAGE:
            return None
        return Level(self + 1)

    def ancestors(self) -> Tuple['Level', ...]:
        """All levels strictly above this one, root first."""
        return tuple(level for level in Level if level < self)

    def descendants(self) -> Tuple['Level', ...]:
        """All levels strictly below this one, nearest first."""
        return tuple(level for level in Level if level > self)

    @classmethod
    def from_name(cls, name: str) -> 'Level':
        """
        Look up a level by its field name.

        Args:
            name: Level name, case-insensitive (e.g. 'district')

        Returns:
            Matching Level

        Raises:
            ConfigurationError: If the name does not identify a level
        """
        key = (name or '').strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown hierarchy level: {name!r}",
                config_key='level',
                config_value=name,
                valid_values=[level.field_name for level in cls]
            ) from None


# Column order of a flat hierarchy table
LEVEL_COLUMNS = [level.field_name for level in Level]


@dataclass
class LevelDefinition:
    """
    Static presentation metadata for a single level.

    Attributes:
        level: The level described
        placeholder: Prompt shown while nothing is selected
        required_message: Message shown when the level is required but empty
    """
    level: Level
    placeholder: str
    required_message: str

    @property
    def name(self) -> str:
        return self.level.field_name

    @property
    def label(self) -> str:
        return self.level.label


@dataclass
class HierarchyConfiguration:
    """
    Per-level metadata for the whole hierarchy.

    Attributes:
        definitions: Level definitions keyed by level
    """
    definitions: Dict[Level, LevelDefinition] = field(default_factory=dict)

    @classmethod
    def default(cls) -> 'HierarchyConfiguration':
        """Build the standard configuration for the five Rwandan levels."""
        definitions = {
            level: LevelDefinition(
                level=level,
                placeholder=f"Select a {level.field_name}",
                required_message=f"{level.label} is required"
            )
            for level in Level
        }
        return cls(definitions=definitions)

    def get_definition(self, level: Level) -> LevelDefinition:
        """
        Get the definition of a level.

        Args:
            level: Level to look up

        Returns:
            LevelDefinition for the level

        Raises:
            ConfigurationError: If the level has no definition
        """
        try:
            return self.definitions[level]
        except KeyError:
            raise ConfigurationError(
                f"No definition configured for level '{level.field_name}'",
                config_key='definitions',
                config_value=level.field_name
            ) from None

    def required_message(self, level: Level) -> str:
        return self.get_definition(level).required_message

    def placeholder(self, level: Level) -> str:
        return self.get_definition(level).placeholder

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the hierarchy configuration.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []

        for level in Level:
            definition = self.definitions.get(level)
            if definition is None:
                issues.append(f"Level '{level.field_name}' has no definition")
                continue
            if definition.level is not level:
                issues.append(
                    f"Definition for '{level.field_name}' describes '{definition.level.field_name}'"
                )
            if not definition.required_message.strip():
                issues.append(f"Level '{level.field_name}' has an empty required message")

        return len(issues) == 0, issues
