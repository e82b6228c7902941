"""
Data models for the location cascade application.

This module defines the selection state shared between the cascade controller
and the presentation layer.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Dict, Set, Iterable, Sequence

from .hierarchy.hierarchy_config import Level
from .utils.data_utils import optional_string


@dataclass
class Selection:
    """
    Selected value per level.

    Unselected levels hold None. Values are stored stripped; a blank value is
    stored as None.
    """

    values: Dict[Level, Optional[str]] = field(
        default_factory=lambda: {level: None for level in Level}
    )

    def get(self, level: Level) -> Optional[str]:
        """Get the selected value at a level, or None."""
        return self.values.get(level)

    def is_set(self, level: Level) -> bool:
        return self.values.get(level) is not None

    def set(self, level: Level, value: Optional[str]):
        """Set the value at a level. Does not touch any other level."""
        self.values[level] = optional_string(value)

    def clear_below(self, level: Level):
        """Clear every level strictly below `level`."""
        for descendant in level.descendants():
            self.values[descendant] = None

    def ancestor_path(self, level: Level) -> Tuple[Optional[str], ...]:
        """Selected values strictly above `level`, root first."""
        return tuple(self.values.get(ancestor) for ancestor in level.ancestors())

    def path_through(self, level: Level) -> Tuple[Optional[str], ...]:
        """Selected values from the root down to and including `level`."""
        return self.ancestor_path(level) + (self.values.get(level),)

    def ancestors_set(self, level: Level) -> bool:
        """Whether every level above `level` has a value."""
        return all(self.is_set(ancestor) for ancestor in level.ancestors())

    def missing_levels(self) -> List[Level]:
        """Unselected levels, in hierarchical order."""
        return [level for level in Level if not self.is_set(level)]

    def is_complete(self) -> bool:
        return not self.missing_levels()

    def has_gap(self) -> bool:
        """True if some level is set while one of its ancestors is not."""
        return any(self.is_set(level) and not self.ancestors_set(level) for level in Level)

    def copy(self) -> 'Selection':
        return Selection(values=dict(self.values))

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Convert to a dictionary keyed by level field name."""
        return {level.field_name: self.values.get(level) for level in Level}


@dataclass
class OptionSet:
    """Ordered option names available per level."""

    options: Dict[Level, Tuple[str, ...]] = field(
        default_factory=lambda: {level: () for level in Level}
    )

    def get(self, level: Level) -> Tuple[str, ...]:
        return self.options.get(level, ())

    def set(self, level: Level, names: Iterable[str]):
        self.options[level] = tuple(names)

    def clear_below(self, level: Level):
        """Empty the option list of every level strictly below `level`."""
        for descendant in level.descendants():
            self.options[descendant] = ()

    def copy(self) -> 'OptionSet':
        return OptionSet(options=dict(self.options))

    def to_dict(self) -> Dict[str, List[str]]:
        return {level.field_name: list(self.get(level)) for level in Level}


@dataclass
class FormState:
    """
    Complete state of one location-selection session.

    Attributes:
        selection: Selected value per level
        options: Available options per level
        touched: Levels the user has interacted with
    """

    selection: Selection = field(default_factory=Selection)
    options: OptionSet = field(default_factory=OptionSet)
    touched: Set[Level] = field(default_factory=set)

    @classmethod
    def initial(cls, provinces: Sequence[str]) -> 'FormState':
        """
        Create the starting state: nothing selected, only provinces offered.

        Args:
            provinces: Full list of province names

        Returns:
            Fresh FormState
        """
        state = cls()
        state.options.set(Level.PROVINCE, provinces)
        return state

    @property
    def is_valid(self) -> bool:
        """True iff every level has a non-blank selection."""
        return self.selection.is_complete()

    def is_required_and_empty(self, level: Level) -> bool:
        """Whether the required message for `level` should be displayed."""
        return level in self.touched and not self.selection.is_set(level)

    def snapshot(self) -> 'FormState':
        """Independent copy that later transitions will not modify."""
        return FormState(
            selection=self.selection.copy(),
            options=self.options.copy(),
            touched=set(self.touched)
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            'selection': self.selection.to_dict(),
            'options': self.options.to_dict(),
            'touched': sorted(level.field_name for level in self.touched),
            'is_valid': self.is_valid
        }


@dataclass(frozen=True)
class SubmittedLocation:
    """Immutable snapshot of a complete five-level selection."""

    province: str
    district: str
    sector: str
    cell: str
    village: str

    @classmethod
    def from_selection(cls, selection: Selection) -> 'SubmittedLocation':
        """
        Build a snapshot from a complete selection.

        Raises:
            ValueError: If any level is unselected
        """
        missing = selection.missing_levels()
        if missing:
            names = ', '.join(level.field_name for level in missing)
            raise ValueError(f"Selection is incomplete: missing {names}")
        return cls(**{level.field_name: selection.get(level) for level in Level})

    def get(self, level: Level) -> str:
        return getattr(self, level.field_name)

    def to_dict(self) -> Dict[str, str]:
        return {level.field_name: self.get(level) for level in Level}


@dataclass(frozen=True)
class RefreshTicket:
    """
    A request for one level's options, stamped with the level's generation.

    A ticket is only honoured if no ancestor has changed since it was issued.
    """

    level: Level
    generation: int
    ancestor_path: Tuple[str, ...]
