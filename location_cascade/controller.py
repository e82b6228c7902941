"""
Cascade controller.

This module owns the selection state of a location form. Selecting a value at
one level clears every level below it and fetches the options of the next
level only; lower levels stay empty until the user picks a value at the newly
populated level.

The presentation layer reads options, selections and required-field messages
from the controller and never keeps selection state of its own.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .data_source import HierarchyDataSource
from .exceptions import (
    ConfigurationError,
    HierarchyValidationError,
    create_incomplete_selection_error,
    create_lookup_error
)
from .hierarchy.hierarchy_config import Level, HierarchyConfiguration
from .models import FormState, RefreshTicket, SubmittedLocation
from .utils.data_utils import optional_string
from .utils.error_handler import ErrorHandler, create_error_context


SubmitHandler = Callable[[SubmittedLocation], None]
Subscriber = Callable[[FormState], None]


def log_submission(location: SubmittedLocation, logger: Optional[logging.Logger] = None):
    """Default submission handler: log the submitted location."""
    (logger or logging.getLogger(__name__)).info(f"Submitted location: {location.to_dict()}")


class CascadeController:
    """
    Single source of truth for a five-level location selection.

    :param data_source: Instance of :class:`HierarchyDataSource`
    :param submit_handler: Called with a :class:`SubmittedLocation` on each
      successful :meth:`submit`; defaults to :func:`log_submission`
    :param reset_on_submit: Return to the initial state after a successful submit
    :param hierarchy_config: Per-level placeholders and required messages;
      must define all five levels or :class:`ConfigurationError` is raised
    """

    def __init__(self, data_source: HierarchyDataSource,
                 submit_handler: Optional[SubmitHandler] = None,
                 reset_on_submit: bool = True,
                 hierarchy_config: Optional[HierarchyConfiguration] = None,
                 logger: Optional[logging.Logger] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)
        self.data_source = data_source
        self.submit_handler = submit_handler or (lambda location: log_submission(location, self.logger))
        self.reset_on_submit = reset_on_submit
        self.hierarchy_config = hierarchy_config or HierarchyConfiguration.default()
        is_valid, issues = self.hierarchy_config.validate()
        if not is_valid:
            raise ConfigurationError(
                f"Invalid hierarchy configuration: {'; '.join(issues)}",
                config_key='hierarchy_config',
                valid_values=[level.field_name for level in Level]
            )
        self._subscribers: List[Subscriber] = []
        self._generations: Dict[Level, int] = {level: 0 for level in Level}
        self._state = FormState.initial(self._lookup(Level.PROVINCE, ()))

    @property
    def state(self) -> FormState:
        """A snapshot of the current state."""
        return self._state.snapshot()

    @property
    def is_valid(self) -> bool:
        return self._state.is_valid

    def options(self, level: Level) -> List[str]:
        """Currently offered names at `level`."""
        return list(self._state.options.get(level))

    def selected(self, level: Level) -> Optional[str]:
        return self._state.selection.get(level)

    def selection(self) -> Dict[str, Optional[str]]:
        return self._state.selection.to_dict()

    def select_level(self, level: Level, value: Optional[str]):
        """
        Set `level` to `value` and cascade the change downwards.

        Every level below `level` loses its selection and its options, and the
        options of the next level are fetched for the new path. A blank value
        clears the level. A value that is not among the offered options is
        accepted; it simply has no children. A failing lookup yields no
        options and is logged, never raised.

        Raises:
            HierarchyValidationError: If a level above `level` is unselected.
              This is the only exception raised; the state is left unchanged.
        """
        level = Level(level)
        selection = self._state.selection

        if not selection.ancestors_set(level):
            missing = [a.field_name for a in level.ancestors() if not selection.is_set(a)]
            raise HierarchyValidationError(
                f"Cannot select {level.field_name} before {', '.join(missing)}",
                hierarchy_level=level.field_name,
                parent_level=missing[0],
                validation_type='structure'
            )

        value = optional_string(value)
        if value is not None and value not in self._state.options.get(level):
            self.logger.debug(f"{level.label} '{value}' is not among the offered options")

        selection.set(level, value)
        selection.clear_below(level)
        self._state.options.clear_below(level)
        self._invalidate_below(level)
        self._state.touched.add(level)

        child = level.child
        if child is not None and value is not None:
            ticket = self.request_options(child)
            self.apply_options(ticket, self._lookup(child, ticket.ancestor_path), notify=False)

        self.logger.debug(f"Selected {level.field_name}={value!r}; selection is {selection.to_dict()}")
        self._notify()

    def reset(self):
        """Clear every selection and re-seed the province options."""
        self._invalidate_below(Level.PROVINCE)
        self._generations[Level.PROVINCE] += 1
        self._state = FormState.initial(self._lookup(Level.PROVINCE, ()))
        self.logger.debug("Selection reset")
        self._notify()

    def submit(self) -> SubmittedLocation:
        """
        Hand the complete selection to the submission handler.

        Returns:
            The submitted snapshot

        Raises:
            IncompleteSelectionError: If any level is unselected; the handler
              is not called and every level is marked touched
        """
        if not self._state.is_valid:
            self._state.touched.update(Level)
            errors = self.field_errors()
            self.logger.warning(f"Submission refused, required fields empty: {list(errors)}")
            self._notify()
            raise create_incomplete_selection_error(list(errors), errors)

        location = SubmittedLocation.from_selection(self._state.selection)
        self.logger.info(f"Submitting location: {location.to_dict()}")
        self.submit_handler(location)

        if self.reset_on_submit:
            self.reset()
        return location

    def touch(self, level: Level):
        """Record that the user interacted with a field without choosing a value."""
        self._state.touched.add(Level(level))
        self._notify()

    def is_required_and_empty(self, level: Level) -> bool:
        return self._state.is_required_and_empty(Level(level))

    def field_error(self, level: Level) -> Optional[str]:
        """The required message for `level`, if it should be displayed."""
        if self.is_required_and_empty(level):
            return self.hierarchy_config.required_message(Level(level))
        return None

    def field_errors(self) -> Dict[str, str]:
        """Messages to display, keyed by level field name, in level order."""
        errors = {}
        for level in Level:
            message = self.field_error(level)
            if message is not None:
                errors[level.field_name] = message
        return errors

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register `callback(state)` to run after every state change.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def request_options(self, level: Level) -> RefreshTicket:
        """
        Issue a ticket for fetching `level`'s options under the current path.

        A ticket becomes stale as soon as any level above `level` changes.
        """
        level = Level(level)
        path = tuple(value for value in self._state.selection.ancestor_path(level) if value is not None)
        return RefreshTicket(level, self._generations[level], path)

    def apply_options(self, ticket: RefreshTicket, options: Sequence[str], notify: bool = True) -> bool:
        """
        Store options fetched for `ticket` unless the ticket is stale.

        Returns:
            True if the options were applied
        """
        level = ticket.level
        if ticket.generation != self._generations[level] \
                or not self._state.selection.ancestors_set(level):
            self.logger.debug(
                f"Discarding stale {level.field_name} options for {' / '.join(ticket.ancestor_path)}"
            )
            return False

        self._state.options.set(level, options)
        if notify:
            self._notify()
        return True

    def _invalidate_below(self, level: Level):
        for descendant in level.descendants():
            self._generations[descendant] += 1

    def _lookup(self, level: Level, ancestor_path: Sequence[str]) -> List[str]:
        """Query the data source; a failing lookup yields no options."""
        try:
            return list(self.data_source.list_options(level, ancestor_path))
        except Exception as e:
            error = create_lookup_error(level.field_name, list(ancestor_path), e)
            context = create_error_context(
                operation='list_options',
                hierarchy_level=level.field_name,
                ancestor_path=list(ancestor_path)
            )
            return self.error_handler.handle_error(error, context, recovery_strategy='empty_options')

    def _notify(self):
        if not self._subscribers:
            return
        snapshot = self._state.snapshot()
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception as e:
                self.logger.error(f"State subscriber {callback!r} failed: {e}")
