"""
Main entry point for the location cascade application.

This script provides the command-line interface for choosing a location one
administrative level at a time, interactively or from --select arguments.
The submitted location is printed to stdout as JSON.
"""

import argparse
import json
import sys
from typing import Callable, Dict, List, Optional

from location_cascade.config import SelectorConfig, VALID_LOG_LEVELS
from location_cascade.controller import CascadeController
from location_cascade.data_loader import DEFAULT_DATA_FILE
from location_cascade.data_source import DataFrameHierarchy
from location_cascade.exceptions import (
    ConfigurationError,
    DataLoadError,
    FileAccessError,
    HierarchyValidationError,
    IncompleteSelectionError
)
from location_cascade.hierarchy.hierarchy_config import Level
from location_cascade.logging_config import setup_logging
from location_cascade.matching.option_matcher import OptionMatcher
from location_cascade.models import SubmittedLocation


class SelectionAborted(Exception):
    """Raised when a --select value cannot be resolved to an offered option."""


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Location Cascade - pick a province, district, sector, cell and village"
    )

    parser.add_argument(
        "--data",
        help=f"Path to a hierarchy CSV or nested JSON file (default: {DEFAULT_DATA_FILE.name})"
    )

    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="LEVEL=VALUE",
        help="Select a value non-interactively, e.g. --select province=Kigali (repeatable)"
    )

    parser.add_argument(
        "--sort-options",
        action="store_true",
        help="List options alphabetically instead of in file order"
    )

    parser.add_argument(
        "--fuzzy-threshold",
        type=int,
        default=85,
        help="Minimum similarity for matching typed names to options (0-100, default: 85)"
    )

    parser.add_argument(
        "--max-suggestions",
        type=int,
        default=5,
        help="Number of 'did you mean' suggestions for unmatched input (default: 5)"
    )

    parser.add_argument(
        "--show-progress",
        action="store_true",
        help="Show a progress bar while indexing the hierarchy"
    )

    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)"
    )

    parser.add_argument(
        "--log-file",
        help="Append log output to this file"
    )

    return parser.parse_args(argv)


def parse_selections(pairs: List[str]) -> Dict[Level, str]:
    """
    Parse LEVEL=VALUE arguments.

    Raises:
        ConfigurationError: For malformed pairs or unknown level names
    """
    selections = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep:
            raise ConfigurationError(
                f"Expected LEVEL=VALUE, got {pair!r}",
                config_key='select',
                config_value=pair
            )
        selections[Level.from_name(name)] = value.strip()
    return selections


def print_submission(location: SubmittedLocation):
    """Submission handler for the CLI: write the location as JSON to stdout."""
    print(json.dumps(location.to_dict(), ensure_ascii=False, indent=2))


def apply_selections(controller: CascadeController, matcher: OptionMatcher,
                     selections: Dict[Level, str], max_suggestions: int = 5):
    """
    Select the given values from the province down.

    Raises:
        SelectionAborted: If a value matches none of the offered options
    """
    for level in sorted(selections):
        options = controller.options(level)
        match = matcher.match(selections[level], options)
        if match is None:
            message = f"No {level.field_name} named {selections[level]!r}"
            suggestions = matcher.suggestions(selections[level], options, max_suggestions)
            if suggestions:
                message += f" (did you mean: {', '.join(suggestions)}?)"
            raise SelectionAborted(message)
        controller.select_level(level, match.value)


def run_interactive(controller: CascadeController, matcher: OptionMatcher,
                    max_suggestions: int = 5,
                    input_func: Callable[[str], str] = input,
                    output: Callable[[str], None] = print) -> Optional[SubmittedLocation]:
    """
    Walk the user through each level and submit the result.

    Answers may be an option number or a (possibly misspelt) name. The
    commands 'back', 'reset' and 'quit' are also accepted.

    Returns:
        The submitted location, or None if the user quit
    """
    level = Level.PROVINCE
    while True:
        if level is None:
            return controller.submit()

        options = controller.options(level)
        placeholder = controller.hierarchy_config.placeholder(level)
        if options:
            output(f"\n{level.label}: {placeholder}")
            for position, name in enumerate(options, 1):
                output(f"  {position:>3}. {name}")
        else:
            path = " / ".join(value for value in controller.state.selection.ancestor_path(level) if value)
            output(f"\nNo {level.field_name} options under {path}. Type 'back' or 'reset'.")

        try:
            answer = input_func(f"{level.label}> ").strip()
        except EOFError:
            return None

        command = answer.lower()
        if command in ("quit", "exit"):
            return None
        if command == "reset":
            controller.reset()
            level = Level.PROVINCE
            continue
        if command == "back":
            level = level.parent or Level.PROVINCE
            continue
        if not answer:
            controller.touch(level)
            output(controller.field_error(level) or "")
            continue

        match = matcher.match(answer, options)
        if match is None:
            suggestions = matcher.suggestions(answer, options, max_suggestions)
            hint = f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""
            output(f"'{answer}' is not a {level.field_name} here.{hint}")
            continue

        controller.select_level(level, match.value)
        level = level.child


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = SelectorConfig(
            data_file=args.data,
            sort_options=args.sort_options,
            fuzzy_threshold=args.fuzzy_threshold,
            max_suggestions=args.max_suggestions,
            show_progress=args.show_progress,
            log_level=args.log_level,
            log_file=args.log_file
        )

        logger = setup_logging(config)
        logger.debug(f"Configuration: {config.to_dict()}")

        data_file = config.data_file or DEFAULT_DATA_FILE
        data_source = DataFrameHierarchy.from_file(
            data_file,
            sort_options=config.sort_options,
            show_progress=config.show_progress,
            logger=logger.logger
        )

        controller = CascadeController(
            data_source,
            submit_handler=print_submission,
            reset_on_submit=config.reset_on_submit,
            logger=logger.logger
        )
        logger.log_session_start(
            str(data_file), {level.field_name: data_source.count(level) for level in Level}
        )

        matcher = OptionMatcher(threshold=config.fuzzy_threshold, logger=logger.logger)

        if args.select:
            apply_selections(controller, matcher, parse_selections(args.select), config.max_suggestions)
            location = controller.submit()
        else:
            location = run_interactive(controller, matcher, config.max_suggestions)

        logger.log_session_end(controller.error_handler.get_error_summary())
        if location is None:
            print("No location submitted", file=sys.stderr)
            return 1

        logger.log_submission(location.to_dict())
        return 0

    except IncompleteSelectionError as e:
        print(f"\nError: {e}", file=sys.stderr)
        for message in e.field_errors.values():
            print(f"  - {message}", file=sys.stderr)
        return 2

    except SelectionAborted as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 2

    except (DataLoadError, FileAccessError, HierarchyValidationError) as e:
        print(f"\nData Error: {e}", file=sys.stderr)
        print("Please check that the hierarchy file exists and is well formed.", file=sys.stderr)
        return 3

    except ConfigurationError as e:
        print(f"\nConfiguration Error: {e}", file=sys.stderr)
        return 4

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
