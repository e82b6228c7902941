"""
Tests for the command-line interface.
"""

import io
import json
import logging
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from location_cascade.controller import CascadeController
from location_cascade.data_source import DataFrameHierarchy
from location_cascade.exceptions import ConfigurationError
from location_cascade.hierarchy.hierarchy_config import Level
from location_cascade.logging_config import SelectorLogger
from location_cascade.matching import OptionMatcher
from location_cascade.models import SubmittedLocation

from main import SelectionAborted, apply_selections, main, parse_selections, run_interactive

from tests.fixtures import FailingSource


FULL_SELECT = [
    "--select", "province=Kigali",
    "--select", "district=gasbo",
    "--select", "sector=Kacyiru",
    "--select", "cell=Kamatamu",
    "--select", "village=Cyimana",
]


def run_main(argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = main(argv)
    return code, stdout.getvalue(), stderr.getvalue()


class TestMain(unittest.TestCase):

    def test_select_arguments_print_location(self):
        code, out, _ = run_main(FULL_SELECT)

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {
            'province': "Kigali", 'district': "Gasabo", 'sector': "Kacyiru",
            'cell': "Kamatamu", 'village': "Cyimana"
        })

    def test_incomplete_selection(self):
        code, out, err = run_main(["--select", "province=Kigali"])

        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("District is required", err)

    def test_unmatched_value(self):
        code, _, err = run_main(["--select", "province=Zzzz"])

        self.assertEqual(code, 2)
        self.assertIn("No province named 'Zzzz'", err)

    def test_bad_select_argument(self):
        self.assertEqual(run_main(["--select", "province"])[0], 4)
        self.assertEqual(run_main(["--select", "county=Kigali"])[0], 4)

    def test_startup_logs_level_counts(self):
        code, _, err = run_main(["--log-level", "INFO"] + FULL_SELECT)

        self.assertEqual(code, 0)
        self.assertIn("province: 5", err)
        self.assertIn("village: 30", err)
        self.assertIn("LOCATION SELECTION FINISHED", err)
        self.assertNotIn("hierarchy lookup error", err)

    def test_missing_data_file(self):
        code, _, err = run_main(["--data", "/nonexistent/locations.csv"] + FULL_SELECT)

        self.assertEqual(code, 4)
        self.assertIn("Configuration Error", err)


class TestSessionReport(unittest.TestCase):

    def test_failed_lookups_are_reported_at_session_end(self):
        session_logger = SelectorLogger(name="tests.session", level="INFO")
        controller = CascadeController(FailingSource(), submit_handler=mock.Mock(),
                                       logger=logging.getLogger("tests.session.controller"))
        with self.assertLogs("tests.session.controller", level="WARNING"):
            controller.select_level(Level.PROVINCE, "Kigali")

        with self.assertLogs("tests.session", level="WARNING") as logs:
            session_logger.log_session_end(controller.error_handler.get_error_summary())

        self.assertIn("1 hierarchy lookup error(s)", logs.output[0])
        self.assertIn("HierarchyLookupError", logs.output[0])


class TestSelectionHelpers(unittest.TestCase):

    def setUp(self):
        self.handler = mock.Mock()
        self.controller = CascadeController(DataFrameHierarchy.default(), submit_handler=self.handler)
        self.matcher = OptionMatcher()

    def test_parse_selections(self):
        selections = parse_selections(["district=Gasabo ", "PROVINCE=Kigali"])

        self.assertEqual(selections, {Level.PROVINCE: "Kigali", Level.DISTRICT: "Gasabo"})
        with self.assertRaises(ConfigurationError):
            parse_selections(["Kigali"])

    def test_apply_selections_in_level_order(self):
        apply_selections(self.controller, self.matcher,
                         {Level.DISTRICT: "Kicukiro", Level.PROVINCE: "kigali"})

        self.assertEqual(self.controller.selected(Level.PROVINCE), "Kigali")
        self.assertEqual(self.controller.selected(Level.DISTRICT), "Kicukiro")

    def test_apply_selections_suggests_alternatives(self):
        apply_selections(self.controller, self.matcher, {Level.PROVINCE: "Kigali"})

        with self.assertRaises(SelectionAborted) as ctx:
            apply_selections(self.controller, OptionMatcher(threshold=100),
                             {Level.DISTRICT: "Kicukro"}, max_suggestions=2)
        self.assertIn("did you mean: Kicukiro", str(ctx.exception))

    def run_session(self, answers):
        lines = []
        result = run_interactive(
            self.controller, self.matcher,
            input_func=mock.Mock(side_effect=answers),
            output=lines.append
        )
        return result, lines

    def test_interactive_session_submits(self):
        result, lines = self.run_session(["1", "gasbo", "Kacyiru", "1", "3"])

        self.assertEqual(result, SubmittedLocation("Kigali", "Gasabo", "Kacyiru", "Kamatamu", "Cyimana"))
        self.handler.assert_called_once_with(result)
        self.assertIn("    1. Kigali", lines)
        self.assertIn("\nProvince: Select a province", lines)

    def test_interactive_back_and_quit(self):
        result, _ = self.run_session(["1", "back", "2", "quit"])

        self.assertIsNone(result)
        self.assertEqual(self.controller.selected(Level.PROVINCE), "Eastern")
        self.assertEqual(self.controller.options(Level.DISTRICT)[0], "Rwamagana")
        self.handler.assert_not_called()

    def test_interactive_empty_answer_shows_required_message(self):
        result, lines = self.run_session(["", "exit"])

        self.assertIsNone(result)
        self.assertIn("Province is required", lines)

    def test_interactive_unmatched_answer(self):
        result, lines = self.run_session(["Zzzz", "reset", EOFError()])

        self.assertIsNone(result)
        self.assertIn("'Zzzz' is not a province here.", lines)


if __name__ == '__main__':
    unittest.main()
