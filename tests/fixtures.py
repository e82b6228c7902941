"""
Shared test data.
"""

from location_cascade.data_source import DataFrameHierarchy, HierarchyDataSource


FULL_PATH = ("Kigali", "Gasabo", "Kacyiru", "Kamatamu", "Cyimana")

SAMPLE_ROWS = [
    ("Kigali", "Gasabo", "Kacyiru", "Kamatamu", "Amajyambere"),
    ("Kigali", "Gasabo", "Kacyiru", "Kamatamu", "Cyimana"),
    ("Kigali", "Gasabo", "Kacyiru", "Kamutwa", "Agasaro"),
    ("Kigali", "Gasabo", "Remera", "Nyabisindu", "Amarembo I"),
    ("Kigali", "Kicukiro", "Gikondo", "Kanserege", "Marembo"),
    ("Eastern", "Rwamagana", "Kigabiro", "Cyanya", "Kabeza"),
    ("Eastern", "Kayonza", "Mukarange", "Bwiza", "Kinunga"),
]


def sample_source(sort_options=False):
    """Small in-memory hierarchy."""
    return DataFrameHierarchy.from_records(SAMPLE_ROWS, sort_options=sort_options)


class RecordingSource(HierarchyDataSource):
    """Wraps a data source and records every lookup path."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def list_children(self, path):
        self.calls.append(tuple(path))
        return self.inner.list_children(path)


class FailingSource(HierarchyDataSource):
    """Answers the province lookup and fails on every other one."""

    def list_children(self, path):
        if not path:
            return ["Kigali", "Eastern"]
        raise RuntimeError("hierarchy backend unavailable")
