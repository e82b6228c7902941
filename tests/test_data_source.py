"""
Unit tests for hierarchy data sources.
"""

import unittest

from location_cascade.data_source import DataFrameHierarchy, HierarchyDataSource
from location_cascade.hierarchy.hierarchy_config import Level

from tests.fixtures import sample_source


class TestDataFrameHierarchy(unittest.TestCase):
    """Test cases for DataFrameHierarchy lookups."""

    def setUp(self):
        self.source = sample_source()

    def test_provinces_in_file_order(self):
        self.assertEqual(self.source.list_provinces(), ["Kigali", "Eastern"])

    def test_children_at_each_level(self):
        self.assertEqual(self.source.list_districts("Kigali"), ["Gasabo", "Kicukiro"])
        self.assertEqual(self.source.list_sectors("Kigali", "Gasabo"), ["Kacyiru", "Remera"])
        self.assertEqual(self.source.list_cells("Kigali", "Gasabo", "Kacyiru"),
                         ["Kamatamu", "Kamutwa"])
        self.assertEqual(self.source.list_villages("Kigali", "Gasabo", "Kacyiru", "Kamatamu"),
                         ["Amajyambere", "Cyimana"])

    def test_unknown_paths_yield_no_children(self):
        self.assertEqual(self.source.list_districts("Atlantis"), [])
        self.assertEqual(self.source.list_sectors("Eastern", "Gasabo"), [])
        self.assertEqual(self.source.list_villages("Kigali", "Gasabo", "Kacyiru", "Nowhere"), [])

    def test_village_has_no_children(self):
        path = ("Kigali", "Gasabo", "Kacyiru", "Kamatamu", "Cyimana")
        self.assertEqual(self.source.list_children(path), [])

    def test_list_options_requires_full_ancestor_path(self):
        self.assertEqual(self.source.list_options(Level.PROVINCE, ()), ["Kigali", "Eastern"])
        self.assertEqual(self.source.list_options(Level.SECTOR, ("Kigali", "Gasabo")),
                         ["Kacyiru", "Remera"])
        self.assertEqual(self.source.list_options(Level.SECTOR, ("Kigali",)), [])

    def test_sort_options(self):
        source = sample_source(sort_options=True)

        self.assertEqual(source.list_provinces(), ["Eastern", "Kigali"])
        self.assertEqual(source.list_districts("Eastern"), ["Kayonza", "Rwamagana"])

    def test_same_name_under_different_parents(self):
        source = DataFrameHierarchy.from_records([
            ("Kigali", "Gasabo", "Remera", "Nyabisindu", "Amarembo I"),
            ("Kigali", "Kicukiro", "Remera", "Rukiri", "Amarembo II"),
        ])

        self.assertEqual(source.list_cells("Kigali", "Gasabo", "Remera"), ["Nyabisindu"])
        self.assertEqual(source.list_cells("Kigali", "Kicukiro", "Remera"), ["Rukiri"])
        self.assertEqual(source.count(Level.SECTOR), 2)

    def test_counts(self):
        self.assertEqual(self.source.count(Level.PROVINCE), 2)
        self.assertEqual(self.source.count(Level.VILLAGE), 7)

    def test_from_nested(self):
        source = DataFrameHierarchy.from_nested({
            "Kigali": {"Gasabo": {"Kacyiru": {"Kamatamu": ["Cyimana", "Amajyambere"]}}}
        })

        self.assertEqual(source.list_villages("Kigali", "Gasabo", "Kacyiru", "Kamatamu"),
                         ["Cyimana", "Amajyambere"])

    def test_bundled_dataset(self):
        source = DataFrameHierarchy.default()

        self.assertEqual(source.list_provinces(),
                         ["Kigali", "Eastern", "Northern", "Southern", "Western"])
        self.assertEqual(source.list_districts("Kigali"), ["Gasabo", "Kicukiro", "Nyarugenge"])
        self.assertEqual(source.list_sectors("Kigali", "Gasabo"), ["Kacyiru", "Kimironko", "Remera"])
        self.assertEqual(source.list_districts("Eastern"),
                         ["Rwamagana", "Kayonza", "Nyagatare", "Bugesera"])

    def test_base_class_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            HierarchyDataSource().list_provinces()


if __name__ == '__main__':
    unittest.main()
