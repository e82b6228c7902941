"""
Hierarchy data sources.

This module defines the lookup contract the cascade controller depends on and
a pandas-backed implementation that answers every lookup from an in-memory
index built once from a flat hierarchy table.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd
from tqdm import tqdm

from .data_loader import DataLoader, DEFAULT_DATA_FILE
from .hierarchy.hierarchy_config import Level, LEVEL_COLUMNS


class HierarchyDataSource:
    """
    (Abstract) read-only view of the administrative hierarchy.

    Subclasses implement :meth:`list_children`; the per-level query methods
    are thin wrappers around it. Every child query returns an empty list for
    an unknown or incomplete ancestor path, never an error.
    """

    def list_children(self, path: Sequence[str]) -> List[str]:
        """
        Return the ordered names one level below `path`.

        Args:
            path: Selected values from the province down, possibly empty.
              An empty path yields the provinces.
        """
        raise NotImplementedError()

    def list_provinces(self) -> List[str]:
        return self.list_children(())

    def list_districts(self, province: str) -> List[str]:
        return self.list_children((province,))

    def list_sectors(self, province: str, district: str) -> List[str]:
        return self.list_children((province, district))

    def list_cells(self, province: str, district: str, sector: str) -> List[str]:
        return self.list_children((province, district, sector))

    def list_villages(self, province: str, district: str, sector: str, cell: str) -> List[str]:
        return self.list_children((province, district, sector, cell))

    def list_options(self, level: Level, ancestor_path: Sequence[str]) -> List[str]:
        """
        Options for `level` under the given ancestors.

        Returns an empty list unless `ancestor_path` holds exactly one value
        for each level above `level`.
        """
        if len(ancestor_path) != int(level):
            return []
        return self.list_children(ancestor_path)


class DataFrameHierarchy(HierarchyDataSource):
    """
    Hierarchy data source backed by a flat pandas table.

    The table has one row per village with the level columns in order.
    Options are returned in first-appearance order, or sorted when
    `sort_options` is set.

    :param df: Cleaned hierarchy table (see :class:`DataLoader`)
    :param sort_options: Sort every option list alphabetically
    :param show_progress: Show a progress bar while indexing large tables
    """

    def __init__(self, df: pd.DataFrame, sort_options: bool = False,
                 show_progress: bool = False, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.sort_options = sort_options
        self._tree: Dict[str, Any] = {}
        self._counts = {level: 0 for level in Level}
        self._build_index(df, show_progress)

    def _build_index(self, df: pd.DataFrame, show_progress: bool):
        """Index the table as nested dictionaries; villages are leaf dictionary keys."""
        self.logger.debug(f"Indexing {len(df)} hierarchy rows")

        with tqdm(total=len(df), desc="Indexing hierarchy", disable=not show_progress) as pbar:
            for row in df[LEVEL_COLUMNS].itertuples(index=False, name=None):
                node = self._tree
                for level, name in zip(Level, row):
                    if name not in node:
                        node[name] = {}
                        self._counts[level] += 1
                    node = node[name]
                pbar.update(1)

        self.logger.info(
            "Indexed hierarchy: " + ', '.join(
                f"{count} {level.field_name}(s)" for level, count in self._counts.items()
            )
        )

    @classmethod
    def from_file(cls, file_path: Union[str, Path], sort_options: bool = False,
                  show_progress: bool = False,
                  logger: Optional[logging.Logger] = None) -> 'DataFrameHierarchy':
        """Load a CSV or nested JSON hierarchy file."""
        df = DataLoader(logger).load(file_path)
        return cls(df, sort_options=sort_options, show_progress=show_progress, logger=logger)

    @classmethod
    def from_records(cls, records: Iterable[Any], sort_options: bool = False,
                     logger: Optional[logging.Logger] = None) -> 'DataFrameHierarchy':
        """Build from rows given as mappings or 5-item sequences."""
        df = DataLoader(logger).from_records(records)
        return cls(df, sort_options=sort_options, logger=logger)

    @classmethod
    def from_nested(cls, nested: Mapping[str, Any], sort_options: bool = False,
                    logger: Optional[logging.Logger] = None) -> 'DataFrameHierarchy':
        """Build from nested province -> ... -> list of villages mappings."""
        loader = DataLoader(logger)
        df = loader.prepare(loader.flatten_nested(nested), source='nested mapping')
        return cls(df, sort_options=sort_options, logger=logger)

    @classmethod
    def default(cls, sort_options: bool = False,
                logger: Optional[logging.Logger] = None) -> 'DataFrameHierarchy':
        """The hierarchy bundled with the package."""
        return cls.from_file(DEFAULT_DATA_FILE, sort_options=sort_options, logger=logger)

    def _node(self, path: Sequence[str]) -> Optional[Dict[str, Any]]:
        node = self._tree
        for name in path:
            if not isinstance(name, str) or name not in node:
                return None
            node = node[name]
        return node

    def list_children(self, path: Sequence[str]) -> List[str]:
        if len(path) >= len(Level):
            return []
        node = self._node(path)
        if node is None:
            return []
        names = list(node.keys())
        if self.sort_options:
            names.sort()
        return names

    def count(self, level: Level) -> int:
        """Number of distinct nodes at a level."""
        return self._counts[level]
