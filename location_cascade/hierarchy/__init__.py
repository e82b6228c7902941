"""
Hierarchy module for the location cascade application.

This module describes the administrative levels (province, district, sector,
cell, village) and the static metadata attached to each of them.
"""

from location_cascade.hierarchy.hierarchy_config import (
    Level,
    LevelDefinition,
    HierarchyConfiguration,
    LEVEL_COLUMNS
)

__all__ = [
    'Level',
    'LevelDefinition',
    'HierarchyConfiguration',
    'LEVEL_COLUMNS'
]
