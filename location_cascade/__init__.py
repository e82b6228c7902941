"""
Location Cascade - cascading selection of Rwandan administrative locations.

This package provides a controller that narrows a location down through
province, district, sector, cell and village, keeping every level's options
consistent with the values selected above it.
"""

__version__ = "1.0.0"
__author__ = "Data Analytics Team"
