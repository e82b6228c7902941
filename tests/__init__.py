"""
Test suite for the Location Cascade application.
"""
