"""
Location Hierarchy - canonical city, district and neighborhood names.

This package resolves free-text location references for a real-estate
marketplace into canonical (neighborhood, district, city) tuples, expands
search text into neighborhood filter sets and aggregates neighborhood ratings.
"""

__version__ = "1.0.0"
__author__ = "Data Analytics Team"
