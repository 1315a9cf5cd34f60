"""
CompLens
Comparable-listing price estimation: scores listings feature by feature
against a reference set and reads a price off the score curve.
"""

__version__ = "0.1.0"
