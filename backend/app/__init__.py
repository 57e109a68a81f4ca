"""
Arena Stats Backend Application Package.

This package contains the rate limited match fetching pipeline, the match
cache, and the statistics computed from a player's Arena match history.
"""

__version__ = "1.0.0"
