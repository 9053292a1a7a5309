"""Subway line maintenance: ordered station chains built from distance-weighted segments."""

__version__ = "0.1.0"
