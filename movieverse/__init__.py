"""
MovieVerse - backend de catalogue de films et series adosse a TMDB.
"""

__version__ = "0.1.0"
