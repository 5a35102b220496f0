"""
treefind - recursive directory search with type and name filters.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
