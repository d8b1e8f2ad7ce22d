# src/lined/__init__.py
"""lined: a small terminal text editor."""

__version__ = "1.0.0"
