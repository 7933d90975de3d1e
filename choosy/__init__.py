"""
choosy package initialization.
"""

__all__ = [
    "cli",
    "config",
    "console",
    "engine",
    "log",
    "schema",
    "settings",
    "ui",
]
