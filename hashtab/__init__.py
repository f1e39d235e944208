"""Hash checking helpers: sumfiles, hash strings, settings, colors and online lookups."""

__version__ = "0.1.0"