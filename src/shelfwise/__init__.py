"""shelfwise - series reading order for your book library."""

__version__ = "0.1.0"
