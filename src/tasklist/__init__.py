"""tasklist - a small offline task list manager."""

__version__ = "0.1.0"
