"""Models, commands, sorting, tables and context configuration for a cloud API."""

__version__ = "0.1.0"