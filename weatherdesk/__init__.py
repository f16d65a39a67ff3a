"""Country search and saved-weather client."""

__version__ = "0.1.0"
