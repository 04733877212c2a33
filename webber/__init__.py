"""webber: builds the static snippet documentation page."""

__version__ = "0.1.0"
