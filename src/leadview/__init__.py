"""leadview: declarative filter, search and sort engine for lead lists."""

__version__ = "0.1.0"
