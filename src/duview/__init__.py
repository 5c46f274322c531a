"""duview — interactive disk usage explorer."""

__version__ = "0.3.0"
