"""Keep declared long-running tasks alive."""

__version__ = "0.1.0"
