"""histpick - insert previous input from history through a completion prompt."""

__version__ = "0.1.0"
