"""doomctl: rule-driven file cleanup planner."""

__version__ = "0.1.0"
