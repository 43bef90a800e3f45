"""Personal time tracking: start and stop named activities, browse where the time went."""

__version__ = "1.0.0"
