"""hustle - short developer verbs for a single development container."""

__version__ = "0.3.0"
