"""Keep audio outputs awake by looping short stretches of silence."""

__version__ = "0.1.0"