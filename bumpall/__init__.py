"""bumpall - bump outdated npm dependencies from the command line."""

__version__ = "1.4.0"
