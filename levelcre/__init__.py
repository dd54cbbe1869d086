"""Level CRE — prospect tracking with shared workspaces."""

__version__ = "0.1.0"
