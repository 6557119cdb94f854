"""Generation of deep-copy functions for Go types described by a type model, driven by comment tags."""

__version__ = "0.1.0"