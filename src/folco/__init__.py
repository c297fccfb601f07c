"""folco: folder icon customization toolkit."""

__version__ = "0.1.0"
