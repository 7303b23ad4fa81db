"""gbgen - generate typed feature-key modules from a GrowthBook catalog."""

__version__ = "0.1.0"
