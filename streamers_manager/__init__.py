"""Streamers manager: bootstrap, configuration and recorder supervision."""

__version__ = "0.1.0"
