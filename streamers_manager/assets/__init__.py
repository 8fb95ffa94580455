"""Recorder scripts bundled with the package and written to the working directory at startup."""
