"""Build, stage and publish release binaries to an object-storage bucket."""

__version__ = "0.1.0"
