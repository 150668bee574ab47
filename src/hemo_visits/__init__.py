"""Patient visit recording for the hemophilia treatment network."""

__version__ = "0.1.0"
