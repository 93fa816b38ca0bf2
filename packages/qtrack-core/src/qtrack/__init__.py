"""QTrack core — domain models, storage, services and quality monitoring."""

__version__ = "0.1.0"
