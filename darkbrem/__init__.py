"""Dark photon definition, dark brem cross sections and dark brem event libraries."""

__version__ = "2.2.0"