"""Alpha Tracker - AI-assisted investment tracking backend."""

__version__ = "0.1.0"
