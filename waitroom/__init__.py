"""Waitroom - virtual waiting room with batch admission."""

__version__ = "0.1.0"
