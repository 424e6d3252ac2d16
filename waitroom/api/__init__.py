"""HTTP API for Waitroom."""

from waitroom.api.app import create_app

__all__ = ["create_app"]
