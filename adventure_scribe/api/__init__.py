"""HTTP backend for the adventure editor."""

from adventure_scribe.api.app import create_app

__all__ = ["create_app"]
