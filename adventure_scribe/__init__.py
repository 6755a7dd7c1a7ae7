"""Adventure Scribe: slash-command content expansion for adventure documents."""

__version__ = "0.1.0"
