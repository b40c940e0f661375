"""SMS relay: per-caller chat transcripts in, completion replies out."""

__version__ = "1.0.0"
