"""vctx - editor context extraction for AI assistants."""

__version__ = "1.0.0"
