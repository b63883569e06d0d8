"""talkctl — first-run installer for the Talk server."""

__version__ = "0.1.0"
