"""nuke - a safer alternative to rm.

Targets are staged into a recoverable trash instead of being unlinked,
or securely overwritten when recovery must be impossible.
"""

__version__ = "0.1.0"
