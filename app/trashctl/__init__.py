"""trashctl - a safe trash can for the command line.

Moves files into a FreeDesktop-style trash area instead of deleting them,
and restores them to their original location on demand.
"""

__version__ = "0.1.0"
