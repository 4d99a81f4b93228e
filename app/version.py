"""
Application version information.

Version format: MAJOR.MINOR.PATCH

Version is logged on server startup and returned by GET /.
"""

__version__ = "1.0.0"
