# GameMode daemon package
"""
Python side of the GameMode daemon.

Only the configuration store lives here for now; see ``gamemode.config``.
"""

__version__ = "0.1.0"
