"""
doom_launcher package
---------------------
Local launcher backend for Doom source ports.
Contains modules for settings, logging, JSON-file storage of mods and the
shared mod file catalog, load-order resolution, launch argument assembly
and detached process launching via a local REST API.
"""

__version__ = "0.3.0"
