"""gitsweep - remove ignored files and directories, one rule scope at a time."""

__version__ = "0.1.0"
