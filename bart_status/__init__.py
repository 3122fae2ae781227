"""bart-status: live BART departure board in the terminal."""

__version__ = "0.1.0"
