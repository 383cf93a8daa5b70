"""Shotmaker - AI filmmaking storyboard wizard."""

__version__ = "0.1.0"
