"""Data models and static catalogs for Shotmaker."""
