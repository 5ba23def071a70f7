"""Stockbook: inventory, invoicing and business analytics for a small shop."""

__version__ = "1.0.0"
