"""Wiring-diagram rendering service for motor service PDFs."""

__version__ = "0.4.0"
