"""Lightweight game audio: signals, filters, mixing, spatialization and WAV demos."""

__version__ = "0.1.0"