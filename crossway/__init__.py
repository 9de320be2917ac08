"""Crossroads traffic simulation with priority synchronisation and kernel-style helpers."""

__version__ = "0.1.0"