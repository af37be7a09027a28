"""Falling-rock tower simulation with cycle-based extrapolation."""

__version__ = "0.1.0"
