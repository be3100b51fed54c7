"""Utility helpers shared across demodeck."""
