"""Simulated sensors, interface buttons and motion control for a Create 3 style robot."""

__version__ = "0.1.0"