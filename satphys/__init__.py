"""Separating-axis collision detection for boxes and planes, a broad-phase grid, messages and a follow camera."""

__version__ = "0.1.0"