"""Communique — recipient expressions for NationStates mass telegrams."""

__version__ = "3.0.0"
