"""Plus-Slash: rule engine and search bot for a two-phase 3x3 board game."""

__version__ = "0.1.0"
