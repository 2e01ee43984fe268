"""Encrypted radio chat packets and a touchscreen chat screen model."""

__version__ = "0.1.0"
__all__ = ["geometry", "keyboard", "participants", "messages", "radio", "ui"]