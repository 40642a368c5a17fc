"""Amnii API: user registration, login and token-based authorization."""

__version__ = "1.0.0"
