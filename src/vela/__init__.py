"""Vela backend: accounts, sessions and token authentication over HTTP."""

__version__ = "0.1.0"
