"""HTTP API of the Vela backend."""

from vela.presentation.api.app import create_app

__all__ = ["create_app"]
