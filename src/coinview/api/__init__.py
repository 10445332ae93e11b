"""HTTP surface -- FastAPI app factory and routers."""

from coinview.api.app import create_app

__all__ = ["create_app"]
