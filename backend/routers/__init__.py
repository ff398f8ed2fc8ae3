"""API routers."""
from .episodes import router as episodes_router
from .channels import router as channels_router

__all__ = ["episodes_router", "channels_router"]
