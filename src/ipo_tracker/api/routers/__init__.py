"""API routers."""

from ipo_tracker.api.routers.ipos import router as ipos_router
from ipo_tracker.api.routers.optimizer import router as optimizer_router

__all__ = ["ipos_router", "optimizer_router"]
