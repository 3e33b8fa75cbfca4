"""HTTP controllers."""

from lawnmower_api.api.controller.debug_log_controller import router as debug_log_router
from lawnmower_api.api.controller.products_controller import router as products_router

__all__ = ["debug_log_router", "products_router"]
