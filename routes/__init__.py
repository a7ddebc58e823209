"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.stock import router as stock_router

__all__ = [
    "stock_router",
]
