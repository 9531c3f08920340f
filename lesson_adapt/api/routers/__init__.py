"""API routers."""
from lesson_adapt.api.routers.explain_router import router as explain_router

__all__ = ["explain_router"]
