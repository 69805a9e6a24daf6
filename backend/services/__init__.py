"""Application services."""

from services.session import ActionResult, LayoutSession

__all__ = ["ActionResult", "LayoutSession"]
