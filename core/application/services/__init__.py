"""Application services."""
from .order_service import OrderWorkflowService

__all__ = ["OrderWorkflowService"]
