"""Database models package."""
from app.db.models.product import Product

__all__ = ["Product"]
