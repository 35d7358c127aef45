"""Exceptions raised by the API layer and mapped to JSON responses."""

from __future__ import annotations

from typing import Any, Literal

PRODUCT_NOT_FOUND = "Producto no encontrado"


class ValidationFailedError(Exception):
    """Request input failed one or more validation rules."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors


class ProductNotFoundError(Exception):
    """No product row matches the requested id.

    ``key`` is the response body key: ``errors`` on the read path and
    ``error`` on the write paths, which existing clients rely on.
    """

    def __init__(self, product_id: int, key: Literal["errors", "error"] = "error"):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id
        self.key = key

    def to_response(self) -> dict[str, str]:
        return {self.key: PRODUCT_NOT_FOUND}


class OriginNotAllowedError(Exception):
    """Request whose Origin is not the configured frontend."""

    def __init__(self, origin: str | None):
        super().__init__(f"Origin not allowed: {origin}")
        self.origin = origin
