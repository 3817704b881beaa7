"""
Domain layer - Enums, request schemas and document mappers.
"""

from domain import enums, mappers, schemas

__all__ = ["enums", "mappers", "schemas"]
