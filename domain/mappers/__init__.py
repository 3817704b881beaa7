"""
Domain mappers package.
Handles transformation between MongoDB documents and API payloads.
"""

from domain.mappers.document_mapper import serialize_document, serialize_value
from domain.mappers.user_mapper import UserMapper
from domain.mappers.order_mapper import OrderMapper

__all__ = ["serialize_document", "serialize_value", "UserMapper", "OrderMapper"]
