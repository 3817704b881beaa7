"""
Order Repository - Data access layer for food orders
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from repositories.base import BaseRepository, Document
from app.exceptions import ConflictError


class OrderRepository(BaseRepository[ObjectId]):
    """Repository for order data access"""

    collection_name = "orders"

    def create_order(self, document: Document) -> Document:
        try:
            return self.create(document)
        except DuplicateKeyError:
            raise ConflictError(
                f"Order number {document.get('order_number')} already exists"
            )

    def list_for_customer(
        self,
        customer_id: str,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> List[Document]:
        """Customer's orders, newest first"""
        return self.find(
            self._customer_query(customer_id, status),
            sort=[("created_at", DESCENDING)],
            skip=skip,
            limit=limit,
        )

    def count_for_customer(self, customer_id: str, status: Optional[str] = None) -> int:
        return self.count(self._customer_query(customer_id, status))

    @staticmethod
    def _customer_query(customer_id: str, status: Optional[str]) -> Dict[str, Any]:
        query: Dict[str, Any] = {"customer_id": customer_id}
        if status:
            query["status"] = status
        return query

    def list_all(self, skip: int = 0, limit: int = 0) -> List[Document]:
        return self.find({}, sort=[("created_at", DESCENDING)], skip=skip, limit=limit)
