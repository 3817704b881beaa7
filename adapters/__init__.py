"""
Adapters package - External service connections.
MongoDB client management and the HTTP image pipeline.
"""

from adapters import image_adapter, mongo_adapter

__all__ = [
    "image_adapter",
    "mongo_adapter",
]
