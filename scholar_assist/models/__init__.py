from .base import TimestampedModel, UUIDModel
from .facts import Resource, Scholarship
from .knowledge import KnowledgeEntry

__all__ = ["TimestampedModel", "UUIDModel", "KnowledgeEntry", "Scholarship", "Resource"]
