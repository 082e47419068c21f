"""Repository implementations for taskman."""

from taskman.infrastructure.database.repositories.base import BaseRepository
from taskman.infrastructure.database.repositories.tasks import TaskRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
]
