"""Database module for taskman.

Provides Supabase client singleton and repository pattern for database operations.
"""

from taskman.infrastructure.database.client import SupabaseClient
from taskman.infrastructure.database.models import Task
from taskman.infrastructure.database.repositories import BaseRepository, TaskRepository

__all__ = [
    "SupabaseClient",
    "Task",
    "BaseRepository",
    "TaskRepository",
]
