"""Tasks repository for taskman.

Reads are retried with the configured policy. Inserts are not idempotent, so
they run exactly once.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from taskman.core.logging import logger
from taskman.core.retry_config import DEFAULT_RETRYABLE_ERROR_KINDS
from taskman.infrastructure.database.models import Task
from taskman.infrastructure.database.repositories.base import BaseRepository

# httpx read/connect timeouts derive from TimeoutException rather than TimeoutError
READ_OVERRIDES = {"retryable_error_kinds": DEFAULT_RETRYABLE_ERROR_KINDS | {"TimeoutException"}}
WRITE_OVERRIDES = {"max_retries": 0}


class TaskRepository(BaseRepository):
    """Repository for tasks table."""

    def table_name(self) -> str:
        """Return table name."""
        return "tasks"

    async def list_for_user(self, user_id: str) -> List[Task]:
        """List a user's non-deleted tasks.

        Args:
            user_id: User UUID (tasks.created_by)

        Returns:
            List of Task objects ordered by created_at DESC
        """
        query = (
            self.db.table(self.table_name())
            .select("*")
            .eq("created_by", user_id)
            .eq("is_deleted", False)
            .order("created_at", desc=True)
        )
        result = await self._run(query, READ_OVERRIDES)

        if not result.data:
            return []

        return [Task.from_row(row) for row in result.data]

    async def get(self, task_id: str) -> Optional[Task]:
        """Get a single task by ID, or None if it does not exist."""
        query = self.db.table(self.table_name()).select("*").eq("id", task_id).limit(1)
        result = await self._run(query, READ_OVERRIDES)

        if not result.data:
            return None

        return Task.from_row(result.data[0])

    async def create(self, user_id: str, title: str, **fields: Any) -> Optional[Task]:
        """Create a task owned by user_id.

        Args:
            user_id: Owner UUID
            title: Task title
            **fields: Other task columns (description, priority, due_date, tags, ...)

        Returns:
            Created Task, or None if the insert returned no row
        """
        now = datetime.now(timezone.utc).isoformat()
        payload = {
            **fields,
            "title": title,
            "created_by": user_id,
            "is_deleted": False,
            "created_at": now,
            "updated_at": now,
        }

        query = self.db.table(self.table_name()).insert(payload)
        result = await self._run(query, WRITE_OVERRIDES)

        if not result.data:
            logger.warning("task_create_empty_result", user_id=user_id)
            return None

        task = Task.from_row(result.data[0])
        logger.info("task_created", task_id=task.id, user_id=user_id)
        return task
