"""Base repository interface for taskman.

Implements Repository pattern; every query runs through the retry executor.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

from postgrest.exceptions import APIError

from taskman.core.errors import DatabaseError
from taskman.core.execution.retry_executor import RetryExecutor
from taskman.core.retry_config import PolicyOverrides
from taskman.infrastructure.database.client import SupabaseClient


class BaseRepository(ABC):
    """Abstract base repository for database operations.

    Provides dependency inversion - depend on repository interface, not concrete tables.
    """

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        executor: Optional[RetryExecutor] = None,
    ):
        """Initialize repository with Supabase client and retry executor.

        Args:
            client: Supabase client wrapper (defaults to the singleton)
            executor: Retry executor (defaults to one built from environment config)
        """
        self._client = client or SupabaseClient()
        self._executor = executor or RetryExecutor.from_config()

    @property
    def db(self):
        """Get Supabase client instance."""
        return self._client.client

    @abstractmethod
    def table_name(self) -> str:
        """Return the table name this repository manages."""
        pass

    async def _run(self, query: Any, overrides: PolicyOverrides = None) -> Any:
        """Execute a postgrest query builder with retries.

        The blocking ``execute()`` runs in a worker thread. PostgREST API
        errors surface as DatabaseError with the original as ``__cause__``.

        Args:
            query: Query builder exposing ``execute()``
            overrides: Partial retry policy for this query

        Returns:
            postgrest APIResponse
        """

        async def _attempt():
            try:
                return await asyncio.to_thread(query.execute)
            except APIError as e:
                raise DatabaseError.from_api_error(e) from e

        return await self._executor.execute(_attempt, overrides)
