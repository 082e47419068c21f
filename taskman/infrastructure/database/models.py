"""Database models for taskman.

Type-safe dataclasses representing database records.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class Task:
    """Represents a record in the tasks table."""

    id: str
    title: str
    created_by: Optional[str] = None
    status: str = "pending"
    priority: str = "medium"
    description: Optional[str] = None
    due_date: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    is_deleted: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Task":
        """Build from a database row, ignoring columns the model does not track."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in row.items() if key in known}
        if values.get("tags") is None:
            values["tags"] = []
        if values.get("is_deleted") is None:
            values["is_deleted"] = False
        return cls(**values)
