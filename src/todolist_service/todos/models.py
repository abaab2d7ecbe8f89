"""To-do item data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Todo:
    """A single to-do item owned by one identity."""
    id: int
    owner: str = ""
    title: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "owner": self.owner,
            "title": self.title,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Todo:
        """
        Build a Todo from a request body (camelCase or PascalCase keys).

        Raises ValueError when the id is missing or not an integer.
        """
        raw_id = data.get("id", data.get("Id"))
        if isinstance(raw_id, bool) or raw_id is None:
            raise ValueError(f"invalid todo id: {raw_id!r}")
        return cls(
            id=int(raw_id),
            owner=str(data.get("owner", data.get("Owner", "")) or ""),
            title=str(data.get("title", data.get("Title", "")) or ""),
        )
