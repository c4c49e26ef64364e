from datetime import datetime, timezone
from dataclasses import dataclass, field
import uuid


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class EntityBase:
    """Base class for all entities"""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: str = field(default_factory=_utc_now)
    updated_at: str = field(default_factory=_utc_now)

    def update_timestamp(self) -> None:
        """Update the last modified timestamp"""
        self.updated_at = _utc_now()
