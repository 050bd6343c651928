from __future__ import annotations

import logging

from dormkeep.models.audit_log import AuditLog
from dormkeep.models.user import User
from dormkeep.repositories.base import AuditLogRepository

logger = logging.getLogger(__name__)

SOURCE_WEB = "web"
SOURCE_CLI = "cli"


class AuditService:
    def __init__(self, repo: AuditLogRepository) -> None:
        self.repo = repo

    def record(
        self,
        event_type: str,
        *,
        actor: User | None = None,
        source: str = "",
        entity_type: str = "",
        entity_id: int | None = None,
        entity_uuid: str = "",
        previous_state: dict | None = None,
        new_state: dict | None = None,
        metadata: dict | None = None,
    ) -> AuditLog:
        """Write an audit entry for ``actor`` (``None`` for system actions). Raises on failure."""
        entry = AuditLog(
            event_type=event_type,
            actor_id=actor.id if actor else None,
            actor_username=actor.username if actor else "",
            source=source,
            entity_type=entity_type,
            entity_id=entity_id,
            entity_uuid=entity_uuid,
            previous_state=previous_state,
            new_state=new_state,
            metadata=metadata or {},
        )
        result = self.repo.create(entry)
        logger.info(
            "Audit %s by %s via %s on %s/%s",
            event_type,
            entry.actor_username or "system",
            source or "-",
            entity_type,
            entity_id,
        )
        return result

    def safe_record(self, event_type: str, **kwargs) -> AuditLog | None:
        """Like ``record`` but never lets an audit failure break the caller."""
        try:
            return self.record(event_type, **kwargs)
        except Exception:
            logger.exception("Failed to write audit entry %s", event_type)
            return None

    def history(self, entity_type: str, entity_id: int) -> list[AuditLog]:
        return self.repo.list_by_entity(entity_type, entity_id)

    def by_actor(self, actor_id: int, limit: int = 50) -> list[AuditLog]:
        return self.repo.list_by_actor(actor_id, limit)

    def recent(self, limit: int = 50) -> list[AuditLog]:
        return self.repo.list_recent(limit)
