"""项目迁移前快照的内存仓储。"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import structlog

from lane_migration.domain.errors import BackupNotFoundError
from lane_migration.domain.models.migration import BackupInfo
from lane_migration.domain.models.project import Project, utcnow
from lane_migration.infra.config.settings import get_settings

logger = structlog.get_logger(__name__)


@dataclass
class ProjectBackup:
    project_id: str
    snapshot: Project
    created_at: datetime
    migration_id: str
    sequence: int  # 同一时间戳下的插入顺序

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.created_at, self.sequence)


class BackupRepository:
    """按项目 id 保存深拷贝快照，并限制每个项目的保留数量。

    同一项目同一时刻只允许一个迁移在进行，并发调用需由调用方串行化。
    """

    def __init__(self, retention: int | None = None) -> None:
        self._retention = retention if retention is not None else get_settings().backup_retention
        self._backups: dict[str, ProjectBackup] = {}
        self._sequence = itertools.count()

    def create(self, project: Project) -> str:
        migration_id = f"migration_{int(time.time() * 1000)}_{uuid4().hex[:9]}"
        backup = ProjectBackup(
            project_id=project.id,
            snapshot=project.model_copy(deep=True),
            created_at=utcnow(),
            migration_id=migration_id,
            sequence=next(self._sequence),
        )
        self._backups[migration_id] = backup
        logger.info("backup.created", project_id=project.id, migration_id=migration_id)
        self._evict(project.id, self._retention)
        return migration_id

    def restore(self, migration_id: str) -> Project:
        """返回快照的全新深拷贝，仓储内的副本不会外泄。"""
        backup = self._backups.get(migration_id)
        if backup is None:
            raise BackupNotFoundError(migration_id)
        return backup.snapshot.model_copy(deep=True)

    def list_for_project(self, project_id: str) -> list[BackupInfo]:
        """最新的在前。"""
        return [
            BackupInfo(migration_id=backup.migration_id, timestamp=backup.created_at)
            for backup in self._sorted_for_project(project_id)
        ]

    def cleanup(self, project_id: str, keep: int | None = None) -> int:
        keep = keep if keep is not None else get_settings().backup_cleanup_keep
        return self._evict(project_id, keep)

    def clear(self) -> None:
        self._backups.clear()

    def __len__(self) -> int:
        return len(self._backups)

    def _sorted_for_project(self, project_id: str) -> list[ProjectBackup]:
        return sorted(
            (b for b in self._backups.values() if b.project_id == project_id),
            key=lambda b: b.sort_key,
            reverse=True,
        )

    def _evict(self, project_id: str, keep: int) -> int:
        stale = self._sorted_for_project(project_id)[max(keep, 0):]
        for backup in stale:
            del self._backups[backup.migration_id]
        if stale:
            logger.info(
                "backup.evicted",
                project_id=project_id,
                evicted=len(stale),
                kept=keep,
            )
        return len(stale)
