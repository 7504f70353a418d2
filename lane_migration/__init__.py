"""教学轨道迁移引擎

把按数字槽位随意摆放的时间线片段整理到四条语义轨道（Code / Visual /
Narration / You），检测并解决槽位冲突，提供备份与回滚。
"""

from lane_migration.domain.errors import (
    BackupNotFoundError,
    MigrationError,
    MigrationExecutionError,
    UnknownLaneError,
)
from lane_migration.domain.models.lane import LANES, Lane, get_lane, get_lane_by_slot
from lane_migration.domain.models.migration import (
    Classification,
    Conflict,
    Decision,
    LaneAssignment,
    MigrationOptions,
    MigrationPreview,
    MigrationResult,
    MigrationStats,
    ValidationReport,
)
from lane_migration.domain.models.project import (
    ItemProperties,
    LaneMetadata,
    MediaAsset,
    Project,
    TimelineItem,
)
from lane_migration.domain.services.migration_service import LaneMigrationService
from lane_migration.infra.observability.structured_logging import configure_logging

__all__ = [
    "BackupNotFoundError",
    "MigrationError",
    "MigrationExecutionError",
    "UnknownLaneError",
    "LANES",
    "Lane",
    "get_lane",
    "get_lane_by_slot",
    "Classification",
    "Conflict",
    "Decision",
    "LaneAssignment",
    "MigrationOptions",
    "MigrationPreview",
    "MigrationResult",
    "MigrationStats",
    "ValidationReport",
    "ItemProperties",
    "LaneMetadata",
    "MediaAsset",
    "Project",
    "TimelineItem",
    "LaneMigrationService",
    "configure_logging",
]
