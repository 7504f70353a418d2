"""把最终分配写回项目。"""

from __future__ import annotations

from typing import Optional, Sequence

import structlog

from lane_migration.domain.errors import MigrationExecutionError
from lane_migration.domain.models.lane import content_purpose
from lane_migration.domain.models.migration import LaneAssignment
from lane_migration.domain.models.project import LaneMetadata, Project, TimelineItem, utcnow
from lane_migration.infra.config.settings import AppSettings, get_settings

logger = structlog.get_logger(__name__)


class MigrationExecutor:
    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self._settings = settings or get_settings()

    def execute(
        self,
        project: Project,
        assignments: Sequence[LaneAssignment],
    ) -> tuple[list[TimelineItem], list[str]]:
        """应用分配并更新项目。

        类型与轨道不兼容、置信度偏低都只产生警告，分配照常进行。
        项目的 items 在全部片段处理完后才整体替换。

        Raises:
            MigrationExecutionError: 项目缺少片段列表或有片段没有分配
        """
        if project.items is None:
            raise MigrationExecutionError("project has no item list")

        by_item = {assignment.item_id: assignment for assignment in assignments}
        warnings: list[str] = []
        migrated: list[TimelineItem] = []

        for item in project.items:
            assignment = by_item.get(item.id)
            if assignment is None:
                raise MigrationExecutionError(f"no lane assignment for item {item.id}")
            migrated_item, item_warnings = self._apply(item, assignment)
            migrated.append(migrated_item)
            warnings.extend(item_warnings)

        project.items = migrated
        project.updated_at = utcnow()
        self.stamp_version(project)

        logger.debug(
            "migration.items_applied",
            project_id=project.id,
            migrated=len(migrated),
            warnings=len(warnings),
        )
        return migrated, warnings

    def stamp_version(self, project: Project) -> None:
        """追加迁移标记，已包含标记时不重复追加。"""
        marker = self._settings.migration_version_marker
        if marker not in project.version:
            project.version = f"{project.version}-{marker}"

    def _apply(
        self, item: TimelineItem, assignment: LaneAssignment
    ) -> tuple[TimelineItem, list[str]]:
        lane = assignment.lane
        warnings: list[str] = []

        if not lane.allows(item.kind):
            warnings.append(
                f"Item {item.id} ({item.kind}) may not be compatible with {lane.name} lane"
            )

        suggested_lane: Optional[str] = None
        if assignment.confidence < self._settings.low_confidence_threshold:
            suggested_lane = lane.id
            warnings.append(
                f"Low confidence ({assignment.confidence}%) for item {item.id} "
                f"placement on {lane.name} lane: {assignment.reason}"
            )

        migrated = item.model_copy(
            deep=True,
            update={
                "slot": lane.slot,
                "properties": lane.default_properties.overlay(item.properties),
                "assigned_lane": lane.id,
                "lane_metadata": LaneMetadata(
                    purpose=content_purpose(lane.id, item.kind),
                    difficulty=self._settings.default_difficulty,
                    tags=[],
                ),
                "suggested_lane": suggested_lane,
            },
        )
        return migrated, warnings
