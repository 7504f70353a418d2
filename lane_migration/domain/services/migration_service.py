"""轨道迁移服务。

对外入口：migrate / preview / rollback，以及 validate / stats /
list_backups / cleanup_backups / is_migrated。

流程: migrate -> 备份（可选）-> 冲突检测 -> 裁决合并 -> 执行写回。
preview 只做检测与分类，不修改项目也不创建备份；rollback 只访问备份仓储。
"""

from __future__ import annotations

from typing import Optional, Sequence

import structlog

from lane_migration.domain.errors import MigrationExecutionError
from lane_migration.domain.models.migration import (
    BackupInfo,
    Decision,
    LaneAssignment,
    MigrationOptions,
    MigrationPreview,
    MigrationResult,
    MigrationStats,
    ValidationReport,
)
from lane_migration.domain.models.project import Project
from lane_migration.domain.services.conflict_detector import ConflictDetector
from lane_migration.domain.services.decision_resolver import DecisionResolver
from lane_migration.domain.services.migration_executor import MigrationExecutor
from lane_migration.domain.services.statistics import StatisticsReporter
from lane_migration.domain.services.validator import validate_project
from lane_migration.infra.config.settings import AppSettings, get_settings
from lane_migration.infra.observability.migration_metrics import record_migration, record_rollback
from lane_migration.infra.persistence.repositories.backup_repository import BackupRepository
from lane_migration.placement import PlacementClassifier, analyze_item, create_classifier

logger = structlog.get_logger(__name__)


class LaneMigrationService:
    def __init__(
        self,
        classifier: Optional[PlacementClassifier] = None,
        backups: Optional[BackupRepository] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._classifier = classifier or create_classifier(self._settings.placement_backend)
        self._backups = backups if backups is not None else BackupRepository(
            retention=self._settings.backup_retention
        )
        self._detector = ConflictDetector(self._classifier, self._settings)
        self._resolver = DecisionResolver(self._classifier, self._settings)
        self._executor = MigrationExecutor(self._settings)
        self._reporter = StatisticsReporter(self._classifier, self._settings, self._detector)

    @property
    def backups(self) -> BackupRepository:
        return self._backups

    def migrate(
        self,
        project: Project,
        options: Optional[MigrationOptions] = None,
        decisions: Sequence[Decision] = (),
    ) -> MigrationResult:
        """把项目中的片段迁移到语义轨道。

        有冲突且调用方既未开启自动解决也未提供裁决时，返回 success=False
        和冲突列表，项目保持不变。任何意外异常都会转换成失败结果，不会抛出。

        Args:
            project: 待迁移项目，成功时被原地修改
            options: 迁移选项，默认取配置
            decisions: 调用方对片段的显式裁决

        Returns:
            MigrationResult；preserve_original 开启时 migration_id 可用于回滚
        """
        migration_id: Optional[str] = None
        project_id = getattr(project, "id", None)
        log = logger.bind(project_id=project_id)

        try:
            options = options or MigrationOptions.from_settings(self._settings)
            if project is None or project.items is None:
                raise MigrationExecutionError("project has no item list")

            if options.preserve_original:
                migration_id = self._backups.create(project)

            conflicts = self._detector.detect(project.items, project.assets)
            if conflicts and not options.auto_resolve_conflicts and not decisions:
                log.info(
                    "migration.conflicts_pending",
                    conflicts=len(conflicts),
                    migration_id=migration_id,
                )
                record_migration(project.id, "conflicts_pending", conflict_count=len(conflicts))
                return MigrationResult(
                    success=False,
                    conflicts=conflicts,
                    warnings=[
                        f"Found {len(conflicts)} migration conflicts that require user resolution"
                    ],
                    migration_id=migration_id,
                )

            assignments = self._resolver.resolve(project.items, project.assets, decisions)
            migrated, warnings = self._executor.execute(project, assignments)
        except Exception as exc:  # noqa: BLE001
            log.warning("migration.failed", error=str(exc), migration_id=migration_id)
            record_migration(project_id or "unknown", "failed")
            return MigrationResult.failed(str(exc), migration_id=migration_id)

        log.info(
            "migration.completed",
            migrated=len(migrated),
            warnings=len(warnings),
            resolved_conflicts=len(conflicts),
            decisions=len(decisions),
            migration_id=migration_id,
        )
        record_migration(
            project.id,
            "completed",
            migrated_count=len(migrated),
            conflict_count=len(conflicts),
            warning_count=len(warnings),
        )
        return MigrationResult(
            success=True,
            migrated_count=len(migrated),
            conflicts=[],
            warnings=warnings,
            migration_id=migration_id,
        )

    def preview(self, project: Project) -> MigrationPreview:
        """演练：返回完整的建议映射与冲突，不修改项目、不创建备份。"""
        items = project.items or []
        assets = project.assets or []
        assets_by_id = project.assets_by_id()

        conflicts = self._detector.detect(items, assets)
        assignments: list[LaneAssignment] = []
        warnings: list[str] = []

        for item in items:
            analysis = analyze_item(item, assets_by_id, self._classifier, self._settings)
            assignments.append(
                LaneAssignment(
                    item_id=item.id,
                    current_slot=item.slot,
                    lane=analysis.lane,
                    confidence=analysis.confidence,
                    reason=analysis.reason,
                )
            )
            if analysis.confidence < self._settings.low_confidence_threshold:
                warnings.append(
                    f"Low confidence ({analysis.confidence}%) for item {item.id}: {analysis.reason}"
                )

        logger.debug(
            "migration.previewed",
            project_id=project.id,
            items=len(assignments),
            conflicts=len(conflicts),
        )
        return MigrationPreview(conflicts=conflicts, assignments=assignments, warnings=warnings)

    def rollback(self, migration_id: str) -> Project:
        """返回迁移前的项目快照（全新深拷贝）。

        Raises:
            BackupNotFoundError: 未知的 migration_id
        """
        project = self._backups.restore(migration_id)
        logger.info("backup.rollback", project_id=project.id, migration_id=migration_id)
        record_rollback(project.id)
        return project

    def validate(self, project: Project) -> ValidationReport:
        return validate_project(project)

    def stats(self, project: Project) -> MigrationStats:
        return self._reporter.build(project)

    def list_backups(self, project_id: str) -> list[BackupInfo]:
        return self._backups.list_for_project(project_id)

    def cleanup_backups(self, project_id: str, keep: Optional[int] = None) -> int:
        return self._backups.cleanup(project_id, keep)

    def clear_backups(self) -> None:
        """仅用于测试隔离。"""
        self._backups.clear()

    def is_migrated(self, project: Project) -> bool:
        if self._settings.migration_version_marker in project.version:
            return True
        return any(
            item.assigned_lane is not None or item.lane_metadata is not None
            for item in project.items or []
        )
