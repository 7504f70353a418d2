"""迁移统计报告。"""

from __future__ import annotations

from typing import Optional

from lane_migration.domain.models.lane import KNOWN_KINDS, LANES
from lane_migration.domain.models.migration import MigrationStats, create_migration_stats
from lane_migration.domain.models.project import Project
from lane_migration.domain.services.conflict_detector import ConflictDetector
from lane_migration.infra.config.settings import AppSettings, get_settings
from lane_migration.placement import PlacementClassifier, analyze_item, create_classifier


class StatisticsReporter:
    def __init__(
        self,
        classifier: Optional[PlacementClassifier] = None,
        settings: Optional[AppSettings] = None,
        detector: Optional[ConflictDetector] = None,
    ) -> None:
        self._classifier = classifier or create_classifier()
        self._settings = settings or get_settings()
        self._detector = detector or ConflictDetector(self._classifier, self._settings)

    def build(self, project: Project) -> MigrationStats:
        """按分类器建议统计，而不是按片段已分配的轨道。"""
        items = project.items or []
        assets_by_id = project.assets_by_id()

        items_by_lane = {lane.name: 0 for lane in LANES}
        items_by_kind = {kind: 0 for kind in KNOWN_KINDS}
        confidences: list[int] = []

        for item in items:
            items_by_kind[item.kind] = items_by_kind.get(item.kind, 0) + 1
            analysis = analyze_item(item, assets_by_id, self._classifier, self._settings)
            items_by_lane[analysis.lane.name] = items_by_lane.get(analysis.lane.name, 0) + 1
            confidences.append(analysis.confidence)

        conflicts = self._detector.detect(items, project.assets or [])
        return create_migration_stats(
            total_items=len(items),
            items_by_lane=items_by_lane,
            items_by_kind=items_by_kind,
            confidences=confidences,
            conflict_count=len(conflicts),
        )
