"""合并分类器建议与调用方裁决，得到每个片段的最终轨道。"""

from __future__ import annotations

from typing import Optional, Sequence

from lane_migration.domain.errors import UnknownLaneError
from lane_migration.domain.models.lane import get_lane
from lane_migration.domain.models.migration import Decision, LaneAssignment
from lane_migration.domain.models.project import MediaAsset, TimelineItem
from lane_migration.infra.config.settings import AppSettings, get_settings
from lane_migration.placement import PlacementClassifier, analyze_item, create_classifier


class DecisionResolver:
    def __init__(
        self,
        classifier: Optional[PlacementClassifier] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self._classifier = classifier or create_classifier()
        self._settings = settings or get_settings()

    def resolve(
        self,
        items: Sequence[TimelineItem],
        assets: Sequence[MediaAsset],
        decisions: Sequence[Decision] = (),
    ) -> list[LaneAssignment]:
        """为每个片段给出分配。

        不再重新检测冲突：调用方一旦选择自动解决或提供了裁决，
        所有片段都进入分配，无论是否曾被标记为冲突。

        Raises:
            UnknownLaneError: 裁决选择的轨道 id 不存在
        """
        assets_by_id = {asset.id: asset for asset in assets or []}
        decisions_by_item = {decision.conflict_id: decision for decision in decisions}
        assignments: list[LaneAssignment] = []

        for item in items:
            decision = decisions_by_item.get(item.id)
            if decision is not None:
                if decision.user_override:
                    confidence = self._settings.user_override_confidence
                    reason = "user override"
                else:
                    confidence = self._settings.user_decision_confidence
                    reason = "user decision"
                try:
                    lane = get_lane(decision.selected_lane)
                except KeyError:
                    raise UnknownLaneError(decision.selected_lane) from None
            else:
                analysis = analyze_item(item, assets_by_id, self._classifier, self._settings)
                lane, confidence, reason = analysis.lane, analysis.confidence, analysis.reason

            assignments.append(
                LaneAssignment(
                    item_id=item.id,
                    current_slot=item.slot,
                    lane=lane,
                    confidence=confidence,
                    reason=reason,
                )
            )
        return assignments
