"""槽位冲突检测。

按当前槽位分组，同组片段的建议轨道不一致即视为冲突。
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional, Sequence

import structlog

from lane_migration.domain.models.lane import get_lane_by_slot, lanes_allowing
from lane_migration.domain.models.migration import Classification, Conflict
from lane_migration.domain.models.project import MediaAsset, TimelineItem
from lane_migration.infra.config.settings import AppSettings, get_settings
from lane_migration.placement import PlacementClassifier, analyze_item, create_classifier

logger = structlog.get_logger(__name__)


def group_by_slot(items: Iterable[TimelineItem]) -> dict[int, list[TimelineItem]]:
    groups: dict[int, list[TimelineItem]] = defaultdict(list)
    for item in items:
        groups[item.slot].append(item)
    return dict(groups)


class ConflictDetector:
    """纯函数式检测，不修改输入。"""

    def __init__(
        self,
        classifier: Optional[PlacementClassifier] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self._classifier = classifier or create_classifier()
        self._settings = settings or get_settings()

    def detect(
        self,
        items: Sequence[TimelineItem],
        assets: Sequence[MediaAsset],
    ) -> list[Conflict]:
        assets_by_id = {asset.id: asset for asset in assets or []}
        conflicts: list[Conflict] = []

        for slot, group in group_by_slot(items).items():
            # 单个片段直接迁移，不产生冲突
            if len(group) <= 1:
                continue

            analyses: list[tuple[TimelineItem, Classification]] = [
                (item, analyze_item(item, assets_by_id, self._classifier, self._settings))
                for item in group
            ]
            suggested = {analysis.lane.id for _, analysis in analyses}
            if len(suggested) <= 1:
                continue

            current_lane = get_lane_by_slot(slot)
            for item, analysis in analyses:
                # 槽位 >= 4 没有对应轨道，视为与建议不一致
                if current_lane is not None and analysis.lane.id == current_lane.id:
                    continue
                alternatives = [
                    lane for lane in lanes_allowing(item.kind) if lane.id != analysis.lane.id
                ]
                conflicts.append(
                    Conflict(
                        item_id=item.id,
                        current_slot=slot,
                        suggested_lane=analysis.lane,
                        reason=analysis.reason,
                        alternatives=alternatives,
                    )
                )

        if conflicts:
            logger.debug(
                "conflicts.detected",
                count=len(conflicts),
                slots=sorted({c.current_slot for c in conflicts}),
            )
        return conflicts
