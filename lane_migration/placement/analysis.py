"""单个片段的轨道分析：有素材走分类器，无素材走兜底表。"""

from __future__ import annotations

from typing import Mapping, Optional

from lane_migration.domain.models.lane import Lane, get_lane
from lane_migration.domain.models.migration import Classification
from lane_migration.domain.models.project import MediaAsset, TimelineItem
from lane_migration.infra.config.settings import AppSettings, get_settings
from lane_migration.placement.protocol import PlacementClassifier, PlacementContext

FALLBACK_LANES: dict[str, str] = {
    "code": "code",
    "video": "visual",
    "title": "visual",
    "audio": "narration",
    "visual-asset": "visual",
}


def fallback_lane_for_kind(kind: str) -> Lane:
    """素材缺失时按片段类型兜底，未知类型放到 Visual。"""
    return get_lane(FALLBACK_LANES.get(kind, "visual"))


def fallback_classification(item: TimelineItem, settings: AppSettings | None = None) -> Classification:
    settings = settings or get_settings()
    return Classification(
        lane=fallback_lane_for_kind(item.kind),
        confidence=settings.fallback_confidence,
        reason=f"no asset found, using fallback for {item.kind}",
    )


def analyze_item(
    item: TimelineItem,
    assets_by_id: Mapping[str, MediaAsset],
    classifier: PlacementClassifier,
    settings: AppSettings | None = None,
    context: Optional[PlacementContext] = None,
) -> Classification:
    asset = assets_by_id.get(item.asset_id)
    if asset is None:
        return fallback_classification(item, settings)
    context = context or PlacementContext(current_time=item.start_time)
    result = classifier.classify(item, asset, context)
    # 外部实现可能直接构造越界值
    return Classification(lane=result.lane, confidence=result.confidence, reason=result.reason)
