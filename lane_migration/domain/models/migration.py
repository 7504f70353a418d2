"""迁移流程中的临时数据结构。

Classification / Conflict / LaneAssignment 只在单次迁移或预览中存在，不会持久化。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, TypedDict

from pydantic import BaseModel

from lane_migration.domain.models.lane import Lane
from lane_migration.infra.config.settings import AppSettings, get_settings


def clamp_confidence(value: float) -> int:
    """置信度规整到 [0, 100] 的整数。"""
    return max(0, min(100, int(round(value))))


@dataclass
class Classification:
    """分类器对单个片段的建议。"""

    lane: Lane
    confidence: int  # 0-100
    reason: str

    def __post_init__(self) -> None:
        self.confidence = clamp_confidence(self.confidence)


@dataclass
class Conflict:
    """同一槽位内片段对轨道归属的分歧。"""

    item_id: str
    current_slot: int
    suggested_lane: Lane
    reason: str
    alternatives: list[Lane] = field(default_factory=list)


@dataclass
class Decision:
    """调用方对某个片段的显式裁决，conflict_id 即片段 id。"""

    conflict_id: str
    selected_lane: str
    user_override: bool = False


@dataclass
class LaneAssignment:
    """片段最终（或预览中）的轨道分配。"""

    item_id: str
    current_slot: int
    lane: Lane
    confidence: int
    reason: str


class MigrationOptions(BaseModel):
    auto_resolve_conflicts: bool = False
    preserve_original: bool = True

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "MigrationOptions":
        """根据全局配置构造默认值。"""

        settings = settings or get_settings()
        return cls(
            auto_resolve_conflicts=settings.auto_resolve_conflicts,
            preserve_original=settings.preserve_original,
        )


@dataclass
class MigrationResult:
    success: bool
    migrated_count: int = 0
    conflicts: list[Conflict] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    migration_id: Optional[str] = None  # 对应备份 id，可用于回滚

    @classmethod
    def failed(cls, message: str, migration_id: Optional[str] = None) -> "MigrationResult":
        return cls(
            success=False,
            warnings=[f"Migration failed: {message}"],
            migration_id=migration_id,
        )


@dataclass
class MigrationPreview:
    conflicts: list[Conflict]
    assignments: list[LaneAssignment]
    warnings: list[str]


@dataclass
class ValidationReport:
    issues: list[str] = field(default_factory=list)

    @property
    def can_migrate(self) -> bool:
        return not self.issues


@dataclass
class BackupInfo:
    migration_id: str
    timestamp: datetime


class MigrationStats(TypedDict):
    """迁移统计。

    字段说明:
    - total_items: 片段总数
    - items_by_lane: 按分类器建议轨道（名称）计数，四条轨道均有键
    - items_by_kind: 按素材类型计数，已知类型均有键
    - average_confidence: 平均置信度，空项目为 0
    - conflict_count: 冲突数量
    """

    total_items: int
    items_by_lane: dict[str, int]
    items_by_kind: dict[str, int]
    average_confidence: float
    conflict_count: int


def create_migration_stats(
    total_items: int,
    items_by_lane: dict[str, int],
    items_by_kind: dict[str, int],
    confidences: list[int],
    conflict_count: int,
) -> MigrationStats:
    average = sum(confidences) / len(confidences) if confidences else 0.0
    return MigrationStats(
        total_items=total_items,
        items_by_lane=items_by_lane,
        items_by_kind=items_by_kind,
        average_confidence=average,
        conflict_count=conflict_count,
    )
