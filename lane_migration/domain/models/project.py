"""项目（时间线容器）相关 pydantic 实体。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ItemProperties(BaseModel):
    """时间线片段的属性记录。

    常用字段显式声明，其余自定义键通过 extra 保留。
    """

    model_config = ConfigDict(extra="allow")

    # Code
    theme: Optional[str] = None
    font_size: Optional[int] = None
    show_line_numbers: Optional[bool] = None
    animation_mode: Optional[str] = None
    typing_speed_cps: Optional[int] = None
    # Visual
    auto_focus: Optional[bool] = None
    focus_scale: Optional[float] = None
    # Narration
    volume: Optional[float] = None
    # You
    talking_head_enabled: Optional[bool] = None
    talking_head_corner: Optional[str] = None
    talking_head_size: Optional[str] = None

    def explicit(self) -> dict[str, Any]:
        """只返回显式设置过的字段（含 extra）。"""
        return self.model_dump(exclude_unset=True)

    def overlay(self, override: "ItemProperties") -> "ItemProperties":
        """以 self 为底、override 覆盖，返回新记录；override 显式设置的字段优先。"""
        merged = self.explicit()
        merged.update(override.explicit())
        return ItemProperties(**merged)


class LaneMetadata(BaseModel):
    """迁移后打在片段上的语义元数据。"""

    purpose: str
    difficulty: str = "beginner"
    tags: list[str] = Field(default_factory=list)


class MediaAsset(BaseModel):
    id: str
    name: str
    kind: str  # video / image / audio / code / visual-asset
    url: str = ""
    mime_type: str = ""
    duration: Optional[float] = None
    language: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class TimelineItem(BaseModel):
    id: str
    asset_id: str
    slot: int
    kind: str
    start_time: float = 0.0  # 秒
    duration: float = 0.0
    properties: ItemProperties = Field(default_factory=ItemProperties)
    label: Optional[str] = None
    # 迁移后才会出现的字段
    assigned_lane: Optional[str] = None
    lane_metadata: Optional[LaneMetadata] = None
    suggested_lane: Optional[str] = None  # 仅低置信度分配时标注


class Project(BaseModel):
    """时间线容器。

    items 由迁移执行器整体替换；version 在首次迁移时追加迁移标记。
    """

    id: str
    name: str
    version: str = "1.0.0"
    items: list[TimelineItem] = Field(default_factory=list)
    assets: list[MediaAsset] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def assets_by_id(self) -> dict[str, MediaAsset]:
        return {asset.id: asset for asset in self.assets or []}
