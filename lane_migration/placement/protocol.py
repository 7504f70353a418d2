"""轨道放置分类器接口定义"""

from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, runtime_checkable

from lane_migration.domain.models.migration import Classification
from lane_migration.domain.models.project import MediaAsset, TimelineItem


@dataclass
class PlacementContext:
    """分类时可参考的时间线上下文"""

    existing_items: Sequence[TimelineItem] = field(default_factory=list)
    current_time: Optional[float] = None
    selected_slot: Optional[int] = None


@runtime_checkable
class PlacementClassifier(Protocol):
    """轨道放置分类器统一接口

    迁移流程只依赖此协议，具体启发式规则由实现决定。
    """

    def classify(
        self,
        item: TimelineItem,
        asset: MediaAsset,
        context: Optional[PlacementContext] = None,
    ) -> Classification:
        """为片段建议语义轨道

        Args:
            item: 时间线片段
            asset: 片段引用的素材
            context: 时间线上下文

        Returns:
            建议轨道、0-100 的置信度与可读原因
        """
        ...
