"""轨道放置分类模块

- protocol: 分类器协议（迁移流程只依赖它）
- rules: 默认的规则分类器
- analysis: 带兜底的单片段分析
"""

from lane_migration.placement.protocol import PlacementClassifier, PlacementContext
from lane_migration.placement.factory import create_classifier
from lane_migration.placement.analysis import analyze_item, fallback_classification

__all__ = [
    "PlacementClassifier",
    "PlacementContext",
    "create_classifier",
    "analyze_item",
    "fallback_classification",
]
