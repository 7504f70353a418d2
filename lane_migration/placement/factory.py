"""放置分类器工厂"""

from typing import Optional

from lane_migration.placement.protocol import PlacementClassifier


def create_classifier(backend: Optional[str] = None) -> PlacementClassifier:
    """创建放置分类器实例

    Args:
        backend: 分类器后端，目前只有 "rules"（基于素材类型与名称的规则）。
            如果为 None，则从配置中读取默认值

    Raises:
        ValueError: 如果指定了未知的后端类型
    """
    from lane_migration.infra.config.settings import settings

    backend = backend or settings.placement_backend

    if backend == "rules":
        from lane_migration.placement.rules import RuleBasedPlacementClassifier

        return RuleBasedPlacementClassifier()
    raise ValueError(f"Unknown placement backend: {backend}")
