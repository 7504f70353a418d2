"""基于规则的轨道放置分类器

先按素材类型给出基础建议，再用名称 / MIME 规则提升置信度，
最后根据用户当前选中的槽位做上下文微调。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from lane_migration.domain.models.lane import get_lane, get_lane_by_slot
from lane_migration.domain.models.migration import Classification
from lane_migration.domain.models.project import MediaAsset, TimelineItem
from lane_migration.placement.protocol import PlacementContext

logger = structlog.get_logger(__name__)

CODE_EXTENSIONS = (
    ".js", ".ts", ".py", ".java", ".cpp", ".c", ".html", ".css", ".jsx", ".tsx",
    ".vue", ".php", ".rb", ".go", ".rs", ".swift", ".kt",
)
AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg", ".m4a", ".aac")

# 素材类型 -> (轨道 id, 置信度)
_BASE_MAPPINGS: dict[str, tuple[str, int]] = {
    "code": ("code", 95),
    "audio": ("narration", 90),
    "video": ("visual", 70),
    "visual-asset": ("visual", 85),
    "title": ("visual", 80),
}

_UNKNOWN_KIND_CONFIDENCE = 50
_SELECTED_SLOT_BOOST = 10
_SELECTED_SLOT_CAP = 98


def _name_has(asset: MediaAsset, *words: str) -> bool:
    name = asset.name.lower()
    return any(word in name for word in words)


@dataclass(frozen=True)
class ContentRule:
    matches: Callable[[MediaAsset], bool]
    lane_id: str
    confidence: int
    reason: str


CONTENT_RULES: tuple[ContentRule, ...] = (
    ContentRule(
        matches=lambda a: a.kind == "video" and _name_has(a, "screen", "recording", "demo"),
        lane_id="visual",
        confidence=90,
        reason="Screen recording content is best suited for Visual lane",
    ),
    ContentRule(
        matches=lambda a: a.kind == "video"
        and _name_has(a, "talking", "head", "presenter", "webcam", "camera"),
        lane_id="you",
        confidence=95,
        reason="Personal video content should be placed on You lane",
    ),
    ContentRule(
        matches=lambda a: a.kind == "code" or a.name.lower().endswith(CODE_EXTENSIONS),
        lane_id="code",
        confidence=95,
        reason="Code files should be placed on Code lane for syntax highlighting",
    ),
    ContentRule(
        matches=lambda a: a.kind == "audio"
        or a.mime_type.startswith("audio/")
        or a.name.lower().endswith(AUDIO_EXTENSIONS),
        lane_id="narration",
        confidence=90,
        reason="Audio content belongs on Narration lane",
    ),
    ContentRule(
        matches=lambda a: a.kind == "audio"
        and _name_has(a, "voice", "narration", "commentary", "explanation"),
        lane_id="narration",
        confidence=95,
        reason="Voiceover content is perfect for Narration lane",
    ),
    ContentRule(
        matches=lambda a: a.kind == "audio" and _name_has(a, "music", "background", "bgm", "ambient"),
        lane_id="narration",
        confidence=80,
        reason="Background music should be managed on Narration lane",
    ),
    ContentRule(
        matches=lambda a: a.kind in ("image", "visual-asset")
        and _name_has(a, "diagram", "chart", "graph", "illustration", "visual"),
        lane_id="visual",
        confidence=90,
        reason="Educational diagrams and visual aids belong on Visual lane",
    ),
)


def effective_kind(asset: MediaAsset) -> str:
    """图片素材在时间线上以 video 片段出现。"""
    return "video" if asset.kind == "image" else asset.kind


class RuleBasedPlacementClassifier:
    """按素材类型与命名规则建议轨道。"""

    def __init__(self, rules: tuple[ContentRule, ...] = CONTENT_RULES) -> None:
        self._rules = rules

    def classify(
        self,
        item: TimelineItem,
        asset: MediaAsset,
        context: Optional[PlacementContext] = None,
    ) -> Classification:
        kind = effective_kind(asset)
        base = _BASE_MAPPINGS.get(kind)
        if base is None:
            logger.debug("placement.unknown_kind", item_id=item.id, asset_kind=asset.kind)
            return Classification(
                lane=get_lane("visual"),
                confidence=_UNKNOWN_KIND_CONFIDENCE,
                reason="Unknown content type, defaulting to Visual lane",
            )

        lane_id, confidence = base
        reason = f"{asset.kind} content typically belongs on {get_lane(lane_id).name} lane"

        # 规则只在置信度更高时覆盖
        for rule in self._rules:
            if rule.confidence > confidence and rule.matches(asset):
                lane_id, confidence, reason = rule.lane_id, rule.confidence, rule.reason

        if context is not None and context.selected_slot is not None:
            selected = get_lane_by_slot(context.selected_slot)
            if selected is not None and selected.id == lane_id and selected.allows(kind):
                confidence = min(_SELECTED_SLOT_CAP, confidence + _SELECTED_SLOT_BOOST)
                reason += " (matches selected lane)"

        return Classification(lane=get_lane(lane_id), confidence=confidence, reason=reason)
