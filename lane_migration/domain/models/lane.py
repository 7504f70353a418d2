"""语义轨道（Lane）定义。

四条固定轨道，每条对应一个数字槽位：

- Code (0): 代码演示
- Visual (1): 画面素材、录屏、标题
- Narration (2): 旁白与音频
- You (3): 出镜讲解
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from lane_migration.domain.models.project import ItemProperties

ContentPurpose = Literal["demonstration", "explanation", "narration", "personal"]

KNOWN_KINDS: tuple[str, ...] = ("video", "code", "title", "audio", "visual-asset")


@dataclass(frozen=True)
class Lane:
    """语义轨道，定义后不可变。"""

    id: str
    name: str
    slot: int
    allowed_kinds: frozenset[str]
    default_properties: ItemProperties = field(default_factory=ItemProperties, hash=False)
    color: str = ""
    icon: str = ""

    def allows(self, kind: str) -> bool:
        return kind in self.allowed_kinds


LANES: tuple[Lane, ...] = (
    Lane(
        id="code",
        name="Code",
        slot=0,
        allowed_kinds=frozenset({"code"}),
        default_properties=ItemProperties(
            theme="vscode-dark-plus",
            font_size=16,
            show_line_numbers=True,
            animation_mode="typing",
            typing_speed_cps=20,
        ),
        color="#8B5CF6",
        icon="code",
    ),
    Lane(
        id="visual",
        name="Visual",
        slot=1,
        # title 的兜底轨道是 Visual，因此 Visual 必须接受 title
        allowed_kinds=frozenset({"video", "visual-asset", "title"}),
        default_properties=ItemProperties(auto_focus=True, focus_scale=1.2),
        color="#10B981",
        icon="monitor",
    ),
    Lane(
        id="narration",
        name="Narration",
        slot=2,
        allowed_kinds=frozenset({"audio"}),
        default_properties=ItemProperties(volume=0.8),
        color="#F59E0B",
        icon="mic",
    ),
    Lane(
        id="you",
        name="You",
        slot=3,
        allowed_kinds=frozenset({"video"}),
        default_properties=ItemProperties(
            talking_head_enabled=True,
            talking_head_corner="bottom-right",
            talking_head_size="md",
        ),
        color="#EF4444",
        icon="user",
    ),
)

_LANES_BY_ID = {lane.id: lane for lane in LANES}
_LANES_BY_SLOT = {lane.slot: lane for lane in LANES}
_LANES_BY_NAME = {lane.name: lane for lane in LANES}

# 内容用途：轨道 -> 素材类型 -> 用途
_PURPOSE_TABLE: dict[str, dict[str, ContentPurpose]] = {
    "code": {
        "code": "demonstration",
        "video": "demonstration",
        "audio": "explanation",
        "title": "explanation",
        "visual-asset": "explanation",
    },
    "visual": {
        "code": "demonstration",
        "video": "demonstration",
        "audio": "explanation",
        "title": "explanation",
        "visual-asset": "demonstration",
    },
    "narration": {kind: "narration" for kind in KNOWN_KINDS},
    "you": {kind: "personal" for kind in KNOWN_KINDS},
}


def get_lane(lane_id: str) -> Lane:
    """按 id 获取轨道。

    Raises:
        KeyError: 未知轨道 id
    """
    try:
        return _LANES_BY_ID[lane_id]
    except KeyError:
        raise KeyError(f"Unknown lane: {lane_id}") from None


def get_lane_by_slot(slot: int) -> Optional[Lane]:
    """槽位 -> 轨道，仅 0..3 有定义，其余返回 None。"""
    return _LANES_BY_SLOT.get(slot)


def get_lane_by_name(name: str) -> Optional[Lane]:
    return _LANES_BY_NAME.get(name)


def is_kind_allowed(lane: Lane, kind: str) -> bool:
    return lane.allows(kind)


def supported_kinds() -> frozenset[str]:
    """所有轨道允许的素材类型并集。"""
    kinds: set[str] = set()
    for lane in LANES:
        kinds.update(lane.allowed_kinds)
    return frozenset(kinds)


def lanes_allowing(kind: str) -> list[Lane]:
    return [lane for lane in LANES if lane.allows(kind)]


def content_purpose(lane_id: str, kind: str) -> ContentPurpose:
    return _PURPOSE_TABLE.get(lane_id, {}).get(kind, "explanation")
