"""轨道注册表单元测试。"""

from __future__ import annotations

import pytest

from lane_migration.domain.models.lane import (
    LANES,
    content_purpose,
    get_lane,
    get_lane_by_name,
    get_lane_by_slot,
    lanes_allowing,
    supported_kinds,
)
from lane_migration.domain.models.project import ItemProperties


class TestLaneLookup:
    def test_one_lane_per_slot(self) -> None:
        assert [lane.slot for lane in LANES] == [0, 1, 2, 3]
        assert [lane.id for lane in LANES] == ["code", "visual", "narration", "you"]

    def test_slot_outside_domain_has_no_lane(self) -> None:
        assert get_lane_by_slot(4) is None
        assert get_lane_by_slot(-1) is None

    def test_lookup_by_name(self) -> None:
        assert get_lane_by_name("Narration") is get_lane("narration")
        assert get_lane_by_name("Audio") is None

    def test_unknown_lane_id_raises(self) -> None:
        with pytest.raises(KeyError):
            get_lane("music")

    def test_lanes_are_immutable(self) -> None:
        lane = get_lane("code")
        with pytest.raises(AttributeError):
            lane.slot = 2  # type: ignore[misc]


class TestAllowedKinds:
    def test_supported_kinds_is_union(self) -> None:
        assert supported_kinds() == {"code", "video", "visual-asset", "title", "audio"}

    def test_video_allowed_on_visual_and_you(self) -> None:
        assert [lane.id for lane in lanes_allowing("video")] == ["visual", "you"]

    def test_title_allowed_on_visual(self) -> None:
        assert get_lane("visual").allows("title")
        assert not get_lane("code").allows("title")


class TestContentPurpose:
    @pytest.mark.parametrize(
        ("lane_id", "kind", "expected"),
        [
            ("code", "code", "demonstration"),
            ("code", "audio", "explanation"),
            ("visual", "visual-asset", "demonstration"),
            ("narration", "video", "narration"),
            ("you", "code", "personal"),
        ],
    )
    def test_purpose_table(self, lane_id: str, kind: str, expected: str) -> None:
        assert content_purpose(lane_id, kind) == expected

    def test_unknown_combination_defaults_to_explanation(self) -> None:
        assert content_purpose("code", "hologram") == "explanation"


class TestPropertyOverlay:
    def test_item_properties_win_over_lane_defaults(self) -> None:
        defaults = get_lane("code").default_properties
        merged = defaults.overlay(ItemProperties(font_size=24, position="left"))

        assert merged.font_size == 24
        assert merged.theme == "vscode-dark-plus"
        assert merged.show_line_numbers is True
        assert merged.explicit()["position"] == "left"

    def test_overlay_does_not_touch_lane_defaults(self) -> None:
        defaults = get_lane("narration").default_properties
        defaults.overlay(ItemProperties(volume=0.2))
        assert get_lane("narration").default_properties.volume == 0.8
