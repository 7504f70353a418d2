"""规则分类器与兜底分析单元测试。"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from lane_migration.domain.models.lane import get_lane
from lane_migration.domain.models.migration import Classification
from lane_migration.domain.models.project import MediaAsset, TimelineItem
from lane_migration.placement import (
    PlacementClassifier,
    PlacementContext,
    analyze_item,
    create_classifier,
    fallback_classification,
)
from lane_migration.placement.rules import RuleBasedPlacementClassifier


@pytest.fixture
def classifier() -> RuleBasedPlacementClassifier:
    return RuleBasedPlacementClassifier()


class TestRuleBasedClassifier:
    @pytest.mark.parametrize(
        ("kind", "name", "lane_id", "confidence"),
        [
            ("code", "index.ts", "code", 95),
            ("video", "clip.mp4", "visual", 70),
            ("video", "screen-recording.mp4", "visual", 90),
            ("video", "webcam-intro.mp4", "you", 95),
            ("audio", "track.wav", "narration", 90),
            ("audio", "voiceover.wav", "narration", 95),
            ("image", "architecture-diagram.png", "visual", 90),
            ("visual-asset", "logo.svg", "visual", 85),
        ],
    )
    def test_suggestions(
        self,
        classifier: RuleBasedPlacementClassifier,
        asset_factory: Callable[..., MediaAsset],
        item_factory: Callable[..., TimelineItem],
        kind: str,
        name: str,
        lane_id: str,
        confidence: int,
    ) -> None:
        asset = asset_factory("a1", kind, name)
        result = classifier.classify(item_factory("i1", "a1", kind), asset)

        assert result.lane.id == lane_id
        assert result.confidence == confidence

    def test_unknown_asset_kind_defaults_to_visual(
        self,
        classifier: RuleBasedPlacementClassifier,
        asset_factory: Callable[..., MediaAsset],
        item_factory: Callable[..., TimelineItem],
    ) -> None:
        result = classifier.classify(item_factory("i1", "a1"), asset_factory("a1", "pdf", "notes.pdf"))

        assert result.lane.id == "visual"
        assert result.confidence == 50
        assert "Unknown content type" in result.reason

    def test_selected_slot_boosts_confidence(
        self,
        classifier: RuleBasedPlacementClassifier,
        asset_factory: Callable[..., MediaAsset],
        item_factory: Callable[..., TimelineItem],
    ) -> None:
        """选中槽位与建议一致时置信度提升，上限 98。"""
        asset = asset_factory("a1", "code", "main.py")
        result = classifier.classify(
            item_factory("i1", "a1", "code"), asset, PlacementContext(selected_slot=0)
        )

        assert result.confidence == 98
        assert result.reason.endswith("(matches selected lane)")

    def test_selected_slot_of_other_lane_has_no_effect(
        self,
        classifier: RuleBasedPlacementClassifier,
        asset_factory: Callable[..., MediaAsset],
        item_factory: Callable[..., TimelineItem],
    ) -> None:
        asset = asset_factory("a1", "code", "main.py")
        result = classifier.classify(
            item_factory("i1", "a1", "code"), asset, PlacementContext(selected_slot=2)
        )
        assert result.confidence == 95

    def test_satisfies_protocol(self, classifier: RuleBasedPlacementClassifier) -> None:
        assert isinstance(classifier, PlacementClassifier)


class TestFactory:
    def test_rules_backend(self) -> None:
        assert isinstance(create_classifier("rules"), RuleBasedPlacementClassifier)

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown placement backend"):
            create_classifier("llm")


class TestAnalyzeItem:
    def test_missing_asset_uses_fallback(
        self, item_factory: Callable[..., TimelineItem]
    ) -> None:
        item = item_factory("i1", "gone", "audio")
        result = analyze_item(item, {}, RuleBasedPlacementClassifier())

        assert result.lane.id == "narration"
        assert result.confidence == 30
        assert result.reason == "no asset found, using fallback for audio"

    @pytest.mark.parametrize(
        ("kind", "lane_id"),
        [("code", "code"), ("video", "visual"), ("title", "visual"), ("visual-asset", "visual"), ("custom", "visual")],
    )
    def test_fallback_table(
        self, item_factory: Callable[..., TimelineItem], kind: str, lane_id: str
    ) -> None:
        assert fallback_classification(item_factory(kind=kind)).lane.id == lane_id

    def test_external_confidence_is_clamped(
        self,
        asset_factory: Callable[..., MediaAsset],
        item_factory: Callable[..., TimelineItem],
    ) -> None:
        class Overconfident:
            def classify(self, item, asset, context=None):  # type: ignore[no-untyped-def]
                result = Classification(lane=get_lane("you"), confidence=0, reason="sure")
                result.confidence = 250
                return result

        asset = asset_factory("a1", "video")
        result = analyze_item(item_factory("i1", "a1"), {"a1": asset}, Overconfident())
        assert result.confidence == 100

    def test_classification_clamps_on_construction(self) -> None:
        assert Classification(lane=get_lane("code"), confidence=-5, reason="").confidence == 0
        assert Classification(lane=get_lane("code"), confidence=101, reason="").confidence == 100
