#!/usr/bin/env python
"""Pytest fixtures for lane migration project."""
# ruff: noqa: E402

import sys
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lane_migration.domain.models.project import (
    ItemProperties,
    MediaAsset,
    Project,
    TimelineItem,
)
from lane_migration.domain.services.migration_service import LaneMigrationService
from lane_migration.infra.config.settings import AppSettings
from lane_migration.infra.persistence.repositories.backup_repository import BackupRepository


@pytest.fixture
def app_settings() -> AppSettings:
    """测试用配置，不读取 .env。"""
    return AppSettings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def backup_repo(app_settings: AppSettings) -> BackupRepository:
    """每个测试函数独立的备份仓储。"""
    return BackupRepository(retention=app_settings.backup_retention)


@pytest.fixture
def migration_service(
    app_settings: AppSettings, backup_repo: BackupRepository
) -> LaneMigrationService:
    return LaneMigrationService(backups=backup_repo, settings=app_settings)


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def asset_factory() -> Callable[..., MediaAsset]:
    """创建 MediaAsset 的工厂函数。"""

    def _create(
        asset_id: str | None = None,
        kind: str = "video",
        name: str = "clip.mp4",
        **kwargs: Any,
    ) -> MediaAsset:
        mime = {"audio": "audio/wav", "video": "video/mp4"}.get(kind, "text/plain")
        kwargs.setdefault("mime_type", mime)
        return MediaAsset(
            id=asset_id or str(uuid.uuid4()),
            name=name,
            kind=kind,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            **kwargs,
        )

    return _create


@pytest.fixture
def item_factory() -> Callable[..., TimelineItem]:
    """创建 TimelineItem 的工厂函数。"""

    def _create(
        item_id: str | None = None,
        asset_id: str = "missing-asset",
        kind: str = "video",
        slot: int = 0,
        properties: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> TimelineItem:
        return TimelineItem(
            id=item_id or str(uuid.uuid4()),
            asset_id=asset_id,
            slot=slot,
            kind=kind,
            start_time=0.0,
            duration=5.0,
            properties=ItemProperties(**(properties or {})),
            **kwargs,
        )

    return _create


@pytest.fixture
def project_factory() -> Callable[..., Project]:
    """创建 Project 的工厂函数。"""

    def _create(
        project_id: str = "p1",
        name: str = "Educational Demo",
        version: str = "1.0.0",
        items: list[TimelineItem] | None = None,
        assets: list[MediaAsset] | None = None,
        **kwargs: Any,
    ) -> Project:
        return Project(
            id=project_id,
            name=name,
            version=version,
            items=items or [],
            assets=assets or [],
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
            **kwargs,
        )

    return _create


@pytest.fixture
def mixed_slot_project(
    project_factory: Callable[..., Project],
    item_factory: Callable[..., TimelineItem],
    asset_factory: Callable[..., MediaAsset],
) -> Project:
    """代码 / 录屏 / 旁白三个片段都堆在槽位 0。"""
    return project_factory(
        assets=[
            asset_factory("a-code", "code", "index.ts", language="typescript"),
            asset_factory("a-video", "video", "screen-recording.mp4"),
            asset_factory("a-audio", "audio", "voiceover.wav"),
        ],
        items=[
            item_factory("i-code", "a-code", "code", 0),
            item_factory("i-video", "a-video", "video", 0),
            item_factory("i-audio", "a-audio", "audio", 0),
        ],
    )
