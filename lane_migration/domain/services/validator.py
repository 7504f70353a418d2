"""迁移前置检查。"""

from __future__ import annotations

from lane_migration.domain.models.lane import get_lane_by_slot, supported_kinds
from lane_migration.domain.models.migration import ValidationReport
from lane_migration.domain.models.project import Project


def validate_project(project: Project) -> ValidationReport:
    """逐项检查并汇总问题，各项检查互不影响。"""
    report = ValidationReport()
    items = project.items or []
    assets = project.assets or []

    if not items:
        report.issues.append("Project has no timeline items to migrate")

    if not assets:
        report.issues.append("Project has no media assets")

    asset_ids = {asset.id for asset in assets}
    orphaned = [item for item in items if item.asset_id not in asset_ids]
    if orphaned:
        report.issues.append(
            f"Found {len(orphaned)} orphaned timeline items without corresponding media assets"
        )

    kinds = supported_kinds()
    unsupported = [item for item in items if item.kind not in kinds]
    if unsupported:
        report.issues.append(
            f"Found {len(unsupported)} timeline items with unsupported kinds"
        )

    unknown_slots = [item for item in items if get_lane_by_slot(item.slot) is None]
    if unknown_slots:
        report.issues.append(
            f"Found {len(unknown_slots)} timeline items on slots without a lane"
        )

    return report
