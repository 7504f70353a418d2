"""迁移与回滚指标的 OpenTelemetry 封装。

未安装 SDK 时 meter 为 no-op，调用方无需判断。
"""

from __future__ import annotations

from typing import Any

from opentelemetry import metrics
from opentelemetry.metrics import Meter

meter: Meter = metrics.get_meter("lane_migration.migration")

migration_runs_total = meter.create_counter(
    name="lane_migration_runs_total",
    description="迁移调用次数，按结果状态区分",
    unit="runs",
)

migration_items_total = meter.create_counter(
    name="lane_migration_items_total",
    description="成功迁移的片段数",
    unit="items",
)

migration_conflicts_total = meter.create_counter(
    name="lane_migration_conflicts_total",
    description="检测到的槽位冲突数",
    unit="conflicts",
)

migration_warnings_total = meter.create_counter(
    name="lane_migration_warnings_total",
    description="迁移过程中产生的警告数",
    unit="warnings",
)

migration_rollbacks_total = meter.create_counter(
    name="lane_migration_rollbacks_total",
    description="回滚次数",
    unit="rollbacks",
)


def record_migration(
    project_id: str,
    status: str,
    migrated_count: int = 0,
    conflict_count: int = 0,
    warning_count: int = 0,
) -> None:
    """记录一次迁移调用。

    Args:
        project_id: 项目 ID
        status: completed / conflicts_pending / failed
        migrated_count: 迁移的片段数
        conflict_count: 冲突数
        warning_count: 警告数
    """
    labels: dict[str, Any] = {"project_id": project_id, "status": status}
    migration_runs_total.add(1, attributes=labels)
    if migrated_count > 0:
        migration_items_total.add(migrated_count, attributes={"project_id": project_id})
    if conflict_count > 0:
        migration_conflicts_total.add(conflict_count, attributes={"project_id": project_id})
    if warning_count > 0:
        migration_warnings_total.add(warning_count, attributes={"project_id": project_id})


def record_rollback(project_id: str) -> None:
    migration_rollbacks_total.add(1, attributes={"project_id": project_id})
