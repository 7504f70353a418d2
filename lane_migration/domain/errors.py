"""迁移相关异常。"""


class MigrationError(Exception):
    """迁移错误基类。"""


class BackupNotFoundError(MigrationError, LookupError):
    """回滚时找不到对应的备份。"""

    def __init__(self, migration_id: str) -> None:
        super().__init__(f"No backup found for migration ID: {migration_id}")
        self.migration_id = migration_id


class MigrationExecutionError(MigrationError):
    """执行迁移前置条件不满足，在 migrate 边界转换为失败结果。"""


class UnknownLaneError(MigrationError):
    """裁决里选择了不存在的轨道。"""

    def __init__(self, lane_id: str) -> None:
        super().__init__(f"Unknown lane: {lane_id}")
        self.lane_id = lane_id
