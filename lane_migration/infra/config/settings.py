"""集中化配置管理。"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 备份与回滚
    backup_retention: int = 10  # 每个项目最多保留的备份数，超出后按时间淘汰最旧的
    backup_cleanup_keep: int = 5  # 手动清理时默认保留数量

    # 置信度阈值
    low_confidence_threshold: int = 70  # 低于此值的分配会附加 suggested_lane 并产生警告
    fallback_confidence: int = 30  # 找不到素材时兜底分类的固定置信度
    user_decision_confidence: int = 80
    user_override_confidence: int = 100

    # 迁移标记
    migration_version_marker: str = "educational"  # 追加到项目版本号，仅追加一次
    default_difficulty: str = "beginner"

    # 分类器后端
    placement_backend: Literal["rules"] = "rules"

    # 迁移默认选项
    auto_resolve_conflicts: bool = False
    preserve_original: bool = True

    # 日志：只作用于 lane_migration 命名空间，不接管 root logger
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_error_level: str = "WARNING"  # migration-error.log 的最低级别
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 3
    log_console: bool = False  # 宿主程序通常已有控制台输出
    log_propagate: bool = True  # 是否继续交给宿主的 root handlers


@lru_cache()
def get_settings() -> AppSettings:
    return AppSettings()


# 便捷别名
settings = get_settings()
