"""lane_migration 命名空间的结构化日志。

库不接管 root logger：configure_logging 只在 ``lane_migration`` logger 上挂
迁移日志文件，migration.* / backup.* 事件以 JSON 行写入，并带上 logger 名称
便于按模块过滤。宿主程序自己的 handlers 不受影响。
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog

from lane_migration.infra.config.settings import AppSettings, get_settings

PACKAGE_LOGGER = "lane_migration"
MIGRATION_LOG = "migration.log"
ERROR_LOG = "migration-error.log"

# 标记由本模块挂载的 handler，重复配置时只替换这些
_HANDLER_MARK = "_lane_migration_handler"

_PRE_CHAIN: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def _file_handler(path: Path, level: int, settings: AppSettings) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(_formatter(structlog.processors.JSONRenderer(ensure_ascii=False)))
    return handler


def reset_logging() -> None:
    """摘除并关闭 configure_logging 挂载的 handler。"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            package_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_dir: Optional[Path] = None,
    settings: Optional[AppSettings] = None,
) -> logging.Logger:
    """为 lane_migration 配置结构化日志。

    输出:
    - migration.log: 全部迁移事件（JSON）
    - migration-error.log: 不低于 settings.log_error_level 的事件
    - 控制台（可选）: settings.log_console 开启时写 stderr

    可重复调用，每次只替换本模块挂载的 handler。

    Returns:
        配置好的 ``lane_migration`` 标准库 logger
    """
    settings = settings or get_settings()
    log_dir = Path(log_dir or settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_PRE_CHAIN,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # 模块级 logger 可能在配置前就已被调用过
        cache_logger_on_first_use=False,
    )

    reset_logging()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level(settings.log_level))
    package_logger.propagate = settings.log_propagate

    handlers: list[logging.Handler] = [
        _file_handler(log_dir / MIGRATION_LOG, logging.NOTSET, settings),
        _file_handler(log_dir / ERROR_LOG, _level(settings.log_error_level), settings),
    ]
    if settings.log_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())))
        handlers.append(console)

    for handler in handlers:
        setattr(handler, _HANDLER_MARK, True)
        package_logger.addHandler(handler)

    structlog.get_logger(__name__).info(
        "logging.configured",
        log_dir=str(log_dir.absolute()),
        level=settings.log_level.upper(),
        error_level=settings.log_error_level.upper(),
        console=settings.log_console,
    )
    return package_logger
