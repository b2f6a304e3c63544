"""
OpsAdmin 日誌設定

統一設定根 logger 的等級、格式和輸出目標
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.core.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAMES = ("opsadmin.console", "opsadmin.file")


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    設定應用程式日誌

    一律輸出到主控台，設定 LOG_FILE 時額外寫入輪替日誌檔
    重複呼叫不會疊加 handler
    """
    config = config or default_settings
    root = logging.getLogger()
    root.setLevel(config.LOG_LEVEL.upper())

    formatter = logging.Formatter(LOG_FORMAT)

    if not any(h.get_name() in HANDLER_NAMES for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        console.set_name("opsadmin.console")
        root.addHandler(console)

        if config.LOG_FILE:
            log_dir = os.path.dirname(config.LOG_FILE)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                config.LOG_FILE,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            file_handler.set_name("opsadmin.file")
            root.addHandler(file_handler)

    # SQL 語句輸出由 DATABASE_ECHO 控制
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if config.DATABASE_ECHO else logging.WARNING
    )
