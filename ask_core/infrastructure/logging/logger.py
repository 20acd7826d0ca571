import json
import logging
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FILE_NAME = "askgpt.log"
MAX_LOG_BYTES = 10_000_000
LOG_BACKUP_COUNT = 7

logger = logging.getLogger("ask_core")


class JsonFormatter(logging.Formatter):
    """每条日志一行 JSON，redact_content 为真时截断消息正文（其中可能含 prompt）。"""

    def __init__(self, redact_content: bool = False):
        super().__init__()
        self.redact_content = redact_content

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self.redact_content:
            msg = (msg or "")[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logger(
    level: Union[str, int] = "info",
    log_dir: Optional[Union[str, Path]] = None,
    redact_content: bool = False,
) -> logging.Logger:
    """为 ask_core 日志器安装按大小滚动的 JSON 文件处理器。

    默认写入系统临时目录下的 askgpt.log，单文件 10 MB，保留 7 个历史文件。
    重复调用会替换之前安装的处理器。
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    directory = Path(log_dir) if log_dir else Path(tempfile.gettempdir())
    directory.mkdir(parents=True, exist_ok=True)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    fh = RotatingFileHandler(
        directory / LOG_FILE_NAME,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(JsonFormatter(redact_content=redact_content))
    logger.addHandler(fh)
    logger.setLevel(level)
    return logger
