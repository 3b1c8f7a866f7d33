import logging
import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from dbxfolders.utils import constants

if TYPE_CHECKING:
    from dbxfolders.config_manager import ConfigManager


class EmojiFormatter(logging.Formatter):
    """
    A log formatter that adds an emoji based on the log level.
    Uses LOG_EMOJI_MAP from constants.
    """
    def format(self, record: logging.LogRecord) -> str:
        record.emoji_level = constants.LOG_EMOJI_MAP.get(record.levelno, "")
        return super().format(record)


def setup_logging(config_manager: 'ConfigManager', logs_base_path: Optional[Path] = None) -> Optional[Path]:
    """
    Configures the application-wide logging system.

    Args:
        config_manager: Source of the 'logging.*' settings.
        logs_base_path: Optional base directory for 'logging.logs_dir'. If None,
                        a relative logs_dir is resolved against the CWD.

    Returns:
        The logs directory in use, or None when file logging is disabled.
    """
    log_level_str = str(config_manager.get('logging.log_level', 'INFO')).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    console_format_str = config_manager.get('logging.log_format_console', "%(asctime)s %(emoji_level)s%(name)s - %(message)s")
    file_format_str = config_manager.get('logging.log_format_file', "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s")
    date_format_str = config_manager.get('logging.date_format', "%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers so repeated setup does not duplicate output
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(EmojiFormatter(fmt=console_format_str, datefmt=date_format_str))
    root_logger.addHandler(console_handler)

    if not config_manager.get('logging.log_to_file', True):
        return None

    logs_dir_fragment = config_manager.get('logging.logs_dir', 'logs')
    logs_dir_abs = (logs_base_path / logs_dir_fragment) if logs_base_path else Path(logs_dir_fragment)
    if not logs_dir_abs.is_absolute():
        logs_dir_abs = Path.cwd() / logs_dir_abs

    try:
        logs_dir_abs.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        root_logger.warning(f"🟡 Log directory {logs_dir_abs} could not be created ({e}). File logging disabled.")
        return None

    if not os.access(logs_dir_abs, os.W_OK):
        root_logger.warning(f"🟡 Log directory {logs_dir_abs} is not writable. File logging disabled.")
        return None

    current_time_str = datetime.now().strftime(config_manager.get('logging.date_format_logfile_suffix', '%Y-%m-%d-%H-%M-%S'))
    log_file_path = logs_dir_abs / f"log-{current_time_str}.log"

    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt=file_format_str, datefmt=date_format_str))
    root_logger.addHandler(file_handler)

    _prune_old_logs(logs_dir_abs, int(config_manager.get('logging.max_log_files', 10)))
    root_logger.info(f"Logging initialized. Level: {log_level_str}. Log file: {log_file_path}")
    return logs_dir_abs


def _prune_old_logs(logs_dir: Path, max_log_files: int) -> None:
    """Deletes the oldest log-*.log files beyond `max_log_files`."""
    if max_log_files <= 0:
        return
    existing_logs: List[Path] = sorted(
        [p for p in logs_dir.glob('log-*.log') if p.is_file()],
        key=os.path.getmtime
    )
    for old_log_file in existing_logs[:max(len(existing_logs) - max_log_files, 0)]:
        try:
            old_log_file.unlink()
        except OSError as e:
            logging.getLogger(__name__).warning(f"🟡 Could not delete old log file {old_log_file}: {e}")
