import functools
import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, TYPE_CHECKING

from dbxfolders.utils import constants

if TYPE_CHECKING:
    from dbxfolders.config_manager import ConfigManager

logger = logging.getLogger(__name__)

# Type variable for the return type of the decorated function
R = TypeVar('R')


def normalize_api_path(path: str) -> str:
    """The Dropbox API addresses the root folder as an empty string, not "/"."""
    if path == constants.ROOT_PATH:
        return constants.API_ROOT_PATH
    return path


def parse_api_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """
    Parses a Dropbox timestamp such as "2015-05-12T15:50:38Z" into an aware UTC datetime.
    Returns None when the field is absent.
    """
    if timestamp_str is None or timestamp_str == "":
        return None
    if not isinstance(timestamp_str, str):
        raise TypeError(f"expected a string timestamp, got {type(timestamp_str).__name__}")
    parsed = datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def exponential_backoff_retry(
    max_attempts: int = 5,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    jitter: bool = True,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """
    Decorator for retrying a function with exponential backoff.
    Only exceptions listed in `retry_on` are retried; anything else propagates immediately.
    """
    def decorator(func: Callable[..., R]) -> Callable[..., R]:
        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> R:
            current_delay = initial_delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except retry_on as e:
                    logger.warning(f"🟡 Attempt {attempt}/{max_attempts} failed for {func.__name__}: {e}")
                    if attempt == max_attempts:
                        logger.error(f"🛑 All {max_attempts} attempts failed for {func.__name__}.")
                        raise

                    delay_with_jitter = current_delay
                    if jitter:
                        delay_with_jitter += random.uniform(0, current_delay * 0.25) # up to 25% jitter

                    logger.info(f"Retrying {func.__name__} in {delay_with_jitter:.2f} seconds...")
                    time.sleep(delay_with_jitter)
                    current_delay = min(current_delay * 2, max_delay)
            raise RuntimeError(f"Retry logic completed without success or error for {func.__name__}")
        return sync_wrapper
    return decorator


def get_retry_config(config_manager: 'ConfigManager') -> Dict[str, Any]:
    """
    Fetches retry parameters from ConfigManager.
    """
    return {
        "max_attempts": int(config_manager.get('retry.max_attempts', 3)),
        "initial_delay": float(config_manager.get('retry.initial_delay_seconds', 1.0)),
        "max_delay": float(config_manager.get('retry.max_delay_seconds', 30.0)),
        "jitter": bool(config_manager.get('retry.jitter', True)),
    }
