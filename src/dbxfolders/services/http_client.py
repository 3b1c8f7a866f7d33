import httpx
import logging
from typing import Dict, Optional, Protocol, Tuple, TYPE_CHECKING

from dbxfolders.utils import common
from dbxfolders.utils import constants
from dbxfolders.utils.errors import TransportError

if TYPE_CHECKING:
    from dbxfolders.config_manager import ConfigManager

logger = logging.getLogger(__name__)

# Failures where the request never reached the server, so resending a POST is safe.
RETRYABLE_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)


class Gateway(Protocol):
    """
    The network boundary used by the Dropbox services.

    `request` returns (status_code, body). Body is None when the server sent nothing.
    Raises TransportError when the call cannot complete.
    """

    def request(
        self,
        method: str,
        host: str,
        route: str,
        headers: Dict[str, str],
        body: bytes,
    ) -> Tuple[int, Optional[bytes]]:
        ...


class HttpClient:
    """Gateway implementation on top of httpx, retrying requests that never reached the server."""

    def __init__(self, config_manager: 'ConfigManager', transport: Optional[httpx.BaseTransport] = None):
        self.config_manager = config_manager
        timeout = float(config_manager.get('http_client.timeout', constants.DEFAULT_HTTP_TIMEOUT_SECONDS))

        self.client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": constants.DEFAULT_USER_AGENT},
            transport=transport,
        )
        self.retry_config = common.get_retry_config(self.config_manager)

    def request(
        self,
        method: str,
        host: str,
        route: str,
        headers: Dict[str, str],
        body: bytes,
    ) -> Tuple[int, Optional[bytes]]:
        url = f"{host}{route}"

        @common.exponential_backoff_retry(
            max_attempts=self.retry_config['max_attempts'],
            initial_delay=self.retry_config['initial_delay'],
            max_delay=self.retry_config['max_delay'],
            jitter=self.retry_config['jitter'],
            retry_on=RETRYABLE_ERRORS,
        )
        def _send_with_retry() -> httpx.Response:
            logger.debug(f"{method} {url} ({len(body)} bytes)")
            return self.client.request(method, url, headers=headers, content=body)

        try:
            response = _send_with_retry()
        except httpx.HTTPError as e:
            logger.error(f"🛑 Request error for {method} {url}: {type(e).__name__} - {e}")
            raise TransportError(str(e) or type(e).__name__, original_exception=e) from e

        content = response.content
        logger.debug(f"{method} {url} -> {response.status_code} ({len(content)} bytes)")
        return response.status_code, content or None

    def close(self) -> None:
        """Closes the underlying httpx.Client."""
        logger.debug("Closing HttpClient session.")
        self.client.close()

    def __enter__(self) -> 'HttpClient':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
