import json
import logging
from typing import Any, Callable, Dict, TypeVar, TYPE_CHECKING

from dbxfolders.utils import constants
from dbxfolders.utils.errors import ChainedError, TransportError

if TYPE_CHECKING:
    from dbxfolders.dropbox_config import DropboxConfig
    from dbxfolders.services.http_client import Gateway

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DropboxApi:
    """
    Base class for the Dropbox endpoint services.

    Every call goes through `_call`, which serializes the payload, sends it
    through the gateway and decodes the answer. Any failure along the way is
    raised as a ChainedError rooted at the error that caused it.
    """
    PROVIDER_NAME = "Dropbox"

    def __init__(self, client: 'Gateway', config: 'DropboxConfig'):
        self.client = client
        self.config = config

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.config.authorization.header_value(),
            "Content-Type": constants.CONTENT_TYPE_JSON,
        }

    def _call(self, route: str, payload: Dict[str, Any], decode: Callable[[Any], T], action: str) -> T:
        """
        POSTs `payload` to `route` and returns `decode(<json body>)`.

        Args:
            route: API route, e.g. constants.ROUTE_LIST_FOLDER.
            payload: JSON-serializable request body.
            decode: Builds the typed response from the parsed JSON.
            action: Short description used in log lines, e.g. "listing folder".

        Raises:
            ChainedError: on serialization, transport, status, empty body or decoding failure.
        """
        try:
            body = json.dumps(payload).encode('utf-8')
        except (TypeError, ValueError) as e:
            logger.error(f"🛑 {self.PROVIDER_NAME}: error serializing request body while {action}: {e}")
            raise ChainedError(e) from e

        try:
            status, response = self.client.request("POST", self.config.hosts.api, route, self._headers(), body)
        except TransportError as e:
            partial = f" (partial response: {e.response!r})" if e.response is not None else ""
            logger.error(f"🛑 {self.PROVIDER_NAME}: error {action}: {e}{partial}")
            raise ChainedError(e) from e

        if status != constants.EXPECTED_STATUS:
            message = f"response status {status} instead of {constants.EXPECTED_STATUS}"
            logger.error(f"🛑 {self.PROVIDER_NAME}: {message} while {action} (response: {response!r})")
            raise ChainedError(message)

        if not response:
            message = f"missing response while {action}"
            logger.error(f"🛑 {self.PROVIDER_NAME}: {message}")
            raise ChainedError(message)

        try:
            result = decode(json.loads(response))
        except (ValueError, TypeError) as e:
            logger.error(f"🛑 {self.PROVIDER_NAME}: error converting response data while {action}: {e}")
            raise ChainedError(e) from e

        logger.debug(f"{self.PROVIDER_NAME}: {action} succeeded ({route}).")
        return result
