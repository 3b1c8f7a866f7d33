from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
import logging

import keyring
from keyring.errors import KeyringError

from dbxfolders.utils import constants

if TYPE_CHECKING:
    from dbxfolders.config_manager import ConfigManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authorization:
    access: str # Scheme, e.g. "Bearer"
    token: str

    def header_value(self) -> str:
        return f"{self.access} {self.token}"


@dataclass(frozen=True)
class Hosts:
    api: str = constants.DEFAULT_API_HOST


@dataclass(frozen=True)
class DropboxConfig:
    """Read-only Dropbox settings: the authorization pair and the API host."""
    authorization: Authorization
    hosts: Hosts = field(default_factory=Hosts)

    @classmethod
    def from_config_manager(cls, config_manager: 'ConfigManager') -> 'DropboxConfig':
        """
        Reads 'dropbox.authorization.*' and 'dropbox.hosts.api'.
        If no token is configured, a token stored in the system keyring is used.
        """
        access = config_manager.get('dropbox.authorization.access', constants.DEFAULT_AUTHORIZATION_ACCESS)
        token = config_manager.get('dropbox.authorization.token') or _load_token_from_keyring()
        if not token:
            logger.error("🛑 Dropbox: no access token in configuration or keyring.")
            raise ValueError("Dropbox access token not configured.")

        api_host = config_manager.get('dropbox.hosts.api', constants.DEFAULT_API_HOST)
        return cls(
            authorization=Authorization(access=access, token=token),
            hosts=Hosts(api=api_host.rstrip('/')),
        )


def _load_token_from_keyring() -> Optional[str]:
    try:
        token = keyring.get_password(constants.KEYRING_SERVICE_NAME, constants.KEYRING_TOKEN_USERNAME)
    except KeyringError as e:
        logger.warning(f"🟡 Dropbox: could not read access token from keyring: {e}")
        return None
    if token:
        logger.debug("Dropbox: access token loaded from keyring.")
    return token
