# src/dbxfolders/utils/constants.py
from typing import Dict
import logging

# Log Emojis
LOG_EMOJI_INFO: str = "🟢"
LOG_EMOJI_WARNING: str = "🟡"
LOG_EMOJI_ERROR: str = "🛑"
LOG_EMOJI_DEBUG: str = "🐛"

LOG_EMOJI_MAP: Dict[int, str] = {
    logging.INFO: LOG_EMOJI_INFO,
    logging.WARNING: LOG_EMOJI_WARNING,
    logging.ERROR: LOG_EMOJI_ERROR,
    logging.CRITICAL: LOG_EMOJI_ERROR, # CRITICAL also uses error emoji
    logging.DEBUG: LOG_EMOJI_DEBUG,
}

APP_NAME: str = "dbxfolders"

# Keyring service/username under which a stored Dropbox access token is looked up
KEYRING_SERVICE_NAME: str = APP_NAME
KEYRING_TOKEN_USERNAME: str = "dropbox_access_token"

# Dropbox API defaults
DEFAULT_API_HOST: str = "https://api.dropboxapi.com/2"
DEFAULT_AUTHORIZATION_ACCESS: str = "Bearer"
CONTENT_TYPE_JSON: str = "application/json"

# The API addresses the root folder as "" rather than "/"
ROOT_PATH: str = "/"
API_ROOT_PATH: str = ""

# Routes (relative to the API host)
ROUTE_LIST_FOLDER: str = "/files/list_folder"
ROUTE_LIST_FOLDER_CONTINUE: str = "/files/list_folder/continue"
ROUTE_CREATE_FOLDER: str = "/files/create_folder_v2"
ROUTE_DELETE: str = "/files/delete_v2"

EXPECTED_STATUS: int = 200

# HTTP client defaults
DEFAULT_HTTP_TIMEOUT_SECONDS: float = 30.0
DEFAULT_USER_AGENT: str = f"{APP_NAME} (Dropbox folder client)"
