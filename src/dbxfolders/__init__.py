"""
Client binding for the Dropbox folder endpoints.

Usage:
    from dbxfolders import ConfigManager, create_folder_service

    service = create_folder_service(ConfigManager("config.yml"))
    listing = service.list_folder("/")
"""

from typing import Optional

from dbxfolders.config_manager import ConfigManager
from dbxfolders.dropbox_config import DropboxConfig
from dbxfolders.services.cloud_storage.file_service import FileService
from dbxfolders.services.cloud_storage.folder_service import FolderService
from dbxfolders.services.http_client import Gateway, HttpClient
from dbxfolders.utils.errors import ChainedError, TransportError, wrap


def create_folder_service(config_manager: ConfigManager, client: Optional[Gateway] = None) -> FolderService:
    """Builds a FolderService from configuration, with an HttpClient unless `client` is given."""
    config = DropboxConfig.from_config_manager(config_manager)
    return FolderService(client or HttpClient(config_manager), config)


__all__ = [
    "ChainedError",
    "ConfigManager",
    "DropboxConfig",
    "FileService",
    "FolderService",
    "Gateway",
    "HttpClient",
    "TransportError",
    "create_folder_service",
    "wrap",
]
