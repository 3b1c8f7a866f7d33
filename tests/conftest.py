"""Shared fixtures for the dbxfolders tests."""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from dbxfolders.config_manager import ConfigManager
from dbxfolders.dropbox_config import Authorization, DropboxConfig, Hosts
from dbxfolders.services.cloud_storage.folder_service import FolderService
from dbxfolders.utils.errors import TransportError

API_HOST = "https://api.example.test/2"


class FakeGateway:
    """Records requests and replays scripted (status, body) replies or errors."""

    def __init__(self, replies: Optional[List[Any]] = None) -> None:
        self.replies = list(replies or [])
        self.calls: List[Dict[str, Any]] = []

    def request(
        self,
        method: str,
        host: str,
        route: str,
        headers: Dict[str, str],
        body: bytes,
    ) -> Tuple[int, Optional[bytes]]:
        self.calls.append(
            {"method": method, "host": host, "route": route, "headers": headers, "body": body}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, TransportError):
            raise reply
        return reply

    def sent_json(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.calls[index]["body"])


def json_reply(payload: Dict[str, Any], status: int = 200) -> Tuple[int, bytes]:
    return status, json.dumps(payload).encode("utf-8")


FOLDER_ENTRY = {
    ".tag": "folder",
    "name": "Photos",
    "id": "id:a4ayc_80_OEAAAAAAAAAXz",
    "path_lower": "/photos",
    "path_display": "/Photos",
    "sharing_info": {
        "read_only": False,
        "parent_shared_folder_id": "84528192421",
        "traverse_only": False,
        "no_access": False,
    },
    "property_groups": [
        {
            "template_id": "ptid:1a5n2i6d3OYEAAAAAAAAAYa",
            "fields": [{"name": "Security Policy", "value": "Confidential"}],
        }
    ],
}

FILE_ENTRY = {
    ".tag": "file",
    "name": "Prime_Numbers.txt",
    "id": "id:a4ayc_80_OEAAAAAAAAAXw",
    "client_modified": "2015-05-12T15:50:38Z",
    "server_modified": "2015-05-12T15:50:38Z",
    "rev": "a1c10ce0dd78",
    "size": 7212,
    "path_lower": "/homework/math/prime_numbers.txt",
    "path_display": "/Homework/math/Prime_Numbers.txt",
    "sharing_info": {
        "read_only": True,
        "parent_shared_folder_id": "84528192421",
        "modified_by": "dbid:AAH4f99T0taONIb-OurWxbNQ6ywGRopQngc",
    },
    "has_explicit_shared_members": False,
    "content_hash": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
}


@pytest.fixture
def dropbox_config() -> DropboxConfig:
    return DropboxConfig(
        authorization=Authorization(access="Bearer", token="test-token"),
        hosts=Hosts(api=API_HOST),
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def folder_service(gateway: FakeGateway, dropbox_config: DropboxConfig) -> FolderService:
    return FolderService(gateway, dropbox_config)


@pytest.fixture
def config_manager() -> ConfigManager:
    return ConfigManager.from_dict(
        {
            "dropbox": {
                "authorization": {"access": "Bearer", "token": "test-token"},
                "hosts": {"api": API_HOST},
            },
            "retry": {"max_attempts": 2, "initial_delay_seconds": 0.0, "max_delay_seconds": 0.0, "jitter": False},
        }
    )
