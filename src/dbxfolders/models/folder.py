from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dbxfolders.utils.common import parse_api_timestamp

# Wire shapes of the Dropbox /files endpoints used by this package.
# Field names in to_dict()/from_dict() are fixed by the remote API.


def _expect_dict(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected an object for '{what}', got {type(value).__name__}")
    return value


def _expect_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected an array for '{what}', got {type(value).__name__}")
    return value


def _expect_str(data: Dict[str, Any], key: str) -> str:
    """Reads an optional string field; present values must be strings."""
    if key not in data:
        return ""
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"expected a string for '{key}', got {type(value).__name__}")
    return value


def _expect_bool(data: Dict[str, Any], key: str) -> bool:
    if key not in data:
        return False
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean for '{key}', got {type(value).__name__}")
    return value


@dataclass(slots=True)
class ListFolderRequest:
    path: str
    recursive: bool = False
    include_media_info: bool = False
    include_deleted: bool = False
    include_has_explicit_shared_members: bool = False
    include_mounted_folders: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "recursive": self.recursive,
            "include_media_info": self.include_media_info,
            "include_deleted": self.include_deleted,
            "include_has_explicit_shared_members": self.include_has_explicit_shared_members,
            "include_mounted_folders": self.include_mounted_folders,
        }


@dataclass(slots=True)
class ListFolderContinueRequest:
    cursor: str

    def to_dict(self) -> Dict[str, Any]:
        return {"cursor": self.cursor}


@dataclass(slots=True)
class CreateFolderRequest:
    path: str
    autorename: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "autorename": self.autorename}


@dataclass(slots=True)
class DeleteRequest:
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path}


@dataclass(slots=True)
class PropertyField:
    name: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> 'PropertyField':
        data = _expect_dict(data, "fields[]")
        return cls(name=_expect_str(data, "name"), value=_expect_str(data, "value"))


@dataclass(slots=True)
class PropertyGroup:
    template_id: str = ""
    fields: List[PropertyField] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'PropertyGroup':
        data = _expect_dict(data, "property_groups[]")
        return cls(
            template_id=_expect_str(data, "template_id"),
            fields=[PropertyField.from_dict(f) for f in _expect_list(data.get("fields"), "fields")],
        )


@dataclass(slots=True)
class SharingInfo:
    """
    Sharing details of an entry. Files carry `modified_by`; folders carry
    `traverse_only` and `no_access`.
    """
    read_only: bool = False
    parent_shared_folder_id: str = ""
    modified_by: str = ""
    traverse_only: bool = False
    no_access: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> 'SharingInfo':
        data = _expect_dict(data, "sharing_info")
        return cls(
            read_only=_expect_bool(data, "read_only"),
            parent_shared_folder_id=_expect_str(data, "parent_shared_folder_id"),
            modified_by=_expect_str(data, "modified_by"),
            traverse_only=_expect_bool(data, "traverse_only"),
            no_access=_expect_bool(data, "no_access"),
        )


@dataclass(slots=True)
class Metadata:
    """A file, folder or deleted entry as returned by the /files endpoints."""
    tag: str = ""
    name: str = ""
    id: str = ""
    client_modified: Optional[datetime] = None
    server_modified: Optional[datetime] = None
    rev: str = ""
    size: int = 0
    path_lower: str = ""
    path_display: str = ""
    sharing_info: SharingInfo = field(default_factory=SharingInfo)
    property_groups: List[PropertyGroup] = field(default_factory=list)
    has_explicit_shared_members: bool = False
    content_hash: str = ""

    @property
    def is_folder(self) -> bool:
        return self.tag == "folder"

    @property
    def is_deleted(self) -> bool:
        return self.tag == "deleted"

    @classmethod
    def from_dict(cls, data: Any) -> 'Metadata':
        data = _expect_dict(data, "metadata")
        size = data.get("size", 0)
        if not isinstance(size, int) or isinstance(size, bool):
            raise TypeError(f"expected an integer for 'size', got {type(size).__name__}")
        sharing_info = data.get("sharing_info")
        return cls(
            tag=_expect_str(data, ".tag"),
            name=_expect_str(data, "name"),
            id=_expect_str(data, "id"),
            client_modified=parse_api_timestamp(data.get("client_modified")),
            server_modified=parse_api_timestamp(data.get("server_modified")),
            rev=_expect_str(data, "rev"),
            size=size,
            path_lower=_expect_str(data, "path_lower"),
            path_display=_expect_str(data, "path_display"),
            sharing_info=SharingInfo.from_dict(sharing_info) if sharing_info is not None else SharingInfo(),
            property_groups=[PropertyGroup.from_dict(g) for g in _expect_list(data.get("property_groups"), "property_groups")],
            has_explicit_shared_members=_expect_bool(data, "has_explicit_shared_members"),
            content_hash=_expect_str(data, "content_hash"),
        )


@dataclass(slots=True)
class ListFolderResponse:
    entries: List[Metadata] = field(default_factory=list)
    cursor: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> 'ListFolderResponse':
        data = _expect_dict(data, "response")
        return cls(
            entries=[Metadata.from_dict(e) for e in _expect_list(data.get("entries"), "entries")],
            cursor=_expect_str(data, "cursor"),
            has_more=_expect_bool(data, "has_more"),
        )


@dataclass(slots=True)
class CreateFolderResponse:
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def from_dict(cls, data: Any) -> 'CreateFolderResponse':
        data = _expect_dict(data, "response")
        return cls(metadata=Metadata.from_dict(data.get("metadata")))


@dataclass(slots=True)
class DeleteResponse:
    metadata: Metadata = field(default_factory=Metadata)

    @classmethod
    def from_dict(cls, data: Any) -> 'DeleteResponse':
        data = _expect_dict(data, "response")
        return cls(metadata=Metadata.from_dict(data.get("metadata")))
