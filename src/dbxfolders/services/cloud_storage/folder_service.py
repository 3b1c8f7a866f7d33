import logging
from typing import Iterator

from dbxfolders.models.folder import (
    CreateFolderRequest,
    CreateFolderResponse,
    DeleteResponse,
    ListFolderContinueRequest,
    ListFolderRequest,
    ListFolderResponse,
    Metadata,
)
from dbxfolders.services.cloud_storage.dropbox_api import DropboxApi
from dbxfolders.services.cloud_storage.file_service import FileService
from dbxfolders.utils import constants
from dbxfolders.utils.common import normalize_api_path
from dbxfolders.utils.errors import ChainedError

logger = logging.getLogger(__name__)


class FolderService(DropboxApi):
    """Lists, creates and deletes Dropbox folders."""

    def list_folder(
        self,
        path: str,
        recursive: bool = False,
        include_media_info: bool = False,
        include_deleted: bool = False,
        include_has_explicit_shared_members: bool = False,
        include_mounted_folders: bool = True,
    ) -> ListFolderResponse:
        """
        Lists the first page of entries in `path`. Use "/" or "" for the root.

        Raises:
            ChainedError: if the request fails at any stage.
        """
        request = ListFolderRequest(
            path=normalize_api_path(path),
            recursive=recursive,
            include_media_info=include_media_info,
            include_deleted=include_deleted,
            include_has_explicit_shared_members=include_has_explicit_shared_members,
            include_mounted_folders=include_mounted_folders,
        )
        return self._call(constants.ROUTE_LIST_FOLDER, request.to_dict(), ListFolderResponse.from_dict, "listing folder")

    def list_folder_continue(self, cursor: str) -> ListFolderResponse:
        """Fetches the page following the one `cursor` was returned with."""
        request = ListFolderContinueRequest(cursor=cursor)
        return self._call(
            constants.ROUTE_LIST_FOLDER_CONTINUE, request.to_dict(), ListFolderResponse.from_dict, "continuing folder listing"
        )

    def iter_entries(self, path: str, recursive: bool = False) -> Iterator[Metadata]:
        """
        Yields every entry in `path`, following the cursor while `has_more` is set.
        A failing page raises a ChainedError annotated with the page number.
        """
        page = 1
        response = self.list_folder(path, recursive=recursive)
        while True:
            yield from response.entries
            if not response.has_more:
                return
            page += 1
            try:
                response = self.list_folder_continue(response.cursor)
            except ChainedError as e:
                raise e.add(f"error listing page {page} of '{path}'")

    def create_folder(self, path: str, autorename: bool = False) -> CreateFolderResponse:
        """
        Creates a folder at `path`.

        Raises:
            ChainedError: if the request fails at any stage.
        """
        request = CreateFolderRequest(path=normalize_api_path(path), autorename=autorename)
        response = self._call(constants.ROUTE_CREATE_FOLDER, request.to_dict(), CreateFolderResponse.from_dict, "creating folder")
        logger.info(f"🟢 {self.PROVIDER_NAME}: created folder '{response.metadata.path_display or path}'.")
        return response

    def delete_folder(self, path: str) -> DeleteResponse:
        file_service = FileService(self.client, self.config)
        return file_service.delete(path)
