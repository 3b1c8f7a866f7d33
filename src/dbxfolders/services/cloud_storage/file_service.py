import logging

from dbxfolders.models.folder import DeleteRequest, DeleteResponse
from dbxfolders.services.cloud_storage.dropbox_api import DropboxApi
from dbxfolders.utils import constants
from dbxfolders.utils.common import normalize_api_path

logger = logging.getLogger(__name__)


class FileService(DropboxApi):
    """Operations that apply to any entry, file or folder."""

    def delete(self, path: str) -> DeleteResponse:
        """Deletes the entry at `path`. Folders are deleted with all their contents."""
        request = DeleteRequest(path=normalize_api_path(path))
        response = self._call(constants.ROUTE_DELETE, request.to_dict(), DeleteResponse.from_dict, "deleting entry")
        logger.info(f"🟢 {self.PROVIDER_NAME}: deleted '{response.metadata.path_display or path}'.")
        return response
