"""
Export service for SiteCraft: packages a generated site as a zip archive
"""
import asyncio
import io
import re
import unicodedata
import zipfile
from typing import Dict
from urllib.parse import quote
import logging

from models.website import GeneratedArtifacts
from prompts.website_prompts import SCRIPT_FILE, STYLESHEET_FILE

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"
ARCHIVE_SUFFIX = "-project.zip"


class ExportService:
    def __init__(self):
        self.content_types = {
            "zip": "application/zip",
            "html": "text/html",
            "css": "text/css",
            "js": "application/javascript",
            "png": "image/png",
            "jpg": "image/jpeg",
            "jpeg": "image/jpeg",
            "webp": "image/webp",
        }

    async def build_archive(
        self,
        artifacts: GeneratedArtifacts,
        archive_html: str,
        asset_files: Dict[str, bytes],
    ) -> bytes:
        """Bundle the site files and spliced assets into one zip blob"""
        try:
            return await asyncio.to_thread(self._write_archive, artifacts, archive_html, asset_files)
        except Exception as e:
            logger.error(f"Error building archive: {str(e)}")
            raise

    def _write_archive(
        self,
        artifacts: GeneratedArtifacts,
        archive_html: str,
        asset_files: Dict[str, bytes],
    ) -> bytes:
        zip_buffer = io.BytesIO()

        with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
            zip_file.writestr(INDEX_FILE, archive_html)
            zip_file.writestr(STYLESHEET_FILE, artifacts.css)
            zip_file.writestr(SCRIPT_FILE, artifacts.js)

            if artifacts.has_server_file:
                zip_file.writestr(artifacts.server_file_name, artifacts.server_code)

            for path, data in asset_files.items():
                zip_file.writestr(path, data)

        logger.info(f"Archive built with {len(asset_files)} assets, size: {zip_buffer.tell()} bytes")
        return zip_buffer.getvalue()

    def get_archive_filename(self, title: str) -> str:
        """Lowercased, stripped title, whitespace runs collapsed to hyphens"""
        return re.sub(r"\s+", "-", title.strip().lower()) + ARCHIVE_SUFFIX

    def get_content_disposition(self, filename: str) -> str:
        """
        Attachment header for a download. Carries a quoted ASCII fallback and
        the UTF-8 name (RFC 6266) so non-latin titles stay encodable.
        """
        fallback = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
        fallback = fallback.replace("\\", "_").replace('"', "_")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"

    def get_content_type(self, file_name: str) -> str:
        """Get content type from a file name's extension"""
        extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
        return self.content_types.get(extension, "application/octet-stream")
