"""
Library service for LectureDeck
Creates and deletes modules and materials, uploads files and triggers analysis
"""
from pathlib import PurePath
from typing import Any, Dict, Optional

from config import settings
from lecturedeck.db import file_storage
from lecturedeck.exceptions import LectureDeckError
from lecturedeck.models.content import Material
from lecturedeck.utils.api_client import StudyApiClient, get_api_client
from lecturedeck.utils.logger import get_logger
from lecturedeck.utils.notifications import (
    LoggingNotificationSink, NotificationSink, error, success
)

logger = get_logger(__name__)


def material_fields_from_filename(filename: str) -> Dict[str, str]:
    """Derive the material title and type tag from an uploaded file name"""
    path = PurePath(filename)
    ext = path.suffix.lstrip(".")
    return {
        "title": path.stem if ext else path.name,
        "type": ext.upper() if ext else "PDF",
    }


class LibraryService:
    """
    Mutations around the session engine.

    Every operation reports its outcome to the notification sink and returns
    None/False on failure instead of raising, mirroring how a front end
    shows a toast and carries on.
    """

    def __init__(
        self,
        client: Optional[StudyApiClient] = None,
        storage=None,
        notifier: Optional[NotificationSink] = None,
    ):
        self.client = client or get_api_client()
        self.storage = storage or file_storage
        self.notifier = notifier if notifier is not None else LoggingNotificationSink()
        self.allowed_extensions = {
            ext.strip().lower() for ext in settings.ALLOWED_UPLOAD_EXTENSIONS.split(",") if ext.strip()
        }

    def create_module(self, title: str, description: str = "") -> Optional[Dict[str, Any]]:
        """Create a module; the title is required"""
        title = (title or "").strip()
        if not title:
            self.notifier.notify(error("Please enter a module title"))
            return None

        try:
            module = self.client.create_module(title, (description or "").strip())
            logger.info(f"Created module '{title}'")
            self.notifier.notify(success("Module created successfully"))
            return module
        except LectureDeckError as e:
            logger.error(f"Error creating module: {e}")
            self.notifier.notify(error("Failed to create module. Please try again."))
            return None

    def delete_module(self, module_id: str) -> bool:
        try:
            self.client.delete_module(module_id)
            logger.info(f"Deleted module {module_id}")
            self.notifier.notify(success("Module deleted successfully"))
            return True
        except LectureDeckError as e:
            logger.error(f"Error deleting module {module_id}: {e}")
            self.notifier.notify(error("Failed to delete module. Please try again."))
            return False

    def upload_material(
        self, module_id: str, filename: str, content: bytes, content_type: str = "application/pdf"
    ) -> Optional[Dict[str, Any]]:
        """Store the file, then register it as a material of the module"""
        ext = PurePath(filename).suffix.lower()
        if self.allowed_extensions and ext not in self.allowed_extensions:
            self.notifier.notify(error(f"Unsupported file type: {ext or filename}"))
            return None

        try:
            stored = self.storage.upload_file(content, filename, content_type, f"modules/{module_id}")
        except LectureDeckError as e:
            logger.error(f"Error uploading material: {e}")
            self.notifier.notify(error("Failed to upload material. Please try again."))
            return None

        try:
            material = self.client.create_material({
                "module_id": module_id,
                **material_fields_from_filename(filename),
                "file_path": stored.path,
                "file_url": stored.url,
            })
        except LectureDeckError as e:
            logger.error(f"Error creating material record for {filename}: {e}")
            self._discard_file(stored.path)
            self.notifier.notify(error("Failed to upload material. Please try again."))
            return None

        logger.info(f"Uploaded material {filename} to module {module_id}")
        self.notifier.notify(success("Material uploaded successfully"))
        return material

    def file_url(self, material: Material) -> Optional[str]:
        """Public URL of the material's document, from the record or storage"""
        if material.file_url:
            return material.file_url
        if not material.file_path:
            self.notifier.notify(error("No file found for this material"))
            return None

        try:
            return self.storage.get_file_url(material.file_path)
        except LectureDeckError as e:
            logger.error(f"Error resolving file for material {material.id}: {e}")
            self.notifier.notify(error("Failed to open file. Please try again."))
            return None

    def _discard_file(self, path: str):
        try:
            self.storage.delete_file(path)
        except LectureDeckError as e:
            logger.warning(f"Could not delete file {path}: {e}")

    def analyze_material(self, material: Material) -> Optional[Dict[str, Any]]:
        """Run document analysis and store the generated content on the material"""
        if not material.file_url:
            self.notifier.notify(error("No file found to analyze"))
            return None

        try:
            analysis = self.client.analyze_document(material.file_url)
            updated = self.client.update_material(material.id, {
                "summary": analysis.get("summary"),
                "quiz": analysis.get("quiz"),
                "flashcards": analysis.get("flashcards"),
            })
            logger.info(f"Analyzed material {material.id}")
            self.notifier.notify(success("Material analyzed successfully"))
            return updated
        except LectureDeckError as e:
            logger.error(f"Error analyzing material {material.id}: {e}")
            self.notifier.notify(error("Failed to analyze material. Please try again."))
            return None

    def delete_material(self, material: Material) -> bool:
        """Delete the material record, then its stored file"""
        try:
            self.client.delete_material(material.id)
        except LectureDeckError as e:
            logger.error(f"Error deleting material {material.id}: {e}")
            self.notifier.notify(error("Failed to delete material. Please try again."))
            return False

        if material.file_path:
            self._discard_file(material.file_path)

        logger.info(f"Deleted material {material.id}")
        self.notifier.notify(success("Material deleted successfully"))
        return True
