"""
Exception types for LectureDeck
"""
from typing import Optional


class LectureDeckError(Exception):
    """Base class for LectureDeck errors"""


class ApiError(LectureDeckError):
    """The content backend answered with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StorageError(LectureDeckError):
    """File storage operation failed"""


class MaterialNotFoundError(LectureDeckError, KeyError):
    """Material id is not part of the loaded module"""

    def __init__(self, material_id: str):
        super().__init__(f"Material not found: {material_id}")
        self.material_id = material_id

    def __str__(self) -> str:
        return f"Material not found: {self.material_id}"


class SessionNotFoundError(LectureDeckError, KeyError):
    """No study session is registered under this id"""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"
