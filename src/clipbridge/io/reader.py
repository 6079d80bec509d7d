"""Path file reader.

This module provides the PathReader class for loading JSON path documents
into PathCollections.
"""

from pathlib import Path

from pydantic import ValidationError

from clipbridge.domain.path import PathCollection
from clipbridge.exceptions import PathFileLoadError
from clipbridge.io.converter import PathsDocument, document_to_paths


class PathReader:
    """Loads JSON path documents.

    Example:
        reader = PathReader(Path("subject.json"))
        paths = reader.load()
    """

    def __init__(self, file_path: Path) -> None:
        """Initialize the path reader.

        Args:
            file_path: Path to the JSON document
        """
        self._file_path = file_path

    def load(self) -> PathCollection:
        """Read and validate the document.

        Returns:
            Collection holding the document's paths

        Raises:
            PathFileLoadError: If the file is missing, unreadable or invalid
        """
        if not self._file_path.exists():
            raise PathFileLoadError(str(self._file_path), "file not found")

        try:
            text = self._file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise PathFileLoadError(str(self._file_path), str(e)) from e

        try:
            document = PathsDocument.model_validate_json(text)
        except ValidationError as e:
            errors = "; ".join(err["msg"] for err in e.errors())
            raise PathFileLoadError(str(self._file_path), errors) from e

        return document_to_paths(document)
