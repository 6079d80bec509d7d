"""Path file writer.

This module provides the PathWriter class for saving PathCollections as
JSON path documents.
"""

from pathlib import Path

from clipbridge.domain.path import PathCollection
from clipbridge.exceptions import PathFileSaveError
from clipbridge.io.converter import paths_to_document


class PathWriter:
    """Writes PathCollections as JSON documents.

    Example:
        writer = PathWriter(Path("result.json"))
        writer.save(paths)
    """

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        """Initialize the path writer.

        Args:
            output_path: Path where the document will be saved
            indent: JSON indentation (None for compact output)
        """
        self._output_path = output_path
        self._indent = indent

    def save(self, paths: PathCollection) -> None:
        """Write ``paths`` to the output path.

        Raises:
            PathFileSaveError: If the file cannot be written
        """
        document = paths_to_document(paths)
        try:
            self._output_path.write_text(
                document.model_dump_json(indent=self._indent), encoding="utf-8"
            )
        except OSError as e:
            raise PathFileSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_result_path(input_path: Path, operation: str) -> Path:
        """Generate output path named after the operation.

        Converts: shapes.json -> shapes-intersection.json

        Args:
            input_path: Input document path
            operation: Operation name used as suffix

        Returns:
            Path with ``-{operation}`` before the extension
        """
        return input_path.parent / f"{input_path.stem}-{operation}{input_path.suffix}"
