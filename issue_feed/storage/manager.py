"""Storage of the generated feed document."""

import json
import logging
from pathlib import Path

from ..feed.models import Document

logger = logging.getLogger(__name__)


class DocumentWriter:
    """Writes feed documents as pretty printed JSON files."""

    def __init__(self, indent: int = 2):
        """Initialize the writer.

        Args:
            indent: JSON indentation width
        """
        self.indent = indent

    def write(self, path: str | Path, document: Document) -> bool:
        """Save a document, replacing any existing file.

        Parent directories are created as needed.

        Args:
            path: Destination file
            document: Document to save

        Returns:
            True if the file was written, False otherwise
        """
        file_path = Path(path)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(
                    document.model_dump(mode="json"),
                    f,
                    indent=self.indent,
                    ensure_ascii=False,
                )
                f.write("\n")

        except OSError as e:
            logger.error("Error writing to file %s: %s", file_path, e)
            return False

        logger.info(
            "Saved %d records to %s", len(document.content), file_path
        )
        return True

    def load(self, path: str | Path) -> Document | None:
        """Read back a previously written document.

        Returns:
            The document, or None if the file is missing or unreadable
        """
        file_path = Path(path)
        if not file_path.exists():
            return None

        try:
            with open(file_path, encoding="utf-8") as f:
                return Document.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            logger.error("Error loading %s: %s", file_path, e)
            return None
