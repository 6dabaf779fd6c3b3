"""
Exam catalog

Loads exam documents from a directory of JSON files for the CLI and the
batch sweep. The engine itself never touches the filesystem.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from eligex.exceptions import CatalogError

logger = logging.getLogger(__name__)


def load_exam_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read one exam document

    Args:
        path: JSON file holding a single exam document

    Returns:
        Parsed document

    Raises:
        CatalogError: If the file cannot be read, is not JSON or is not an object
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in exam document {path}: {str(e)}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read exam document {path}: {str(e)}") from e

    if not isinstance(document, dict):
        raise CatalogError(f"Exam document {path} must be a JSON object")
    return document


class ExamCatalog:
    """
    Directory of exam documents.

    Documents are keyed by file stem and loaded lazily on first access.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise CatalogError(f"Exam catalog directory not found: {self.directory}")
        self._documents: Optional[Dict[str, Dict[str, Any]]] = None

    def paths(self) -> List[Path]:
        return sorted(self.directory.glob('*.json'))

    def load(self) -> Dict[str, Dict[str, Any]]:
        """Load every document in the directory

        Raises:
            CatalogError: If any document is unreadable
        """
        if self._documents is None:
            documents = {}
            for path in self.paths():
                documents[path.stem] = load_exam_document(path)
            logger.info(f"Loaded {len(documents)} exam documents from {self.directory}")
            self._documents = documents
        return self._documents

    def names(self) -> List[str]:
        return list(self.load())

    def find(self, name: str) -> Optional[Dict[str, Any]]:
        """Look up a document by file stem, exam_name or exam_code (case-insensitive)"""
        documents = self.load()
        if name in documents:
            return documents[name]
        wanted = name.strip().upper()
        for stem, document in documents.items():
            candidates = (stem, document.get('exam_name'), document.get('exam_code'))
            if any(isinstance(value, str) and value.strip().upper() == wanted for value in candidates):
                return document
        return None

    def __len__(self) -> int:
        return len(self.load())
