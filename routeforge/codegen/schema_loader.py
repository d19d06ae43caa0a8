"""Document loading utilities.

This module loads API documents from local JSON or YAML files. Documents
already held in memory go through load_document, which applies the same
shape check.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from routeforge.exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

__all__ = ['SchemaLoader', 'load_document']


def load_document(document: Any, source: str = '<memory>') -> dict[str, Any]:
    """Check that a parsed document is a mapping and return it as a dict.

    Raises:
        SchemaLoadError: If the top level of the document is not a mapping.
    """
    if not isinstance(document, Mapping):
        logger.warning(f'Document {source} is not an object ({type(document).__name__})')
        raise SchemaLoadError(
            source,
            cause=TypeError(
                f'expected a mapping at the top level, got {type(document).__name__}'
            ),
        )
    if 'paths' not in document:
        logger.debug(f'Document {source} declares no paths')
    return dict(document)


class SchemaLoader:
    """Loads API documents from local files.

    Files ending in ``.yaml`` or ``.yml`` are parsed with PyYAML, anything
    else as JSON.

    Example:
        >>> loader = SchemaLoader()
        >>> document = loader.load('./openapi.yaml')
        >>> sorted(document)
        ['info', 'openapi', 'paths']
    """

    def __init__(self, base_path: str | Path | None = None):
        """Initialize the loader.

        Args:
            base_path: Base path for relative sources. Defaults to the
                current working directory.
        """
        self._base_path = Path(base_path) if base_path else Path.cwd()

    def load(self, source: str | Path) -> dict[str, Any]:
        """Load a document from a file path.

        Raises:
            SchemaLoadError: If the file is missing, unreadable, not valid
                JSON/YAML or not an object at the top level.
        """
        path = Path(source)
        if not path.is_absolute():
            path = self._base_path / path

        if not path.exists():
            raise SchemaLoadError(
                str(source), cause=FileNotFoundError(f'File not found: {path}')
            )

        try:
            content = path.read_text(encoding='utf-8')
            if path.suffix.lower() in ('.yaml', '.yml'):
                document = yaml.safe_load(content)
            else:
                document = json.loads(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SchemaLoadError(str(source), cause=e)
        except OSError as e:
            raise SchemaLoadError(str(source), cause=e)

        logger.debug(f'Loaded document from {path}')
        return load_document(document, str(source))
