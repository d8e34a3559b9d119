"""
Export a connector drawable state to JSON format
"""

import json
import logging
from typing import Optional

from .exceptions import FileExportError, PathValidationError
from .utils import validate_file_path, validate_drawable_state

logger = logging.getLogger(__name__)


def export_to_json(
    state,
    file_path: Optional[str] = None,
    indent: int = 2,
    ensure_ascii: bool = False
) -> str:
    """
    Export a drawable state to JSON format

    Serializes anchors, the main path (d string and commands), head glyphs,
    both layers with their drawables and the diagnostics, and optionally
    saves the result to a file.

    Args:
        state: DrawableState produced by a CurvedArrow
        file_path: Optional path to save JSON file. If None, only returns JSON string
        indent: Number of spaces for indentation (default: 2)
        ensure_ascii: If True, escape non-ASCII characters (default: False)

    Returns:
        JSON string representation of the state

    Raises:
        InvalidStateError: If the state is missing or malformed
        PathValidationError: If file_path is invalid or unsafe
        FileExportError: If serialization or the file write fails
    """
    try:
        validated_state = validate_drawable_state(state)
    except Exception as e:
        logger.error(f"State validation failed: {e}")
        raise

    try:
        json_str = json.dumps(
            validated_state.to_dict(),
            indent=indent,
            default=str,
            ensure_ascii=ensure_ascii
        )
    except (TypeError, ValueError) as e:
        logger.error(f"JSON serialization failed: {e}")
        raise FileExportError(f"Failed to serialize state to JSON: {e}") from e

    if file_path:
        try:
            validated_path = validate_file_path(file_path)
            validated_path.write_text(json_str, encoding='utf-8')
            logger.info(f"JSON state exported to: {validated_path}")

        except PathValidationError:
            raise
        except (OSError, IOError) as e:
            logger.error(f"Failed to write JSON file: {e}")
            raise FileExportError(f"Failed to write file '{file_path}': {e}") from e

    return json_str
