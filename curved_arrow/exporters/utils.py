"""
Utility functions for exporters
"""

import os
import logging
from pathlib import Path
from typing import Any, Union

from .exceptions import PathValidationError, InvalidStateError
from ..core.compositor import LAYER_ORDER

logger = logging.getLogger(__name__)

# Constants
MAX_FILENAME_LENGTH = 255
DEFAULT_SVG_FILENAME = "connector.svg"

RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL', 'COM1', 'COM2', 'COM3', 'COM4',
    'COM5', 'COM6', 'COM7', 'COM8', 'COM9', 'LPT1', 'LPT2',
    'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9',
}


def validate_file_path(file_path: Union[str, Path]) -> Path:
    """
    Validate and resolve an output path

    Args:
        file_path: Path to validate

    Returns:
        Resolved Path object

    Raises:
        PathValidationError: If path is empty, too long, reserved or unusable

    Examples:
        >>> validate_file_path("arrow.svg").name
        'arrow.svg'
    """
    if isinstance(file_path, Path):
        file_path = str(file_path)
    if not file_path or not isinstance(file_path, str):
        raise PathValidationError(f"File path must be a non-empty string, got: {type(file_path)}")

    filename = os.path.basename(file_path)
    if len(filename) > MAX_FILENAME_LENGTH:
        raise PathValidationError(
            f"Filename too long ({len(filename)} chars). Maximum is {MAX_FILENAME_LENGTH}"
        )

    try:
        path = Path(file_path).resolve()
    except (ValueError, OSError) as e:
        raise PathValidationError(f"Invalid file path: {e}")

    if path.stem.upper() in RESERVED_NAMES:
        raise PathValidationError(f"Reserved filename: {filename}")

    return path


def validate_drawable_state(state: Any):
    """
    Check that a drawable state carries both layers in stacking order

    Raises:
        InvalidStateError: If the state is missing or its layers are malformed
    """
    if state is None:
        raise InvalidStateError("No drawable state to export (connector not rendered yet?)")

    layers = getattr(state, 'layers', None)
    if layers is None:
        raise InvalidStateError(f"Expected a DrawableState, got: {type(state)}")

    names = tuple(layer.name for layer in layers)
    if names != LAYER_ORDER:
        raise InvalidStateError(f"Layers must be {LAYER_ORDER}, got {names}")

    z_values = [layer.z_index for layer in layers]
    if z_values != sorted(z_values) or len(set(z_values)) != len(z_values):
        raise InvalidStateError(f"Layer z-indexes must be strictly increasing, got {z_values}")

    return state
