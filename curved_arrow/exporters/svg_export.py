"""
Export a connector drawable state to an SVG document
"""

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .exceptions import FileExportError, PathValidationError
from .utils import validate_file_path, validate_drawable_state, DEFAULT_SVG_FILENAME
from ..core.path import format_number

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "connector.svg.j2"


def _build_environment() -> Environment:
    if not TEMPLATE_DIR.exists():
        logger.error(f"Template directory not found: {TEMPLATE_DIR}")
        raise FileExportError(f"Template directory not found: {TEMPLATE_DIR}")

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(['svg.j2', 'svg', 'xml']),
        trim_blocks=True,
        lstrip_blocks=True
    )
    env.filters['num'] = format_number
    return env


def render_svg(
    state,
    width: float = 800,
    height: float = 600,
    template_name: Optional[str] = None
) -> str:
    """
    Render both connector layers into one SVG document

    The under layer is emitted before the over layer so document order
    matches the stacking contract.

    Args:
        state: DrawableState produced by a CurvedArrow
        width: Document width
        height: Document height
        template_name: Optional custom template name

    Returns:
        SVG markup

    Raises:
        InvalidStateError: If the state is missing or malformed
        FileExportError: If the template cannot be loaded or rendered
    """
    validated_state = validate_drawable_state(state)
    env = _build_environment()

    template_file = template_name or DEFAULT_TEMPLATE
    try:
        template = env.get_template(template_file)
    except Exception as e:
        logger.error(f"Failed to load template '{template_file}': {e}")
        raise FileExportError(f"Failed to load template '{template_file}': {e}") from e

    context = {
        'instance_id': validated_state.instance_id,
        'width': width,
        'height': height,
        'layers': validated_state.layers,
    }

    try:
        return template.render(**context)
    except Exception as e:
        logger.error(f"Template rendering failed: {e}")
        raise FileExportError(f"Failed to render template: {e}") from e


def export_to_svg(
    state,
    file_path: str = DEFAULT_SVG_FILENAME,
    width: float = 800,
    height: float = 600
) -> str:
    """
    Render a drawable state and write it to an SVG file

    Returns:
        Absolute path to the saved SVG file

    Raises:
        InvalidStateError: If the state is missing or malformed
        PathValidationError: If file_path is invalid or unsafe
        FileExportError: If rendering or writing fails
    """
    svg = render_svg(state, width=width, height=height)

    try:
        validated_path = validate_file_path(file_path)
    except PathValidationError as e:
        logger.error(f"Path validation failed: {e}")
        raise

    try:
        validated_path.write_text(svg, encoding='utf-8')
        logger.info(f"SVG connector exported to: {validated_path}")
    except (OSError, IOError) as e:
        logger.error(f"Failed to write SVG file: {e}")
        raise FileExportError(f"Failed to write file '{file_path}': {e}") from e

    return str(validated_path)
