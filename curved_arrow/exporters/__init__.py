"""
Export functionality for connector drawable states

- SVG: both layers stacked in one document, rendered with Jinja2
  (autoescaped)
- JSON: machine-readable anchors, paths, layers and diagnostics

All exporters validate their input and output path and raise the
ExporterError hierarchy on failure.
"""

from .svg_export import export_to_svg, render_svg
from .json_export import export_to_json

# Export exceptions for error handling
from .exceptions import (
    ExporterError,
    InvalidStateError,
    FileExportError,
    PathValidationError
)

__all__ = [
    # Export functions
    "export_to_svg",
    "render_svg",
    "export_to_json",
    # Exceptions
    "ExporterError",
    "InvalidStateError",
    "FileExportError",
    "PathValidationError",
]
