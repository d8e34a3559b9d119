"""
Curved Arrow - connector geometry and layout engine
Anchors, curve styles, obstacle routing, arrowheads and two-layer compositing
"""

from importlib.metadata import version, PackageNotFoundError

from .core.config import ArrowConfig, SceneConfig
from .core.connector import CurvedArrow, Diagnostic, DrawableState

try:
    __version__ = version("curved-arrow")
except PackageNotFoundError:
    # Package not installed (development mode)
    __version__ = "0.0.0.dev"

__all__ = ["CurvedArrow", "ArrowConfig", "SceneConfig", "Diagnostic", "DrawableState"]
