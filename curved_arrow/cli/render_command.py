"""
CLI command to render a scene file to SVG or JSON
"""

import logging
import re
from pathlib import Path
from typing import Optional

from ..core.config import EndpointConfig, SceneConfig
from ..core.connector import CurvedArrow
from ..core.geometry import AnchorPoint, EntityRect
from ..core.observe import StaticEntity
from ..exporters import ExporterError, export_to_json, export_to_svg
from .output import print_diagnostics

logger = logging.getLogger(__name__)


def _endpoint(endpoint: EndpointConfig, entities: dict):
    if endpoint.entity is not None:
        return entities[endpoint.entity]
    return AnchorPoint(endpoint.x, endpoint.y)


def build_scene_connector(scene: SceneConfig) -> CurvedArrow:
    """
    Build a connector for a static scene

    The container sits at the origin so entity rects are already
    container-relative.
    """
    entities = {
        name: StaticEntity(EntityRect(*rect))
        for name, rect in scene.entities.items()
    }
    container = StaticEntity(EntityRect(0, 0, scene.container_width, scene.container_height))

    return CurvedArrow(
        start=_endpoint(scene.start, entities),
        end=_endpoint(scene.end, entities),
        config=scene.arrow,
        obstacles=[entities[name] for name in scene.obstacles],
        container=container,
        instance_id=f"curved-arrow-{re.sub(r'[^A-Za-z0-9_-]+', '-', scene.name)}" if scene.name else None,
    )


def run_render_command(scene_file: str, output: Optional[str] = None, output_format: str = 'svg') -> int:
    """
    Render a scene file

    Args:
        scene_file: Path to the YAML scene
        output: Output path (default: scene path with the format extension)
        output_format: 'svg' or 'json'

    Returns:
        Exit code (0 = success, 1 = error)
    """
    try:
        scene = SceneConfig.from_yaml(scene_file)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Could not load scene: {e}")
        print(f"Could not load scene: {e}")
        return 1

    connector = build_scene_connector(scene)
    with connector:
        connector.refresh()
        state = connector.state

    output_path = output or str(Path(scene_file).with_suffix(f".{output_format}"))
    try:
        if output_format == 'json':
            written = output_path
            export_to_json(state, output_path)
        else:
            written = export_to_svg(state, output_path, scene.container_width, scene.container_height)
    except ExporterError as e:
        logger.error(f"Export failed: {e}")
        print(f"Export failed: {e}")
        return 1

    logger.info(f"Rendered '{scene.name or scene_file}' ({scene.arrow.curve.type}) to {written}")
    print(f"Connector saved to: {written}")
    print_diagnostics(state.diagnostics)
    return 0
