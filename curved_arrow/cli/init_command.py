"""
CLI command to create a sample scene file
"""

from pathlib import Path
from typing import Optional

from .config_template import SAMPLE_SCENE_TEMPLATE

DEFAULT_SCENE_FILE = './arrow_scene.yaml'


def run_init_command(force: bool = False, path: Optional[str] = None) -> int:
    """
    Write the sample scene to the current directory or a custom path

    Args:
        force: If True, overwrite an existing file
        path: Custom path for the scene file. If None, creates ./arrow_scene.yaml

    Returns:
        Exit code (0 = success, 1 = error)
    """
    scene_path = Path(path or DEFAULT_SCENE_FILE).resolve()

    if scene_path.exists() and not force:
        print(f"Scene already exists: {scene_path}")
        print("   Use --force to overwrite")
        return 1

    try:
        scene_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Failed to create directory: {scene_path.parent}")
        print(f"   Error: {e}")
        return 1

    try:
        scene_path.write_text(SAMPLE_SCENE_TEMPLATE, encoding='utf-8')
    except OSError as e:
        print(f"Failed to write scene file: {scene_path}")
        print(f"   Error: {e}")
        return 1

    print(f"Scene created: {scene_path}")
    print("\nNext steps:")
    print(f"  1. Edit the entities and arrow block in {scene_path}")
    print("  2. Render it:")
    print(f"     curved_arrow render {scene_path}")

    return 0
