"""
CLI utilities for draw_arrow.py
"""

from .argument_parser import setup_argument_parser
from .init_command import run_init_command
from .render_command import run_render_command, build_scene_connector
from .output import print_catalog, print_diagnostics

__all__ = [
    'setup_argument_parser',
    'run_init_command',
    'run_render_command',
    'build_scene_connector',
    'print_catalog',
    'print_diagnostics',
]
