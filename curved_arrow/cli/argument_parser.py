"""
Command-line argument parser configuration with subcommands
"""

import argparse


def setup_argument_parser() -> argparse.ArgumentParser:
    """
    Configure and return the argument parser with subcommands (init, render, list)

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='curved_arrow',
        description='Render curved arrow connectors between rectangles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a sample scene
  curved_arrow init                          # Write ./arrow_scene.yaml
  curved_arrow init --path ./demo.yaml       # Custom location

  # Render a scene
  curved_arrow render arrow_scene.yaml                  # SVG next to the scene
  curved_arrow render arrow_scene.yaml -o out.svg       # Custom output path
  curved_arrow render arrow_scene.yaml --format json    # Drawable state as JSON
  curved_arrow render arrow_scene.yaml --log-level DEBUG

  # Show available presets
  curved_arrow list
  curved_arrow list heads
        """
    )

    subparsers = parser.add_subparsers(
        dest='command',
        required=True,
        help='Command to execute'
    )

    # ========================================================================
    # INIT SUBCOMMAND
    # ========================================================================
    init_parser = subparsers.add_parser(
        'init',
        help='Create a sample scene file',
        description='Write a sample scene YAML to start from'
    )

    init_parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing scene file'
    )

    init_parser.add_argument(
        '--path', '-p',
        type=str,
        help='Custom path for the scene file (default: ./arrow_scene.yaml)'
    )

    # ========================================================================
    # RENDER SUBCOMMAND
    # ========================================================================
    render_parser = subparsers.add_parser(
        'render',
        help='Render a scene to SVG or JSON',
        description='Compute the connector for a scene and export it'
    )

    render_parser.add_argument(
        'scene_file',
        help='Path to YAML scene file'
    )

    render_parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file (default: scene file name with the format extension)'
    )

    render_parser.add_argument(
        '--format',
        choices=['svg', 'json'],
        default='svg',
        help='Output format (default: svg)'
    )

    render_parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Set logging level (default: INFO). Use DEBUG to trace the pipeline.'
    )

    render_parser.add_argument(
        '--log-file',
        type=str,
        help='Also write logs to this file'
    )

    # ========================================================================
    # LIST SUBCOMMAND
    # ========================================================================
    list_parser = subparsers.add_parser(
        'list',
        help='List curve styles, head shapes and dock positions',
        description='Print the available presets'
    )

    list_parser.add_argument(
        'catalog',
        nargs='?',
        choices=['curves', 'heads', 'docks', 'all'],
        default='all',
        help='Which catalog to print (default: all)'
    )

    return parser
