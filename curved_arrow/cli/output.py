"""
Output formatting and printing utilities for CLI
"""

from typing import Dict, List

from ..core.anchors import DOCK_ALIASES, list_docks
from ..core.config import CURVE_TYPES, HEAD_SHAPES, RESERVED_CURVE_TYPES


def catalog_entries(catalog: str = 'all') -> Dict[str, List[str]]:
    """Preset names grouped by catalog"""
    catalogs = {
        'curves': list(CURVE_TYPES),
        'heads': list(HEAD_SHAPES),
        'docks': list_docks() + [f"{alias} (= {target})" for alias, target in DOCK_ALIASES.items()],
    }
    if catalog == 'all':
        return catalogs
    return {catalog: catalogs[catalog]}


def print_separator(width: int = 70, char: str = '=') -> None:
    print(char * width)


def print_catalog(catalog: str = 'all') -> None:
    """
    Print available presets

    Args:
        catalog: 'curves', 'heads', 'docks' or 'all'
    """
    for name, entries in catalog_entries(catalog).items():
        print_separator()
        print(f"{name.title()} ({len(entries)})")
        print_separator()
        for entry in entries:
            print(f"  {entry}")
        if name == 'curves':
            print(f"  (reserved, rendered as smooth: {', '.join(RESERVED_CURVE_TYPES)})")
        print()


def print_diagnostics(diagnostics) -> None:
    """Print conditions the engine absorbed while rendering"""
    if not diagnostics:
        return
    print("Rendered with fallbacks:")
    for diagnostic in diagnostics:
        print(f"  - {diagnostic.value}")
