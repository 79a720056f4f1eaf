"""
qdiagram - Visualization Module

quantikz rendering of quantum circuits.

Modules:
--------
circuit : Diagram rendering
    CircuitDiagram - Lay out and render a circuit
    to_quantikz - Quick function to render a circuit as LaTeX

layout : Column assignment (serial or packed)

labels : Gate labels and pi-fraction parameter formatting

cells : Per-wire cell tokens
"""

from .cells import CellKind, DiagramCell, TargetShape
from .circuit import (
    CircuitDiagram,
    TikzPicture,
    column_tokens,
    gate_cells,
    to_quantikz,
    to_tikz_picture,
)
from .labels import GATE_SYMBOLS, controlled_target_cell, format_param, gate_to_latex
from .layout import (
    ColumnAssignment,
    LayoutMode,
    assign_columns,
    resolve_layout,
    schedule_packed,
    schedule_serial,
)

__all__ = [
    'CircuitDiagram',
    'TikzPicture',
    'column_tokens',
    'gate_cells',
    'to_quantikz',
    'to_tikz_picture',
    'GATE_SYMBOLS',
    'controlled_target_cell',
    'format_param',
    'gate_to_latex',
    'ColumnAssignment',
    'LayoutMode',
    'assign_columns',
    'resolve_layout',
    'schedule_packed',
    'schedule_serial',
    'CellKind',
    'DiagramCell',
    'TargetShape',
]
