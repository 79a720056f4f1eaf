"""
Quantum Circuit Diagram Rendering

quantikz rendering of a QuantumCircuit:
- LaTeX/quantikz markup (papers)
- TikzPicture wrapper for standalone documents

Example:
--------
    >>> from qdiagram import QuantumCircuit
    >>> from qdiagram.visualization import CircuitDiagram
    >>>
    >>> circuit = QuantumCircuit(2).h(1).cx(1, 2)
    >>> print(CircuitDiagram(circuit).to_latex())
    \\begin{quantikz}
    \\lstick{\\ket{0}} & \\gate{H} & \\ctrl{1} & \\qw \\\\
    \\lstick{\\ket{0}} & \\qw & \\targ{} & \\qw
    \\end{quantikz}
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from ..circuit import QuantumCircuit
from ..core import MULTI_KINDS, GateKind, GateOperation, involved_range
from ..states import resolve_wire_labels
from .cells import GHOST, SWAP_PARTNER, THROUGH, THROUGH_TOKEN, DiagramCell, TargetShape
from .labels import controlled_target_cell, gate_to_latex, is_reserved_target
from .layout import DEFAULT_LAYOUT, ColumnAssignment, LayoutMode, resolve_layout, schedule

logger = logging.getLogger(__name__)

BEGIN_QUANTIKZ = "\\begin{quantikz}\n"
END_QUANTIKZ = "\n\\end{quantikz}"
ROW_SEP = " \\\\\n"
CELL_SEP = " & "
TIKZ_CELL_SEP = " \\& "

SWAP_FAMILY = frozenset({"SWAP", "Swap"})
TOFFOLI_FAMILY = frozenset({"Toffoli", "CCNOT", "CCX", "TOFF"})
FREDKIN_FAMILY = frozenset({"Fredkin", "CSWAP", "CSwap", "CS"})
TRIPLE_CONTROL_FAMILY = frozenset({"CCCNOT"})


# ============================================================================
# Per-operation cells
# ============================================================================

def _target_cell(gate: GateOperation) -> DiagramCell:
    if not gate.params or is_reserved_target(gate.gate_type):
        return controlled_target_cell(gate.gate_type)
    return DiagramCell.target(TargetShape.BOX, gate_to_latex(gate.gate_type, gate.params))


def _place_swap(cells: Dict[int, DiagramCell], qubit1: int, qubit2: int):
    lo, hi = min(qubit1, qubit2), max(qubit1, qubit2)
    cells[lo] = DiagramCell.swap_anchor(hi - lo)
    cells[hi] = SWAP_PARTNER


def _place_control_chain(cells: Dict[int, DiagramCell], controls: Sequence[int],
                         target: int, target_cell: DiagramCell):
    """Controls point at the next wire of the chain, walking towards the target."""
    points = sorted(list(controls) + [target])
    t = points.index(target)
    for i, w in enumerate(points):
        if i < t:
            cells[w] = DiagramCell.control(points[i + 1] - w)
        elif i > t:
            cells[w] = DiagramCell.control(points[i - 1] - w)
    cells[target] = target_cell


def _place_span_box(cells: Dict[int, DiagramCell], lo: int, hi: int, label: str):
    cells[lo] = DiagramCell.span_box(hi - lo + 1, label)
    for w in range(lo + 1, hi + 1):
        cells[w] = GHOST


def gate_cells(gate: GateOperation) -> Dict[int, DiagramCell]:
    """
    Cells drawn by ``gate`` on every wire of its [lo, hi] range.

    Wires inside the range that the gate does not act on stay THROUGH,
    unless a span box covers them.
    """
    lo, hi = involved_range(gate)
    cells = {w: THROUGH for w in range(lo, hi + 1)}
    kind, name, wires = gate.kind, gate.gate_type, gate.wires

    if kind in (GateKind.SINGLE, GateKind.PARAMETRIC_SINGLE):
        cells[wires[0]] = DiagramCell.box(gate_to_latex(name, gate.params))

    elif kind in (GateKind.CONTROLLED, GateKind.PARAMETRIC_CONTROLLED):
        control, target = wires
        cells[control] = DiagramCell.control(target - control)
        cells[target] = _target_cell(gate)

    elif kind is GateKind.TWO_WIRE and name in SWAP_FAMILY:
        _place_swap(cells, *wires)

    elif kind is GateKind.THREE_WIRE and name in TOFFOLI_FAMILY:
        _place_control_chain(cells, wires[:2], wires[2], DiagramCell.target(TargetShape.CROSS))

    elif kind is GateKind.THREE_WIRE and name in FREDKIN_FAMILY:
        control, qubit1, qubit2 = wires
        _place_swap(cells, qubit1, qubit2)
        nearest = min(sorted((qubit1, qubit2)), key=lambda w: abs(w - control))
        cells[control] = DiagramCell.control(nearest - control)

    elif kind is GateKind.FOUR_WIRE and name in TRIPLE_CONTROL_FAMILY:
        _place_control_chain(cells, wires[:3], wires[3], DiagramCell.target(TargetShape.CROSS))

    elif kind in MULTI_KINDS and gate.controls:
        _place_control_chain(cells, wires[:-1], wires[-1], _target_cell(gate))

    else:
        # Two-wire non-swap, Ising couplings, unrecognized 3/4-wire and
        # uncontrolled n-wire gates
        _place_span_box(cells, lo, hi, gate_to_latex(name, gate.params))

    return cells


def column_tokens(gate: GateOperation, num_qubits: int) -> List[str]:
    """quantikz tokens of a single-gate column, ghost cells as ""."""
    cells = gate_cells(gate)
    tokens = []
    for w in range(1, num_qubits + 1):
        token = cells.get(w, THROUGH).to_token()
        tokens.append("" if token is None else token)
    return tokens


# ============================================================================
# Diagram
# ============================================================================

@dataclass(frozen=True)
class TikzPicture:
    """quantikz body prepared for a standalone TikZ document."""
    data: str
    options: str = "ampersand replacement=\\&"
    preamble: str = "\\usepackage{quantikz}"
    environment: str = "quantikz"

    def to_document(self) -> str:
        """Complete standalone LaTeX document."""
        return "\n".join([
            "\\documentclass[tikz]{standalone}",
            self.preamble,
            "\\begin{document}",
            f"\\begin{{{self.environment}}}[{self.options}]",
            self.data,
            f"\\end{{{self.environment}}}",
            "\\end{document}",
        ])

    def __str__(self) -> str:
        return self.to_document()


class CircuitDiagram:
    """
    quantikz diagram of a circuit.

    Wire labels, layout mode and column assignment are all resolved in the
    constructor, so any error surfaces before markup is produced.

    Example:
    --------
        circuit = QuantumCircuit(3)
        circuit.h(1).cx(1, 2).cx(2, 3)

        diagram = CircuitDiagram(circuit, layout="packed")
        print(diagram.to_latex())
        diagram.save("ghz_circuit.tex")
    """

    def __init__(self, circuit: QuantumCircuit,
                 layout: Union[LayoutMode, str] = DEFAULT_LAYOUT,
                 align_spans: bool = False):
        """
        Initialize circuit diagram.

        Parameters:
        -----------
        circuit : QuantumCircuit
            Circuit to render
        layout : LayoutMode or str
            'packed' (default, aliases 'parallel'/'vertical') or
            'serial' (alias 'horizontal')
        align_spans : bool
            Emit empty placeholder cells under span boxes instead of
            dropping them
        """
        self.num_qubits = circuit.num_qubits
        self.wire_labels = resolve_wire_labels(circuit.initial_states, circuit.num_qubits)
        self.layout = resolve_layout(layout)
        self.align_spans = align_spans
        self.gates = circuit.gates
        self.assignment: ColumnAssignment = schedule(self.gates, self.num_qubits, self.layout)
        self.grid = self._build_grid()

    def _build_grid(self) -> List[List[DiagramCell]]:
        grid = [[THROUGH] * self.assignment.num_columns for _ in range(self.num_qubits)]
        for index, gate in enumerate(self.gates):
            column = self.assignment[index]
            for wire, cell in gate_cells(gate).items():
                grid[wire - 1][column] = cell
        return grid

    @property
    def depth(self) -> int:
        """Number of diagram columns."""
        return self.assignment.num_columns

    def _row_tokens(self, wire: int) -> List[str]:
        tokens = [f"\\lstick{{{self.wire_labels[wire]}}}"]
        for cell in self.grid[wire]:
            token = cell.to_token()
            if token is None:
                if not self.align_spans:
                    continue
                token = ""
            tokens.append(token)
        tokens.append(THROUGH_TOKEN)
        return tokens

    def rows(self, cell_sep: str = CELL_SEP) -> List[str]:
        """One line of markup per wire."""
        return [cell_sep.join(self._row_tokens(w)) for w in range(self.num_qubits)]

    def to_latex(self) -> str:
        """
        Generate LaTeX/quantikz representation.

        Returns:
        --------
        str : LaTeX code using the quantikz package
        """
        return BEGIN_QUANTIKZ + ROW_SEP.join(self.rows()) + END_QUANTIKZ

    def to_tikz_picture(self) -> TikzPicture:
        """Diagram body with ``\\&`` cell separators for ampersand replacement."""
        return TikzPicture(ROW_SEP.join(self.rows(TIKZ_CELL_SEP)))

    def save(self, filename: str, format: Optional[str] = None):
        """
        Save diagram to file.

        Parameters:
        -----------
        filename : str or path-like
            Output filename
        format : str, optional
            'tex' (quantikz environment) or 'standalone' (full document).
            Auto-detected from the extension.
        """
        filename = str(filename)
        if format is None:
            format = filename.split('.')[-1].lower()

        if format == 'tex' or format == 'latex':
            content = self.to_latex()
        elif format == 'standalone':
            content = self.to_tikz_picture().to_document()
        else:
            raise ValueError(f"Unsupported export format {format!r}; use 'tex' or 'standalone'")

        with open(filename, 'w') as f:
            f.write(content)
        logger.info("Saved circuit diagram to %s", filename)

    def __repr__(self) -> str:
        return (f"CircuitDiagram({self.num_qubits} qubits, depth={self.depth}, "
                f"layout={self.layout.value})")


def to_quantikz(circuit: QuantumCircuit,
                layout: Union[LayoutMode, str] = DEFAULT_LAYOUT,
                align_spans: bool = False) -> str:
    """Render ``circuit`` as a quantikz environment."""
    return CircuitDiagram(circuit, layout=layout, align_spans=align_spans).to_latex()


def to_tikz_picture(circuit: QuantumCircuit,
                    layout: Union[LayoutMode, str] = DEFAULT_LAYOUT,
                    align_spans: bool = False) -> TikzPicture:
    """Render ``circuit`` as a TikzPicture."""
    return CircuitDiagram(circuit, layout=layout, align_spans=align_spans).to_tikz_picture()
