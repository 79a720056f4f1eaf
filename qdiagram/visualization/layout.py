"""
Column layout of circuit diagrams

Two layout modes:
- SERIAL : one operation per column, in program order
- PACKED : greedy left-to-right packing; an operation shares a column with
           earlier operations unless their wire ranges overlap

Example:
--------
    >>> circuit = QuantumCircuit(3).h(1).h(3).cx(1, 2)
    >>> assign_columns(circuit, "packed").columns
    (0, 0, 1)
    >>> assign_columns(circuit, "serial").columns
    (0, 1, 2)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple, Union

from ..circuit import QuantumCircuit
from ..core import GateOperation, UnsupportedModeError, involved_range

logger = logging.getLogger(__name__)


class LayoutMode(Enum):
    """Column assignment policy"""
    SERIAL = "serial"
    PACKED = "packed"


LAYOUT_ALIASES = {
    "serial": LayoutMode.SERIAL,
    "horizontal": LayoutMode.SERIAL,
    "packed": LayoutMode.PACKED,
    "parallel": LayoutMode.PACKED,
    "vertical": LayoutMode.PACKED,
}

DEFAULT_LAYOUT = LayoutMode.PACKED


def resolve_layout(mode: Union[LayoutMode, str]) -> LayoutMode:
    """
    Resolve a layout selector to a LayoutMode.

    Raises:
        UnsupportedModeError: for anything that is not a LayoutMode or a known alias
    """
    if isinstance(mode, LayoutMode):
        return mode
    if isinstance(mode, str) and mode in LAYOUT_ALIASES:
        return LAYOUT_ALIASES[mode]
    raise UnsupportedModeError(
        f"Unknown layout mode {mode!r}; expected one of {sorted(LAYOUT_ALIASES)}"
    )


@dataclass(frozen=True)
class ColumnAssignment:
    """0-based column of every operation, by operation index."""
    mode: LayoutMode
    columns: Tuple[int, ...]
    num_columns: int

    def __len__(self) -> int:
        return len(self.columns)

    def __getitem__(self, index: int) -> int:
        return self.columns[index]


def schedule_serial(gates: Sequence[GateOperation]) -> ColumnAssignment:
    """Operation i goes to column i."""
    return ColumnAssignment(LayoutMode.SERIAL, tuple(range(len(gates))), len(gates))


def schedule_packed(gates: Sequence[GateOperation], num_qubits: int) -> ColumnAssignment:
    """
    Greedy order-preserving packing.

    Every wire in an operation's [lo, hi] range is marked occupied, not just
    the wires it acts on: the vertical connector of a controlled gate crosses
    the wires in between.
    """
    frontier = [0] * (num_qubits + 1)
    columns = []

    for gate in gates:
        lo, hi = involved_range(gate)
        depth = max(frontier[lo:hi + 1]) + 1
        columns.append(depth - 1)
        for w in range(lo, hi + 1):
            frontier[w] = depth

    num_columns = max(frontier)
    logger.debug("Packed %d operations into %d columns", len(columns), num_columns)
    return ColumnAssignment(LayoutMode.PACKED, tuple(columns), num_columns)


def schedule(gates: Sequence[GateOperation], num_qubits: int,
             layout: Union[LayoutMode, str] = DEFAULT_LAYOUT) -> ColumnAssignment:
    """Assign columns to ``gates`` with the given layout."""
    mode = resolve_layout(layout)
    if mode is LayoutMode.SERIAL:
        return schedule_serial(gates)
    return schedule_packed(gates, num_qubits)


def assign_columns(circuit: QuantumCircuit,
                   layout: Union[LayoutMode, str] = DEFAULT_LAYOUT) -> ColumnAssignment:
    """Assign a column to every operation of ``circuit``."""
    return schedule(circuit.gates, circuit.num_qubits, layout)
