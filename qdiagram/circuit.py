"""
Quantum circuit container

Example:
--------
    >>> from qdiagram import QuantumCircuit
    >>>
    >>> circuit = QuantumCircuit(2)
    >>> circuit.h(1).cx(1, 2)
    >>> len(circuit)
    2
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .core import GateOperation, ValidationError
from .states import BasisState, InitialState, validate_initial_states


class QuantumCircuit:
    """
    Fixed number of wires, gates in program order, initial states.

    Wires are numbered from 1. Gates are validated against the wire count
    as they are added; program order is never changed.

    Parameters:
    -----------
    num_qubits : int
        Number of wires (>= 1)
    gates : iterable of GateOperation, optional
        Initial gate sequence
    initial_states : sequence of InitialState, optional
        One descriptor for all wires or one per wire (defaults to |0>)
    """

    def __init__(self, num_qubits: int, gates: Optional[Iterable[GateOperation]] = None,
                 initial_states: Optional[Sequence[InitialState]] = None):
        if isinstance(num_qubits, bool) or not isinstance(num_qubits, int):
            raise ValidationError(f"num_qubits must be an int, got {num_qubits!r}")
        if num_qubits < 1:
            raise ValidationError(f"num_qubits must be >= 1, got {num_qubits}")

        self.num_qubits = num_qubits
        if initial_states is None:
            initial_states = [BasisState("0")]
        validate_initial_states(initial_states, num_qubits)
        self.initial_states: Tuple[InitialState, ...] = tuple(initial_states)

        self._gates: List[GateOperation] = []
        for gate in gates or ():
            self.add_gate(gate)

    @property
    def gates(self) -> Tuple[GateOperation, ...]:
        """Gate sequence in program order."""
        return tuple(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self):
        return iter(self.gates)

    def add_gate(self, gate: GateOperation) -> 'QuantumCircuit':
        """Append a gate; returns the circuit for chaining."""
        if not isinstance(gate, GateOperation):
            raise ValidationError(f"Expected a GateOperation, got {gate!r}")
        if gate.hi > self.num_qubits:
            raise ValidationError(
                f"Wire index {gate.hi} of {gate.gate_type} is out of range [1, {self.num_qubits}]"
            )
        self._gates.append(gate)
        return self

    # Single-qubit gates
    def h(self, qubit: int) -> 'QuantumCircuit':
        """Add Hadamard gate."""
        return self.add_gate(GateOperation.single(qubit, "H"))

    def x(self, qubit: int) -> 'QuantumCircuit':
        """Add Pauli-X gate."""
        return self.add_gate(GateOperation.single(qubit, "X"))

    def y(self, qubit: int) -> 'QuantumCircuit':
        """Add Pauli-Y gate."""
        return self.add_gate(GateOperation.single(qubit, "Y"))

    def z(self, qubit: int) -> 'QuantumCircuit':
        """Add Pauli-Z gate."""
        return self.add_gate(GateOperation.single(qubit, "Z"))

    def s(self, qubit: int) -> 'QuantumCircuit':
        """Add S (phase) gate."""
        return self.add_gate(GateOperation.single(qubit, "S"))

    def t(self, qubit: int) -> 'QuantumCircuit':
        """Add T (pi/8) gate."""
        return self.add_gate(GateOperation.single(qubit, "T"))

    def rx(self, qubit: int, angle: float) -> 'QuantumCircuit':
        """Add RX rotation gate."""
        return self.add_gate(GateOperation.parametric_single(qubit, "Rx", [angle]))

    def ry(self, qubit: int, angle: float) -> 'QuantumCircuit':
        """Add RY rotation gate."""
        return self.add_gate(GateOperation.parametric_single(qubit, "Ry", [angle]))

    def rz(self, qubit: int, angle: float) -> 'QuantumCircuit':
        """Add RZ rotation gate."""
        return self.add_gate(GateOperation.parametric_single(qubit, "Rz", [angle]))

    def p(self, qubit: int, angle: float) -> 'QuantumCircuit':
        """Add phase gate diag(1, e^{i angle})."""
        return self.add_gate(GateOperation.parametric_single(qubit, "P", [angle]))

    # Two-qubit gates
    def cx(self, control: int, target: int) -> 'QuantumCircuit':
        """Add CNOT (controlled-X) gate."""
        return self.add_gate(GateOperation.controlled(control, target, "CNOT"))

    def cy(self, control: int, target: int) -> 'QuantumCircuit':
        """Add CY (controlled-Y) gate."""
        return self.add_gate(GateOperation.controlled(control, target, "CY"))

    def cz(self, control: int, target: int) -> 'QuantumCircuit':
        """Add CZ (controlled-Z) gate."""
        return self.add_gate(GateOperation.controlled(control, target, "CZ"))

    def cp(self, control: int, target: int, angle: float) -> 'QuantumCircuit':
        """Add controlled phase gate."""
        return self.add_gate(GateOperation.parametric_controlled(control, target, "CPHASE", [angle]))

    def crx(self, control: int, target: int, angle: float) -> 'QuantumCircuit':
        """Add controlled RX gate."""
        return self.add_gate(GateOperation.parametric_controlled(control, target, "CRx", [angle]))

    def cry(self, control: int, target: int, angle: float) -> 'QuantumCircuit':
        """Add controlled RY gate."""
        return self.add_gate(GateOperation.parametric_controlled(control, target, "CRy", [angle]))

    def crz(self, control: int, target: int, angle: float) -> 'QuantumCircuit':
        """Add controlled RZ gate."""
        return self.add_gate(GateOperation.parametric_controlled(control, target, "CRz", [angle]))

    def swap(self, qubit1: int, qubit2: int) -> 'QuantumCircuit':
        """Add SWAP gate."""
        return self.add_gate(GateOperation.two_wire(qubit1, qubit2, "SWAP"))

    def iswap(self, qubit1: int, qubit2: int) -> 'QuantumCircuit':
        """Add iSWAP gate."""
        return self.add_gate(GateOperation.two_wire(qubit1, qubit2, "iSWAP"))

    def rxx(self, qubit1: int, qubit2: int, angle: float) -> 'QuantumCircuit':
        """Add XX Ising coupling."""
        return self.add_gate(GateOperation.parametric_two_wire(qubit1, qubit2, "Rxx", [angle]))

    def ryy(self, qubit1: int, qubit2: int, angle: float) -> 'QuantumCircuit':
        """Add YY Ising coupling."""
        return self.add_gate(GateOperation.parametric_two_wire(qubit1, qubit2, "Ryy", [angle]))

    def rzz(self, qubit1: int, qubit2: int, angle: float) -> 'QuantumCircuit':
        """Add ZZ Ising coupling."""
        return self.add_gate(GateOperation.parametric_two_wire(qubit1, qubit2, "Rzz", [angle]))

    # Multi-qubit gates
    def ccx(self, ctrl1: int, ctrl2: int, target: int) -> 'QuantumCircuit':
        """Add Toffoli (CCX) gate."""
        return self.add_gate(GateOperation.three_wire(ctrl1, ctrl2, target, "Toffoli"))

    def toffoli(self, ctrl1: int, ctrl2: int, target: int) -> 'QuantumCircuit':
        """Add Toffoli gate (alias for ccx)."""
        return self.ccx(ctrl1, ctrl2, target)

    def cswap(self, control: int, qubit1: int, qubit2: int) -> 'QuantumCircuit':
        """Add Fredkin (controlled-SWAP) gate."""
        return self.add_gate(GateOperation.three_wire(control, qubit1, qubit2, "Fredkin"))

    def fredkin(self, control: int, qubit1: int, qubit2: int) -> 'QuantumCircuit':
        """Add Fredkin gate (alias for cswap)."""
        return self.cswap(control, qubit1, qubit2)

    def cccx(self, ctrl1: int, ctrl2: int, ctrl3: int, target: int) -> 'QuantumCircuit':
        """Add triple-controlled NOT gate."""
        return self.add_gate(GateOperation.four_wire(ctrl1, ctrl2, ctrl3, target, "CCCNOT"))

    def mcx(self, controls: Sequence[int], target: int) -> 'QuantumCircuit':
        """Add multi-controlled X with any number of controls."""
        controls = list(controls)
        return self.add_gate(GateOperation.multi(controls + [target], "X", controls=len(controls)))

    def __repr__(self) -> str:
        return f"QuantumCircuit({self.num_qubits} qubits, {len(self._gates)} gates)"
