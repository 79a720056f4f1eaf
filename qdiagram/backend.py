"""
qdiagram Backend - Operator records and reference state-vector simulator

``to_backend_op`` forwards a GateOperation to the record a numerical
backend consumes: gate identifier, ordered wires and named parameters.

``StatevectorBackend`` consumes those records with a dense NumPy state
vector. It is an exact reference for small circuits (up to 16 qubits);
larger circuits belong to a tensor-network backend.

Conventions:
- Wires are 1-based; wire 1 is the most significant bit
- Gate matrices act on their wires in the order given (controls first)
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .circuit import QuantumCircuit
from .core import BackendError, GateKind, GateOperation
from .states import resolve_backend_labels

logger = logging.getLogger(__name__)

MAX_QUBITS = 16


# ============================================================================
# OPERATOR RECORDS
# ============================================================================

@dataclass(frozen=True)
class BackendOp:
    """
    Operator record: identifier, ordered wires, named parameters.

    ``controls`` counts the leading control wires. Zero means the operator
    acts on all its wires with no control structure.
    """
    name: str
    wires: Tuple[int, ...]
    params: Dict[str, float] = field(default_factory=dict)
    controls: int = 0


def _param_names(gate: GateOperation) -> Tuple[str, ...]:
    n = len(gate.params)
    if n == 1:
        return ("phi",) if gate.kind is GateKind.PARAMETRIC_TWO_WIRE else ("theta",)
    if n == 3:
        return ("theta", "phi", "lambda")
    return tuple(f"p{i}" for i in range(n))


def _num_controls(gate: GateOperation) -> int:
    if gate.kind in (GateKind.CONTROLLED, GateKind.PARAMETRIC_CONTROLLED):
        return 1
    if gate.kind in (GateKind.THREE_WIRE, GateKind.FOUR_WIRE) and gate.gate_type in CONTROLLED_GATES:
        return CONTROLLED_GATES[gate.gate_type][0]
    return gate.controls


def to_backend_op(gate: GateOperation) -> BackendOp:
    """
    Forward a gate to its backend operator record.

    Controlled kinds and the named 3/4-wire controlled families carry their
    control count; every other kind forwards ``gate.controls`` unchanged.

    Example:
        >>> to_backend_op(GateOperation.parametric_single(1, "Rx", [0.1]))
        BackendOp(name='Rx', wires=(1,), params={'theta': 0.1}, controls=0)
    """
    params = dict(zip(_param_names(gate), gate.params))
    return BackendOp(gate.gate_type, gate.wires, params, _num_controls(gate))


# ============================================================================
# GATE MATRICES
# ============================================================================

def _frozen(matrix) -> np.ndarray:
    m = np.array(matrix, dtype=complex)
    m.flags.writeable = False
    return m


_SQ = np.sqrt(0.5)

I2 = _frozen(np.eye(2))
X = _frozen([[0, 1], [1, 0]])
Y = _frozen([[0, -1j], [1j, 0]])
Z = _frozen([[1, 0], [0, -1]])
H = _frozen([[_SQ, _SQ], [_SQ, -_SQ]])
S = _frozen([[1, 0], [0, 1j]])
T = _frozen([[1, 0], [0, np.exp(1j * np.pi / 4)]])
SWAP = _frozen([[1, 0, 0, 0], [0, 0, 1, 0], [0, 1, 0, 0], [0, 0, 0, 1]])

SINGLE_QUBIT_GATES = MappingProxyType({
    "I": I2, "Id": I2,
    "X": X, "σx": X, "σ1": X,
    "Y": Y, "σy": Y, "σ2": Y,
    "Z": Z, "σz": Z, "σ3": Z,
    "iY": _frozen([[0, 1], [-1, 0]]),
    "iσy": _frozen([[0, 1], [-1, 0]]), "iσ2": _frozen([[0, 1], [-1, 0]]),
    "H": H,
    "S": S, "Phase": S, "P": S,
    "Sdag": _frozen(S.conj().T),
    "T": T, "π/8": T,
    "Tdag": _frozen(T.conj().T),
    "√NOT": _frozen([[(1 + 1j) / 2, (1 - 1j) / 2], [(1 - 1j) / 2, (1 + 1j) / 2]]),
    "Proj0": _frozen([[1, 0], [0, 0]]), "ProjUp": _frozen([[1, 0], [0, 0]]),
    "projUp": _frozen([[1, 0], [0, 0]]),
    "Proj1": _frozen([[0, 0], [0, 1]]), "ProjDn": _frozen([[0, 0], [0, 1]]),
    "projDn": _frozen([[0, 0], [0, 1]]),
    "Sz": _frozen(Z / 2), "Sᶻ": _frozen(Z / 2),
    "Sx": _frozen(X / 2), "Sˣ": _frozen(X / 2),
    "Sy": _frozen(Y / 2), "Sʸ": _frozen(Y / 2),
    "iSy": _frozen(1j * Y / 2), "iSʸ": _frozen(1j * Y / 2),
    "S+": _frozen([[0, 1], [0, 0]]), "S⁺": _frozen([[0, 1], [0, 0]]),
    "Splus": _frozen([[0, 1], [0, 0]]),
    "S-": _frozen([[0, 0], [1, 0]]), "S⁻": _frozen([[0, 0], [1, 0]]),
    "Sminus": _frozen([[0, 0], [1, 0]]),
    "S2": _frozen(0.75 * np.eye(2)), "S²": _frozen(0.75 * np.eye(2)),
})


def _rx(theta):
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -1j * s], [-1j * s, c]], dtype=complex)


def _ry(theta):
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s], [s, c]], dtype=complex)


def _rz(theta):
    return np.diag([np.exp(-0.5j * theta), np.exp(0.5j * theta)])


def _rn(theta, phi, lam):
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([
        [c, -np.exp(1j * lam) * s],
        [np.exp(1j * phi) * s, np.exp(1j * (phi + lam)) * c],
    ], dtype=complex)


def _phase(theta):
    return np.diag([1, np.exp(1j * theta)])


PARAMETRIC_SINGLE_QUBIT_GATES = MappingProxyType({
    "Rx": _rx, "RX": _rx,
    "Ry": _ry, "RY": _ry,
    "Rz": _rz, "RZ": _rz,
    "Rn": _rn, "Rn̂": _rn,
    "Phase": _phase, "P": _phase, "S": _phase,
})


def _ising(pauli):
    pp = np.kron(pauli, pauli)

    def gate(phi):
        return np.cos(phi / 2) * np.eye(4) - 1j * np.sin(phi / 2) * pp
    return gate


ISING_GATES = MappingProxyType({
    "Rxx": _ising(X), "RXX": _ising(X),
    "Ryy": _ising(Y), "RYY": _ising(Y),
    "Rzz": _ising(Z), "RZZ": _ising(Z),
})

_ISWAP = _frozen([[1, 0, 0, 0], [0, 0, 1j, 0], [0, 1j, 0, 0], [0, 0, 0, 1]])
_SQRT_SWAP = _frozen([
    [1, 0, 0, 0],
    [0, (1 + 1j) / 2, (1 - 1j) / 2, 0],
    [0, (1 - 1j) / 2, (1 + 1j) / 2, 0],
    [0, 0, 0, 1],
])
_SQRT_ISWAP = _frozen([
    [1, 0, 0, 0],
    [0, _SQ, 1j * _SQ, 0],
    [0, 1j * _SQ, _SQ, 0],
    [0, 0, 0, 1],
])

TWO_QUBIT_GATES = MappingProxyType({
    "SWAP": SWAP, "Swap": SWAP,
    "iSWAP": _ISWAP, "iSwap": _ISWAP,
    "√SWAP": _SQRT_SWAP, "√Swap": _SQRT_SWAP,
    "√iSWAP": _SQRT_ISWAP, "√iSwap": _SQRT_ISWAP,
})

# Controlled families: identifier -> (number of controls, base operator)
CONTROLLED_GATES = MappingProxyType({
    "CNOT": (1, X), "CX": (1, X),
    "CY": (1, Y),
    "CZ": (1, Z),
    "CPHASE": (1, Z), "Cphase": (1, Z),
    "Toffoli": (2, X), "CCNOT": (2, X), "CCX": (2, X), "TOFF": (2, X),
    "Fredkin": (1, SWAP), "CSWAP": (1, SWAP), "CSwap": (1, SWAP), "CS": (1, SWAP),
    "CCCNOT": (3, X),
})


def controlled(base: np.ndarray, num_controls: int) -> np.ndarray:
    """Block-diagonal controlled version of ``base``; controls come first."""
    dim = base.shape[0] * 2 ** num_controls
    matrix = np.eye(dim, dtype=complex)
    matrix[dim - base.shape[0]:, dim - base.shape[0]:] = base
    return matrix


def single_qubit_matrix(name: str, params: Sequence[float] = ()) -> Optional[np.ndarray]:
    """Matrix of a single-qubit operator, or None if unknown."""
    if params:
        factory = PARAMETRIC_SINGLE_QUBIT_GATES.get(name)
        return factory(*params) if factory is not None else None
    return SINGLE_QUBIT_GATES.get(name)


def _controlled_base(name: str, params: Sequence[float], num_controls: int) -> Optional[np.ndarray]:
    if name in ("CPHASE", "Cphase") and params:
        return _phase(*params)
    entry = CONTROLLED_GATES.get(name)
    if entry is not None and not params and entry[0] == num_controls:
        return entry[1]
    # Base name ("X", "Rz") or prefixed ("CRx", "CRn")
    base = single_qubit_matrix(name, params)
    if base is None and name.startswith("C"):
        base = single_qubit_matrix(name[1:], params)
    return base


def gate_matrix(op: BackendOp) -> np.ndarray:
    """
    Unitary (or operator) acting on ``op.wires`` in the given order.

    Only records with ``controls > 0`` take the controlled path; the first
    ``controls`` wires are the controls.

    Raises:
        BackendError: if the identifier or its wire count is not supported
    """
    name, nwires = op.name, len(op.wires)
    params = list(op.params.values())

    try:
        if op.controls:
            base = _controlled_base(name, params, op.controls)
            if base is not None and nwires == op.controls + int(np.log2(base.shape[0])):
                return controlled(base, op.controls)

        elif nwires == 1:
            matrix = single_qubit_matrix(name, params)
            if matrix is not None:
                return matrix

        elif nwires == 2 and name in ISING_GATES and params:
            return ISING_GATES[name](*params)

        elif nwires == 2 and name in TWO_QUBIT_GATES and not params:
            return TWO_QUBIT_GATES[name]
    except TypeError:
        raise BackendError(f"Wrong number of parameters for {name}: {params}") from None

    raise BackendError(f"Unsupported gate {name} on {nwires} qubit(s) with {op.controls} control(s)")


# ============================================================================
# STATE
# ============================================================================

BASIS_VECTORS = MappingProxyType({
    "0": _frozen([1, 0]), "Up": _frozen([1, 0]), "↑": _frozen([1, 0]), "Z+": _frozen([1, 0]),
    "1": _frozen([0, 1]), "Dn": _frozen([0, 1]), "↓": _frozen([0, 1]), "Z-": _frozen([0, 1]),
    "+": _frozen([_SQ, _SQ]), "X+": _frozen([_SQ, _SQ]),
    "-": _frozen([_SQ, -_SQ]), "X-": _frozen([_SQ, -_SQ]),
    "i": _frozen([_SQ, 1j * _SQ]), "Y+": _frozen([_SQ, 1j * _SQ]),
    "-i": _frozen([_SQ, -1j * _SQ]), "Y-": _frozen([_SQ, -1j * _SQ]),
})


class StatevectorState:
    """
    Dense state vector stored as a rank-n tensor of shape (2,) * n.

    Axis k holds wire k + 1.
    """

    def __init__(self, amplitudes: np.ndarray):
        amplitudes = np.array(amplitudes, dtype=complex)
        n = int(round(np.log2(amplitudes.size)))
        if 2 ** n != amplitudes.size:
            raise BackendError(f"Array size {amplitudes.size} is not a power of 2")
        self.tensor = amplitudes.reshape([2] * n)

    @property
    def num_qubits(self) -> int:
        return self.tensor.ndim

    def get_statevector(self) -> np.ndarray:
        """Flat amplitude vector, wire 1 most significant."""
        return self.tensor.reshape(-1).copy()

    def probabilities(self) -> np.ndarray:
        """Probability of every basis state."""
        return np.abs(self.tensor.reshape(-1)) ** 2

    def copy(self) -> 'StatevectorState':
        return StatevectorState(self.tensor.copy())

    def __repr__(self):
        return f"StatevectorState(num_qubits={self.num_qubits})"


def apply_matrix(tensor: np.ndarray, matrix: np.ndarray, wires: Sequence[int]) -> np.ndarray:
    """Contract ``matrix`` into the state tensor on ``wires`` (1-based)."""
    k = len(wires)
    axes = [w - 1 for w in wires]
    gate = np.asarray(matrix).reshape([2] * (2 * k))
    out = np.tensordot(gate, tensor, axes=(list(range(k, 2 * k)), axes))
    return np.moveaxis(out, list(range(k)), axes)


class StatevectorBackend:
    """
    Dense reference backend.

    Example:
        >>> backend = StatevectorBackend()
        >>> state = backend.run(QuantumCircuit(2).h(1).cx(1, 2))
        >>> state.probabilities()
        array([0.5, 0. , 0. , 0.5])
    """

    max_qubits = MAX_QUBITS

    def init_state(self, labels: Sequence[str]) -> StatevectorState:
        """Product state from per-wire state names ("0", "1", "+", "-", "i", "-i", ...)."""
        if not 1 <= len(labels) <= self.max_qubits:
            raise BackendError(f"Number of qubits must be in [1, {self.max_qubits}], got {len(labels)}")

        vectors: List[np.ndarray] = []
        for label in labels:
            if label not in BASIS_VECTORS:
                raise BackendError(f"Unsupported initial state {label!r}")
            vectors.append(BASIS_VECTORS[label])

        state = vectors[0]
        for v in vectors[1:]:
            state = np.kron(state, v)
        return StatevectorState(state)

    def apply(self, state: StatevectorState, op: BackendOp) -> StatevectorState:
        """Apply one operator record in place; returns the state for chaining."""
        for w in op.wires:
            if not 1 <= w <= state.num_qubits:
                raise BackendError(f"Wire {w} is out of range [1, {state.num_qubits}]")
        state.tensor = apply_matrix(state.tensor, gate_matrix(op), op.wires)
        return state

    def run(self, circuit: QuantumCircuit) -> StatevectorState:
        """Prepare the initial state and apply every gate in program order."""
        labels = resolve_backend_labels(circuit.initial_states, circuit.num_qubits)
        state = self.init_state(labels)
        for gate in circuit.gates:
            self.apply(state, to_backend_op(gate))
        logger.debug("Executed %d gates on %d qubits", len(circuit), circuit.num_qubits)
        return state


def execute_circuit(circuit: QuantumCircuit,
                    backend: Optional[StatevectorBackend] = None) -> StatevectorState:
    """Run ``circuit`` on ``backend`` (a fresh StatevectorBackend by default)."""
    if backend is None:
        backend = StatevectorBackend()
    return backend.run(circuit)
