"""
qdiagram - Quantum Circuit Diagrams
===================================

Gate-level circuit model with quantikz diagram rendering.

Features:
- Closed gate model: single, controlled, two-, three-, four- and n-wire gates
- Serial and packed column layouts
- quantikz/LaTeX export with pi-fraction parameter labels
- Reference state-vector backend and measurements (up to 16 qubits)

Quick Start:
    >>> from qdiagram import QuantumCircuit, Sampling, execute_circuit, measure, to_quantikz
    >>> circuit = QuantumCircuit(2).h(1).cx(1, 2)  # Bell pair
    >>> latex = to_quantikz(circuit)
    >>> state = execute_circuit(circuit)
    >>> counts = measure(state, Sampling(1000), rng=7)
"""

__version__ = "0.1.0"
__author__ = "tsotchke"

from .core import (
    GateKind,
    GateOperation,
    involved_range,
    QuantumError,
    ValidationError,
    UnsupportedModeError,
    FormatError,
    BackendError,
)

from .states import (
    InitialState,
    BasisState,
    NamedState,
    ProductState,
)

from .circuit import QuantumCircuit

from .backend import (
    BackendOp,
    to_backend_op,
    StatevectorBackend,
    StatevectorState,
    execute_circuit,
)

from .measurement import (
    Measurement,
    ExpectationValue,
    Sampling,
    ProjectiveMeasurement,
    measure,
)

from .visualization import (
    CircuitDiagram,
    LayoutMode,
    assign_columns,
    format_param,
    gate_to_latex,
    to_quantikz,
)

__all__ = [
    'GateKind',
    'GateOperation',
    'involved_range',
    'QuantumError',
    'ValidationError',
    'UnsupportedModeError',
    'FormatError',
    'BackendError',
    'InitialState',
    'BasisState',
    'NamedState',
    'ProductState',
    'QuantumCircuit',
    'BackendOp',
    'to_backend_op',
    'StatevectorBackend',
    'StatevectorState',
    'execute_circuit',
    'Measurement',
    'ExpectationValue',
    'Sampling',
    'ProjectiveMeasurement',
    'measure',
    'CircuitDiagram',
    'LayoutMode',
    'assign_columns',
    'format_param',
    'gate_to_latex',
    'to_quantikz',
]
