"""
Initial state descriptors

A circuit carries either a single descriptor that is broadcast to every
wire, or one descriptor per wire. ``ProductState`` describes all wires at
once and must then be the only descriptor.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .core import ValidationError

logger = logging.getLogger(__name__)


class InitialState(ABC):
    """Base class for initial state descriptors"""

    @abstractmethod
    def backend_labels(self, num_qubits: int) -> List[str]:
        """State names for every wire, as understood by the backend."""

    @abstractmethod
    def latex_label(self, qubit: int) -> str:
        """LaTeX label shown in the ``\\lstick`` of wire ``qubit`` (1-based)."""


def _check_num_qubits(num_qubits: int):
    if num_qubits <= 0:
        raise ValidationError(f"Number of qubits must be positive, got {num_qubits}")


def _check_qubit(qubit: int):
    if qubit <= 0:
        raise ValidationError(f"Qubit index must be positive, got {qubit}")


@dataclass(frozen=True)
class BasisState(InitialState):
    """
    Computational basis state, e.g. ``BasisState("0")`` or ``BasisState("+")``.

    The label doubles as the backend state name.
    """
    label: str

    def backend_labels(self, num_qubits: int) -> List[str]:
        _check_num_qubits(num_qubits)
        return [self.label] * num_qubits

    def latex_label(self, qubit: int) -> str:
        _check_qubit(qubit)
        return f"\\ket{{{self.label}}}"


@dataclass(frozen=True)
class NamedState(InitialState):
    """Backend state ``name`` displayed with an arbitrary ``latex`` label."""
    name: str
    latex: str

    def backend_labels(self, num_qubits: int) -> List[str]:
        _check_num_qubits(num_qubits)
        return [self.name] * num_qubits

    def latex_label(self, qubit: int) -> str:
        _check_qubit(qubit)
        return f"\\ket{{{self.latex}}}"


@dataclass(frozen=True)
class ProductState(InitialState):
    """Product state with one label per wire."""
    labels: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "labels", tuple(self.labels))

    def backend_labels(self, num_qubits: int) -> List[str]:
        _check_num_qubits(num_qubits)
        if len(self.labels) != num_qubits:
            raise ValidationError(
                f"ProductState has {len(self.labels)} labels but circuit has {num_qubits} qubits"
            )
        return list(self.labels)

    def latex_label(self, qubit: int) -> str:
        _check_qubit(qubit)
        if qubit > len(self.labels):
            raise ValidationError(
                f"Qubit index {qubit} exceeds ProductState size {len(self.labels)}"
            )
        return f"\\ket{{{self.labels[qubit - 1]}}}"


def validate_initial_states(states: Sequence[InitialState], num_qubits: int):
    """
    Check that ``states`` fits a circuit of ``num_qubits`` wires.

    Raises:
        ValidationError: on any arity mismatch
    """
    _check_num_qubits(num_qubits)
    if not states:
        raise ValidationError("At least one initial state is required")
    for s in states:
        if not isinstance(s, InitialState):
            raise ValidationError(f"Expected an InitialState, got {s!r}")

    if len(states) == 1:
        only = states[0]
        if isinstance(only, ProductState) and len(only.labels) != num_qubits:
            raise ValidationError(
                f"ProductState has {len(only.labels)} labels but circuit has {num_qubits} qubits"
            )
        return

    if len(states) != num_qubits:
        raise ValidationError(
            f"Got {len(states)} initial states for {num_qubits} qubits; "
            f"give one state or exactly one per qubit"
        )
    if any(isinstance(s, ProductState) for s in states):
        raise ValidationError("ProductState must be the only initial state descriptor")


def resolve_wire_labels(states: Sequence[InitialState], num_qubits: int) -> List[str]:
    """
    Resolve the display label of every wire.

    One descriptor is broadcast to all wires; otherwise descriptor i labels wire i.
    """
    validate_initial_states(states, num_qubits)
    if len(states) == 1:
        return [states[0].latex_label(q) for q in range(1, num_qubits + 1)]
    return [s.latex_label(q) for q, s in enumerate(states, start=1)]


def resolve_backend_labels(states: Sequence[InitialState], num_qubits: int) -> List[str]:
    """Resolve the backend state name of every wire."""
    validate_initial_states(states, num_qubits)
    if len(states) == 1:
        return states[0].backend_labels(num_qubits)
    labels = []
    for s in states:
        labels.extend(s.backend_labels(1))
    logger.debug("Resolved per-qubit backend labels: %s", labels)
    return labels
