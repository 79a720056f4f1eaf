"""
Measurements on backend states

- ExpectationValue : <psi|O|psi> of a single-qubit operator
- Sampling : shot counts in the computational basis
- ProjectiveMeasurement : single-qubit measurement with collapse

Descriptors validate their arguments on construction; wire ranges are
checked against the state when measured.
"""

from dataclasses import dataclass
from functools import singledispatch
from typing import Dict, Tuple, Union

import numpy as np

from .backend import StatevectorState, apply_matrix, single_qubit_matrix
from .core import BackendError, ValidationError

RandomLike = Union[None, int, np.random.Generator]


class Measurement:
    """Base class for measurement descriptors"""
    pass


def _check_index(value, what: str):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f"{what} must be an int, got {value!r}")
    if value <= 0:
        raise ValidationError(f"{what} must be positive, got {value}")


@dataclass(frozen=True)
class ExpectationValue(Measurement):
    """
    Expectation value of ``operator`` on ``qubits``.

    For several qubits the single-site expectation values are averaged.
    """
    operator: str
    qubits: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "qubits", tuple(self.qubits))
        if not self.qubits:
            raise ValidationError("ExpectationValue requires at least one qubit")
        for q in self.qubits:
            _check_index(q, "Qubit index")


@dataclass(frozen=True)
class Sampling(Measurement):
    """Repeated computational-basis measurement with ``shots`` samples."""
    shots: int

    def __post_init__(self):
        _check_index(self.shots, "Number of shots")


@dataclass(frozen=True)
class ProjectiveMeasurement(Measurement):
    """Computational-basis measurement of one qubit."""
    qubit: int

    def __post_init__(self):
        _check_index(self.qubit, "Qubit index")


def _check_range(qubit: int, state: StatevectorState):
    if qubit > state.num_qubits:
        raise ValidationError(f"Qubit index {qubit} is out of range [1, {state.num_qubits}]")


def measure(state: StatevectorState, measurement: Measurement, rng: RandomLike = None):
    """
    Execute ``measurement`` on ``state``.

    Parameters:
    -----------
    state : StatevectorState
        State produced by the backend (left unchanged)
    measurement : Measurement
        Measurement descriptor
    rng : int or numpy.random.Generator, optional
        Seed or generator for sampling and projective measurements

    Returns:
    --------
    float for ExpectationValue, dict[str, int] for Sampling,
    (outcome, collapsed_state) for ProjectiveMeasurement
    """
    return _measure(measurement, state, rng)


@singledispatch
def _measure(measurement, state, rng):
    raise ValidationError(f"Unsupported measurement {measurement!r}")


@_measure.register
def _(measurement: ExpectationValue, state: StatevectorState, rng: RandomLike) -> float:
    for q in measurement.qubits:
        _check_range(q, state)
    operator = single_qubit_matrix(measurement.operator)
    if operator is None:
        raise BackendError(f"Unsupported observable {measurement.operator}")

    total = 0.0
    for q in measurement.qubits:
        applied = apply_matrix(state.tensor, operator, [q])
        total += np.vdot(state.tensor.reshape(-1), applied.reshape(-1)).real
    return float(total / len(measurement.qubits))


@_measure.register
def _(measurement: Sampling, state: StatevectorState, rng: RandomLike) -> Dict[str, int]:
    rng = np.random.default_rng(rng)
    probs = state.probabilities()
    probs = probs / probs.sum()

    outcomes = rng.choice(probs.size, size=measurement.shots, p=probs)
    values, counts = np.unique(outcomes, return_counts=True)
    n = state.num_qubits
    return {format(int(v), f"0{n}b"): int(c) for v, c in zip(values, counts)}


@_measure.register
def _(measurement: ProjectiveMeasurement, state: StatevectorState,
      rng: RandomLike) -> Tuple[int, StatevectorState]:
    _check_range(measurement.qubit, state)
    rng = np.random.default_rng(rng)
    axis = measurement.qubit - 1

    probs = np.abs(state.tensor) ** 2
    prob_1 = float(np.take(probs, 1, axis=axis).sum() / probs.sum())
    outcome = 1 if rng.random() < prob_1 else 0

    collapsed = state.tensor.copy()
    index = [slice(None)] * state.num_qubits
    index[axis] = 1 - outcome
    collapsed[tuple(index)] = 0
    norm = np.linalg.norm(collapsed)
    return outcome, StatevectorState(collapsed / norm)
