"""
qdiagram Core - Gate model and error types

Closed representation of circuit operations: every operation is a
``GateOperation`` tagged with a ``GateKind``, carrying an ordered wire list
whose order encodes the role each wire plays (controls before target,
fixed order for symmetric gates).
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional, Sequence, Tuple

# ============================================================================
# PYTHON EXCEPTIONS
# ============================================================================

class QuantumError(Exception):
    """Base exception for qdiagram errors"""
    pass


class ValidationError(QuantumError, ValueError):
    """Raised when an operation, circuit or measurement argument is invalid"""
    pass


class UnsupportedModeError(QuantumError, ValueError):
    """Raised for an unrecognized layout mode selector"""
    pass


class FormatError(QuantumError):
    """Raised when a gate parameter cannot be formatted as a number"""
    pass


class BackendError(QuantumError):
    """Raised by the numerical backend for unsupported gates or states"""
    pass


# ============================================================================
# GATE KINDS
# ============================================================================

class GateKind(Enum):
    """Operation shape tags"""
    SINGLE = "single"
    PARAMETRIC_SINGLE = "parametric_single"
    CONTROLLED = "controlled"
    PARAMETRIC_CONTROLLED = "parametric_controlled"
    TWO_WIRE = "two_wire"
    PARAMETRIC_TWO_WIRE = "parametric_two_wire"
    THREE_WIRE = "three_wire"
    FOUR_WIRE = "four_wire"
    MULTI = "multi"                          # generalized n-wire
    PARAMETRIC_MULTI = "parametric_multi"

    @property
    def is_parametric(self) -> bool:
        return self in _PARAMETRIC_KINDS

    @property
    def wire_count(self) -> Optional[int]:
        """Fixed number of wires for this kind, None for n-wire kinds."""
        return _KIND_WIRE_COUNT.get(self)


_PARAMETRIC_KINDS = frozenset({
    GateKind.PARAMETRIC_SINGLE,
    GateKind.PARAMETRIC_CONTROLLED,
    GateKind.PARAMETRIC_TWO_WIRE,
    GateKind.PARAMETRIC_MULTI,
})

_KIND_WIRE_COUNT = {
    GateKind.SINGLE: 1,
    GateKind.PARAMETRIC_SINGLE: 1,
    GateKind.CONTROLLED: 2,
    GateKind.PARAMETRIC_CONTROLLED: 2,
    GateKind.TWO_WIRE: 2,
    GateKind.PARAMETRIC_TWO_WIRE: 2,
    GateKind.THREE_WIRE: 3,
    GateKind.FOUR_WIRE: 4,
}

MULTI_KINDS = frozenset({GateKind.MULTI, GateKind.PARAMETRIC_MULTI})

# Expected parameter count for known parametric gate types.
# Unknown parametric gate types accept any non-empty parameter list.
PARAM_ARITY = MappingProxyType({
    "Rx": 1, "Ry": 1, "Rz": 1, "RX": 1, "RY": 1, "RZ": 1,
    "Rn": 3, "Rn̂": 3,
    "CRx": 1, "CRy": 1, "CRz": 1, "CRX": 1, "CRY": 1, "CRZ": 1,
    "CRn": 3, "CRn̂": 3,
    "Rxx": 1, "Ryy": 1, "Rzz": 1, "RXX": 1, "RYY": 1, "RZZ": 1,
    "Phase": 1, "P": 1, "S": 1,
    "CPHASE": 1, "Cphase": 1,
})


# ============================================================================
# GATE OPERATION
# ============================================================================

@dataclass(frozen=True)
class GateOperation:
    """
    Single circuit operation.

    Attributes:
        kind: Shape tag of the operation
        wires: 1-based wire indices; order encodes role
        gate_type: Gate identifier used for labels and backend lookup
        params: Real parameters (empty for non-parametric kinds)
        controls: Number of leading control wires (n-wire kinds only)

    Example:
        >>> cnot = GateOperation.controlled(1, 2, "CNOT")
        >>> cnot.wires
        (1, 2)
        >>> involved_range(cnot)
        (1, 2)
    """
    kind: GateKind
    wires: Tuple[int, ...]
    gate_type: str
    params: Tuple[float, ...] = ()
    controls: int = 0

    def __post_init__(self):
        if not isinstance(self.kind, GateKind):
            raise ValidationError(f"kind must be a GateKind, got {self.kind!r}")
        if not isinstance(self.gate_type, str) or not self.gate_type:
            raise ValidationError(f"gate_type must be a non-empty str, got {self.gate_type!r}")

        # Normalize sequences to tuples so the record stays hashable
        object.__setattr__(self, "wires", tuple(self.wires))
        try:
            params = tuple(float(p) for p in self.params)
        except (TypeError, ValueError):
            raise ValidationError(f"Parameters of {self.gate_type} must be real numbers, "
                                  f"got {self.params!r}") from None
        object.__setattr__(self, "params", params)

        self._validate_wires()
        self._validate_params()
        self._validate_controls()

    def _validate_wires(self):
        if not self.wires:
            raise ValidationError(f"{self.gate_type} requires at least one wire")
        for w in self.wires:
            if isinstance(w, bool) or not isinstance(w, int):
                raise ValidationError(f"Wire index must be an int, got {w!r}")
            if w <= 0:
                raise ValidationError(f"Wire index must be positive, got {w}")
        if len(set(self.wires)) != len(self.wires):
            raise ValidationError(f"Duplicate wire indices in {self.gate_type}: {list(self.wires)}")

        expected = self.kind.wire_count
        if expected is not None and len(self.wires) != expected:
            raise ValidationError(
                f"{self.kind.value} gate {self.gate_type} needs {expected} wires, "
                f"got {len(self.wires)}"
            )

    def _validate_params(self):
        if not self.kind.is_parametric:
            if self.params:
                raise ValidationError(
                    f"{self.kind.value} gate {self.gate_type} takes no parameters, "
                    f"got {list(self.params)}"
                )
            return

        if not self.params:
            raise ValidationError(f"Parametric gate {self.gate_type} requires parameters")
        arity = PARAM_ARITY.get(self.gate_type)
        if arity is not None and len(self.params) != arity:
            raise ValidationError(
                f"{self.gate_type} expects {arity} parameter(s), got {len(self.params)}"
            )

    def _validate_controls(self):
        if self.kind not in MULTI_KINDS:
            if self.controls != 0:
                raise ValidationError(
                    f"controls only applies to n-wire gates, got {self.controls} "
                    f"for {self.kind.value}"
                )
            return

        # Role order beyond the built-in families must be explicit:
        # either no controls (generic box) or k controls + 1 target.
        if self.controls not in (0, len(self.wires) - 1):
            raise ValidationError(
                f"{self.gate_type} on {len(self.wires)} wires must have 0 or "
                f"{len(self.wires) - 1} controls, got {self.controls}"
            )

    @property
    def lo(self) -> int:
        return min(self.wires)

    @property
    def hi(self) -> int:
        return max(self.wires)

    # ------------------------------------------------------------------------
    # Constructors, one per gate family
    # ------------------------------------------------------------------------

    @classmethod
    def single(cls, qubit: int, gate_type: str) -> 'GateOperation':
        """Single-qubit gate without parameters (X, H, S, Proj0, ...)"""
        return cls(GateKind.SINGLE, (qubit,), gate_type)

    @classmethod
    def parametric_single(cls, qubit: int, gate_type: str,
                          params: Sequence[float]) -> 'GateOperation':
        """Single-qubit gate with parameters (Rx, Ry, Rz, Rn, P)"""
        return cls(GateKind.PARAMETRIC_SINGLE, (qubit,), gate_type, tuple(params))

    @classmethod
    def controlled(cls, control: int, target: int, gate_type: str) -> 'GateOperation':
        """Controlled gate (CNOT, CY, CZ, CPHASE)"""
        return cls(GateKind.CONTROLLED, (control, target), gate_type)

    @classmethod
    def parametric_controlled(cls, control: int, target: int, gate_type: str,
                              params: Sequence[float]) -> 'GateOperation':
        """Controlled gate with parameters (CRx, CRy, CRz, CRn)"""
        return cls(GateKind.PARAMETRIC_CONTROLLED, (control, target), gate_type, tuple(params))

    @classmethod
    def two_wire(cls, qubit1: int, qubit2: int, gate_type: str) -> 'GateOperation':
        """Two-qubit gate without control structure (SWAP, iSWAP, √SWAP)"""
        return cls(GateKind.TWO_WIRE, (qubit1, qubit2), gate_type)

    @classmethod
    def parametric_two_wire(cls, qubit1: int, qubit2: int, gate_type: str,
                            params: Sequence[float]) -> 'GateOperation':
        """Ising coupling gates (Rxx, Ryy, Rzz)"""
        return cls(GateKind.PARAMETRIC_TWO_WIRE, (qubit1, qubit2), gate_type, tuple(params))

    @classmethod
    def three_wire(cls, qubit1: int, qubit2: int, qubit3: int,
                   gate_type: str) -> 'GateOperation':
        """Three-qubit gate (Toffoli: c1, c2, target; Fredkin: c, s1, s2)"""
        return cls(GateKind.THREE_WIRE, (qubit1, qubit2, qubit3), gate_type)

    @classmethod
    def four_wire(cls, qubit1: int, qubit2: int, qubit3: int, qubit4: int,
                  gate_type: str) -> 'GateOperation':
        """Four-qubit gate (CCCNOT: c1, c2, c3, target)"""
        return cls(GateKind.FOUR_WIRE, (qubit1, qubit2, qubit3, qubit4), gate_type)

    @classmethod
    def multi(cls, wires: Sequence[int], gate_type: str,
              controls: int = 0) -> 'GateOperation':
        """Generalized n-qubit gate; the first ``controls`` wires are controls."""
        return cls(GateKind.MULTI, tuple(wires), gate_type, (), controls)

    @classmethod
    def parametric_multi(cls, wires: Sequence[int], gate_type: str,
                         params: Sequence[float], controls: int = 0) -> 'GateOperation':
        """Generalized n-qubit gate with parameters."""
        return cls(GateKind.PARAMETRIC_MULTI, tuple(wires), gate_type, tuple(params), controls)


def involved_range(op: GateOperation) -> Tuple[int, int]:
    """
    Get the (lowest, highest) wire an operation touches.

    Role order is left untouched; the range is only used for collision
    and span computations.
    """
    return op.lo, op.hi
