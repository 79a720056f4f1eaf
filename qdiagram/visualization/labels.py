"""
Gate labels for quantikz diagrams

- format_param : rotation angles as compact multiples/fractions of pi
- GATE_SYMBOLS : read-only gate identifier -> LaTeX symbol table
- gate_to_latex : label of a gate, with or without parameters
- controlled_target_cell : target shape of a controlled gate
"""

import logging
import math
from types import MappingProxyType
from typing import Optional, Sequence

from ..core import FormatError
from .cells import DiagramCell, TargetShape

logger = logging.getLogger(__name__)

# Tolerance for snapping an angle onto a multiple or fraction of the reference
SNAP_TOLERANCE = 1e-6
MAX_DENOMINATOR = 16


def format_param(theta: float, reference: float = math.pi, symbol: str = "\\pi") -> str:
    """
    Format an angle as a multiple or fraction of ``reference``.

    Parameters:
    -----------
    theta : float
        Angle in radians
    reference : float
        Unit constant (pi by default)
    symbol : str
        LaTeX symbol of the unit

    Returns:
    --------
    str : "0", "\\pi", "-\\pi", "2\\pi", "\\pi/2", "3\\pi/4", or a decimal
    rounded to 3 places

    Raises:
    -------
    FormatError : if theta is not a real number
    """
    try:
        theta = float(theta)
    except (TypeError, ValueError):
        raise FormatError(f"Cannot format non-numeric parameter {theta!r}") from None
    if not math.isfinite(theta):
        return str(theta)

    ratio = theta / reference
    if abs(ratio - round(ratio)) < SNAP_TOLERANCE:
        k = int(round(ratio))
        if k == 0:
            return "0"
        if k == 1:
            return symbol
        if k == -1:
            return f"-{symbol}"
        return f"{k}{symbol}"

    for n in range(2, MAX_DENOMINATOR + 1):
        num = round(theta * n / reference)
        if abs(theta * n - reference * num) < SNAP_TOLERANCE:
            num = int(num)
            if num == 1:
                return f"{symbol}/{n}"
            if num == -1:
                return f"-{symbol}/{n}"
            return f"{num}{symbol}/{n}"

    return str(round(theta, 3))


def _build_symbol_table():
    table = {
        # Pauli gates
        "X": "X", "Y": "Y", "Z": "Z", "iY": "iY",
        "σx": "\\sigma_x", "σ1": "\\sigma_1",
        "σy": "\\sigma_y", "σ2": "\\sigma_2",
        "σz": "\\sigma_z", "σ3": "\\sigma_3",
        "iσy": "i\\sigma_y", "iσ2": "i\\sigma_2",

        # Standard gates
        "H": "H",
        "T": "T", "π/8": "T",
        "Tdag": "T^\\dagger",
        "S": "S", "Phase": "S", "P": "S",
        "Sdag": "S^\\dagger",
        "√NOT": "\\sqrt{X}",

        # Projection operators
        "Proj0": "P_0", "ProjUp": "P_{\\uparrow}", "projUp": "P_{\\uparrow}",
        "Proj1": "P_1", "ProjDn": "P_{\\downarrow}", "projDn": "P_{\\downarrow}",

        # Parameterized gates (bare symbol)
        "Rx": "R_x", "Ry": "R_y", "Rz": "R_z", "Rn": "R_n",
        "RX": "R_x", "RY": "R_y", "RZ": "R_z", "Rn̂": "R_n",
        "Rxx": "R_{xx}", "Ryy": "R_{yy}", "Rzz": "R_{zz}",
        "RXX": "R_{xx}", "RYY": "R_{yy}", "RZZ": "R_{zz}",

        # Spin operators
        "Sz": "S_z", "Sᶻ": "S_z",
        "Sx": "S_x", "Sˣ": "S_x",
        "Sy": "S_y", "Sʸ": "S_y",
        "iSy": "iS_y", "iSʸ": "iS_y",
        "S+": "S_+", "S⁺": "S_+", "Splus": "S_+",
        "S-": "S_-", "S⁻": "S_-", "Sminus": "S_-",
        "S2": "S^2", "S²": "S^2",

        # Controlled gates (target operator)
        "CNOT": "X", "CX": "X",
        "CY": "Y",
        "CZ": "Z",
        "CPHASE": "P", "Cphase": "P",

        # Two-qubit, no control structure
        "SWAP": "\\times", "Swap": "\\times",
        "√SWAP": "\\sqrt{SWAP}", "√Swap": "\\sqrt{SWAP}",
        "iSWAP": "iSWAP", "iSwap": "iSWAP",
        "√iSWAP": "\\sqrt{iSWAP}", "√iSwap": "\\sqrt{iSWAP}",

        # Three-qubit gates
        "Toffoli": "\\text{TOF}", "CCNOT": "\\text{TOF}", "CCX": "\\text{TOF}",
        "TOFF": "\\text{TOF}",
        "Fredkin": "\\text{FRDKN}", "CSWAP": "\\text{CSWAP}", "CSwap": "\\text{CSWAP}",
        "CS": "\\text{CS}",

        # Four-qubit gates
        "CCCNOT": "\\text{CCCNOT}",
    }
    return MappingProxyType(table)


# Built once at import, never mutated
GATE_SYMBOLS = _build_symbol_table()

# Parametric label prefixes: identifier -> (LaTeX name, parameter count shown)
_PARAMETRIC_LABELS = MappingProxyType({
    "Rx": ("R_x", 1), "RX": ("R_x", 1),
    "Ry": ("R_y", 1), "RY": ("R_y", 1),
    "Rz": ("R_z", 1), "RZ": ("R_z", 1),
    "Rn": ("R_n", 3), "Rn̂": ("R_n", 3),
    "CRx": ("R_x", 1), "CRX": ("R_x", 1),
    "CRy": ("R_y", 1), "CRY": ("R_y", 1),
    "CRz": ("R_z", 1), "CRZ": ("R_z", 1),
    "CRn": ("R_n", 3), "CRn̂": ("R_n", 3),
    "Rxx": ("R_{xx}", 1), "RXX": ("R_{xx}", 1),
    "Ryy": ("R_{yy}", 1), "RYY": ("R_{yy}", 1),
    "Rzz": ("R_{zz}", 1), "RZZ": ("R_{zz}", 1),
    "Phase": ("P", 1), "P": ("P", 1), "S": ("P", 1),
})

BIT_FLIP_FAMILY = frozenset({"X", "CNOT", "CX"})
PHASE_FAMILY = frozenset({"Z", "CZ", "CPHASE", "Cphase"})


def gate_to_latex(gate_type: str, params: Optional[Sequence[float]] = None) -> str:
    """
    LaTeX label for a gate identifier.

    Unknown identifiers are returned verbatim so that display-only gate
    kinds never fail to render.

    Example:
    --------
        >>> gate_to_latex("√NOT")
        '\\\\sqrt{X}'
        >>> gate_to_latex("Rx", [math.pi / 2])
        'R_x(\\\\pi/2)'
    """
    if not params:
        symbol = GATE_SYMBOLS.get(gate_type)
        if symbol is None:
            logger.debug("No symbol for gate %r, using identifier", gate_type)
            return str(gate_type)
        return symbol

    entry = _PARAMETRIC_LABELS.get(gate_type)
    if entry is None:
        args = ", ".join(format_param(p) for p in params)
        return f"{gate_type}({args})"
    name, count = entry
    args = ", ".join(format_param(p) for p in params[:count])
    return f"{name}({args})"


def is_reserved_target(gate_type: str) -> bool:
    """True if the gate draws a dedicated target symbol instead of a box."""
    return gate_type in BIT_FLIP_FAMILY or gate_type in PHASE_FAMILY


def controlled_target_cell(gate_type: str) -> DiagramCell:
    """
    Target cell of a controlled gate.

    Bit-flip gates draw a cross, phase-type gates draw a second control
    dot, everything else is a labeled box.
    """
    if gate_type in BIT_FLIP_FAMILY:
        return DiagramCell.target(TargetShape.CROSS)
    if gate_type in PHASE_FAMILY:
        return DiagramCell.target(TargetShape.DOT)
    return DiagramCell.target(TargetShape.BOX, gate_to_latex(gate_type))
