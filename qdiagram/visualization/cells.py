"""
Diagram cells

One ``DiagramCell`` per (wire, column) position of a rendered circuit.
A cell is either a wire continuation (THROUGH), visible content, or
GHOST: the suppressed continuation of a span box on a non-anchor wire.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CellKind(Enum):
    """Cell token kinds"""
    THROUGH = "through"             # plain wire
    BOX = "box"                     # \gate{label}
    SPAN_BOX = "span_box"           # \gate[n]{label}
    GHOST = "ghost"                 # covered by a span box
    CONTROL = "control"             # \ctrl{offset}
    TARGET = "target"               # \targ{}, \ctrl{0} or \gate{label}
    SWAP_ANCHOR = "swap_anchor"     # \swap{offset}
    SWAP_PARTNER = "swap_partner"   # \targX{}


class TargetShape(Enum):
    """Target marker of a controlled gate"""
    CROSS = "cross"     # bit flip
    DOT = "dot"         # phase family, same glyph as a control point
    BOX = "box"


THROUGH_TOKEN = "\\qw"


@dataclass(frozen=True)
class DiagramCell:
    """Single diagram cell"""
    kind: CellKind
    label: str = ""
    offset: int = 0
    span: int = 1
    shape: Optional[TargetShape] = None

    @classmethod
    def box(cls, label: str) -> 'DiagramCell':
        return cls(CellKind.BOX, label=label)

    @classmethod
    def span_box(cls, span: int, label: str) -> 'DiagramCell':
        return cls(CellKind.SPAN_BOX, label=label, span=span)

    @classmethod
    def control(cls, offset: int) -> 'DiagramCell':
        return cls(CellKind.CONTROL, offset=offset)

    @classmethod
    def target(cls, shape: TargetShape, label: str = "") -> 'DiagramCell':
        return cls(CellKind.TARGET, label=label, shape=shape)

    @classmethod
    def swap_anchor(cls, offset: int) -> 'DiagramCell':
        return cls(CellKind.SWAP_ANCHOR, offset=offset)

    @property
    def is_ghost(self) -> bool:
        return self.kind is CellKind.GHOST

    def to_token(self) -> Optional[str]:
        """quantikz token for this cell; None for a suppressed ghost cell."""
        kind = self.kind
        if kind is CellKind.THROUGH:
            return THROUGH_TOKEN
        if kind is CellKind.BOX:
            return f"\\gate{{{self.label}}}"
        if kind is CellKind.SPAN_BOX:
            return f"\\gate[{self.span}]{{{self.label}}}"
        if kind is CellKind.GHOST:
            return None
        if kind is CellKind.CONTROL:
            return f"\\ctrl{{{self.offset}}}"
        if kind is CellKind.TARGET:
            if self.shape is TargetShape.CROSS:
                return "\\targ{}"
            if self.shape is TargetShape.DOT:
                return "\\ctrl{0}"
            return f"\\gate{{{self.label}}}"
        if kind is CellKind.SWAP_ANCHOR:
            return f"\\swap{{{self.offset}}}"
        if kind is CellKind.SWAP_PARTNER:
            return "\\targX{}"
        raise ValueError(f"Unknown cell kind: {kind}")


THROUGH = DiagramCell(CellKind.THROUGH)
GHOST = DiagramCell(CellKind.GHOST)
SWAP_PARTNER = DiagramCell(CellKind.SWAP_PARTNER)
