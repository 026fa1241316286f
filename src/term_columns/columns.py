"""
Column configurations.

Each column kind is a shortcut for a set of flex attributes, similar to the
``flex`` CSS shorthand. They all convert to a ``ColumnSpec`` which holds the
flex ``Item`` used to size the column and the alignment of its cells.
"""

from dataclasses import dataclass, field

from .flex import AUTO, Item
from .text import Alignment


@dataclass(frozen=True)
class ColumnSpec:
    """Flex attributes and alignment of a configured column.

    The item's ``size`` is left at 0, it is filled in from the content when
    the widths are computed. A ``min`` of 0 means "the min content width".
    """
    item: Item = field(default_factory=Item)
    align: Alignment = Alignment.LEFT


class Column:
    """Base class of the column kinds."""

    def to_spec(self) -> ColumnSpec:
        raise NotImplementedError


def _capped_min(minimum, maximum):
    if maximum != 0 and minimum > maximum:
        return maximum
    return minimum


@dataclass(frozen=True)
class Rigid(Column):
    """A column as wide as its content, within min and max.

    It ignores the output width: it neither grows nor shrinks. Setting min
    and max to the same value gives a fixed width column. Equivalent to
    ``flex: none`` in CSS.

    Attributes:
        min: Minimum width; shorter content is padded
        max: Maximum width, longer content is wrapped; 0 means no maximum
        align: Alignment of the content within the column
    """
    min: int = 0
    max: int = 0
    align: Alignment = Alignment.LEFT

    def to_spec(self) -> ColumnSpec:
        return ColumnSpec(
            Item(basis=AUTO, min=_capped_min(self.min, self.max), max=self.max),
            self.align,
        )


@dataclass(frozen=True)
class Shrinkable(Column):
    """A column as wide as its content, that shrinks down to min if needed.

    Equivalent to ``flex: initial`` in CSS.

    Attributes:
        weight: Shrink weight; values below 1 mean 1
        min: Minimum width; shorter content is padded
        max: Maximum width, longer content is wrapped; 0 means no maximum
        align: Alignment of the content within the column
    """
    weight: int = 0
    min: int = 0
    max: int = 0
    align: Alignment = Alignment.LEFT

    def to_spec(self) -> ColumnSpec:
        return ColumnSpec(
            Item(
                basis=AUTO,
                shrink=max(self.weight, 1),
                min=_capped_min(self.min, self.max),
                max=self.max,
            ),
            self.align,
        )


@dataclass(frozen=True)
class Flexed(Column):
    """A column taking a share of the output width proportional to its weight.

    Its content size is ignored. Equivalent to ``flex: N`` in CSS.

    Attributes:
        weight: Grow weight; values below 1 mean 1
        min: Minimum width; 0 means the width of the longest word
        max: Maximum width, longer content is wrapped; 0 means no maximum
        align: Alignment of the content within the column
    """
    weight: int = 0
    min: int = 0
    max: int = 0
    align: Alignment = Alignment.LEFT

    def to_spec(self) -> ColumnSpec:
        return ColumnSpec(
            Item(
                basis=0,
                grow=max(self.weight, 1),
                shrink=1,
                min=_capped_min(self.min, self.max),
                max=self.max,
            ),
            self.align,
        )


@dataclass(frozen=True)
class Flexbox(Column):
    """A column with raw flexbox attributes.

    There are no smart defaults as with the CSS ``flex`` shorthand: every
    attribute defaults to 0.

    Attributes:
        basis: Size before growing or shrinking; AUTO for the content size
        grow: Grow weight
        shrink: Shrink weight
        min: Minimum width; 0 means the width of the longest word
        max: Maximum width, longer content is wrapped; 0 means no maximum
        align: Alignment of the content within the column
    """
    basis: int = 0
    grow: int = 0
    shrink: int = 0
    min: int = 0
    max: int = 0
    align: Alignment = Alignment.LEFT

    def to_spec(self) -> ColumnSpec:
        return ColumnSpec(
            Item(
                basis=self.basis,
                grow=self.grow,
                shrink=self.shrink,
                min=_capped_min(self.min, self.max),
                max=self.max,
            ),
            self.align,
        )


@dataclass(frozen=True)
class Omit(Column):
    """A column that does not appear in the output."""

    def to_spec(self) -> ColumnSpec:
        raise TypeError("Omit columns have no spec; they are filtered out")
