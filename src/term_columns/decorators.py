"""
Decorators add gaps, borders and separators around columns and rows.
"""

from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from blessed import Terminal


class Decorator:
    """Base class for output decorators.

    Row indices passed to the separator methods are 1-based for rows, with
    -1 standing for the last row. Column indices are 0 for the left edge, -1
    for the right edge, and N for the separator right of the Nth column.
    """

    def row_separator(self, row_idx: int, widths: Sequence[int]) -> str:
        """Return the line drawn above the first row (row_idx 0), below the
        last row (-1), or below the Nth row (N).

        ``widths`` are the content widths of the columns. An empty string
        means no separator line.
        """
        return ''

    def column_separator(self, row_idx: int, col_idx: int) -> str:
        """Return the separator drawn at column position ``col_idx``.

        Its printable length must not depend on ``row_idx``, otherwise
        columns won't line up.
        """
        return ''


@dataclass
class GapDecorator(Decorator):
    """Fixed gaps between columns, plus optional left and right margins."""
    gap: str = '  '
    left: str = ''
    right: str = ''

    def column_separator(self, row_idx, col_idx):
        if col_idx == 0:
            return self.left
        if col_idx == -1:
            return self.right
        return self.gap


@dataclass
class TableDecorator(Decorator):
    """Borders around every cell, drawing a table.

    Each border attribute is a (left, inner, right) triple, except
    ``horizontal`` which holds the (top, middle, bottom) fill characters.
    Fill characters must be one column wide, they are repeated to the width
    of each column.
    """
    top: Tuple[str, str, str]
    middle: Tuple[str, str, str]
    bottom: Tuple[str, str, str]
    vertical: Tuple[str, str, str]
    horizontal: Tuple[str, str, str]

    @staticmethod
    def _line(intersections, fill, widths):
        left, inner, right = intersections
        return left + inner.join(fill * width for width in widths) + right

    def row_separator(self, row_idx, widths):
        if row_idx == 0:
            return self._line(self.top, self.horizontal[0], widths)
        if row_idx == -1:
            return self._line(self.bottom, self.horizontal[2], widths)
        return self._line(self.middle, self.horizontal[1], widths)

    def column_separator(self, row_idx, col_idx):
        if col_idx == 0:
            return self.vertical[0]
        if col_idx == -1:
            return self.vertical[2]
        return self.vertical[1]


def ascii_table_decorator() -> TableDecorator:
    """Table drawn with ``+``, ``-`` and ``|`` for an old-school look."""
    return TableDecorator(
        top=('+-', '-+-', '-+'),
        middle=('+-', '-+-', '-+'),
        bottom=('+-', '-+-', '-+'),
        vertical=('| ', ' | ', ' |'),
        horizontal=('-', '-', '-'),
    )


def box_drawing_table_decorator() -> TableDecorator:
    """Table drawn with Unicode box drawing characters."""
    return TableDecorator(
        top=('┌─', '─┬─', '─┐'),
        middle=('├─', '─┼─', '─┤'),
        bottom=('└─', '─┴─', '─┘'),
        vertical=('│ ', ' │ ', ' │'),
        horizontal=('─', '─', '─'),
    )


class ColorizeDecorator(Decorator):
    """Wraps another decorator to style all of its separators.

    ``style`` is any callable that wraps a string in escape sequences, such
    as a blessed formatting string (``term.yellow``, ``term.bold_red``...).
    It is called once; the opening and closing sequences it produces are
    then reused by plain concatenation.
    """

    _CUT = '__CUT_HERE__'

    def __init__(self, parent: Decorator, style: Callable[[str], str]):
        self.parent = parent
        self.start, _, self.end = str(style(self._CUT)).partition(self._CUT)

    def row_separator(self, row_idx, widths):
        sep = self.parent.row_separator(row_idx, widths)
        # an absent separator line stays absent
        return self.start + sep + self.end if sep else ''

    def column_separator(self, row_idx, col_idx):
        return self.start + self.parent.column_separator(row_idx, col_idx) + self.end


def decorator_width(term: Terminal, deco: Decorator, columns: int) -> int:
    """Return how many columns of output ``deco`` takes on a row of
    ``columns`` columns."""
    separators: List[str] = [deco.column_separator(0, 0), deco.column_separator(0, -1)]
    separators.extend(deco.column_separator(0, i) for i in range(1, columns))
    return sum(term.length(sep) for sep in separators)
