"""
The flex writer: buffers rows of cells and prints them as aligned columns.

Column widths are computed at flush time from the buffered content, the
column configurations and the output width, then every cell is wrapped
and aligned to its column width.
"""

import logging
import sys
import threading
from dataclasses import replace
from typing import Any, List, Optional, Sequence

from blessed import Terminal

from .columns import Column, ColumnSpec, Omit, Shrinkable
from .decorators import Decorator, GapDecorator, decorator_width
from .flex import resolve_flex_lengths
from .text import align, min_content, wrap

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 80


def transpose(columns: Sequence[Sequence[Any]], fill: Any = None) -> List[List[Any]]:
    """Turn a list of columns into a list of rows.

    Columns may have different lengths; missing values are set to ``fill``
    so that the result is rectangular.
    """
    height = max((len(col) for col in columns), default=0)
    rows = [[fill] * len(columns) for _ in range(height)]
    for i, col in enumerate(columns):
        for j, value in enumerate(col):
            rows[j][i] = value
    return rows


def terminal_width(stream) -> Optional[int]:
    """Return the width of ``stream`` if it is a terminal, else None."""
    term = Terminal(stream=stream)
    if term.is_a_tty and term.width > 0:
        return term.width
    return None


class FlexWriter:
    """Writes rows of cells as columns fitted to an output width.

    Rows are buffered until ``flush()``, since column widths depend on all
    of the content. Cells are added either with ``write_row()``, or through
    ``write()`` with tab separated cells and newline separated rows, like
    a ``tabwriter``. Don't mix both without flushing in between.

    The writer can be used as a context manager, which flushes on exit.

    Attributes:
        term: Blessed Terminal used to measure and wrap text
        output: Stream the rows are written to
        width: Target width of the output
        decorator: Decorator providing gaps and borders
    """

    def __init__(
        self,
        output=None,
        *,
        width: Optional[int] = None,
        columns: Sequence[Column] = (),
        default_column: Optional[Column] = None,
        decorator: Optional[Decorator] = None,
        term: Optional[Terminal] = None,
    ):
        self._lock = threading.Lock()
        self.term = term or Terminal()
        self.width = DEFAULT_WIDTH
        self.output = None
        self.decorator: Decorator = GapDecorator(gap='  ')
        self._omitted: List[bool] = []
        self._columns: List[ColumnSpec] = []
        self._omit_default = False
        self._default_spec = Shrinkable().to_spec()
        self._buffer: List[str] = []
        self._rows: List[List[str]] = []

        self.set_output(sys.stdout if output is None else output)
        if width is not None:
            self.set_width(width)
        self.set_columns(*columns)
        if default_column is not None:
            self.set_default_column(default_column)
        if decorator is not None:
            self.set_decorator(decorator)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.flush()

    def set_columns(self, *columns: Column):
        """Configure the first ``len(columns)`` columns."""
        for col in columns:
            if not isinstance(col, Column):
                raise TypeError(f"expected a Column, got {col!r}")
        with self._lock:
            self._omitted = [isinstance(col, Omit) for col in columns]
            self._columns = [col.to_spec() for col in columns if not isinstance(col, Omit)]

    def set_default_column(self, column: Column):
        """Configure the columns beyond those given to ``set_columns()``."""
        if not isinstance(column, Column):
            raise TypeError(f"expected a Column, got {column!r}")
        with self._lock:
            if isinstance(column, Omit):
                self._omit_default = True
                return
            self._omit_default = False
            self._default_spec = column.to_spec()

    def set_output(self, output):
        """Set the output stream.

        If it is a terminal, the target width becomes the terminal width;
        call ``set_width()`` afterwards to force another width.
        """
        detected = terminal_width(output)
        with self._lock:
            if detected is not None:
                self.width = detected
            self.output = output

    def set_width(self, width: int):
        """Set the target width of the output.

        Columns min widths take precedence, so the output may be wider.
        """
        with self._lock:
            self.width = width

    def set_decorator(self, decorator: Decorator):
        with self._lock:
            self.decorator = decorator

    def write(self, text: str) -> int:
        """Buffer raw text: ``\\n`` separates rows and ``\\t`` separates cells."""
        with self._lock:
            self._buffer.append(text)
        return len(text)

    def write_row(self, *cells: Any):
        """Buffer a row of cells; non-string cells are converted with ``str()``."""
        with self._lock:
            self._write_row(cells)

    def _write_row(self, cells: Sequence[Any]):
        row = [
            cell if isinstance(cell, str) else str(cell)
            for i, cell in enumerate(cells)
            if not self._is_omitted(i)
        ]
        self._rows.append(row)

    def _is_omitted(self, i: int) -> bool:
        if i < len(self._omitted):
            return self._omitted[i]
        return self._omit_default

    def _column_spec(self, i: int) -> ColumnSpec:
        if i < len(self._columns):
            return self._columns[i]
        return self._default_spec

    def _flush_buffer(self):
        rows = ''.join(self._buffer).split('\n')
        if rows and rows[-1] == '':
            rows.pop()
        for row in rows:
            self._write_row(row.split('\t'))
        self._buffer = []

    def _compute_widths(self) -> List[int]:
        n_columns = max((len(row) for row in self._rows), default=0)
        items = []
        for i in range(n_columns):
            spec = self._column_spec(i)
            cells = [row[i] for row in self._rows if i < len(row)]
            if spec.item.min > 0:
                minimum = spec.item.min
            else:
                minimum = max((min_content(self.term, cell) for cell in cells), default=0)
            if spec.item.max > 0 and minimum > spec.item.max:
                minimum = spec.item.max
            size = max((self.term.length(cell) for cell in cells), default=0)
            items.append(replace(spec.item, min=minimum, size=size))

        available = self.width - decorator_width(self.term, self.decorator, n_columns)
        return resolve_flex_lengths(items, available)

    def _render_line(self, cells: Sequence[str], widths: Sequence[int], row_idx: int) -> str:
        deco = self.decorator
        parts = [deco.column_separator(row_idx, 0)]
        last = len(cells) - 1
        for ci, cell in enumerate(cells):
            alignment = self._column_spec(ci).align
            if ci != last:
                parts.append(align(self.term, cell, widths[ci], alignment, True))
                parts.append(deco.column_separator(row_idx, ci + 1))
            else:
                # no trailing spaces unless a right border follows
                right = deco.column_separator(row_idx, -1)
                parts.append(align(self.term, cell, widths[ci], alignment, bool(right)))
                parts.append(right)
        return ''.join(parts)

    def flush(self):
        """Write all buffered rows to the output and reset the buffer.

        Errors raised by the output stream propagate, and the rows are kept
        so that the flush can be retried.
        """
        with self._lock:
            self._flush_buffer()
            if not self._rows:
                return

            widths = self._compute_widths()
            logger.debug("flushing %d rows with widths %s", len(self._rows), widths)

            deco = self.decorator
            lines = []
            header = deco.row_separator(0, widths)
            if header:
                lines.append(header)
            last = len(self._rows) - 1
            for ri, row in enumerate(self._rows):
                row_idx = -1 if ri == last else ri + 1
                row = row + [''] * (len(widths) - len(row))
                wrapped = [wrap(self.term, cell, widths[ci]) for ci, cell in enumerate(row)]
                for cells in transpose(wrapped, fill=''):
                    lines.append(self._render_line(cells, widths, row_idx))
                separator = deco.row_separator(row_idx, widths)
                if separator:
                    lines.append(separator)

            self.output.write(''.join(line + '\n' for line in lines))
            self._rows = []
