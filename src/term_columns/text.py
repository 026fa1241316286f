"""
Text measurement, wrapping and alignment of cell contents.

All functions take a blessed ``Terminal`` so that printable lengths ignore
escape sequences such as colors, and account for double-width characters.
"""

import re
from enum import Enum
from typing import List

import wcwidth
from blessed import Terminal

_SGR_RE = re.compile(r'\x1b\[([0-9;]*)m')
_SGR_RESET = '\x1b[0m'


class Alignment(Enum):
    """Horizontal alignment of a cell within its column."""
    LEFT = 'left'
    CENTER = 'center'
    RIGHT = 'right'


class _CharKind(Enum):
    NONE = 0
    WIDE = 1
    INVISIBLE = 2
    SHORT_UNICODE = 3
    SPACE = 4
    VISIBLE_ASCII = 5


def _char_kind(ch):
    width = wcwidth.wcwidth(ch)
    if width > 1:
        return _CharKind.WIDE, width
    if width <= 0:
        return _CharKind.INVISIBLE, 0
    if ord(ch) > 127:
        return _CharKind.SHORT_UNICODE, width
    if ch == ' ':
        return _CharKind.SPACE, width
    return _CharKind.VISIBLE_ASCII, width


def min_content(term: Terminal, s: str) -> int:
    """Return the width of the longest unbreakable chunk of ``s``.

    A chunk is a run of characters of the same kind (visible ASCII, spaces,
    narrow non-ASCII, zero-width); every wide character is a chunk by itself.
    This is the narrowest width ``s`` can be wrapped to without cutting a word.
    """
    longest = 0
    chunk_len = 0
    chunk_kind = _CharKind.NONE
    for ch in term.strip_seqs(s):
        kind, width = _char_kind(ch)
        if kind is _CharKind.WIDE:
            longest = max(longest, chunk_len, width)
            chunk_len = 0
            chunk_kind = _CharKind.NONE
        elif kind is not chunk_kind:
            longest = max(longest, chunk_len)
            chunk_len = width
            chunk_kind = kind
        else:
            chunk_len += width
    return max(longest, chunk_len)


class _StyleState:
    """Tracks the SGR sequences in effect while scanning wrapped lines."""

    def __init__(self):
        self.active: List[str] = []

    def witness(self, line: str):
        for match in _SGR_RE.finditer(line):
            params = match.group(1)
            if params in ('', '0'):
                self.active = []
            else:
                self.active.append(match.group(0))

    @property
    def format_string(self) -> str:
        return ''.join(self.active)

    @property
    def reset_string(self) -> str:
        return _SGR_RESET if self.active else ''


def wrap(term: Terminal, s: str, width: int) -> List[str]:
    """Wrap ``s`` to lines of at most ``width`` printable columns.

    Styles spanning a line break are closed at the end of the line and
    reopened at the start of the next one, so every line can be printed
    on its own.

    Raises:
        ValueError: if width is not positive
    """
    if width <= 0:
        raise ValueError(f"wrap width must be > 0, got {width}")

    if term.length(s) <= width:
        return [s]

    lines = term.wrap(s, width) or ['']
    state = _StyleState()
    wrapped = []
    for line in lines:
        line = state.format_string + line
        state.witness(line)
        wrapped.append(line + state.reset_string)
    return wrapped


def align(term: Terminal, s: str, width: int, alignment: Alignment, pad_right: bool) -> str:
    """Pad ``s`` with spaces so that it is ``width`` columns wide.

    Args:
        term: Terminal used to measure printable length
        s: Cell text; surrounding whitespace is stripped
        width: Target width
        alignment: Where the text goes within the width
        pad_right: Whether trailing spaces should be added; right-aligned
            text is always padded on the left
    """
    s = s.strip()

    pad_len = width - term.length(s)
    if pad_len <= 0:
        return s

    if alignment is Alignment.RIGHT:
        return ' ' * pad_len + s
    if alignment is Alignment.CENTER:
        pad_left = pad_len // 2
        pad_len -= pad_left
        s = ' ' * pad_left + s
    if not pad_right:
        return s
    return s + ' ' * pad_len
