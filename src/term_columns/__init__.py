"""
Terminal Columns Library

Arranges rows of data into columns fitted to the width of the terminal,
wrapping cell contents as needed. Column widths are resolved with a
simplified flexbox algorithm, and output can be decorated with gaps or
table borders, optionally colorized with Blessed.
"""

import logging

from .columns import (
    Column,
    ColumnSpec,
    Flexbox,
    Flexed,
    Omit,
    Rigid,
    Shrinkable,
)
from .decorators import (
    ColorizeDecorator,
    Decorator,
    GapDecorator,
    TableDecorator,
    ascii_table_decorator,
    box_drawing_table_decorator,
)
from .flex import AUTO, Item, NoSolutionError, normalize, resolve_flex_lengths
from .text import Alignment
from .writer import FlexWriter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'AUTO',
    'Alignment',
    'ColorizeDecorator',
    'Column',
    'ColumnSpec',
    'Decorator',
    'FlexWriter',
    'Flexbox',
    'Flexed',
    'GapDecorator',
    'Item',
    'NoSolutionError',
    'Omit',
    'Rigid',
    'Shrinkable',
    'TableDecorator',
    'ascii_table_decorator',
    'box_drawing_table_decorator',
    'normalize',
    'resolve_flex_lengths',
]

__version__ = '0.1.0'
