"""Tests for FlexWriter."""

import io
import threading
from unittest.mock import Mock, patch

import pytest
from blessed import Terminal
from term_columns import (
    Alignment,
    ColorizeDecorator,
    FlexWriter,
    Flexed,
    GapDecorator,
    Omit,
    Rigid,
    ascii_table_decorator,
    box_drawing_table_decorator,
)
from term_columns.writer import DEFAULT_WIDTH, transpose

BORDERS = GapDecorator(left="| ", gap=" | ", right=" |")


def create_writer(**kwargs):
    """Create a writer to a StringIO buffer, 80 columns wide."""
    out = io.StringIO()
    kwargs.setdefault("width", 80)
    writer = FlexWriter(out, term=Terminal(), **kwargs)
    return writer, out


class TestTranspose:
    """Tests for transpose."""

    def test_dense(self):
        assert transpose([[1, 2], [3, 4], [5, 6]]) == [[1, 3, 5], [2, 4, 6]]

    def test_sparse(self):
        assert transpose([[1, 2], [3], [4, 5, 6]], fill=0) == [
            [1, 3, 4],
            [2, 0, 5],
            [0, 0, 6],
        ]

    def test_empty(self):
        assert transpose([]) == []


class TestConfiguration:
    """Tests for writer configuration."""

    def test_defaults(self):
        writer = FlexWriter(io.StringIO(), term=Terminal())
        assert writer.width == DEFAULT_WIDTH
        assert isinstance(writer.decorator, GapDecorator)
        assert writer.decorator.gap == "  "

    def test_terminal_width_detected(self):
        """Test that the width of a terminal output is used."""
        with patch("term_columns.writer.Terminal") as mock_terminal:
            mock_terminal.return_value.is_a_tty = True
            mock_terminal.return_value.width = 132
            writer = FlexWriter(io.StringIO(), term=Terminal())
        assert writer.width == 132

    def test_explicit_width_wins(self):
        with patch("term_columns.writer.Terminal") as mock_terminal:
            mock_terminal.return_value.is_a_tty = True
            mock_terminal.return_value.width = 132
            writer = FlexWriter(io.StringIO(), width=50, term=Terminal())
        assert writer.width == 50

    def test_set_output_keeps_width_for_non_terminal(self):
        writer, _ = create_writer(width=33)
        writer.set_output(io.StringIO())
        assert writer.width == 33

    def test_invalid_column(self):
        writer, _ = create_writer()
        with pytest.raises(TypeError):
            writer.set_columns(Rigid(), "not a column")
        with pytest.raises(TypeError):
            writer.set_default_column(None)


class TestOutput:
    """Tests for the formatted output."""

    def test_default_columns(self):
        writer, out = create_writer()
        writer.write_row("deep", "thought", "says", ":")
        writer.write_row("the", "answer", "is", 42)
        writer.write_row("yes", "or", "no", "?")
        writer.flush()

        assert out.getvalue() == (
            "deep  thought  says  :\n"
            "the   answer   is    42\n"
            "yes   or       no    ?\n"
        )

    def test_configuration(self):
        writer, out = create_writer(
            columns=[
                Rigid(),
                Rigid(max=10),
                Flexed(),
                Flexed(weight=2, align=Alignment.RIGHT),
            ],
            default_column=Rigid(min=5, max=5, align=Alignment.CENTER),
            decorator=BORDERS,
        )
        writer.write_row(1, "hello", "world", "what's up", "A")
        writer.write_row(2, "this text is quite long", "so", "it will wrap", "B")
        writer.write_row(3, "I", "like", "bunnies", "C")
        writer.flush()

        assert out.getvalue() == (
            "| 1 | hello      | world            |                        what's up |   A   |\n"
            "| 2 | this text  | so               |                     it will wrap |   B   |\n"
            "|   | is quite   |                  |                                  |       |\n"
            "|   | long       |                  |                                  |       |\n"
            "| 3 | I          | like             |                          bunnies |   C   |\n"
        )

    def test_rigid(self):
        writer, out = create_writer(
            columns=[Rigid(), Rigid(min=20), Rigid(max=20)],
            decorator=BORDERS,
        )
        writer.write_row(
            "sized to content",
            "min 20 wide",
            "maximum of 20 characters, longer content will wrap",
        )
        writer.flush()

        assert out.getvalue() == (
            "| sized to content | min 20 wide          | maximum of 20        |\n"
            "|                  |                      | characters, longer   |\n"
            "|                  |                      | content will wrap    |\n"
        )

    def test_flexed(self):
        writer, out = create_writer(
            columns=[Flexed(), Flexed(weight=2), Flexed(weight=3)],
            decorator=BORDERS,
        )
        writer.write_row("one sixth,", "one third,", "and half of the output width")
        writer.flush()

        assert out.getvalue() == (
            "| one sixth,  | one third,              | and half of the output width         |\n"
        )

    def test_default_column(self):
        writer, out = create_writer(columns=[Rigid()], default_column=Flexed())
        writer.write_row(
            "first column is sized to content",
            "all other columns",
            "will share the rest of the output width",
            "equally and wrap as needed.",
        )
        writer.flush()

        assert out.getvalue() == (
            "first column is sized to content  all other       will share the  equally and\n"
            "                                  columns         rest of the     wrap as\n"
            "                                                  output width    needed.\n"
        )

    def test_ascii_table(self):
        writer, out = create_writer(decorator=ascii_table_decorator())
        writer.write_row("a", "nice", "table")
        writer.write_row("with", "a classic", "look")
        writer.flush()

        assert out.getvalue() == (
            "+------+-----------+-------+\n"
            "| a    | nice      | table |\n"
            "+------+-----------+-------+\n"
            "| with | a classic | look  |\n"
            "+------+-----------+-------+\n"
        )

    def test_box_drawing_table(self):
        writer, out = create_writer(decorator=box_drawing_table_decorator())
        writer.write_row("a", "nice", "table")
        writer.write_row("with", "a modern", "look")
        writer.flush()

        assert out.getvalue() == (
            "┌──────┬──────────┬───────┐\n"
            "│ a    │ nice     │ table │\n"
            "├──────┼──────────┼───────┤\n"
            "│ with │ a modern │ look  │\n"
            "└──────┴──────────┴───────┘\n"
        )

    def test_colorized_table(self):
        """Test that colored borders don't count in the column widths."""
        style = lambda text: "\x1b[33m" + text + "\x1b[0m"
        writer, out = create_writer(
            decorator=ColorizeDecorator(ascii_table_decorator(), style),
        )
        writer.write_row("a", "bc")
        writer.flush()

        assert out.getvalue() == (
            "\x1b[33m+---+----+\x1b[0m\n"
            "\x1b[33m| \x1b[0ma\x1b[33m | \x1b[0mbc\x1b[33m |\x1b[0m\n"
            "\x1b[33m+---+----+\x1b[0m\n"
        )

    def test_shrink_to_width(self):
        """Test that shrinkable columns wrap to fit a narrow output."""
        writer, out = create_writer(width=20)
        writer.write_row("aaaa bbbb cccc", "dddd eeee ffff")
        writer.flush()

        assert out.getvalue() == (
            "aaaa bbbb  dddd eeee\n"
            "cccc       ffff\n"
        )

    def test_unequal_row_lengths(self):
        """Test that short rows are padded with empty cells."""
        writer, out = create_writer(decorator=ascii_table_decorator())
        writer.write_row("ab", "cde")
        writer.write_row(1, 2, 3)
        writer.flush()

        assert out.getvalue() == (
            "+----+-----+---+\n"
            "| ab | cde |   |\n"
            "+----+-----+---+\n"
            "| 1  | 2   | 3 |\n"
            "+----+-----+---+\n"
        )

    def test_decorator_indices(self):
        """Test the row and column indices passed to the decorator."""

        class DebugDecorator(GapDecorator):
            def row_separator(self, row_idx, widths):
                return f"--- {row_idx} ---"

            def column_separator(self, row_idx, col_idx):
                return f" {row_idx}/{col_idx} "

        writer, out = create_writer(decorator=DebugDecorator())
        writer.write_row("A", "B")
        writer.write_row("C", "D")
        writer.write_row("E", "F")
        writer.flush()

        assert out.getvalue() == (
            "--- 0 ---\n"
            " 1/0 A 1/1 B 1/-1 \n"
            "--- 1 ---\n"
            " 2/0 C 2/1 D 2/-1 \n"
            "--- 2 ---\n"
            " -1/0 E -1/1 F -1/-1 \n"
            "--- -1 ---\n"
        )

    def test_omit(self):
        writer, out = create_writer(
            columns=[Rigid(), Omit(), Rigid()],
            default_column=Omit(),
            decorator=box_drawing_table_decorator(),
        )
        writer.write_row("A", "B", "C", "D", "E")
        writer.write_row("F", "G", "H", "I", "J")
        writer.flush()

        print("A\tB\tC\tD\tE", file=writer)
        print("F\tG\tH\tI\tJ", file=writer)
        writer.flush()

        table = (
            "┌───┬───┐\n"
            "│ A │ C │\n"
            "├───┼───┤\n"
            "│ F │ H │\n"
            "└───┴───┘\n"
        )
        assert out.getvalue() == table + table


class TestBuffering:
    """Tests for buffering and flushing."""

    def test_flush_without_write(self):
        writer, out = create_writer()
        writer.flush()
        assert out.getvalue() == ""

    def test_empty_row(self):
        writer, out = create_writer()
        writer.write_row()
        writer.flush()
        assert out.getvalue() == ""

    def test_multiple_flushes(self):
        """Test that each flush sizes its columns independently."""
        writer, out = create_writer()
        writer.write_row("hello", "world")
        writer.flush()
        writer.write_row("how", "are", "you")
        writer.flush()

        assert out.getvalue() == "hello  world\nhow  are  you\n"

    def test_tabwriter_compatible(self):
        writer, out = create_writer()
        writer.write("hello\tworld\n")
        writer.write("helloooooooo\tworld\n")
        writer.write("hello\twoooooooooooorld\n")
        writer.flush()

        assert out.getvalue() == (
            "hello         world\n"
            "helloooooooo  world\n"
            "hello         woooooooooooorld\n"
        )

    def test_write_returns_length(self):
        writer, _ = create_writer()
        assert writer.write("a\tb\n") == 4

    def test_context_manager_flushes(self):
        out = io.StringIO()
        with FlexWriter(out, width=80, term=Terminal()) as writer:
            writer.write_row("a", "b")
        assert out.getvalue() == "a  b\n"

    def test_output_error_keeps_rows(self):
        """Test that a failed flush can be retried."""
        class FailingStream(io.StringIO):
            write = Mock(side_effect=OSError("disk full"))

        writer, _ = create_writer()
        writer.set_output(FailingStream())
        writer.write_row("a", "b")

        with pytest.raises(OSError):
            writer.flush()

        out = io.StringIO()
        writer.set_output(out)
        writer.flush()
        assert out.getvalue() == "a  b\n"

    def test_concurrent_rows(self):
        writer, out = create_writer()

        def write_rows():
            for _ in range(50):
                writer.write_row("x", "y")

        threads = [threading.Thread(target=write_rows) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        writer.flush()

        assert out.getvalue() == "x  y\n" * 200
