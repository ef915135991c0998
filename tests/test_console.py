import io
import sys

import pytest

from klevret.cli.console import Color, Console


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(output)


def test_initial_state(console):
    assert console.current_command_input == ""
    assert console.current_command_input_cursor_pos == 0
    assert console.current_text_color is Color.WHITE


def test_write(console, output):
    console.write("klevret> ")
    assert output.getvalue() == "klevret> "
    assert console.current_command_input == ""


def test_write_empty_writes_nothing(console, output):
    console.write("")
    assert output.getvalue() == ""
    assert console.current_command_input == ""


def test_move_cursor_left(console, output):
    console.move_cursor_left(3)
    assert output.getvalue() == "\033[3D"
    assert console.current_command_input_cursor_pos == 0


def test_move_cursor_right(console, output):
    console.move_cursor_right(2)
    assert output.getvalue() == "\033[2C"
    assert console.current_command_input_cursor_pos == 0


def test_zero_moves_write_nothing(console, output):
    console.move_cursor_left(0)
    console.move_cursor_right(0)
    assert output.getvalue() == ""
    assert console.current_command_input_cursor_pos == 0


def test_clear_line(console, output):
    console.clear_line()
    assert output.getvalue() == "\033[K"
    assert console.current_text_color is Color.WHITE


def test_change_text_color(console, output):
    console.change_text_color(Color.GREEN)
    assert console.current_text_color is Color.GREEN
    assert output.getvalue() == "\033[32m"


def test_color_sequences_start_with_csi(console, output):
    console.change_text_color(Color.RED)
    assert console.current_text_color is Color.RED
    assert output.getvalue().startswith(Console.CSI)
    assert output.getvalue().endswith("m")


def test_instance_is_shared():
    shared = Console.instance()
    saved = shared.current_command_input
    shared.current_command_input = "probe"
    try:
        assert Console.instance().current_command_input == "probe"
    finally:
        shared.current_command_input = saved


def test_getkey_without_terminal(console, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("a"))
    assert console.getkey() == -1