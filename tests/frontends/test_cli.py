"""Tests for the CLI frontend."""

import argparse
from io import StringIO
from unittest.mock import patch

import pytest
from lifemap.core.parser import parse_map_with_header
from lifemap.frontends.cli import (
    CLEAR_SCREEN,
    CLIGameOfLife,
    create_parser,
    main,
    validate_args,
)

BLINKER_MAP = "5x5\n.....\n..x..\n..x..\n..x..\n.....\n"


@pytest.fixture
def blinker_file(tmp_path):
    map_file = tmp_path / "blinker.map"
    map_file.write_text(BLINKER_MAP, encoding="utf-8")
    return map_file


class TestCLIGameOfLife:
    """Test cases for the console driver."""

    def test_from_path(self, blinker_file):
        cli = CLIGameOfLife.from_path(str(blinker_file))
        assert cli.game.grid.shape == (5, 5)
        assert cli.show_border is False
        assert cli.clear_screen is True

    def test_format_game_interior(self):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP))
        assert cli.format_game() == ".x.\n.x.\n.x."

    def test_format_game_with_border(self):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP), show_border=True)
        assert cli.format_game() == ".....\n..x..\n..x..\n..x..\n....."

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_frame_clears_screen(self, mock_stdout):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP))
        cli.print_frame("Initial State")

        output = mock_stdout.getvalue()
        assert output.startswith(CLEAR_SCREEN)
        assert "Initial State\n.x.\n.x.\n.x.\n" in output

    @patch("sys.stdout", new_callable=StringIO)
    def test_print_frame_without_clear(self, mock_stdout):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP), clear_screen=False)
        cli.print_frame("Step 0")

        assert mock_stdout.getvalue() == "Step 0\n.x.\n.x.\n.x.\n"

    @patch("lifemap.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_animate(self, mock_stdout, mock_sleep):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP), clear_screen=False)
        cli.animate(steps=3, delay=0.25)

        assert mock_sleep.call_count == 3
        mock_sleep.assert_called_with(0.25)
        assert cli.game.generation == 3

        output = mock_stdout.getvalue()
        assert "Initial State\n.x.\n.x.\n.x.\n" in output
        assert "Step 0\n...\nxxx\n...\n" in output
        assert "Step 1\n.x.\n.x.\n.x.\n" in output
        assert "Step 2\n...\nxxx\n...\n" in output
        assert "Step 3" not in output

    @patch("lifemap.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_animate_clears_only_between_steps(self, mock_stdout, mock_sleep):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP))
        cli.animate(steps=2, delay=0)

        output = mock_stdout.getvalue()
        assert output.startswith("Initial State\n")
        assert output.count(CLEAR_SCREEN) == 2
        assert CLEAR_SCREEN + "Step 0\n" in output
        assert CLEAR_SCREEN + "Step 1\n" in output

    @patch("lifemap.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_animate_zero_steps(self, mock_stdout, mock_sleep):
        cli = CLIGameOfLife(parse_map_with_header(BLINKER_MAP))
        cli.animate(steps=0, delay=1.0)

        mock_sleep.assert_not_called()
        assert cli.game.generation == 0
        assert "Initial State" in mock_stdout.getvalue()


class TestArgumentParsing:
    """Test cases for argument parsing and validation."""

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.map == "map"
        assert args.steps == 1000
        assert args.delay == 0.1
        assert args.show_border is False
        assert args.no_clear is False
        assert args.verbose is False

    def test_all_options(self):
        args = create_parser().parse_args(
            ["maps/glider.map", "-n", "5", "-d", "0", "--show-border", "--no-clear", "-v"]
        )
        assert args.map == "maps/glider.map"
        assert args.steps == 5
        assert args.delay == 0.0
        assert args.show_border is True
        assert args.no_clear is True
        assert args.verbose is True

    def test_validate_args_valid(self):
        args = argparse.Namespace(steps=0, delay=0.0)
        assert validate_args(args) is True

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_args_invalid(self, mock_stdout):
        args = argparse.Namespace(steps=-1, delay=-0.5)
        assert validate_args(args) is False

        output = mock_stdout.getvalue()
        assert "Steps must be non-negative" in output
        assert "Delay must be non-negative" in output


class TestMain:
    """Test cases for the main entry point."""

    @patch("lifemap.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_successful_run(self, mock_stdout, mock_sleep, blinker_file):
        argv = ["lifemap-cli", str(blinker_file), "--steps", "2", "--delay", "0", "--no-clear"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 0
        output = mock_stdout.getvalue()
        assert "Initial State" in output
        assert "Step 0\n...\nxxx\n...\n" in output
        assert "Step 1\n.x.\n.x.\n.x.\n" in output

    @patch("lifemap.frontends.cli.time.sleep")
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_show_border(self, mock_stdout, mock_sleep, blinker_file):
        argv = ["lifemap-cli", str(blinker_file), "-n", "1", "--show-border", "--no-clear"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 0
        assert "Step 0\n.....\n.....\n.xxx.\n.....\n.....\n" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        with patch("sys.argv", ["lifemap-cli", "--steps", "-5"]):
            result = main()

        assert result == 1
        assert "Error: Invalid arguments" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_missing_file(self, mock_stdout, tmp_path):
        with patch("sys.argv", ["lifemap-cli", str(tmp_path / "missing.map")]):
            result = main()

        assert result == 1
        assert "Error:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_malformed_map(self, mock_stdout, tmp_path):
        map_file = tmp_path / "bad.map"
        map_file.write_text("3x3\nx..\n.#.\n..x\n", encoding="utf-8")

        with patch("sys.argv", ["lifemap-cli", str(map_file)]):
            result = main()

        assert result == 1
        assert "unknown character '#'" in mock_stdout.getvalue()

    @patch("lifemap.frontends.cli.CLIGameOfLife.animate", side_effect=KeyboardInterrupt)
    @patch("sys.stdout", new_callable=StringIO)
    def test_main_keyboard_interrupt(self, mock_stdout, mock_animate, blinker_file):
        with patch("sys.argv", ["lifemap-cli", str(blinker_file)]):
            result = main()

        assert result == 1
        assert "interrupted" in mock_stdout.getvalue()
