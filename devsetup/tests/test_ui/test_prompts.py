"""
Tests for interactive prompts and console output.
"""

from unittest.mock import patch

from devsetup.ui.prompts import Prompts
from devsetup.validators.email import validate_email


class TestPrompts:

    @patch("builtins.input", side_effect=["", "bad", "dev@example.com"])
    def test_ask_reprompts_until_valid(self, mock_input, console, output):
        value = Prompts(console).ask("Enter your GitHub email", validator=validate_email)

        assert value == "dev@example.com"
        assert mock_input.call_count == 3
        assert "This field cannot be empty." in output.getvalue()
        assert "Invalid email format" in output.getvalue()

    @patch("builtins.input", return_value="")
    def test_ask_default(self, mock_input, console):
        assert Prompts(console).ask("Host", default="github.com") == "github.com"
        mock_input.assert_called_once_with("Host [github.com]: ")

    @patch("builtins.input", return_value="abc")
    def test_ask_raw_does_not_validate(self, mock_input, console):
        assert Prompts(console).ask_raw("Select a version", default="1") == "abc"
        mock_input.assert_called_once_with("Select a version [1]: ")

    @patch("builtins.input", return_value="  ")
    def test_ask_raw_default(self, mock_input, console):
        assert Prompts(console).ask_raw("Select a version", default="1") == "1"


class TestConsole:

    def test_menu_numbering(self, console, output):
        console.print_menu(["go1.23.2 (latest)", "go1.23.1"], header="Available Go versions:")
        text = output.getvalue()

        assert "Available Go versions:" in text
        assert "  1) go1.23.2 (latest)" in text
        assert "  2) go1.23.1" in text

    def test_markup_in_messages_is_literal(self, console, output):
        console.info("[bold]not markup[/bold]")
        assert "[bold]not markup[/bold]" in output.getvalue()

    def test_quiet_keeps_warnings(self, console, output):
        console.quiet = True
        console.info("hidden")
        console.success("hidden too")
        console.warning("npm not found")

        text = output.getvalue()
        assert "hidden" not in text
        assert "WARNING: npm not found" in text

    def test_step_header(self, console, output):
        console.print_step(3, 9, "Installing Go")
        assert "Step 3/9: Installing Go" in output.getvalue()
