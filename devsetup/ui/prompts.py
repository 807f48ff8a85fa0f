"""
Interactive prompts with validation for the devsetup package.
"""

from typing import Callable, Optional, Tuple

from devsetup.ui.console import Console


class Prompts:
    """Interactive prompts with validation."""

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize prompts.

        Args:
            console: Console instance for output
        """
        self.console = console or Console()

    def ask(
        self,
        prompt: str,
        validator: Optional[Callable[[str], Tuple[bool, Optional[str]]]] = None,
        default: str = "",
        allow_empty: bool = False,
    ) -> str:
        """
        Ask for user input with optional validation.

        Re-prompts until the input is non-empty (unless allowed) and valid.

        Args:
            prompt: The prompt to display
            validator: Optional validation function that returns (is_valid, error_message)
            default: Default value if user presses Enter
            allow_empty: Allow empty input

        Returns:
            User input (or default value)
        """
        while True:
            if default:
                full_prompt = f"{prompt} [{default}]: "
            else:
                full_prompt = f"{prompt}: "

            value = input(full_prompt).strip()

            if not value and default:
                value = default

            if not value and not allow_empty:
                self.console.error("This field cannot be empty.")
                continue

            if validator and value:
                is_valid, error = validator(value)
                if not is_valid:
                    self.console.error(error or "Invalid input.")
                    continue

            return value

    def ask_raw(self, prompt: str, default: str = "") -> str:
        """
        Ask once and return the answer without validation.

        Callers that must treat bad input as a hard error use this instead
        of ask(), which keeps re-prompting.
        """
        suffix = f" [{default}]" if default else ""
        value = input(f"{prompt}{suffix}: ").strip()
        return value or default

    def press_enter_to_continue(self, message: str = "Press Enter to continue...") -> None:
        """Wait for user to press Enter."""
        input(message)
