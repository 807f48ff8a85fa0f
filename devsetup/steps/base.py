"""
Base class for provisioning steps.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence, TYPE_CHECKING

from devsetup.errors import FatalStepError
from devsetup.utils.files import FileWriter
from devsetup.utils.logger import logger
from devsetup.utils.net import download_file, fetch_json, fetch_text
from devsetup.utils.platform import find_executable, machine_arch
from devsetup.utils.shell import CmdResult, run_command

if TYPE_CHECKING:
    from devsetup.config.schema import ProvisionConfig
    from devsetup.ui.console import Console
    from devsetup.ui.prompts import Prompts
    from devsetup.ui.progress import ProgressTracker


@dataclass
class StepResult:
    """Result of a step execution."""

    success: bool
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped: bool = False
    skip_reason: str = ""
    fatal: bool = False

    @classmethod
    def ok(cls, message: str = "", data: Optional[Dict[str, Any]] = None) -> "StepResult":
        """Create a successful result."""
        return cls(success=True, message=message, data=data or {})

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None) -> "StepResult":
        """Create a failed result. The run continues with the next step."""
        return cls(success=False, message=message, errors=errors or [message])

    @classmethod
    def skip(cls, reason: str, warnings: Optional[List[str]] = None) -> "StepResult":
        """Create a skipped result."""
        return cls(
            success=True,
            skipped=True,
            skip_reason=reason,
            message=f"Skipped: {reason}",
            warnings=warnings or [],
        )

    @classmethod
    def abort(cls, message: str) -> "StepResult":
        """Create a fatal result. The run halts with a non-zero exit."""
        return cls(success=False, message=message, errors=[message], fatal=True)


@dataclass
class StepContext:
    """Context passed to each step."""

    config: "ProvisionConfig"
    console: "Console"
    prompts: "Prompts"
    progress: "ProgressTracker"
    writer: FileWriter = field(default_factory=FileWriter)
    dry_run: bool = False
    verbose: bool = False
    quiet: bool = False


class BaseStep(ABC):
    """
    Abstract base class for provisioning steps.

    Each step checks its own precondition ("already installed?") on the
    machine and skips itself when it holds, so re-running the whole sequence
    is safe.
    """

    # Step metadata - override in subclasses
    name: str = "base"
    display_name: str = "Base Step"
    order: int = 0

    def __init__(self, context: StepContext):
        """
        Initialize the step.

        Args:
            context: Step context with shared resources
        """
        self.context = context
        self.config = context.config
        self.console = context.console
        self.prompts = context.prompts
        self.progress = context.progress
        self.writer = context.writer
        self.dry_run = context.dry_run
        self.verbose = context.verbose
        self.quiet = context.quiet
        self.log = logger.bind(step=self.name)

    @abstractmethod
    def run(self) -> StepResult:
        """
        Execute the step.

        Returns:
            StepResult indicating success, skip or failure

        Raises:
            FatalStepError: For conditions that must halt the whole run
        """
        pass

    def is_enabled(self) -> bool:
        """
        Whether the step takes part in a full run.

        Override for steps that are off by default.
        """
        return True

    def validate(self) -> tuple[bool, str]:
        """
        Validate that the step can be executed.

        Override this method to add validation logic.

        Returns:
            Tuple of (is_valid, error_message)
        """
        return True, ""

    def skip(self, reason: str) -> StepResult:
        """
        Skip this step with a reason.

        Args:
            reason: Reason for skipping

        Returns:
            StepResult indicating skip
        """
        self.info(reason)
        return StepResult.skip(reason)

    def get_preview(self) -> Dict[str, Any]:
        """
        Get a short description of the step for listings.

        Returns:
            Dictionary describing the step
        """
        return {
            "step": self.name,
            "display_name": self.display_name,
            "order": self.order,
            "enabled": self.is_enabled(),
        }

    # -- machine access -------------------------------------------------

    def which(self, command: str) -> Optional[str]:
        """Look up a command on PATH."""
        return find_executable(command)

    def machine(self) -> str:
        """Raw CPU architecture of this machine."""
        return machine_arch()

    def run_cmd(
        self,
        argv: Sequence[str],
        *,
        sudo: bool = False,
        capture_output: bool = False,
        input_text: Optional[str] = None,
    ) -> CmdResult:
        """
        Run a command for this step; dry runs only log it.

        The exit status is returned, never raised.
        """
        full_argv = ["sudo", *argv] if sudo else list(argv)
        return run_command(
            full_argv,
            capture_output=capture_output,
            input_text=input_text,
            dry_run=self.dry_run,
        )

    def fetch_text(self, url: str) -> str:
        return fetch_text(url)

    def fetch_json(self, url: str) -> Any:
        return fetch_json(url)

    def download(self, url: str, destination: Path) -> Path:
        if self.dry_run:
            self.log.info("dry_run_download", url=url, destination=str(destination))
            return destination
        return download_file(url, destination)

    def path(self, configured: str) -> Path:
        """Resolve a configured path against home / repository root."""
        return self.config.expand(configured)

    # -- output -----------------------------------------------------------

    def print_header(self, total_steps: int) -> None:
        """Print the step header."""
        if not self.quiet:
            self.console.print_step(self.order, total_steps, self.display_name)

    def info(self, message: str) -> None:
        """Print an info message."""
        if not self.quiet:
            self.console.info(message)

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet:
            self.console.success(message)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.warning(message)

    def error(self, message: str) -> None:
        """Print an error message."""
        self.console.error(message)

    def run_with_tracking(self, total_steps: int) -> StepResult:
        """
        Run the step with progress tracking.

        Args:
            total_steps: Total number of steps

        Returns:
            StepResult from step execution
        """
        valid, error = self.validate()
        if not valid:
            self.error(error)
            self.progress.fail_step(self.name, error)
            return StepResult.fail(f"Validation failed: {error}")

        self.print_header(total_steps)
        self.progress.start_step(self.name)
        self.log.info("step_started")

        try:
            result = self.run()

        except FatalStepError as e:
            self.error(str(e))
            self.progress.fail_step(self.name, str(e), fatal=True)
            self.log.error("step_fatal", error=str(e))
            return StepResult.abort(str(e))

        except KeyboardInterrupt:
            self.progress.fail_step(self.name, "Interrupted by user")
            raise

        except Exception as e:
            error_msg = str(e) or type(e).__name__
            self.log.exception("step_error")
            self.progress.fail_step(self.name, error_msg)
            self.error(f"Step failed: {error_msg}")
            return StepResult.fail(error_msg)

        if result.fatal:
            self.progress.fail_step(self.name, result.message, fatal=True)
        elif not result.success:
            self.progress.fail_step(self.name, result.message)
        elif result.skipped:
            self.progress.skip_step(self.name, result.skip_reason)
        else:
            self.progress.complete_step(self.name, result.message, result.data)

        self.log.info("step_finished", success=result.success, skipped=result.skipped)
        return result
