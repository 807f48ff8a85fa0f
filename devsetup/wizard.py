"""
Provisioner - runs the setup steps in order against this machine.
"""

from typing import Optional, List, Dict, Type

from devsetup.config.schema import ProvisionConfig
from devsetup.config.loader import ConfigLoader
from devsetup.ui.console import Console
from devsetup.ui.prompts import Prompts
from devsetup.ui.progress import ProgressTracker, PENDING, SKIPPED
from devsetup.steps import STEP_CLASSES
from devsetup.steps.base import BaseStep, StepContext
from devsetup.utils.files import FileWriter
from devsetup.utils.logger import logger


class Provisioner:
    """
    Main provisioning coordinator.

    Runs every enabled step strictly in order. A failed step is reported
    and the run moves on; a fatal step (unsupported architecture, invalid
    Go version selection) stops the run with exit code 1.
    """

    STEP_CLASSES: List[Type[BaseStep]] = STEP_CLASSES

    def __init__(
        self,
        config_file: Optional[str] = None,
        dry_run: bool = False,
        verbose: bool = False,
        quiet: bool = False,
        no_color: bool = False,
        with_cloud_sdk: bool = False,
        root_dir: Optional[str] = None,
        config: Optional[ProvisionConfig] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the provisioner.

        Args:
            config_file: Path to configuration file
            dry_run: Log commands and file writes without performing them
            verbose: Increase verbosity
            quiet: Minimal output
            no_color: Disable colored output
            with_cloud_sdk: Enable the Google Cloud SDK step
            root_dir: Repository root holding the Brewfile and dotfiles
            config: Pre-built configuration (skips loading from files)
            console: Pre-built console
        """
        self.loader = ConfigLoader(root_dir)
        self.config = config or self.loader.load_config(config_file)
        if with_cloud_sdk:
            self.config.cloud_sdk.enabled = True

        self.root_dir = str(self.config.repo_path)
        self.dry_run = dry_run
        self.verbose = verbose
        self.quiet = quiet

        # Initialize UI components
        self.console = console or Console(no_color=no_color, quiet=quiet)
        self.prompts = Prompts(self.console)
        self.progress = ProgressTracker(self.root_dir, persist=not dry_run)
        self.writer = FileWriter(dry_run=dry_run)

        self.steps: Dict[str, BaseStep] = {}
        self._init_steps()

    def _init_steps(self) -> None:
        """Initialize all step instances."""
        context = StepContext(
            config=self.config,
            console=self.console,
            prompts=self.prompts,
            progress=self.progress,
            writer=self.writer,
            dry_run=self.dry_run,
            verbose=self.verbose,
            quiet=self.quiet,
        )

        for step_class in self.STEP_CLASSES:
            step = step_class(context)
            self.steps[step.name] = step
            self.progress.register_step(step.name, step.display_name, step.order)

    def run(self) -> int:
        """
        Run the full provisioning sequence.

        Returns:
            Exit code (0 when the sequence completed, 1 on a fatal step)
        """
        if not self.quiet:
            self.console.print_banner()
        self.console.info("Starting macOS setup...")
        if self.dry_run:
            self.console.warning("Dry run: commands and file writes are only logged.")

        steps = self._get_enabled_steps()
        total_steps = len(steps)
        self.progress.start_run(total_steps, dry_run=self.dry_run)
        logger.info("provision_started", steps=[s.name for s in steps], dry_run=self.dry_run)

        for step in steps:
            result = step.run_with_tracking(total_steps)

            if result.fatal:
                self.console.error(f"Setup aborted at '{step.display_name}': {result.message}")
                self.progress.finish_run(1)
                return 1

            if not result.success:
                self.console.warning(f"Step '{step.display_name}' failed: {result.message}. Continuing.")

        self._show_summary()
        self.console.success("Setup script finished!")
        self.progress.finish_run(0)
        return 0

    def run_single_step(self, step_name: str) -> int:
        """
        Run a single step by name.

        Args:
            step_name: Name of the step to run

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        if step_name not in self.steps:
            self.console.error(f"Unknown step: {step_name}")
            self.console.info("Use --list-steps to see available steps.")
            return 1

        step = self.steps[step_name]
        total_steps = len(self._get_enabled_steps())
        result = step.run_with_tracking(total_steps)

        if not result.success:
            self.console.error(f"Step failed: {result.message}")
            return 1

        if self.progress.get_step_status(step_name) == SKIPPED:
            self.console.info(f"Step '{step.display_name}' skipped: {result.skip_reason}")
        else:
            self.console.success(f"Step '{step.display_name}' completed successfully.")
        return 0

    def _get_steps_in_order(self) -> List[BaseStep]:
        """Get steps sorted by order."""
        return sorted(self.steps.values(), key=lambda s: s.order)

    def _get_enabled_steps(self) -> List[BaseStep]:
        return [s for s in self._get_steps_in_order() if s.is_enabled()]

    def _show_summary(self) -> None:
        """Show a table of step outcomes and any planned file changes."""
        if self.quiet:
            return

        rows = [
            (order, name, status, message)
            for order, name, status, message in self.progress.get_summary_rows()
            if status != PENDING
        ]
        self.console.print()
        self.console.print_table("Setup summary", rows, ["#", "Step", "Status", "Details"])

        if self.writer.changes:
            self.console.print_file_changes(
                [(change.path, change.description) for change in self.writer.changes]
            )
