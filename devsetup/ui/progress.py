"""
Run record for the provisioning sequence.

Each run overwrites the record with the status of every step. The record
is a report only: whether a step does any work is decided by the step's own
check of the machine, never by what an earlier run wrote here.
"""

import json
from typing import Dict, Any, Optional, List
from pathlib import Path
from dataclasses import dataclass, field, asdict
from datetime import datetime

PENDING = "pending"
IN_PROGRESS = "in_progress"
COMPLETED = "completed"
SKIPPED = "skipped"
FAILED = "failed"
FATAL = "fatal"


@dataclass
class StepProgress:
    """Progress tracking for a single step."""

    name: str
    display_name: str
    order: int = 0
    status: str = PENDING
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    message: str = ""
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunProgress:
    """Overall run progress."""

    total_steps: int = 0
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    exit_code: Optional[int] = None
    dry_run: bool = False
    steps: Dict[str, StepProgress] = field(default_factory=dict)


class ProgressTracker:
    """Track and persist the outcome of the last provisioning run."""

    PROGRESS_FILE = ".provision_progress"

    def __init__(self, root_dir: Optional[str] = None, persist: bool = True):
        """
        Initialize the progress tracker.

        Args:
            root_dir: Directory holding the progress file
            persist: Write the record to disk after each change
        """
        self.root_dir = Path(root_dir) if root_dir else Path.cwd()
        self.progress_path = self.root_dir / self.PROGRESS_FILE
        self.persist = persist
        self.progress: RunProgress = RunProgress()

    def load(self) -> RunProgress:
        """
        Load the last run record from file.

        A missing or corrupt file yields an empty record.
        """
        if self.progress_path.exists():
            try:
                with open(self.progress_path, "r") as f:
                    data = json.load(f)

                self.progress = RunProgress(
                    total_steps=data.get("total_steps", 0),
                    started_at=data.get("started_at"),
                    finished_at=data.get("finished_at"),
                    exit_code=data.get("exit_code"),
                    dry_run=data.get("dry_run", False),
                )

                for name, step_data in data.get("steps", {}).items():
                    self.progress.steps[name] = StepProgress(
                        name=step_data.get("name", name),
                        display_name=step_data.get("display_name", name),
                        order=step_data.get("order", 0),
                        status=step_data.get("status", PENDING),
                        started_at=step_data.get("started_at"),
                        finished_at=step_data.get("finished_at"),
                        message=step_data.get("message", ""),
                        data=step_data.get("data", {}),
                    )

            except (json.JSONDecodeError, KeyError, TypeError, AttributeError):
                self.progress = RunProgress()

        return self.progress

    def save(self) -> None:
        """Save progress to file."""
        if not self.persist:
            return

        data = {
            "total_steps": self.progress.total_steps,
            "started_at": self.progress.started_at,
            "finished_at": self.progress.finished_at,
            "exit_code": self.progress.exit_code,
            "dry_run": self.progress.dry_run,
            "steps": {
                name: asdict(step) for name, step in self.progress.steps.items()
            },
        }

        self.root_dir.mkdir(parents=True, exist_ok=True)
        with open(self.progress_path, "w") as f:
            json.dump(data, f, indent=2)

    def reset(self) -> bool:
        """
        Reset progress and delete the progress file.

        Returns:
            True if a progress file was removed
        """
        self.progress = RunProgress()
        if self.progress_path.exists():
            self.progress_path.unlink()
            return True
        return False

    def start_run(self, total_steps: int, dry_run: bool = False) -> None:
        """
        Begin a new run record, discarding the previous one.

        Args:
            total_steps: Number of steps that will run
            dry_run: Whether this is a dry run
        """
        registered = self.progress.steps
        self.progress = RunProgress(
            total_steps=total_steps,
            started_at=datetime.now().isoformat(),
            dry_run=dry_run,
        )
        for name, step in registered.items():
            self.progress.steps[name] = StepProgress(
                name=name, display_name=step.display_name, order=step.order
            )
        self.save()

    def finish_run(self, exit_code: int) -> None:
        """Record the end of the run and its exit code."""
        self.progress.finished_at = datetime.now().isoformat()
        self.progress.exit_code = exit_code
        self.save()

    def register_step(self, name: str, display_name: str, order: int) -> None:
        """
        Register a step for tracking.

        Args:
            name: Step identifier
            display_name: Human-readable name
            order: Step order number
        """
        if name not in self.progress.steps:
            self.progress.steps[name] = StepProgress(
                name=name,
                display_name=display_name,
                order=order,
            )

    def start_step(self, step_name: str) -> None:
        """Mark a step as started."""
        if step_name in self.progress.steps:
            step = self.progress.steps[step_name]
            step.status = IN_PROGRESS
            step.started_at = datetime.now().isoformat()
            step.message = ""
            self.save()

    def complete_step(self, step_name: str, message: str = "", data: Optional[Dict[str, Any]] = None) -> None:
        """
        Mark a step as completed.

        Args:
            step_name: Step identifier
            message: Result message
            data: Optional data collected during the step
        """
        self._finish(step_name, COMPLETED, message, data)

    def skip_step(self, step_name: str, reason: str = "") -> None:
        """Mark a step as skipped."""
        self._finish(step_name, SKIPPED, reason)

    def fail_step(self, step_name: str, error: str, fatal: bool = False) -> None:
        """
        Mark a step as failed.

        Args:
            step_name: Step identifier
            error: Error message
            fatal: Whether the failure halted the run
        """
        self._finish(step_name, FATAL if fatal else FAILED, error)

    def _finish(self, step_name: str, status: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        if step_name in self.progress.steps:
            step = self.progress.steps[step_name]
            step.status = status
            step.finished_at = datetime.now().isoformat()
            step.message = message
            if data:
                step.data = data
            self.save()

    def get_step_status(self, step_name: str) -> str:
        """Get the status of a step."""
        if step_name in self.progress.steps:
            return self.progress.steps[step_name].status
        return PENDING

    def get_summary_rows(self) -> List[tuple]:
        """
        Get (order, step, status, message) rows sorted by step order.
        """
        steps = sorted(self.progress.steps.values(), key=lambda s: s.order)
        return [(s.order, s.display_name, s.status, s.message) for s in steps]
