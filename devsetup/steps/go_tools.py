"""
Step 4: Install Go developer tools
"""

import os

from devsetup.steps.base import BaseStep, StepResult


class GoToolsStep(BaseStep):
    """Install goimports, gopls and dlv with the freshly installed Go."""

    name = "go_tools"
    display_name = "Installing Go tools"
    order = 4

    def run(self) -> StepResult:
        cfg = self.config.go

        # Absolute path: PATH in this session may not include /usr/local/go/bin yet
        go = cfg.go_binary
        if not self.dry_run and not os.path.exists(go):
            self.error(f"Go binary not found at {go}.")
            return StepResult.fail(f"Go binary not found at {go}")

        failed = []
        for tool in cfg.tools:
            self.info(f"Installing {tool}...")
            result = self.run_cmd([go, "install", tool])
            if not result.ok:
                self.error(f"Failed to install {tool} (status {result.returncode}).")
                failed.append(tool)

        if failed:
            return StepResult.fail(
                "Some Go tools failed to install",
                [f"Failed: {tool}" for tool in failed],
            )

        self.success("Go tools installed.")
        return StepResult.ok("Go tools installed", {"go_tools": list(cfg.tools)})
