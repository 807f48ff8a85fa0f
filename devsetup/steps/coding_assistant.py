"""
Step 7: Install the CLI coding assistant
"""

from devsetup.steps.base import BaseStep, StepResult


class CodingAssistantStep(BaseStep):
    """Install the coding assistant globally with npm, when npm is available."""

    name = "coding_assistant"
    display_name = "Installing Claude Code"
    order = 7

    def run(self) -> StepResult:
        cfg = self.config.assistant

        npm = self.which("npm")
        if not npm:
            message = f"npm not found. Skipping {cfg.display_name} installation."
            self.warning(message)
            return StepResult.skip("npm not found", warnings=[message])

        self.info(f"Installing {cfg.display_name}...")
        result = self.run_cmd(["npm", "install", "-g", cfg.package], sudo=cfg.use_sudo)

        if not result.ok:
            self.error(f"npm install exited with status {result.returncode}.")
            return StepResult.fail(f"{cfg.display_name} installation failed", [f"exit status {result.returncode}"])

        self.success(f"{cfg.display_name} installed.")
        return StepResult.ok(f"{cfg.package} installed")
