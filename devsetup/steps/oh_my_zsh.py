"""
Step 5: Install Oh My Zsh
"""

from devsetup.steps.base import BaseStep, StepResult


class OhMyZshStep(BaseStep):
    """Install Oh My Zsh unattended if its directory is missing."""

    name = "oh_my_zsh"
    display_name = "Installing Oh My Zsh"
    order = 5

    def run(self) -> StepResult:
        cfg = self.config.shell
        install_dir = self.path(cfg.install_dir)

        if install_dir.is_dir():
            return self.skip("Oh My Zsh is already installed.")

        self.info("Oh My Zsh not found, installing...")
        script = self.fetch_text(cfg.install_url)
        # sh -c <script> <$0> <$1>: the empty string fills $0
        result = self.run_cmd(["sh", "-c", script, "", "--unattended"])

        if not result.ok:
            self.error(f"Oh My Zsh installer exited with status {result.returncode}.")
            return StepResult.fail("Oh My Zsh installation failed", [f"exit status {result.returncode}"])

        self.success("Oh My Zsh installed.")
        return StepResult.ok("Oh My Zsh installed")
