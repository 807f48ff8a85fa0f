"""
Step 1: Install Homebrew
"""

import os

from devsetup.steps.base import BaseStep, StepResult


class HomebrewStep(BaseStep):
    """Install Homebrew if it is not on PATH."""

    name = "homebrew"
    display_name = "Installing Homebrew"
    order = 1

    def run(self) -> StepResult:
        if self.which("brew"):
            return self.skip("Homebrew is already installed.")

        cfg = self.config.homebrew
        prefix = cfg.resolve_prefix(self.machine())

        self.info("Homebrew not found, installing...")
        script = self.fetch_text(cfg.install_url)
        result = self.run_cmd(["/bin/bash", "-c", script])
        if not result.ok:
            self.error(f"Homebrew installer exited with status {result.returncode}.")

        # Future login shells
        profile = self.path(cfg.shell_profile)
        self.writer.append_line(profile, cfg.shellenv_line(prefix))

        # This process, so later steps find brew and what it installs
        brew_bin = os.path.join(prefix, "bin")
        path_entries = os.environ.get("PATH", "").split(os.pathsep)
        if brew_bin not in path_entries and not self.dry_run:
            os.environ["PATH"] = os.pathsep.join([brew_bin, *filter(None, path_entries)])

        if not result.ok:
            return StepResult.fail(
                "Homebrew installation failed",
                [f"installer exit status {result.returncode}"],
            )

        self.success("Homebrew installed.")
        return StepResult.ok("Homebrew installed", {"brew_prefix": prefix})
