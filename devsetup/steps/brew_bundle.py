"""
Step 2: Install packages and casks from the Brewfile
"""

import os

from devsetup.steps.base import BaseStep, StepResult


class BrewBundleStep(BaseStep):
    """Apply the Brewfile with `brew bundle`."""

    name = "brew_bundle"
    display_name = "Installing packages from Brewfile"
    order = 2

    def validate(self) -> tuple[bool, str]:
        manifest = self.config.manifest_path
        if not manifest.is_file():
            return False, f"Brewfile not found at {manifest}"
        return True, ""

    def run(self) -> StepResult:
        brew = self.which("brew") or self._prefixed_brew()
        manifest = self.config.manifest_path

        self.info(f"Installing packages from {manifest}...")
        # brew bundle skips entries that are already satisfied
        result = self.run_cmd([brew, "bundle", f"--file={manifest}"])

        if not result.ok:
            self.error(f"brew bundle exited with status {result.returncode}.")
            return StepResult.fail("brew bundle failed", [f"exit status {result.returncode}"])

        self.success("Brewfile applied.")
        return StepResult.ok("Brewfile applied")

    def _prefixed_brew(self) -> str:
        prefix = self.config.homebrew.resolve_prefix(self.machine())
        return os.path.join(prefix, "bin", "brew")
