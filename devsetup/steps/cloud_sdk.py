"""
Step 10: Set up Google Cloud SDK (off unless enabled)
"""

import os

from devsetup.steps.base import BaseStep, StepResult


class CloudSDKStep(BaseStep):
    """Run `gcloud init`, locating a Homebrew-installed SDK if needed."""

    name = "cloud_sdk"
    display_name = "Setting up Google Cloud SDK"
    order = 10

    def is_enabled(self) -> bool:
        return self.config.cloud_sdk.enabled

    def run(self) -> StepResult:
        if self.which("gcloud"):
            self.info("Google Cloud SDK found. Running 'gcloud init'...")
            return self._init("gcloud")

        sdk_dir = self._brew_sdk_dir()
        if sdk_dir and os.path.isfile(os.path.join(sdk_dir, "path.zsh.inc")):
            sdk_bin = os.path.join(sdk_dir, "bin")
            if not self.dry_run:
                os.environ["PATH"] = os.pathsep.join([sdk_bin, os.environ.get("PATH", "")])
            self.info("Google Cloud SDK found in Homebrew. Running 'gcloud init'...")
            return self._init(os.path.join(sdk_bin, "gcloud"))

        message = "Google Cloud SDK not found. Please install it and run 'gcloud init' manually."
        self.warning(message)
        return StepResult.skip("Google Cloud SDK not found", warnings=[message])

    def _brew_sdk_dir(self) -> str:
        """SDK directory under `brew --prefix`, or '' when brew is unavailable."""
        brew = self.which("brew")
        if not brew:
            return ""
        result = self.run_cmd([brew, "--prefix"], capture_output=True)
        prefix = result.stdout.strip()
        if not result.ok or not prefix:
            return ""
        return os.path.join(prefix, self.config.cloud_sdk.sdk_subdir)

    def _init(self, gcloud: str) -> StepResult:
        result = self.run_cmd([gcloud, "init"])
        if not result.ok:
            return StepResult.fail("gcloud init failed", [f"exit status {result.returncode}"])
        return StepResult.ok("Google Cloud SDK initialised")
