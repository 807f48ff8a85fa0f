"""
Step 3: Install Go via the official tarball
"""

import tempfile
from pathlib import Path
from typing import List

import httpx

from devsetup.steps.base import BaseStep, StepResult
from devsetup.utils.go import go_arch_for, go_archive_name, parse_go_versions, select_version


class GoToolchainStep(BaseStep):
    """Install an operator-selected Go release into /usr/local/go."""

    name = "go_toolchain"
    display_name = "Installing Go"
    order = 3

    def run(self) -> StepResult:
        cfg = self.config.go

        go = self.which("go")
        if go:
            current = self.run_cmd([go, "version"], capture_output=True).stdout.strip()
            self.info(f"Go is already installed: {current or go}.")
            # Only a single y/Y reinstalls; any other answer keeps the current Go
            answer = self.prompts.ask_raw("Do you want to reinstall/change version? (y/n)")
            if answer not in ("y", "Y"):
                return self.skip("Keeping current Go installation.")

        # Unsupported architectures halt before anything is fetched
        arch = go_arch_for(self.machine())

        self.info("Fetching available Go versions...")
        versions = self._fetch_versions()

        labels = [
            f"{v} (latest)" if idx == 0 else v
            for idx, v in enumerate(versions)
        ]
        self.console.print_menu(labels, header="Available Go versions:")

        choice = self.prompts.ask_raw("Select a version", default="1")
        version = select_version(versions, choice)

        self.info(f"Installing {version}...")
        archive_name = go_archive_name(version, cfg.os_name, arch)
        url = cfg.archive_url(archive_name)
        archive = Path(tempfile.gettempdir()) / archive_name

        self.info(f"Downloading {url}...")
        # Download first: a failed transfer leaves the current install in place
        self.download(url, archive)

        self.info(f"Extracting to {cfg.install_dir}...")
        self.run_cmd(["rm", "-rf", cfg.install_dir], sudo=cfg.use_sudo)
        extract = self.run_cmd(["tar", "-C", cfg.install_root, "-xzf", str(archive)], sudo=cfg.use_sudo)
        if not self.dry_run:
            archive.unlink(missing_ok=True)

        if not extract.ok:
            self.error(f"Extracting {archive_name} failed with status {extract.returncode}.")
            return StepResult.fail(f"Could not extract {archive_name}", [f"tar exit status {extract.returncode}"])

        installed = self.run_cmd([cfg.go_binary, "version"], capture_output=True).stdout.strip()
        self.success(f"Go installed successfully: {installed or version}")
        return StepResult.ok(f"Installed {version}", {"go_version": version, "go_arch": arch})

    def _fetch_versions(self) -> List[str]:
        """Newest stable releases; empty when the listing cannot be fetched."""
        cfg = self.config.go
        try:
            releases = self.fetch_json(cfg.versions_url)
        except (httpx.HTTPError, ValueError) as e:
            self.log.warning("go_versions_fetch_failed", error=str(e))
            self.warning(f"Could not fetch Go versions: {e}")
            return []
        return parse_go_versions(releases, cfg.max_versions)
