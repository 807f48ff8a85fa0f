"""
Tests for the Provisioner.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from devsetup.wizard import Provisioner
from devsetup.ui.progress import COMPLETED, FAILED, FATAL, PENDING, SKIPPED

# Go menu choice, GitHub email, Enter after adding the key
FRESH_MACHINE_INPUT = ["1", "dev@example.com", ""]


def dotfile_snapshot(config):
    """Map every dotfile destination present on disk to its contents."""
    snapshot = {}
    for entry in config.dotfiles.files:
        path = config.expand(entry.destination)
        if path.exists():
            snapshot[str(path)] = path.read_text()
    return snapshot


@pytest.fixture
def provisioner(config, console, fake_machine):
    return Provisioner(config=config, console=console)


class TestProvisioner:
    """Tests for Provisioner class."""

    def test_initialization(self, provisioner, repo_dir):
        assert provisioner.root_dir == repo_dir
        assert provisioner.config is not None
        assert len(provisioner.steps) == 10

    def test_steps_initialized(self, provisioner):
        assert list(provisioner.steps) == [
            "homebrew",
            "brew_bundle",
            "go_toolchain",
            "go_tools",
            "oh_my_zsh",
            "dotfiles",
            "coding_assistant",
            "editor_extensions",
            "ssh_key",
            "cloud_sdk",
        ]

    def test_get_steps_in_order(self, provisioner):
        orders = [s.order for s in provisioner._get_steps_in_order()]
        assert orders == sorted(orders)

    def test_cloud_sdk_excluded_by_default(self, provisioner):
        names = [s.name for s in provisioner._get_enabled_steps()]
        assert "cloud_sdk" not in names
        assert len(names) == 9

    def test_with_cloud_sdk_flag(self, config, console, fake_machine):
        provisioner = Provisioner(config=config, console=console, with_cloud_sdk=True)
        assert "cloud_sdk" in [s.name for s in provisioner._get_enabled_steps()]

    def test_run_single_step_unknown(self, provisioner, output):
        assert provisioner.run_single_step("nonexistent_step") == 1
        assert "Unknown step: nonexistent_step" in output.getvalue()

    def test_run_single_step(self, provisioner, home_dir):
        assert provisioner.run_single_step("dotfiles") == 0
        assert (Path(home_dir) / ".zshrc").exists()

    def test_run_single_step_reports_skip(self, provisioner, home_dir, output):
        (Path(home_dir) / ".oh-my-zsh").mkdir()
        assert provisioner.run_single_step("oh_my_zsh") == 0
        assert "Step 'Installing Oh My Zsh' skipped: Oh My Zsh is already installed." in output.getvalue()


class TestFullRun:
    """End-to-end runs against the fake machine."""

    @patch("builtins.input", side_effect=FRESH_MACHINE_INPUT)
    def test_fresh_machine(self, mock_input, provisioner, fake_machine, home_dir, repo_dir, output):
        assert provisioner.run() == 0

        home = Path(home_dir)
        assert 'brew shellenv' in (home / ".zprofile").read_text()
        assert (home / ".oh-my-zsh").is_dir()
        assert (home / ".zshrc").exists()
        assert (home / ".ssh" / "id_ed25519").exists()
        assert (home / ".ssh" / "config").exists()
        assert "Setup script finished!" in output.getvalue()

        record = json.loads((Path(repo_dir) / ".provision_progress").read_text())
        assert record["exit_code"] == 0
        assert record["steps"]["go_toolchain"]["status"] == COMPLETED
        assert record["steps"]["cloud_sdk"]["status"] == PENDING

    @patch("builtins.input", side_effect=FRESH_MACHINE_INPUT)
    def test_steps_run_in_order(self, mock_input, provisioner, fake_machine):
        provisioner.run()

        first_seen = []
        for name in fake_machine.commands():
            if name not in first_seen:
                first_seen.append(name)
        assert first_seen.index("bash") < first_seen.index("brew")
        assert first_seen.index("brew") < first_seen.index("tar")
        assert first_seen.index("tar") < first_seen.index("sh")
        assert first_seen.index("npm") < first_seen.index("code")
        assert first_seen.index("code") < first_seen.index("ssh-keygen")

    def test_second_run_is_idempotent(self, config, console, fake_machine, home_dir):
        with patch("builtins.input", side_effect=FRESH_MACHINE_INPUT):
            assert Provisioner(config=config, console=console).run() == 0

        zprofile = (Path(home_dir) / ".zprofile").read_text()
        dotfiles = dotfile_snapshot(config)
        assert len(dotfiles) == 4
        fake_machine.calls.clear()

        # Keep the installed Go
        with patch("builtins.input", side_effect=["n"]) as mock_input:
            provisioner = Provisioner(config=config, console=console)
            assert provisioner.run() == 0

        assert mock_input.call_count == 1
        commands = fake_machine.commands()
        for installer in ("bash", "sh", "tar", "ssh-keygen"):
            assert installer not in commands
        assert (Path(home_dir) / ".zprofile").read_text() == zprofile
        assert dotfile_snapshot(config) == dotfiles

        statuses = {name: provisioner.progress.get_step_status(name) for name in provisioner.steps}
        assert statuses["homebrew"] == SKIPPED
        assert statuses["go_toolchain"] == SKIPPED
        assert statuses["oh_my_zsh"] == SKIPPED
        assert statuses["ssh_key"] == SKIPPED

    @pytest.mark.parametrize("choice", ["abc", "²", "11"])
    def test_invalid_go_selection_halts_run(self, choice, provisioner, fake_machine, home_dir, repo_dir):
        with patch("builtins.input", side_effect=[choice]):
            assert provisioner.run() == 1

        assert fake_machine.downloads == []
        # Nothing after the Go step ran
        assert not (Path(home_dir) / ".zshrc").exists()
        assert "ssh-keygen" not in fake_machine.commands()

        record = json.loads((Path(repo_dir) / ".provision_progress").read_text())
        assert record["exit_code"] == 1
        assert record["steps"]["go_toolchain"]["status"] == FATAL
        assert record["steps"]["dotfiles"]["status"] == PENDING

    @patch("builtins.input")
    def test_unsupported_arch_halts_run(self, mock_input, provisioner, fake_machine):
        fake_machine.arch = "ppc64"
        assert provisioner.run() == 1
        assert fake_machine.fetched == [provisioner.config.homebrew.install_url]

    @patch("builtins.input", side_effect=FRESH_MACHINE_INPUT)
    def test_non_fatal_failure_continues(self, mock_input, provisioner, fake_machine, home_dir, output):
        fake_machine.returncodes["code"] = 1

        assert provisioner.run() == 0
        assert provisioner.progress.get_step_status("editor_extensions") == FAILED
        assert (Path(home_dir) / ".ssh" / "id_ed25519").exists()
        assert "failed" in output.getvalue()

    @patch("builtins.input", side_effect=FRESH_MACHINE_INPUT)
    def test_dry_run_changes_nothing(self, mock_input, config, console, fake_machine, home_dir, repo_dir):
        provisioner = Provisioner(config=config, console=console, dry_run=True)

        assert provisioner.run() == 0
        assert os.listdir(home_dir) == []
        assert fake_machine.downloads == []
        assert not (Path(repo_dir) / ".provision_progress").exists()
        assert provisioner.writer.changes
