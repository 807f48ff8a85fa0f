"""
Shared pytest fixtures for devsetup tests.

Nothing here touches the real machine: commands, PATH lookups, the CPU
architecture and network access are all served by FakeMachine.
"""

import io
import os
import tempfile
import shutil
from pathlib import Path
from typing import Generator, Dict, Callable, List, Any

import pytest
from rich.console import Console as RichConsole

from devsetup.config.schema import ProvisionConfig
from devsetup.steps.base import StepContext
from devsetup.ui.console import Console
from devsetup.ui.prompts import Prompts
from devsetup.ui.progress import ProgressTracker
from devsetup.utils.files import FileWriter
from devsetup.utils.shell import CmdResult, COMMAND_NOT_FOUND

GO_RELEASES = [
    {"version": "go1.23.2", "stable": True},
    {"version": "go1.23rc1", "stable": False},
    {"version": "go1.23.1", "stable": True},
    {"version": "go1.22.8", "stable": True},
    {"version": "go1.22.7", "stable": True},
    {"version": "go1.22.6", "stable": True},
    {"version": "go1.22.5", "stable": True},
    {"version": "go1.22.4", "stable": True},
    {"version": "go1.22.3", "stable": True},
    {"version": "go1.22.2", "stable": True},
    {"version": "go1.22.1", "stable": True},
    {"version": "go1.22.0", "stable": True},
    {"version": "go1.21.13", "stable": True},
]


class FakeMachine:
    """Records every command and network access a step makes."""

    def __init__(self, home: Path, install_root: Path):
        self.home = home
        self.install_root = install_root
        self.arch = "arm64"
        self.installed: Dict[str, str] = {}
        self.returncodes: Dict[str, int] = {}
        self.outputs: Dict[str, str] = {}
        self.effects: Dict[str, Callable[[List[str]], None]] = {}
        self.calls: List[List[str]] = []
        self.fetched: List[str] = []
        self.downloads: List[str] = []
        self.events: List[str] = []
        self.releases: Any = GO_RELEASES

    # -- patched callables ----------------------------------------------

    def which(self, command: str):
        return self.installed.get(command)

    def machine_arch(self) -> str:
        return self.arch

    def run(self, argv, *, check=False, capture_output=False, input_text=None,
            env=None, cwd=None, dry_run=False) -> CmdResult:
        argv = [str(a) for a in argv]
        self.calls.append(argv)
        name = self.command_name(argv)
        self.events.append(name)

        if not dry_run and name in self.effects:
            self.effects[name](argv)

        returncode = self.returncodes.get(name, 0)
        return CmdResult(argv=argv, returncode=returncode, stdout=self.outputs.get(name, ""))

    def fetch_text(self, url: str) -> str:
        self.fetched.append(url)
        return "#!/bin/sh\necho installing\n"

    def fetch_json(self, url: str) -> Any:
        self.fetched.append(url)
        if isinstance(self.releases, Exception):
            raise self.releases
        return self.releases

    def download(self, url: str, destination) -> Path:
        self.downloads.append(url)
        self.events.append("download")
        dest = Path(destination)
        dest.write_bytes(b"archive")
        return dest

    # -- helpers ----------------------------------------------------------

    @staticmethod
    def command_name(argv: List[str]) -> str:
        command = argv[1] if argv[0] == "sudo" and len(argv) > 1 else argv[0]
        return os.path.basename(command)

    def commands(self) -> List[str]:
        return [self.command_name(argv) for argv in self.calls]

    def calls_to(self, name: str) -> List[List[str]]:
        return [argv for argv in self.calls if self.command_name(argv) == name]

    def missing(self, name: str) -> None:
        self.installed.pop(name, None)
        self.returncodes[name] = COMMAND_NOT_FOUND


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield temp
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def repo_dir(temp_dir: str) -> str:
    """
    Create a repository checkout with provisioning inputs.

    Creates:
    - Brewfile
    - dotfiles/zshrc, gitconfig, com.googlecode.iterm2.plist, settings.json
    """
    repo = os.path.join(temp_dir, "repo")
    dotfiles = os.path.join(repo, "dotfiles")
    os.makedirs(dotfiles)

    with open(os.path.join(repo, "Brewfile"), "w") as f:
        f.write('brew "git"\ncask "iterm2"\n')

    for name, content in {
        "zshrc": "export ZSH=$HOME/.oh-my-zsh\n",
        "gitconfig": "[user]\n\tname = Test\n",
        "com.googlecode.iterm2.plist": "<plist></plist>\n",
        "settings.json": '{"workbench.colorTheme": "Monokai Pro"}\n',
    }.items():
        with open(os.path.join(dotfiles, name), "w") as f:
            f.write(content)

    return repo


@pytest.fixture
def home_dir(temp_dir: str) -> str:
    """Empty home directory standing in for the user's profile."""
    home = os.path.join(temp_dir, "home")
    os.makedirs(home)
    return home


@pytest.fixture
def config(repo_dir: str, home_dir: str, temp_dir: str) -> ProvisionConfig:
    """Configuration pointing every path into the temp directory."""
    return ProvisionConfig(
        repo_dir=repo_dir,
        home=home_dir,
        go={"install_root": os.path.join(temp_dir, "usr_local")},
    )


@pytest.fixture
def fake_machine(monkeypatch, config: ProvisionConfig) -> FakeMachine:
    """
    Replace command execution, PATH lookup, architecture and network access.

    Commands succeed by default. Installers leave behind what the real ones
    would, so later steps and re-runs see an installed machine.
    """
    machine = FakeMachine(config.home_path, Path(config.go.install_root))

    def keygen(argv):
        key = Path(argv[argv.index("-f") + 1])
        key.write_text("PRIVATE KEY\n")
        Path(str(key) + ".pub").write_text("ssh-ed25519 AAAAC3Nza test@example.com\n")

    def brew_installer(argv):
        machine.installed["brew"] = "/opt/homebrew/bin/brew"

    def oh_my_zsh_installer(argv):
        (machine.home / ".oh-my-zsh").mkdir(parents=True, exist_ok=True)

    def extract(argv):
        root = Path(argv[argv.index("-C") + 1])
        go_bin = root / "go" / "bin" / "go"
        go_bin.parent.mkdir(parents=True, exist_ok=True)
        go_bin.write_text("")
        machine.installed["go"] = str(go_bin)

    machine.effects.update({
        "ssh-keygen": keygen,
        "bash": brew_installer,
        "sh": oh_my_zsh_installer,
        "tar": extract,
    })
    machine.installed.update({
        "npm": "/opt/homebrew/bin/npm",
        "code": "/usr/local/bin/code",
    })
    machine.outputs["ssh-agent"] = (
        "SSH_AUTH_SOCK=/tmp/ssh-test/agent.1; export SSH_AUTH_SOCK;\n"
        "SSH_AGENT_PID=4242; export SSH_AGENT_PID;\n"
        "echo Agent pid 4242;\n"
    )

    monkeypatch.setattr("devsetup.steps.base.run_command", machine.run)
    monkeypatch.setattr("devsetup.steps.base.find_executable", machine.which)
    monkeypatch.setattr("devsetup.steps.base.machine_arch", machine.machine_arch)
    monkeypatch.setattr("devsetup.steps.base.fetch_text", machine.fetch_text)
    monkeypatch.setattr("devsetup.steps.base.fetch_json", machine.fetch_json)
    monkeypatch.setattr("devsetup.steps.base.download_file", machine.download)

    # Steps export into os.environ; restore it after each test
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.setenv("SSH_AUTH_SOCK", "")
    monkeypatch.setenv("SSH_AGENT_PID", "")

    return machine


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving everything the console prints."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Console writing plain text into the output buffer."""
    rich_console = RichConsole(file=output, width=200, color_system=None, highlight=False)
    return Console(no_color=True, rich_console=rich_console)


@pytest.fixture
def step_context(config: ProvisionConfig, console: Console, repo_dir: str) -> StepContext:
    """Create a step context for testing."""
    progress = ProgressTracker(repo_dir, persist=False)
    return StepContext(
        config=config,
        console=console,
        prompts=Prompts(console),
        progress=progress,
        writer=FileWriter(),
        dry_run=False,
        verbose=False,
        quiet=False,
    )
