"""
Pydantic models for provisioning configuration.

Defaults reproduce the stock machine setup; a devsetup.yaml in the
repository root (or --config) overrides any of them.
"""

from pathlib import Path
from typing import List
from pydantic import BaseModel, Field, field_validator

from devsetup.validators.urls import validate_https_url


def _check_https(v: str) -> str:
    is_valid, error = validate_https_url(v)
    if not is_valid:
        raise ValueError(error)
    return v


class HomebrewConfig(BaseModel):
    """Homebrew bootstrap configuration."""

    install_url: str = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
    # Empty means: pick by architecture (/opt/homebrew on arm64, /usr/local on Intel)
    prefix: str = ""
    shell_profile: str = "~/.zprofile"
    manifest: str = "Brewfile"

    @field_validator("install_url")
    @classmethod
    def validate_install_url(cls, v: str) -> str:
        return _check_https(v)

    def resolve_prefix(self, machine: str) -> str:
        """Return the Homebrew prefix for the given CPU architecture."""
        if self.prefix:
            return self.prefix
        return "/opt/homebrew" if machine == "arm64" else "/usr/local"

    def shellenv_line(self, prefix: str) -> str:
        """Line added to the login profile so new shells find brew."""
        return f'eval "$({prefix}/bin/brew shellenv)"'


class GoConfig(BaseModel):
    """Go toolchain configuration."""

    versions_url: str = "https://go.dev/dl/?mode=json&include=all"
    download_base_url: str = "https://go.dev/dl/"
    os_name: str = "darwin"
    install_root: str = "/usr/local"
    max_versions: int = Field(default=10, ge=1)
    use_sudo: bool = True
    tools: List[str] = Field(
        default_factory=lambda: [
            "golang.org/x/tools/cmd/goimports@latest",
            "golang.org/x/tools/gopls@latest",
            "github.com/go-delve/delve/cmd/dlv@latest",
        ]
    )

    @field_validator("versions_url", "download_base_url")
    @classmethod
    def validate_urls(cls, v: str) -> str:
        return _check_https(v)

    @property
    def install_dir(self) -> str:
        return str(Path(self.install_root) / "go")

    @property
    def go_binary(self) -> str:
        return str(Path(self.install_dir) / "bin" / "go")

    def archive_url(self, archive_name: str) -> str:
        return self.download_base_url.rstrip("/") + "/" + archive_name


class ShellConfig(BaseModel):
    """Oh My Zsh configuration."""

    install_dir: str = "~/.oh-my-zsh"
    install_url: str = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"

    @field_validator("install_url")
    @classmethod
    def validate_install_url(cls, v: str) -> str:
        return _check_https(v)


class DotfileEntry(BaseModel):
    """One repository file and where it is copied to."""

    source: str
    destination: str
    note: str = ""


class DotfilesConfig(BaseModel):
    """Dotfile set configuration."""

    source_dir: str = "dotfiles"
    files: List[DotfileEntry] = Field(
        default_factory=lambda: [
            DotfileEntry(source="zshrc", destination="~/.zshrc"),
            DotfileEntry(source="gitconfig", destination="~/.gitconfig"),
            DotfileEntry(
                source="com.googlecode.iterm2.plist",
                destination="~/Library/Preferences/com.googlecode.iterm2.plist",
                note="For iTerm2 settings, you may need to manually import the "
                "'com.googlecode.iterm2.plist' file.",
            ),
            DotfileEntry(
                source="settings.json",
                destination="~/Library/Application Support/Cursor/User/settings.json",
            ),
        ]
    )


class AssistantConfig(BaseModel):
    """CLI coding assistant installed through npm."""

    display_name: str = "Claude Code"
    package: str = "@anthropic-ai/claude-code"
    use_sudo: bool = True


class EditorConfig(BaseModel):
    """Editor theme extension configuration."""

    extension_id: str = "monokai-pro-vscode"
    display_name: str = "Monokai Pro"
    editors: List[str] = Field(default_factory=lambda: ["code", "cursor"])


class SSHConfig(BaseModel):
    """GitHub SSH key configuration."""

    key_type: str = "ed25519"
    key_path: str = "~/.ssh/id_ed25519"
    config_path: str = "~/.ssh/config"
    host: str = "github.com"
    user: str = "git"
    use_keychain: bool = True
    keychain_flag: str = "--apple-use-keychain"
    clipboard_command: List[str] = Field(default_factory=lambda: ["pbcopy"])
    keys_url: str = "https://github.com/settings/keys"

    @field_validator("key_type")
    @classmethod
    def validate_key_type(cls, v: str) -> str:
        if v not in ("ed25519", "ecdsa", "rsa"):
            raise ValueError("key_type must be one of: ed25519, ecdsa, rsa")
        return v

    @property
    def public_key_path(self) -> str:
        return self.key_path + ".pub"


class CloudSDKConfig(BaseModel):
    """Google Cloud SDK initialisation (off unless enabled)."""

    enabled: bool = False
    sdk_subdir: str = "share/google-cloud-sdk"


class ProvisionConfig(BaseModel):
    """Root configuration model containing all provisioning sections."""

    repo_dir: str = ""
    home: str = ""

    homebrew: HomebrewConfig = Field(default_factory=HomebrewConfig)
    go: GoConfig = Field(default_factory=GoConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    dotfiles: DotfilesConfig = Field(default_factory=DotfilesConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    ssh: SSHConfig = Field(default_factory=SSHConfig)
    cloud_sdk: CloudSDKConfig = Field(default_factory=CloudSDKConfig)

    @property
    def home_path(self) -> Path:
        return Path(self.home).expanduser() if self.home else Path.home()

    @property
    def repo_path(self) -> Path:
        return Path(self.repo_dir) if self.repo_dir else Path.cwd()

    def expand(self, path: str) -> Path:
        """
        Resolve a configured path.

        '~' refers to the configured home directory; relative paths are
        taken from the repository root.
        """
        if path == "~":
            return self.home_path
        if path.startswith("~/"):
            return self.home_path / path[2:]
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.repo_path / candidate

    @property
    def manifest_path(self) -> Path:
        return self.expand(self.homebrew.manifest)

    @property
    def dotfiles_dir(self) -> Path:
        return self.expand(self.dotfiles.source_dir)

    def get_missing_inputs(self) -> List[str]:
        """List repository input files (manifest, dotfiles) that do not exist."""
        missing = []
        if not self.manifest_path.is_file():
            missing.append(str(self.manifest_path))
        for entry in self.dotfiles.files:
            source = self.dotfiles_dir / entry.source
            if not source.is_file():
                missing.append(str(source))
        return missing
