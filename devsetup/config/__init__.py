"""
Configuration management for the devsetup package.
"""

from devsetup.config.schema import (
    HomebrewConfig,
    GoConfig,
    ShellConfig,
    DotfileEntry,
    DotfilesConfig,
    AssistantConfig,
    EditorConfig,
    SSHConfig,
    CloudSDKConfig,
    ProvisionConfig,
)
from devsetup.config.loader import ConfigLoader

__all__ = [
    "HomebrewConfig",
    "GoConfig",
    "ShellConfig",
    "DotfileEntry",
    "DotfilesConfig",
    "AssistantConfig",
    "EditorConfig",
    "SSHConfig",
    "CloudSDKConfig",
    "ProvisionConfig",
    "ConfigLoader",
]
