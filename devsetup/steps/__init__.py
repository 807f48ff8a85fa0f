"""
Provisioning steps, in the order they run.
"""

from devsetup.steps.base import BaseStep, StepResult, StepContext
from devsetup.steps.homebrew import HomebrewStep
from devsetup.steps.brew_bundle import BrewBundleStep
from devsetup.steps.go_toolchain import GoToolchainStep
from devsetup.steps.go_tools import GoToolsStep
from devsetup.steps.oh_my_zsh import OhMyZshStep
from devsetup.steps.dotfiles import DotfilesStep
from devsetup.steps.coding_assistant import CodingAssistantStep
from devsetup.steps.editor_extensions import EditorExtensionsStep
from devsetup.steps.ssh_key import SSHKeyStep
from devsetup.steps.cloud_sdk import CloudSDKStep

STEP_CLASSES = [
    HomebrewStep,
    BrewBundleStep,
    GoToolchainStep,
    GoToolsStep,
    OhMyZshStep,
    DotfilesStep,
    CodingAssistantStep,
    EditorExtensionsStep,
    SSHKeyStep,
    CloudSDKStep,
]

__all__ = [
    "BaseStep",
    "StepResult",
    "StepContext",
    "STEP_CLASSES",
    "HomebrewStep",
    "BrewBundleStep",
    "GoToolchainStep",
    "GoToolsStep",
    "OhMyZshStep",
    "DotfilesStep",
    "CodingAssistantStep",
    "EditorExtensionsStep",
    "SSHKeyStep",
    "CloudSDKStep",
]
