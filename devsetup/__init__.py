"""
devsetup - Personal macOS machine provisioning.

Installs Homebrew, applies the Brewfile, installs a pinned Go toolchain,
shell customizations, editor extensions and generates a GitHub SSH key.

Usage:
    python -m devsetup
    python -m devsetup --step dotfiles
    python -m devsetup --dry-run
"""

__version__ = "1.0.0"
