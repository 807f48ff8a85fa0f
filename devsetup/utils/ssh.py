"""
SSH helpers: agent environment parsing and client config rendering.
"""

import re
from typing import Dict

_AGENT_VAR_RE = re.compile(r"(SSH_AUTH_SOCK|SSH_AGENT_PID)=([^;]+);")


def parse_agent_env(output: str) -> Dict[str, str]:
    """
    Parse the Bourne-shell output of `ssh-agent -s`.

    Example input:
        SSH_AUTH_SOCK=/tmp/ssh-XXXX/agent.123; export SSH_AUTH_SOCK;
        SSH_AGENT_PID=124; export SSH_AGENT_PID;
        echo Agent pid 124;

    Returns:
        Mapping with SSH_AUTH_SOCK and SSH_AGENT_PID when present
    """
    return {name: value.strip() for name, value in _AGENT_VAR_RE.findall(output)}


def render_ssh_config(host: str, identity_file: str, use_keychain: bool = True) -> str:
    """Render a Host block pinning the identity file for one host."""
    lines = [
        f"Host {host}",
        "  AddKeysToAgent yes",
    ]
    if use_keychain:
        lines.append("  UseKeychain yes")
    lines.append(f"  IdentityFile {identity_file}")
    return "\n".join(lines) + "\n"
