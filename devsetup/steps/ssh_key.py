"""
Step 9: Generate an SSH key for GitHub
"""

import os

from devsetup.steps.base import BaseStep, StepResult
from devsetup.utils.ssh import parse_agent_env, render_ssh_config
from devsetup.validators.email import validate_email


class SSHKeyStep(BaseStep):
    """
    Create the GitHub SSH keypair if it does not exist yet.

    The private key path is the only gate: when it exists nothing is
    generated, nothing is prompted and the agent is left alone.
    """

    name = "ssh_key"
    display_name = "Generating SSH key for GitHub"
    order = 9

    def run(self) -> StepResult:
        cfg = self.config.ssh
        key_path = self.path(cfg.key_path)

        if key_path.exists():
            return self.skip(f"SSH key already exists at {cfg.key_path}, skipping generation.")

        email = self.prompts.ask("Enter your GitHub email", validator=validate_email)

        if not self.dry_run:
            key_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

        keygen = self.run_cmd(["ssh-keygen", "-t", cfg.key_type, "-C", email, "-f", str(key_path)])
        if not keygen.ok:
            self.error(f"ssh-keygen exited with status {keygen.returncode}.")

        self._start_agent()
        self._write_client_config()

        add_argv = ["ssh-add"]
        if cfg.use_keychain and cfg.keychain_flag:
            add_argv.append(cfg.keychain_flag)
        add_argv.append(str(key_path))
        self.run_cmd(add_argv)

        self._copy_public_key()
        self.prompts.press_enter_to_continue("Press Enter after you've added the key to GitHub...")

        # Informational only: GitHub answers a successful auth with exit status 1
        check = self.run_cmd(["ssh", "-T", f"{cfg.user}@{cfg.host}"])
        self.info(f"Connection test to {cfg.host} finished with status {check.returncode}.")

        if not keygen.ok:
            return StepResult.fail("SSH key generation failed", [f"ssh-keygen exit status {keygen.returncode}"])

        return StepResult.ok(
            f"SSH key created at {cfg.key_path}",
            {"ssh_key": cfg.key_path, "ssh_check_status": check.returncode},
        )

    def _start_agent(self) -> None:
        """Start ssh-agent and export its socket into this process."""
        result = self.run_cmd(["ssh-agent", "-s"], capture_output=True)
        agent_env = parse_agent_env(result.stdout)
        if agent_env:
            os.environ.update(agent_env)
            self.log.debug("ssh_agent_started", pid=agent_env.get("SSH_AGENT_PID"))
        elif not self.dry_run:
            self.warning("Could not start ssh-agent; the key may not be added to the agent.")

    def _write_client_config(self) -> None:
        """Author ~/.ssh/config only if the user has none."""
        cfg = self.config.ssh
        config_path = self.path(cfg.config_path)
        if config_path.exists():
            self.log.debug("ssh_config_exists", path=str(config_path))
            return

        content = render_ssh_config(cfg.host, cfg.key_path, use_keychain=cfg.use_keychain)
        self.writer.write_file(config_path, content, mode=0o600)

    def _copy_public_key(self) -> None:
        cfg = self.config.ssh
        public_key = self.path(cfg.public_key_path)
        if not self.dry_run and not public_key.exists():
            self.warning(f"Public key not found at {public_key}; nothing copied to the clipboard.")
            return
        key_text = "" if self.dry_run else public_key.read_text()

        result = self.run_cmd(cfg.clipboard_command, input_text=key_text)
        if result.ok:
            self.success(f"SSH public key copied to clipboard! Add it to GitHub at {cfg.keys_url}")
        else:
            self.warning("Could not copy the public key to the clipboard. Add it manually:")
            self.console.print(key_text.strip())
            self.info(f"Add it to GitHub at {cfg.keys_url}")
