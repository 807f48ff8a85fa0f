"""
Step 8: Install editor extensions
"""

from devsetup.steps.base import BaseStep, StepResult


class EditorExtensionsStep(BaseStep):
    """Install the theme extension into every editor CLI found on PATH."""

    name = "editor_extensions"
    display_name = "Installing editor extensions"
    order = 8

    def run(self) -> StepResult:
        cfg = self.config.editor
        self.info(f"Installing {cfg.display_name} extension...")

        installed = []
        failed = []
        for editor in cfg.editors:
            if not self.which(editor):
                self.log.debug("editor_not_found", editor=editor)
                continue

            result = self.run_cmd([editor, "--install-extension", cfg.extension_id])
            if result.ok:
                self.success(f"{cfg.extension_id} installed for {editor}.")
                installed.append(editor)
            else:
                self.error(f"{editor} could not install {cfg.extension_id} (status {result.returncode}).")
                failed.append(editor)

        if not installed and not failed:
            return self.skip("No supported editor found.")

        if failed:
            return StepResult.fail(
                "Extension installation failed",
                [f"Failed: {editor}" for editor in failed],
            )

        return StepResult.ok(f"Installed into {', '.join(installed)}", {"editors": installed})
