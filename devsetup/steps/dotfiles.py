"""
Step 6: Copy dotfiles
"""

from devsetup.steps.base import BaseStep, StepResult


class DotfilesStep(BaseStep):
    """Copy the repository's dotfiles into the user profile, overwriting."""

    name = "dotfiles"
    display_name = "Copying dotfiles"
    order = 6

    def run(self) -> StepResult:
        source_dir = self.config.dotfiles_dir
        copied = []
        errors = []
        notes = []

        for entry in self.config.dotfiles.files:
            source = source_dir / entry.source
            destination = self.path(entry.destination)
            try:
                self.writer.copy_file(source, destination)
            except OSError as e:
                self.error(f"Could not copy {source} -> {destination}: {e}")
                errors.append(f"{entry.source}: {e}")
                continue

            self.info(f"{source} -> {destination}")
            copied.append(str(destination))
            if entry.note:
                notes.append(entry.note)

        self.info("Dotfiles copied. Please restart your terminal for .zshrc changes to take effect.")
        for note in notes:
            self.info(note)

        if errors:
            return StepResult.fail(f"{len(errors)} dotfile(s) could not be copied", errors)

        return StepResult.ok(f"Copied {len(copied)} dotfiles", {"dotfiles": copied})
