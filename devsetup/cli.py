"""
CLI interface for the devsetup package.

Provides command-line argument parsing and main entry point.
"""

import argparse
import sys
from typing import Optional, List

from devsetup import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="devsetup",
        description="Provision a macOS development machine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m devsetup                         # Full setup
  python -m devsetup --dry-run               # Show what would run
  python -m devsetup --step dotfiles         # Run a single step
  python -m devsetup --config machine.yaml   # Override defaults
  python -m devsetup --list-steps            # List all steps
  python -m devsetup --status                # Show the last run
""",
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        metavar="FILE",
        help="Path to configuration file (YAML or JSON)",
    )

    # Execution modes
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log commands and file writes without performing them",
    )

    parser.add_argument(
        "--step", "-s",
        type=str,
        metavar="NAME",
        help="Run a single step by name",
    )

    parser.add_argument(
        "--with-cloud-sdk",
        action="store_true",
        help="Also run the Google Cloud SDK step",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate configuration and repository inputs without running setup",
    )

    parser.add_argument(
        "--export",
        type=str,
        metavar="FILE",
        help="Export the effective configuration to file",
    )

    parser.add_argument(
        "--list-steps",
        action="store_true",
        help="List all setup steps",
    )

    parser.add_argument(
        "--status",
        action="store_true",
        help="Show the outcome of the last run",
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete the record of the last run",
    )

    # Output options
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Minimal output",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every command and download",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Import here so logging is configured before modules bind loggers
    from devsetup.utils.logger import configure_logging

    configure_logging(verbose=parsed_args.verbose, colors=not parsed_args.no_color)

    from devsetup.errors import ConfigError
    from devsetup.ui.console import Console
    from devsetup.wizard import Provisioner

    console = Console(no_color=parsed_args.no_color, quiet=parsed_args.quiet)

    if parsed_args.reset:
        return reset_progress(console)

    if parsed_args.status:
        return show_status(console)

    try:
        if parsed_args.list_steps:
            return list_steps(console, parsed_args.config, parsed_args.with_cloud_sdk)

        if parsed_args.check:
            return check_config(console, parsed_args.config)

        if parsed_args.export:
            return export_config(console, parsed_args.export, parsed_args.config)

        provisioner = Provisioner(
            config_file=parsed_args.config,
            dry_run=parsed_args.dry_run,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            no_color=parsed_args.no_color,
            with_cloud_sdk=parsed_args.with_cloud_sdk,
            console=console,
        )

        if parsed_args.step:
            return provisioner.run_single_step(parsed_args.step)

        return provisioner.run()

    except ConfigError as e:
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.print("\n\nSetup interrupted.")
        console.print("Re-run the script anytime; finished steps are detected and skipped.")
        return 1
    except Exception as e:
        console.error(f"An unexpected error occurred: {e}")
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        return 1


def list_steps(
    console: "Console",
    config_file: Optional[str] = None,
    with_cloud_sdk: bool = False,
) -> int:
    """List all setup steps and whether a full run includes them."""
    from devsetup.wizard import Provisioner

    provisioner = Provisioner(config_file=config_file, with_cloud_sdk=with_cloud_sdk, console=console)

    console.print("\nSetup steps:\n")

    for step in provisioner._get_steps_in_order():
        preview = step.get_preview()
        state = "" if preview["enabled"] else " (disabled)"
        console.print(f"  {preview['order']:2}. {preview['step']:20} - {preview['display_name']}{state}")

    console.print("\nUse --step <name> to run a specific step.")
    return 0


def reset_progress(console: "Console") -> int:
    """Delete the record of the last run."""
    from devsetup.config.loader import ConfigLoader
    from devsetup.ui.progress import ProgressTracker

    tracker = ProgressTracker(str(ConfigLoader().root_dir))
    if tracker.reset():
        console.success("Run record has been reset.")
    else:
        console.info("No run record to reset.")
    return 0


def show_status(console: "Console") -> int:
    """Show the outcome of the last run."""
    from devsetup.config.loader import ConfigLoader
    from devsetup.ui.progress import ProgressTracker

    tracker = ProgressTracker(str(ConfigLoader().root_dir))
    progress = tracker.load()

    if not progress.started_at:
        console.info("No previous run recorded.")
        return 0

    console.print(f"\nLast run started {progress.started_at}", style="bold")
    if progress.finished_at:
        console.print(f"Finished {progress.finished_at} with exit code {progress.exit_code}")
    else:
        console.warning("The last run did not finish.")

    console.print_table("Steps", tracker.get_summary_rows(), ["#", "Step", "Status", "Details"])
    return 0


def check_config(console: "Console", config_file: Optional[str] = None) -> int:
    """Validate configuration and the repository's input files."""
    from devsetup.config.loader import ConfigLoader
    from devsetup.utils.platform import get_platform_info

    loader = ConfigLoader()
    config = loader.load_config(config_file)

    console.print("\nConfiguration Validation:\n")

    platform_info = get_platform_info()
    console.info(f"Platform: {platform_info['system']} {platform_info['release']} ({platform_info['machine']})")
    if not platform_info["is_macos"]:
        console.warning("This setup targets macOS; several steps will not work on this system.")

    missing = config.get_missing_inputs()
    if missing:
        console.error("Missing repository files:")
        for path in missing:
            console.print(f"  - {path}")
        return 1

    console.success("Configuration is valid and all repository files are present.")
    console.print(f"  - Brewfile: {config.manifest_path}")
    console.print(f"  - Dotfiles: {len(config.dotfiles.files)} file(s) from {config.dotfiles_dir}")
    console.print(f"  - Go: {config.go.install_dir} ({len(config.go.tools)} tools)")
    console.print(f"  - SSH key: {config.ssh.key_path} for {config.ssh.host}")
    cloud = "enabled" if config.cloud_sdk.enabled else "disabled"
    console.print(f"  - Google Cloud SDK step: {cloud}")
    return 0


def export_config(
    console: "Console",
    output_path: str,
    config_file: Optional[str] = None,
) -> int:
    """Export configuration to file."""
    from devsetup.config.loader import ConfigLoader

    loader = ConfigLoader()
    config = loader.load_config(config_file)

    try:
        loader.export_config(config, output_path)
        console.success(f"Configuration exported to {output_path}")
        return 0
    except OSError as e:
        console.error(f"Failed to export configuration: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
