"""
mixbump - Entry Point
Semantic version bumping and precommit wiring for Mix projects.
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from mixbump import __version__
from mixbump.core.decisions import InstallOutcome, UninstallOutcome
from mixbump.core.errors import MixbumpError, MixfileError, VersionError
from mixbump.core.install_planner import plan_install
from mixbump.core.precommit import manual_instructions, precommit_entry
from mixbump.core.uninstall_planner import plan_uninstall
from mixbump.core.versioning import (
    BumpType,
    bump_type_from_options,
    bump_version,
    ensure_consistent_versions,
    extract_version,
    update_mix_exs_content,
)
from mixbump.services.config_service import CONFIG_FILENAME, ConfigService, MixbumpConfig
from mixbump.services.file_service import FileService
from mixbump.services.git_service import GitService, RevisionStatus
from mixbump.services.hook_service import HOOK_NAME, HookOptions, HookService
from mixbump.ui.console import Console
from mixbump.utils.terminal import tty_available

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    base_dir: Path
    config: MixbumpConfig
    console: Console
    files: FileService


# =====================================================================
#  VERSION BUMPING
# =====================================================================

def _read_current_version(ctx: CommandContext, mix_file: str) -> Tuple[str, str]:
    content = ctx.files.read_text(mix_file)
    ensure_consistent_versions(content)
    current = extract_version(content)
    if current is None:
        raise VersionError(f"Could not find version in {mix_file}")
    return content, current


def _prompt_bump_type(ctx: CommandContext, yes: bool) -> BumpType:
    if yes:
        return BumpType.PATCH

    console = ctx.console
    console.info("")
    console.info("Select bump type:")
    console.info("[1] MAJOR - Incompatible API changes")
    console.info("[2] MINOR - Backward compatible functionality")
    console.info("[3] PATCH - Backward compatible bug fixes (Default)")
    console.info("")

    try:
        choice = console.prompt("Enter choice (1/2/3):").strip()
    except EOFError:
        raise VersionError("No answer received. Re-run with --yes or pass a bump type.") from None

    choices = {"1": BumpType.MAJOR, "2": BumpType.MINOR, "3": BumpType.PATCH, "": BumpType.PATCH}
    if choice not in choices:
        raise VersionError("Invalid choice. Please enter 1, 2, or 3")
    return choices[choice]


def _bump_file(
    ctx: CommandContext,
    mix_file: str,
    bump_type: Optional[BumpType],
    yes: bool,
    dry_run: bool = False,
) -> Tuple[str, str]:
    content, current = _read_current_version(ctx, mix_file)
    ctx.console.muted(f"Current version: {current}")

    if bump_type is None:
        bump_type = _prompt_bump_type(ctx, yes)

    new_version = bump_version(current, bump_type)
    new_content = update_mix_exs_content(content, new_version)

    if not dry_run:
        ctx.files.write_atomic(mix_file, new_content)
    return current, new_version


def cmd_bump(args: argparse.Namespace, ctx: CommandContext) -> int:
    """Bump the project version, interactively unless told otherwise."""
    mix_file = args.file or ctx.config.file
    bump_type = bump_type_from_options(None, args.major, args.minor, args.patch)

    current, new_version = _bump_file(ctx, mix_file, bump_type, args.yes, dry_run=args.dry_run)

    ctx.console.info("")
    if args.dry_run:
        ctx.console.info(f"(dry-run) Would bump: {current} → {new_version}")
    else:
        ctx.console.success(f"Version bumped: {current} → {new_version}")
    return 0


# =====================================================================
#  VERSION CHECK
# =====================================================================

def _git_path(ctx: CommandContext, mix_file: str) -> str:
    """Path of the mix file as ``git show REV:<path>`` expects it."""
    resolved = ctx.files.resolve(mix_file).resolve()
    relative = os.path.relpath(resolved, ctx.base_dir)
    return "./" + Path(relative).as_posix()


def _auto_bump(args: argparse.Namespace, ctx: CommandContext, mix_file: str) -> Tuple[str, str]:
    bump_type = bump_type_from_options(args.bump, args.major, args.minor, args.patch)

    if bump_type is None and not args.yes and not tty_available():
        raise MixbumpError(
            "\n✗ Cannot run interactive bump (no TTY detected).\n"
            "  Re-run with: mixbump check --auto-bump --yes\n"
            "  Or choose a bump type: mixbump check --auto-bump --bump patch\n"
        )

    return _bump_file(ctx, mix_file, bump_type, args.yes)


def cmd_check(args: argparse.Namespace, ctx: CommandContext) -> int:
    """Fail when the version did not change since ``--against`` (HEAD by default)."""
    mix_file = args.file or ctx.config.file
    rev = args.against or ctx.config.against
    console = ctx.console

    _, current = _read_current_version(ctx, mix_file)
    result = GitService(ctx.base_dir).version_at(rev, _git_path(ctx, mix_file))

    if result.status is RevisionStatus.NO_GIT:
        console.success("Version check skipped (no git repository)")
        return 0
    if result.status is RevisionStatus.NO_COMMITS:
        console.success("Version check skipped (no previous commits)")
        return 0
    if result.status is RevisionStatus.ERROR:
        console.warning(f"Warning: Could not check git version: {result.detail}")
        console.success("Version check skipped")
        return 0

    if current != result.version:
        console.success(f"Version check passed ({result.version} → {current})")
        return 0

    if not args.auto_bump:
        console.error(
            "\n✗ Version has not been updated since last commit!\n"
            f"  Current version: {current}\n\n"
            "  Please run: mixbump bump\n"
        )
        return 1

    _, new_version = _auto_bump(args, ctx, mix_file)
    console.success(f"Version auto-bumped ({result.version} → {new_version})")
    return 0


# =====================================================================
#  MIX ALIAS INSTALL / UNINSTALL
# =====================================================================

def cmd_mix_install(args: argparse.Namespace, ctx: CommandContext) -> int:
    """Install the precommit alias into mix.exs."""
    mix_file = args.file or ctx.config.file
    entry = precommit_entry((args.alias or ctx.config.alias).strip(), ctx.config.steps)
    content = ctx.files.read_text(mix_file)

    try:
        decision = plan_install(content, entry, force=args.force)
    except MixfileError as e:
        ctx.console.error(str(e))
        ctx.console.info(manual_instructions(entry))
        return 1
    logger.debug(f"Install decision: {decision.to_dict()}")

    if decision.outcome is InstallOutcome.REFUSED:
        ctx.console.error(decision.reason)
        return 1
    if decision.outcome is InstallOutcome.ALREADY_INSTALLED:
        ctx.console.success(f"Alias already installed ({entry.name})")
        return 0

    ctx.files.write_atomic(mix_file, decision.content)
    if decision.outcome is InstallOutcome.REPLACED:
        ctx.console.success(f"Replaced alias {entry.name}")
    elif decision.outcome is InstallOutcome.SYNTHESIZED:
        ctx.console.success(f"Installed alias {entry.name} (added defp aliases/0)")
    else:
        ctx.console.success(f"Installed alias {entry.name}")
    return 0


def cmd_mix_uninstall(args: argparse.Namespace, ctx: CommandContext) -> int:
    """Remove the precommit alias from mix.exs."""
    mix_file = args.file or ctx.config.file
    entry = precommit_entry((args.alias or ctx.config.alias).strip(), ctx.config.steps)
    content = ctx.files.read_text(mix_file)

    try:
        decision = plan_uninstall(content, entry, force=args.force)
    except MixfileError as e:
        ctx.console.error(str(e))
        return 1
    logger.debug(f"Uninstall decision: {decision.to_dict()}")

    if decision.outcome is UninstallOutcome.REFUSED:
        ctx.console.error(decision.reason)
        return 1
    if decision.outcome is UninstallOutcome.ALREADY_ABSENT:
        ctx.console.success(f"Alias already absent ({entry.name})")
        return 0

    ctx.files.write_atomic(mix_file, decision.content)
    ctx.console.success(f"Removed alias {entry.name}")
    return 0


# =====================================================================
#  GIT HOOK INSTALL / UNINSTALL
# =====================================================================

def _hook_service(ctx: CommandContext) -> HookService:
    return HookService(GitService(ctx.base_dir).hooks_dir(), file_service=ctx.files)


def cmd_hook_install(args: argparse.Namespace, ctx: CommandContext) -> int:
    options = HookOptions(
        auto_bump=args.auto_bump,
        yes=args.yes,
        bump=bump_type_from_options(args.bump, args.major, args.minor, args.patch),
    )
    hooks = _hook_service(ctx)
    if hooks.install(options, force=args.force):
        ctx.console.success(f"Installed {HOOK_NAME} hook ({hooks.hook_path})")
    else:
        ctx.console.success(f"{HOOK_NAME} hook already installed")
    return 0


def cmd_hook_uninstall(args: argparse.Namespace, ctx: CommandContext) -> int:
    hooks = _hook_service(ctx)
    if hooks.uninstall(force=args.force):
        ctx.console.success(f"Removed {HOOK_NAME} hook")
    else:
        ctx.console.success(f"{HOOK_NAME} hook already absent")
    return 0


# =====================================================================
#  ARGUMENT PARSING
# =====================================================================

def _add_file_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--file",
        metavar="PATH",
        help="Path to mix.exs (default: mix.exs)"
    )


def _add_bump_flags(parser: argparse.ArgumentParser, with_bump_option: bool = True) -> None:
    if with_bump_option:
        parser.add_argument(
            "--bump",
            metavar="TYPE",
            help="One of: major, minor, patch (non-interactive if provided)"
        )
    parser.add_argument("--major", action="store_true", help="Bump major version")
    parser.add_argument("--minor", action="store_true", help="Bump minor version")
    parser.add_argument("--patch", action="store_true", help="Bump patch version")
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Non-interactive (defaults to patch if no bump type given)"
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="mixbump",
        description="Semantic version bumping and precommit wiring for Mix projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mixbump bump                   # Interactive bump
  mixbump bump --minor           # Bump minor version
  mixbump check --auto-bump      # Fail (or bump) if the version did not change
  mixbump mix-install            # Add a precommit alias to mix.exs
  mixbump hook-install --yes     # Run the version check from a git pre-commit hook
        """
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"mixbump {__version__}"
    )
    parser.add_argument(
        "--dir",
        type=str,
        help="Project directory (default: current directory)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    # Subcommands
    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands"
    )

    # bump
    parser_bump = subparsers.add_parser(
        "bump",
        help="Bump the version in mix.exs"
    )
    _add_file_option(parser_bump)
    _add_bump_flags(parser_bump, with_bump_option=False)
    parser_bump.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write files, only print the result"
    )

    # check
    parser_check = subparsers.add_parser(
        "check",
        help="Verify the version changed since a git revision"
    )
    _add_file_option(parser_check)
    parser_check.add_argument(
        "--against",
        metavar="REV",
        help="Git revision to compare against (default: HEAD)"
    )
    parser_check.add_argument(
        "--auto-bump",
        action="store_true",
        help="When the version has not changed, bump it instead of failing"
    )
    _add_bump_flags(parser_check)

    # mix-install / mix-uninstall
    parser_install = subparsers.add_parser(
        "mix-install",
        help="Install a precommit Mix alias into mix.exs"
    )
    _add_file_option(parser_install)
    parser_install.add_argument(
        "--alias",
        metavar="NAME",
        help="Alias name to install (default: precommit)"
    )
    parser_install.add_argument(
        "--force",
        action="store_true",
        help="Replace an existing alias entry"
    )

    parser_uninstall = subparsers.add_parser(
        "mix-uninstall",
        help="Remove the precommit Mix alias from mix.exs"
    )
    _add_file_option(parser_uninstall)
    parser_uninstall.add_argument(
        "--alias",
        metavar="NAME",
        help="Alias name to remove (default: precommit)"
    )
    parser_uninstall.add_argument(
        "--force",
        action="store_true",
        help="Remove the alias even if it points elsewhere"
    )

    # hook-install / hook-uninstall
    parser_hook = subparsers.add_parser(
        "hook-install",
        help="Install a git pre-commit hook running mixbump check"
    )
    parser_hook.add_argument(
        "--auto-bump",
        action="store_true",
        help="Make the hook bump the version instead of failing"
    )
    _add_bump_flags(parser_hook)
    parser_hook.add_argument(
        "--force",
        action="store_true",
        help="Overwrite a pre-commit hook not installed by mixbump"
    )

    parser_unhook = subparsers.add_parser(
        "hook-uninstall",
        help="Remove the mixbump git pre-commit hook"
    )
    parser_unhook.add_argument(
        "--force",
        action="store_true",
        help="Remove the pre-commit hook even if mixbump did not install it"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with subcommand routing."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    base_dir = Path(args.dir).resolve() if args.dir else Path.cwd()
    console = Console(color=not args.no_color)

    try:
        config = ConfigService(base_dir / CONFIG_FILENAME).load()
        console.color = config.color and not args.no_color
        ctx = CommandContext(
            base_dir=base_dir,
            config=config,
            console=console,
            files=FileService(base_dir),
        )

        # Route to subcommand handlers
        if args.command == "bump":
            return cmd_bump(args, ctx)
        elif args.command == "check":
            return cmd_check(args, ctx)
        elif args.command == "mix-install":
            return cmd_mix_install(args, ctx)
        elif args.command == "mix-uninstall":
            return cmd_mix_uninstall(args, ctx)
        elif args.command == "hook-install":
            return cmd_hook_install(args, ctx)
        elif args.command == "hook-uninstall":
            return cmd_hook_uninstall(args, ctx)
        else:
            parser.print_help()
            return 1
    except MixbumpError as e:
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.error("Aborted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
