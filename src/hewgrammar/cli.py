#!/usr/bin/env python3
"""
hew-grammar - command-line interface.

Keeps syntaxes/hew.tmLanguage.json in sync with the Hew compiler's
syntax-data.json:
- sync: Regenerate keyword/type patterns (or check for drift)
- coverage: Verify every keyword of syntax-data.json has a grammar scope
- validate: Run the packaged grammar validators
- status: Show resolved paths and validator counts

Usage:
    hewgrammar sync                          # Update the grammar in place
    hewgrammar sync --check                  # Exit 1 if the grammar is stale
    hewgrammar sync --syntax-data PATH       # Use a specific syntax-data.json
    hewgrammar coverage                      # Keyword coverage report
    hewgrammar coverage --strict             # Exit 1 on gaps or orphans
    hewgrammar validate                      # Run all validators
    hewgrammar validate grammar              # Run grammar validators only
    hewgrammar status                        # Show platform status
    hewgrammar --help                        # Show help
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from hewgrammar import __version__
from hewgrammar.commands.synchronize import GrammarSynchronizer
from hewgrammar.commands.test_runner import ValidatorRunner
from hewgrammar.utils.config import SYNTAX_DATA_ENV, config_path, resolve_paths
from hewgrammar.utils.repo import find_repo_root


class GrammarTool:
    """Orchestrates hew-grammar operations for one repository."""

    def __init__(self, repo_root: Path = None):
        self.repo_root = repo_root or find_repo_root()
        self.validator_runner = ValidatorRunner(self.repo_root)

    def sync(self, check: bool = False, grammar: str = None, syntax_data: str = None) -> int:
        """Regenerate (or check) the grammar's keyword/type patterns."""
        synchronizer = GrammarSynchronizer(
            self.repo_root, grammar=grammar, syntax_data=syntax_data
        )
        return synchronizer.run(check=check)

    def coverage(self, strict: bool = False, syntax_data: str = None) -> int:
        """Report keyword coverage gaps and orphans."""
        synchronizer = GrammarSynchronizer(self.repo_root, syntax_data=syntax_data)
        return synchronizer.check_coverage(strict=strict)

    def run_validators(self, phase: str = "all", verbose: bool = False, quick: bool = False) -> int:
        """Run hew-grammar validators."""
        if quick:
            return self.validator_runner.quick_check()
        return self.validator_runner.run_tests(phase=phase, verbose=verbose, parallel=True)

    def show_status(self) -> int:
        """Show quick status summary."""
        paths = resolve_paths(self.repo_root)

        def mark(path: Path) -> str:
            return "✅" if path.exists() else "❌"

        print("=" * 60)
        print("hew-grammar Status")
        print("=" * 60)
        print(f"\nRepo root:   {self.repo_root}")
        print(f"Config:      {config_path(self.repo_root)}"
              f"{'' if config_path(self.repo_root).exists() else ' (not found, using defaults)'}")
        print(f"\nInputs:")
        print(f"  {mark(paths.grammar)} Grammar:     {paths.grammar}")
        print(f"  {mark(paths.syntax_data)} Syntax data: {paths.syntax_data}")
        print(f"  Scope name:  {paths.scope_name}")
        if not paths.syntax_data.exists():
            print(f"\n  Set {SYNTAX_DATA_ENV} env var to the correct syntax-data.json path.")

        counts = self.validator_runner.count_validators()
        print(f"\nValidator files:")
        for phase, count in counts.items():
            print(f"  {phase.capitalize():<8} {count} files")
        print(f"  {'Total':<8} {sum(counts.values())} files")

        return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="hewgrammar",
        description="hew-grammar - keep the Hew TextMate grammar in sync with syntax-data.json",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Grammar synchronization
  %(prog)s sync                           Update hew.tmLanguage.json in place
  %(prog)s sync --check                   Check for drift (CI), exit 1 if stale
  %(prog)s sync --grammar PATH            Use a specific grammar file

  # Keyword coverage
  %(prog)s coverage                       Report gaps and orphan keywords
  %(prog)s coverage --strict              Exit 1 on gaps or orphans

  # Validators
  %(prog)s validate                       Run all validators
  %(prog)s validate grammar               Validate the repository grammar only
  %(prog)s validate sync                  Self-check the synchronization engine
  %(prog)s validate --quick               Quick smoke test

Environment:
  {SYNTAX_DATA_ENV}  Path to syntax-data.json (default: ../hew/docs/syntax-data.json)
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--repo",
        type=str,
        help="Repository root (default: search upward for .hewgrammar/)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ----- hewgrammar sync -----
    sync_parser = subparsers.add_parser(
        "sync",
        help="Regenerate keyword/type patterns",
        description="Update keyword and type regexes in the grammar from syntax-data.json"
    )
    sync_parser.add_argument(
        "--check",
        action="store_true",
        help="Check for drift without writing (exit 1 if changes detected)"
    )
    sync_parser.add_argument(
        "--grammar",
        type=str,
        help="Path to hew.tmLanguage.json (default: from config)"
    )
    sync_parser.add_argument(
        "--syntax-data",
        type=str,
        dest="syntax_data",
        help=f"Path to syntax-data.json (overrides {SYNTAX_DATA_ENV})"
    )

    # ----- hewgrammar coverage -----
    coverage_parser = subparsers.add_parser(
        "coverage",
        help="Verify keyword coverage",
        description="Cross-check all_keywords against the grammar keyword scopes"
    )
    coverage_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit 1 if any gap or orphan keyword is found"
    )
    coverage_parser.add_argument(
        "--syntax-data",
        type=str,
        dest="syntax_data",
        help=f"Path to syntax-data.json (overrides {SYNTAX_DATA_ENV})"
    )

    # ----- hewgrammar validate [phase] -----
    validate_parser = subparsers.add_parser(
        "validate",
        help="Run validators",
        description="Run the packaged validators against the repository grammar"
    )
    validate_parser.add_argument(
        "phase",
        nargs="?",
        type=str,
        default="all",
        choices=["all", "grammar", "sync"],
        help="Phase to validate (default: all)"
    )
    validate_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        dest="verbose_validators",
        help="Verbose pytest output"
    )
    validate_parser.add_argument(
        "--quick", "-q",
        action="store_true",
        help="Quick smoke test (no parallel)"
    )

    # ----- hewgrammar status -----
    subparsers.add_parser(
        "status",
        help="Show status",
        description="Display resolved paths and validator counts"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    tool = GrammarTool(repo_root=Path(args.repo) if args.repo else None)

    try:
        if args.command == "sync":
            return tool.sync(check=args.check, grammar=args.grammar, syntax_data=args.syntax_data)
        elif args.command == "coverage":
            return tool.coverage(strict=args.strict, syntax_data=args.syntax_data)
        elif args.command == "validate":
            return tool.run_validators(
                phase=args.phase,
                verbose=args.verbose or args.verbose_validators,
                quick=args.quick,
            )
        elif args.command == "status":
            return tool.show_status()
    except yaml.YAMLError as e:
        print(f"Error: invalid {config_path(tool.repo_root)}: {e}")
        return 1

    parser.print_help()
    return 0


def cli() -> int:
    """Console script entry point."""
    return main()


if __name__ == "__main__":
    sys.exit(cli())
