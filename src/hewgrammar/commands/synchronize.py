"""
Grammar synchronizer - regenerate keyword/type patterns from syntax-data.json.

Reads the canonical syntax-data.json from the Hew compiler and updates the
keyword and type regex patterns in hew.tmLanguage.json. Complex patterns
(strings, comments, function definitions, operators, ...) are preserved from
the existing grammar; only simple keyword/type match regexes are regenerated.

Modes:
- apply: rewrite the grammar file (default)
- check: run everything in memory, never write, report drift

Usage:
    hewgrammar sync                      # Update the grammar
    hewgrammar sync --check              # Exit 1 if the grammar is out of date
    HEW_SYNTAX_DATA=path/to/syntax-data.json hewgrammar sync
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from hewgrammar.sync.changes import ChangeRecord, ChangeReport
from hewgrammar.sync.coverage import CoverageResult, verify_coverage
from hewgrammar.sync.errors import MissingInputError, SyntaxDataError
from hewgrammar.sync.grammar import GrammarDocument, load_grammar, write_grammar
from hewgrammar.sync.inserter import insert_missing
from hewgrammar.sync.scopes import SCOPE_TABLE, ScopeGroups, ScopeRule, build_scope_groups
from hewgrammar.sync.taxonomy import Taxonomy, load_taxonomy
from hewgrammar.sync.walker import walk_grammar
from hewgrammar.utils.config import SYNTAX_DATA_ENV, SyncPaths, resolve_paths
from hewgrammar.utils.repo import find_repo_root

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one synchronization pass."""

    taxonomy: Taxonomy
    document: GrammarDocument
    report: ChangeReport
    coverage: CoverageResult
    written: bool = False

    @property
    def changes(self) -> Tuple[ChangeRecord, ...]:
        return self.report.records

    @property
    def has_changes(self) -> bool:
        return len(self.report) > 0


def synchronize(
    taxonomy: Taxonomy,
    document: GrammarDocument,
    table: Tuple[ScopeRule, ...] = SCOPE_TABLE,
) -> Tuple[ChangeReport, ScopeGroups]:
    """
    Bring document in line with taxonomy, in memory.

    Walks the existing patterns first, then inserts patterns for every scope
    the walk did not find.
    """
    groups = build_scope_groups(taxonomy, table)
    report = ChangeReport()

    changes, handled = walk_grammar(document, groups)
    report.extend(changes)

    inserted = insert_missing(document, groups, handled)
    report.extend(inserted.changes)
    for scope, reason in inserted.skipped:
        report.skip(scope, reason)

    return report, groups


def check_inputs(paths: SyncPaths) -> None:
    """
    Fail before any mutation if an input file is absent.

    Raises:
        MissingInputError: naming the missing path and how to override it
    """
    if not paths.syntax_data.exists():
        raise MissingInputError(
            f"syntax-data.json not found at {paths.syntax_data}\n"
            f"Set {SYNTAX_DATA_ENV} env var to the correct path.",
            path=paths.syntax_data,
        )
    if not paths.grammar.exists():
        raise MissingInputError(
            f"hew.tmLanguage.json not found at {paths.grammar}\n"
            "Pass --grammar or set grammar.path in .hewgrammar/config.yaml.",
            path=paths.grammar,
        )


class GrammarSynchronizer:
    """Runs the synchronization pipeline against one repository."""

    def __init__(
        self,
        repo_root: Path = None,
        grammar: Optional[str] = None,
        syntax_data: Optional[str] = None,
        table: Tuple[ScopeRule, ...] = SCOPE_TABLE,
    ):
        self.repo_root = repo_root or find_repo_root()
        self.table = table
        self.paths = resolve_paths(self.repo_root, grammar=grammar, syntax_data=syntax_data)

    def sync(self, mode: str = "apply") -> SyncResult:
        """
        Run the pipeline.

        Args:
            mode: "apply" writes the grammar, "check" never writes

        Returns:
            SyncResult with the change report and coverage diagnostics

        Raises:
            MissingInputError: an input file is absent (nothing was modified)
            MalformedInputError: an input file could not be parsed
        """
        logger.debug("sync mode=%s repo_root=%s", mode, self.repo_root)
        check_inputs(self.paths)

        print(f"Reading syntax data from: {self.paths.syntax_data}")
        print(f"Updating grammar at:      {self.paths.grammar}\n")

        taxonomy = load_taxonomy(self.paths.syntax_data)
        document = load_grammar(self.paths.grammar)

        report, groups = synchronize(taxonomy, document, self.table)

        written = False
        if mode == "apply":
            write_grammar(document, self.paths.grammar)
            written = True
            print(f"TextMate grammar updated from syntax-data.json v{taxonomy.version}\n")
        else:
            print(f"TextMate grammar checked against syntax-data.json v{taxonomy.version}\n")

        report.print_report()

        coverage = verify_coverage(taxonomy, groups)
        for line in coverage.render():
            print(line)

        return SyncResult(
            taxonomy=taxonomy,
            document=document,
            report=report,
            coverage=coverage,
            written=written,
        )

    def run(self, check: bool = False) -> int:
        """
        CLI facade for sync.

        Returns:
            0 on success (including no changes), 1 on missing/malformed input
            or, with check=True, when drift is detected
        """
        mode = "check" if check else "apply"
        try:
            result = self.sync(mode=mode)
        except SyntaxDataError as e:
            print(f"Error: {e}")
            return 1

        if check:
            if result.has_changes:
                print(f"⚠️  Drift detected: {len(result.changes)} pattern(s) out of date")
                print("   Run 'hewgrammar sync' to update the grammar.")
                return 1
            print("✅ Grammar is in sync")
            return 0

        print("Done.")
        return 0

    def check_coverage(self, strict: bool = False) -> int:
        """
        Run only the coverage verification.

        Returns:
            0, or 1 when strict and a gap/orphan exists or the taxonomy is unusable
        """
        if not self.paths.syntax_data.exists():
            print(f"Error: syntax-data.json not found at {self.paths.syntax_data}")
            print(f"Set {SYNTAX_DATA_ENV} env var to the correct path.")
            return 1
        try:
            taxonomy = load_taxonomy(self.paths.syntax_data)
        except SyntaxDataError as e:
            print(f"Error: {e}")
            return 1

        groups = build_scope_groups(taxonomy, self.table)
        coverage = verify_coverage(taxonomy, groups)

        print(f"Keyword coverage for syntax-data.json v{taxonomy.version}")
        print(f"  {len(taxonomy.all_keywords)} keywords, {len(groups.keyword_groups())} keyword scopes\n")
        if coverage.ok:
            print("✅ All keywords covered, no orphan keywords")
            return 0

        for line in coverage.render():
            print(line)
        return 1 if strict else 0


def main(repo_root: Path) -> int:
    """Main entry point for the synchronizer."""
    return GrammarSynchronizer(repo_root).run()


if __name__ == "__main__":
    import sys
    sys.exit(main(find_repo_root()))
