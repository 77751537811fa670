"""
Insertion of patterns for scopes the grammar does not contain yet.

A new node goes to a repository section chosen by the scope prefix. The
section must already exist: the grammar's structure is hand-authored, so a
missing section is reported and the scope skipped rather than inventing one.

TextMate tries the patterns of a sequence in order and stops at the first
match, so in the variables section a new node is placed before the
variable.other.hew catch-all.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from hewgrammar.sync.changes import ChangeAction, ChangeRecord
from hewgrammar.sync.grammar import GrammarDocument, PatternNode
from hewgrammar.sync.regex import build_regex
from hewgrammar.sync.scopes import ScopeGroups

logger = logging.getLogger(__name__)

# (scope prefix, repository section), first match wins
SECTION_ROUTES: Tuple[Tuple[str, str], ...] = (
    ("keyword.", "keywords"),
    ("constant.language.", "keywords"),
    ("storage.type.", "types"),
    ("variable.language.", "variables"),
)

# section -> scope of its catch-all pattern
CATCH_ALL_SCOPES = {
    "variables": "variable.other.hew",
}

PATTERN_COMMENTS = {
    "keyword.reserved.hew": "Reserved keywords (not yet used in the language)",
    "variable.language.contextual.hew": "Contextual identifiers (special meaning in specific contexts)",
}
DEFAULT_COMMENT = "Generated from syntax-data.json"


@dataclass
class InsertionResult:
    changes: List[ChangeRecord] = field(default_factory=list)
    # (scope, reason) for scopes that could not be placed
    skipped: List[Tuple[str, str]] = field(default_factory=list)


def route_scope(scope: str) -> Optional[str]:
    """Repository section for a scope, or None for an unrouted prefix."""
    for prefix, section in SECTION_ROUTES:
        if scope.startswith(prefix):
            return section
    return None


def insertion_index(patterns: List[PatternNode], section: str) -> int:
    """Position for a new node: before the section's catch-all, else the end."""
    catch_all = CATCH_ALL_SCOPES.get(section)
    if catch_all:
        for index, node in enumerate(patterns):
            if node.name == catch_all:
                return index
    return len(patterns)


def new_pattern(scope: str, keywords) -> PatternNode:
    return PatternNode(
        comment=PATTERN_COMMENTS.get(scope, DEFAULT_COMMENT),
        name=scope,
        match=build_regex(keywords),
    )


def insert_missing(
    document: GrammarDocument,
    groups: ScopeGroups,
    handled: Set[str],
) -> InsertionResult:
    """
    Add a pattern for every scope not marked handled by the walk.

    Scopes are processed in scope table order and marked handled once added.
    """
    result = InsertionResult()

    for scope, keywords in groups.items():
        if scope in handled:
            continue

        section = route_scope(scope)
        if section is None:
            logger.debug("No section route for %s", scope)
            continue

        target = document.section(section)
        if target is None or target.patterns is None:
            logger.warning("Repository section '%s' missing, %s not added", section, scope)
            result.skipped.append((scope, f"repository.{section} not found in grammar"))
            continue

        node = new_pattern(scope, keywords)
        index = insertion_index(target.patterns, section)
        target.patterns.insert(index, node)
        logger.debug("Inserted %s at repository.%s[%d]", scope, section, index)

        result.changes.append(ChangeRecord(
            scope=scope,
            path=f"repository.{section}",
            new_match=node.match,
            action=ChangeAction.ADDED,
        ))
        handled.add(scope)

    return result
