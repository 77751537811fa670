"""
Tree walk that refreshes the match regex of known-scope patterns.

Nodes are identified by their `name` (scope), never by position, so a
pattern is found wherever it sits in the tree. Only the `match` field of a
recognized node is ever rewritten; nothing is deleted or reordered.
"""
import logging
from typing import List, Optional, Set, Tuple

from hewgrammar.sync.changes import ChangeAction, ChangeRecord
from hewgrammar.sync.grammar import GrammarDocument, PatternNode
from hewgrammar.sync.regex import build_regex
from hewgrammar.sync.scopes import ScopeGroups

logger = logging.getLogger(__name__)


def update_patterns(
    patterns: List[PatternNode],
    path: str,
    groups: ScopeGroups,
    handled: Set[str],
    changes: List[ChangeRecord],
) -> None:
    """
    Update every recognized node of a pattern sequence, recursively.

    Args:
        patterns: Sequence to visit (mutated in place)
        path: Dotted location reported in change records
        groups: Scope groups built from the taxonomy
        handled: Accumulator of scopes found with a match field
        changes: Accumulator of change records
    """
    for node in patterns:
        scope = node.name
        if scope and scope in groups and node.match is not None:
            new_regex = build_regex(groups[scope])
            if node.match != new_regex:
                changes.append(ChangeRecord(
                    scope=scope,
                    path=path,
                    old_match=node.match,
                    new_match=new_regex,
                    action=ChangeAction.UPDATED,
                ))
                node.match = new_regex
                logger.debug("Updated %s in %s", scope, path)
            handled.add(scope)

        if node.patterns:
            update_patterns(node.patterns, path, groups, handled, changes)


def walk_grammar(
    document: GrammarDocument,
    groups: ScopeGroups,
    handled: Optional[Set[str]] = None,
) -> Tuple[List[ChangeRecord], Set[str]]:
    """
    Walk the top-level patterns and every repository section.

    Returns:
        (change records, handled scopes)
    """
    handled = set() if handled is None else handled
    changes: List[ChangeRecord] = []
    for path, patterns in document.sequences():
        update_patterns(patterns, path, groups, handled, changes)
    return changes, handled
