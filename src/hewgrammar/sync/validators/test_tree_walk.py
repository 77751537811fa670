"""
Sync validators: tree walk over existing patterns.

Validates:
- Recognized scopes are updated wherever they are nested
- Unchanged regexes produce no change record but are marked handled
- Unrecognized nodes and nodes without match are left untouched
"""
import copy

import pytest

from hewgrammar.sync.changes import ChangeAction
from hewgrammar.sync.grammar import GrammarDocument
from hewgrammar.sync.regex import build_regex
from hewgrammar.sync.scopes import build_scope_groups
from hewgrammar.sync.taxonomy import Taxonomy
from hewgrammar.sync.walker import update_patterns, walk_grammar


@pytest.fixture
def groups(full_taxonomy):
    return build_scope_groups(Taxonomy.from_dict(full_taxonomy))


@pytest.mark.sync
def test_stale_top_level_node_is_updated(base_grammar, groups):
    """
    Given: A top-level keyword.reserved.hew node with a stale regex
    When: Walking the grammar
    Then: The regex is replaced and one updated record names path 'patterns'
    """
    base_grammar["patterns"].append({"name": "keyword.reserved.hew", "match": "\\b(goto)\\b"})
    document = GrammarDocument.from_dict(base_grammar)

    changes, handled = walk_grammar(document, groups)

    assert document.patterns[-1].match == r"\b(macro|yield)\b"
    assert len(changes) == 1
    change = changes[0]
    assert change.action is ChangeAction.UPDATED
    assert change.scope == "keyword.reserved.hew"
    assert change.path == "patterns"
    assert change.old_match == "\\b(goto)\\b"
    assert change.new_match == r"\b(macro|yield)\b"
    assert handled == {"keyword.reserved.hew"}


@pytest.mark.sync
def test_deeply_nested_node_is_found_by_name(base_grammar, groups):
    """
    Given: keyword.wire.hew nested three levels deep inside repository.strings
    When: Walking the grammar
    Then: It is updated and reported under repository.strings
    """
    base_grammar["repository"]["strings"]["patterns"][0]["patterns"].append({
        "begin": "\\{",
        "end": "\\}",
        "patterns": [{"patterns": [{"name": "keyword.wire.hew", "match": "old"}]}],
    })
    document = GrammarDocument.from_dict(base_grammar)

    changes, handled = walk_grammar(document, groups)

    nested = document.repository["strings"].patterns[0].patterns[1].patterns[0].patterns[0]
    assert nested.match == r"\b(wire)\b"
    assert [c.path for c in changes] == ["repository.strings"]
    assert "keyword.wire.hew" in handled


@pytest.mark.sync
def test_up_to_date_node_is_handled_without_change(base_grammar, groups):
    """
    Given: A keyword.operator.logical.hew node already in sync
    When: Walking the grammar
    Then: No change is recorded but the scope is handled
    """
    base_grammar["repository"]["keywords"]["patterns"].append(
        {"name": "keyword.operator.logical.hew", "match": build_regex(["or", "and"])}
    )
    document = GrammarDocument.from_dict(base_grammar)

    changes, handled = walk_grammar(document, groups)

    assert changes == []
    assert handled == {"keyword.operator.logical.hew"}


@pytest.mark.sync
def test_unrecognized_and_matchless_nodes_untouched(base_grammar, groups):
    """
    Given: An unknown-scope node and a known-scope node with begin/end only
    When: Walking the grammar
    Then: Both render exactly as before and neither scope is handled
    """
    unknown = {"name": "keyword.operator.arrow.hew", "match": "->"}
    matchless = {"name": "keyword.control.hew", "begin": "\\bif\\b", "end": "\\{"}
    base_grammar["repository"]["keywords"]["patterns"] += [unknown, matchless]
    document = GrammarDocument.from_dict(base_grammar)
    before = copy.deepcopy(document.to_dict())

    changes, handled = walk_grammar(document, groups)

    assert changes == []
    assert handled == set()
    assert document.to_dict() == before


@pytest.mark.sync
def test_update_patterns_accumulates_into_given_collections(base_grammar, groups):
    """
    Given: Pre-filled handled set and change list
    When: Calling update_patterns on one sequence
    Then: Results are appended to the same objects
    """
    base_grammar["repository"]["types"]["patterns"].append(
        {"name": "storage.type.trait.hew", "match": "\\b(Send)\\b"}
    )
    document = GrammarDocument.from_dict(base_grammar)
    handled = {"already.there"}
    changes = []

    update_patterns(document.repository["types"].patterns, "repository.types", groups, handled, changes)

    assert handled == {"already.there", "storage.type.trait.hew"}
    assert [c.new_match for c in changes] == [r"\b(Copy|Frozen|Send)\b"]


@pytest.mark.sync
def test_walk_never_reorders_or_removes(base_grammar, groups):
    """
    Given: A section mixing known and unknown scopes
    When: Walking the grammar
    Then: Node count and name order are unchanged
    """
    base_grammar["repository"]["keywords"]["patterns"] = [
        {"name": "keyword.operator.arrow.hew", "match": "->"},
        {"name": "keyword.control.hew", "match": "x"},
        {"include": "#types"},
        {"name": "constant.language.boolean.hew", "match": "y"},
    ]
    document = GrammarDocument.from_dict(base_grammar)

    walk_grammar(document, groups)

    names = [node.name for node in document.repository["keywords"].patterns]
    assert names == [
        "keyword.operator.arrow.hew",
        "keyword.control.hew",
        None,
        "constant.language.boolean.hew",
    ]
