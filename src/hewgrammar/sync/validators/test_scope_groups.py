"""
Sync validators: scope table and scope group construction.

Validates:
- Each taxonomy category feeds its scope, with hardcoded extras merged in
- Integer and float types share the numeric scope
- Contextual identifiers exclude metadata and self
- Scopes without any word are left out
"""
import pytest

from hewgrammar.sync.scopes import (
    SCOPE_TABLE,
    ScopeKind,
    ScopeRule,
    build_scope_groups,
)
from hewgrammar.sync.taxonomy import Taxonomy


def make_taxonomy(keywords=None, types=None, contextual=None, all_keywords=()):
    return Taxonomy(
        version="1",
        keywords={k: tuple(v) for k, v in (keywords or {}).items()},
        types={k: tuple(v) for k, v in (types or {}).items()},
        contextual_identifiers=contextual or {},
        all_keywords=tuple(all_keywords),
    )


@pytest.mark.sync
def test_scope_table_has_unique_scopes():
    """
    Given: The scope table
    When: Collecting scope names
    Then: No scope is listed twice
    """
    scopes = [rule.scope for rule in SCOPE_TABLE]
    assert len(scopes) == len(set(scopes))


@pytest.mark.sync
def test_numeric_scope_combines_integer_and_float(full_taxonomy):
    """
    Given: Integer and float type categories
    When: Building scope groups
    Then: storage.type.numeric.hew holds both
    """
    groups = build_scope_groups(Taxonomy.from_dict(full_taxonomy))

    assert groups["storage.type.numeric.hew"] == frozenset(
        full_taxonomy["types"]["integer"] + full_taxonomy["types"]["float"]
    )
    assert groups.kinds["storage.type.numeric.hew"] is ScopeKind.TYPE


@pytest.mark.sync
def test_control_scope_merges_extras():
    """
    Given: control_flow = [if, else]
    When: Building scope groups
    Then: keyword.control.hew holds them plus the actor control keywords
    """
    groups = build_scope_groups(make_taxonomy(keywords={"control_flow": ["if", "else"]}))

    control = groups["keyword.control.hew"]
    assert {"if", "else"} <= control
    assert {"select", "join", "after", "from", "await", "scope", "cooperate"} <= control


@pytest.mark.sync
def test_generic_scope_includes_constructors_and_smart_pointers():
    """
    Given: collections and other type categories
    When: Building scope groups
    Then: storage.type.generic.hew adds Option/Result constructors and Arc/Rc/Weak
    """
    groups = build_scope_groups(make_taxonomy(types={"collections": ["Vec"], "other": ["Duration"]}))

    assert groups["storage.type.generic.hew"] == frozenset(
        {"Vec", "Duration", "Option", "Result", "Ok", "Err", "Some", "Arc", "Rc", "Weak"}
    )
    assert "None" not in groups["storage.type.generic.hew"]


@pytest.mark.sync
def test_contextual_group_excludes_metadata_and_self(full_taxonomy):
    """
    Given: contextual_identifiers with description, self, state, reply
    When: Building scope groups
    Then: Only state and reply form the contextual group
    """
    groups = build_scope_groups(Taxonomy.from_dict(full_taxonomy))

    assert groups["variable.language.contextual.hew"] == frozenset({"state", "reply"})
    assert groups.kinds["variable.language.contextual.hew"] is ScopeKind.CONTEXTUAL


@pytest.mark.sync
def test_duplicate_sources_are_deduplicated():
    """
    Given: A keyword listed both in the taxonomy and as a hardcoded extra
    When: Building scope groups
    Then: The group is a set with the keyword once
    """
    groups = build_scope_groups(make_taxonomy(keywords={"other": ["isolated", "as", "as"]}))

    assert groups["keyword.other.hew"] == frozenset({"isolated", "as"})


@pytest.mark.sync
def test_empty_scopes_are_omitted():
    """
    Given: A taxonomy without reserved_unused or concurrency types
    When: Building scope groups
    Then: Those scopes are absent, hardcoded-only scopes remain
    """
    groups = build_scope_groups(make_taxonomy())

    assert "keyword.reserved.hew" not in groups
    assert "storage.type.concurrency.hew" not in groups
    assert "variable.language.contextual.hew" not in groups
    assert groups["constant.language.boolean.hew"] == frozenset({"true", "false"})


@pytest.mark.sync
def test_groups_follow_table_order(full_taxonomy):
    """
    Given: A taxonomy feeding every scope
    When: Iterating the groups
    Then: Scopes come in scope table order
    """
    groups = build_scope_groups(Taxonomy.from_dict(full_taxonomy))

    assert list(groups) == [rule.scope for rule in SCOPE_TABLE]


@pytest.mark.sync
def test_custom_table_is_honoured():
    """
    Given: A one-row table
    When: Building scope groups with it
    Then: Only that scope is produced
    """
    table = (ScopeRule("keyword.control.hew", ScopeKind.KEYWORD, keyword_categories=("control_flow",)),)

    groups = build_scope_groups(make_taxonomy(keywords={"control_flow": ["if"]}), table)

    assert list(groups) == ["keyword.control.hew"]
    assert groups.keyword_groups() == {"keyword.control.hew": frozenset({"if"})}
