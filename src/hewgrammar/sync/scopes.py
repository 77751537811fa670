"""
Scope table: which TextMate scope owns which keyword.

This table is the single place that assigns taxonomy categories (plus a few
Hew keywords the taxonomy does not list yet) to grammar scopes. The tree
walker, the inserter and the coverage verifier all read the groups built
from it, so they cannot disagree.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, Mapping, Tuple

from hewgrammar.sync.taxonomy import Taxonomy


class ScopeKind(Enum):
    KEYWORD = "keyword"
    TYPE = "type"
    CONTEXTUAL = "contextual"


@dataclass(frozen=True)
class ScopeRule:
    """
    One row of the scope table.

    Attributes:
        scope: TextMate scope name (e.g. keyword.control.hew)
        kind: Only KEYWORD rules take part in coverage verification
        keyword_categories: syntax-data.json `keywords` categories feeding the scope
        type_categories: syntax-data.json `types` categories feeding the scope
        extras: Literal names not derivable from the taxonomy
    """

    scope: str
    kind: ScopeKind
    keyword_categories: Tuple[str, ...] = ()
    type_categories: Tuple[str, ...] = ()
    extras: Tuple[str, ...] = ()


SCOPE_TABLE: Tuple[ScopeRule, ...] = (
    # Keywords
    ScopeRule(
        "keyword.control.hew", ScopeKind.KEYWORD,
        keyword_categories=("control_flow",),
        # actor keywords that act as control flow
        extras=("select", "join", "after", "from", "await", "scope", "cooperate"),
    ),
    ScopeRule("keyword.declaration.hew", ScopeKind.KEYWORD, keyword_categories=("declarations",)),
    ScopeRule(
        "keyword.actor.hew", ScopeKind.KEYWORD,
        extras=("actor", "receive", "init", "spawn", "move"),
    ),
    ScopeRule(
        "keyword.supervisor.hew", ScopeKind.KEYWORD,
        extras=("supervisor", "child", "restart", "budget", "strategy"),
    ),
    ScopeRule(
        "constant.language.strategy.hew", ScopeKind.KEYWORD,
        extras=(
            "permanent", "transient", "temporary",
            "one_for_one", "one_for_all", "rest_for_one",
        ),
    ),
    ScopeRule("keyword.wire.hew", ScopeKind.KEYWORD, keyword_categories=("wire",)),
    ScopeRule(
        "keyword.other.hew", ScopeKind.KEYWORD,
        keyword_categories=("other",), extras=("isolated",),
    ),
    ScopeRule("keyword.operator.logical.hew", ScopeKind.KEYWORD, extras=("and", "or")),
    ScopeRule("constant.language.boolean.hew", ScopeKind.KEYWORD, extras=("true", "false")),
    ScopeRule("keyword.reserved.hew", ScopeKind.KEYWORD, keyword_categories=("reserved_unused",)),
    # Types
    ScopeRule("storage.type.numeric.hew", ScopeKind.TYPE, type_categories=("integer", "float")),
    ScopeRule("storage.type.primitive.hew", ScopeKind.TYPE, type_categories=("primitive",)),
    ScopeRule(
        "storage.type.generic.hew", ScopeKind.TYPE,
        type_categories=("collections", "other"),
        # None is matched by constant.language.none.hew
        extras=("Option", "Result", "Ok", "Err", "Some", "Arc", "Rc", "Weak"),
    ),
    ScopeRule("storage.type.concurrency.hew", ScopeKind.TYPE, type_categories=("concurrency",)),
    ScopeRule("storage.type.trait.hew", ScopeKind.TYPE, extras=("Send", "Frozen", "Copy")),
    # Contextual identifiers (filled from contextual_identifiers keys)
    ScopeRule("variable.language.contextual.hew", ScopeKind.CONTEXTUAL),
)

# contextual_identifiers entries that are not identifiers, or have their own pattern
CONTEXTUAL_EXCLUDED: FrozenSet[str] = frozenset({"self", "description"})


@dataclass(frozen=True)
class ScopeGroups:
    """Scope -> keyword set, in scope table order."""

    groups: Mapping[str, FrozenSet[str]]
    kinds: Mapping[str, ScopeKind]

    def __contains__(self, scope: object) -> bool:
        return scope in self.groups

    def __iter__(self) -> Iterator[str]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __getitem__(self, scope: str) -> FrozenSet[str]:
        return self.groups[scope]

    def items(self):
        return self.groups.items()

    def of_kind(self, kind: ScopeKind) -> Dict[str, FrozenSet[str]]:
        return {scope: words for scope, words in self.groups.items() if self.kinds[scope] is kind}

    def keyword_groups(self) -> Dict[str, FrozenSet[str]]:
        return self.of_kind(ScopeKind.KEYWORD)


def contextual_names(taxonomy: Taxonomy) -> Tuple[str, ...]:
    return tuple(
        name for name in taxonomy.contextual_identifiers
        if name not in CONTEXTUAL_EXCLUDED
    )


def build_scope_groups(taxonomy: Taxonomy, table: Tuple[ScopeRule, ...] = SCOPE_TABLE) -> ScopeGroups:
    """
    Map every scope of the table to its deduplicated keyword set.

    Categories absent from the taxonomy contribute nothing. A scope that ends
    up with no words is left out entirely: an empty alternation would match
    the empty string at every word boundary.
    """
    groups: Dict[str, FrozenSet[str]] = {}
    kinds: Dict[str, ScopeKind] = {}

    for rule in table:
        words = set(rule.extras)
        for category in rule.keyword_categories:
            words.update(taxonomy.keyword_category(category))
        for category in rule.type_categories:
            words.update(taxonomy.type_category(category))
        if rule.kind is ScopeKind.CONTEXTUAL:
            words.update(contextual_names(taxonomy))
        if not words:
            continue

        groups[rule.scope] = frozenset(words)
        kinds[rule.scope] = rule.kind

    return ScopeGroups(groups=MappingProxyType(groups), kinds=MappingProxyType(kinds))
