"""
Keyword coverage verification.

Cross-checks the taxonomy's authoritative all_keywords list against the
keyword scope groups. Type and contextual groups are not keywords and do
not take part. Results are diagnostics only.
"""
from dataclasses import dataclass
from typing import List, Set, Tuple

from hewgrammar.sync.scopes import ScopeGroups
from hewgrammar.sync.taxonomy import Taxonomy


@dataclass(frozen=True)
class CoverageResult:
    # in all_keywords, but in no keyword scope (all_keywords order)
    gaps: Tuple[str, ...]
    # in a keyword scope, but not in all_keywords (sorted)
    orphans: Tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.gaps and not self.orphans

    def render(self) -> List[str]:
        lines: List[str] = []
        if self.gaps:
            lines.append("⚠️  Keywords in all_keywords not assigned to any grammar scope:")
            lines.append(f"   {', '.join(self.gaps)}")
            lines.append("")
        if self.orphans:
            lines.append("⚠️  Keywords in grammar scopes but not in all_keywords:")
            lines.append(f"   {', '.join(self.orphans)}")
            lines.append("")
        return lines


def covered_keywords(groups: ScopeGroups) -> Set[str]:
    covered: Set[str] = set()
    for words in groups.keyword_groups().values():
        covered.update(words)
    return covered


def verify_coverage(taxonomy: Taxonomy, groups: ScopeGroups) -> CoverageResult:
    covered = covered_keywords(groups)
    authoritative = set(taxonomy.all_keywords)

    gaps = []
    for keyword in taxonomy.all_keywords:
        if keyword not in covered and keyword not in gaps:
            gaps.append(keyword)

    return CoverageResult(
        gaps=tuple(gaps),
        orphans=tuple(sorted(covered - authoritative)),
    )
