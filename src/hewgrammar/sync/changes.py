"""
Change records and the change report printed after a sync.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class ChangeAction(Enum):
    UPDATED = "updated"
    ADDED = "added"


@dataclass(frozen=True)
class ChangeRecord:
    """A single rewritten or inserted pattern."""

    scope: str
    path: str
    new_match: str
    action: ChangeAction
    old_match: Optional[str] = None


class ChangeReport:
    """Append-only log of ChangeRecords in emission order."""

    def __init__(self):
        self._records: List[ChangeRecord] = []
        self._skipped: List[Tuple[str, str]] = []

    def record(self, change: ChangeRecord) -> None:
        self._records.append(change)

    def extend(self, changes) -> None:
        for change in changes:
            self.record(change)

    def skip(self, scope: str, reason: str) -> None:
        """Note a scope that could not be placed in the grammar."""
        self._skipped.append((scope, reason))

    @property
    def records(self) -> Tuple[ChangeRecord, ...]:
        return tuple(self._records)

    @property
    def skipped(self) -> Tuple[Tuple[str, str], ...]:
        """(scope, reason) pairs for scopes that could not be placed."""
        return tuple(self._skipped)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ChangeRecord]:
        return iter(self.records)

    def count(self, action: ChangeAction) -> int:
        return sum(1 for c in self._records if c.action is action)

    def render(self) -> List[str]:
        """Render the report as console lines."""
        lines: List[str] = []
        if not self._records:
            lines.append("No changes needed, grammar already in sync.")
        else:
            lines.append(f"{len(self._records)} pattern(s) changed:")
            lines.append("")
            for change in self._records:
                if change.action is ChangeAction.ADDED:
                    lines.append(f"  + {change.scope} (new pattern in {change.path})")
                    lines.append(f"    {change.new_match}")
                else:
                    lines.append(f"  ~ {change.scope} ({change.path})")
                    lines.append(f"    old: {change.old_match}")
                    lines.append(f"    new: {change.new_match}")
                lines.append("")

        if self._skipped:
            lines.append("")
            lines.append(f"⚠️  {len(self._skipped)} scope(s) not added to the grammar:")
            for scope, reason in self._skipped:
                lines.append(f"   • {scope}: {reason}")
        return lines

    def print_report(self) -> None:
        for line in self.render():
            print(line)
