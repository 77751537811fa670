"""
Keyword coverage enforcement phase.

Coverage gaps and orphan keywords are always warnings for `hewgrammar sync`.
The grammar validators can be made strict per repository:

    # .hewgrammar/config.yaml
    coverage:
      phase: strict

Usage in validators:
    from hewgrammar.utils.coverage_phase import CoveragePhase, should_enforce

    if should_enforce(REPO_ROOT):
        assert not result.gaps, "Error message"
    else:
        if result.gaps:
            emit_coverage_warning("COVERAGE-GAP", "Warning message")
"""

from enum import IntEnum
from pathlib import Path
from typing import Optional
import warnings

from hewgrammar.utils.config import get_section


class CoveragePhase(IntEnum):
    """
    Enforcement phases, ordered by strictness:
    - WARNINGS_ONLY (1): coverage problems emit warnings
    - STRICT (2): coverage problems fail the validators
    """
    WARNINGS_ONLY = 1
    STRICT = 2


_PHASE_NAMES = {
    "warnings": CoveragePhase.WARNINGS_ONLY,
    "strict": CoveragePhase.STRICT,
}


def get_current_phase(repo_root: Path) -> CoveragePhase:
    """Phase configured for the repository (warnings when unset or unknown)."""
    value = str(get_section(repo_root, "coverage")["phase"]).lower()
    return _PHASE_NAMES.get(value, CoveragePhase.WARNINGS_ONLY)


def should_enforce(repo_root: Path, validator_phase: CoveragePhase = CoveragePhase.STRICT) -> bool:
    """True if the configured phase is at least validator_phase."""
    return get_current_phase(repo_root) >= validator_phase


def get_phase_name(phase: Optional[CoveragePhase] = None) -> str:
    """Get human-readable name for a phase."""
    phase = phase or CoveragePhase.WARNINGS_ONLY
    return {
        CoveragePhase.WARNINGS_ONLY: "Phase 1: Warnings Only",
        CoveragePhase.STRICT: "Phase 2: Strict",
    }.get(phase, "Unknown Phase")


def emit_coverage_warning(check_id: str, message: str) -> None:
    """
    Emit a coverage warning with phase context.

    Args:
        check_id: Identifier of the check (e.g., "COVERAGE-GAP")
        message: The warning message
    """
    warnings.warn(
        f"[{check_id}] {message} (becomes an error in {get_phase_name(CoveragePhase.STRICT)})",
        category=UserWarning,
        stacklevel=3,
    )
