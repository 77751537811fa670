"""
Fixtures for the repository grammar validators.

Path resolution strategy:
- REPO_ROOT (via find_repo_root()) = extension repository being validated
- PATHS (via resolve_paths()) = grammar and syntax-data.json locations from
  .hewgrammar/config.yaml, HEW_SYNTAX_DATA and defaults
"""
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from hewgrammar.sync.errors import SyntaxDataError
from hewgrammar.sync.grammar import DuplicateKeyError, reject_duplicate_keys
from hewgrammar.sync.taxonomy import Taxonomy, load_taxonomy
from hewgrammar.utils.config import SyncPaths, resolve_paths
from hewgrammar.utils.repo import find_repo_root


REPO_ROOT = find_repo_root()


def pytest_configure(config):
    config.addinivalue_line("markers", "grammar: repository grammar validation")


@pytest.fixture(scope="module")
def sync_paths() -> SyncPaths:
    """Resolved input locations for the repository under validation."""
    return resolve_paths(REPO_ROOT)


@pytest.fixture(scope="module")
def grammar_text(sync_paths) -> str:
    """Raw text of hew.tmLanguage.json."""
    if not sync_paths.grammar.exists():
        pytest.skip(f"Grammar not found at {sync_paths.grammar}")
    return sync_paths.grammar.read_text(encoding="utf-8")


@pytest.fixture(scope="module")
def grammar_json(grammar_text, sync_paths) -> Dict[str, Any]:
    """hew.tmLanguage.json parsed with duplicate keys rejected."""
    try:
        return json.loads(grammar_text, object_pairs_hook=reject_duplicate_keys)
    except DuplicateKeyError as e:
        pytest.fail(f"{sync_paths.grammar}: duplicate key '{e}'")
    except json.JSONDecodeError as e:
        pytest.fail(f"{sync_paths.grammar} is not valid JSON: {e}")


@pytest.fixture(scope="module")
def taxonomy(sync_paths) -> Taxonomy:
    """The compiler's syntax-data.json, when it is checked out."""
    if not Path(sync_paths.syntax_data).exists():
        pytest.skip(f"syntax-data.json not found at {sync_paths.syntax_data}")
    try:
        return load_taxonomy(sync_paths.syntax_data)
    except SyntaxDataError as e:
        pytest.fail(str(e))
