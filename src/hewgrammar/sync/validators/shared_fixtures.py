"""
Shared fixtures and sample documents for the synchronization engine validators.

Every fixture builds its own taxonomy and grammar under tmp_path, so these
validators never depend on the repository being validated.
"""
import copy
import json
from pathlib import Path

import pytest

from hewgrammar.sync.scopes import SCOPE_TABLE, ScopeKind
from hewgrammar.utils.config import SYNTAX_DATA_ENV


KEYWORD_CATEGORIES = {
    "control_flow": ["if", "else", "match", "loop", "for", "while", "break", "continue", "return"],
    "declarations": ["fn", "let", "var", "const", "type", "struct", "enum", "trait", "impl", "pub"],
    "wire": ["wire"],
    "other": ["as", "in", "unsafe", "extern"],
    "reserved_unused": ["yield", "macro"],
}

# Keywords hardcoded in the scope table for keyword scopes
TABLE_KEYWORD_EXTRAS = sorted(
    word
    for rule in SCOPE_TABLE
    if rule.kind is ScopeKind.KEYWORD
    for word in rule.extras
)

FULL_TAXONOMY = {
    "version": "0.9.0",
    "keywords": KEYWORD_CATEGORIES,
    "types": {
        "integer": ["i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64"],
        "float": ["f32", "f64"],
        "primitive": ["bool", "char", "string"],
        "collections": ["Vec", "HashMap", "HashSet"],
        "concurrency": ["Mailbox", "Channel"],
        "other": ["Duration"],
    },
    "contextual_identifiers": {
        "description": "Identifiers with special meaning only in specific parser contexts",
        "self": {"description": "Receiver of an actor or impl method"},
        "state": {"description": "Actor state block"},
        "reply": {"description": "Reply channel inside receive"},
    },
    "all_keywords": sorted(
        {word for words in KEYWORD_CATEGORIES.values() for word in words}
        | set(TABLE_KEYWORD_EXTRAS)
    ),
}

BASE_GRAMMAR = {
    "$schema": "https://raw.githubusercontent.com/martinring/tmlanguage/master/tmlanguage.json",
    "name": "Hew",
    "scopeName": "source.hew",
    "patterns": [
        {"include": "#comments"},
        {"include": "#strings"},
        {"include": "#keywords"},
        {"include": "#types"},
        {"include": "#variables"},
    ],
    "repository": {
        "comments": {
            "patterns": [
                {"name": "comment.line.double-slash.hew", "match": "//.*$"},
                {"name": "comment.block.hew", "begin": "/\\*", "end": "\\*/"},
            ]
        },
        "strings": {
            "patterns": [
                {
                    "name": "string.quoted.double.hew",
                    "begin": "\"",
                    "end": "\"",
                    "patterns": [
                        {"name": "constant.character.escape.hew", "match": "\\\\."},
                    ],
                }
            ]
        },
        "keywords": {"patterns": []},
        "types": {"patterns": []},
        "variables": {
            "patterns": [
                {"name": "variable.language.self.hew", "match": "\\bself\\b"},
                {"name": "variable.other.hew", "match": "\\b[a-z_][a-zA-Z0-9_]*\\b"},
            ]
        },
    },
}


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def full_taxonomy():
    """A taxonomy whose keyword categories plus table extras partition all_keywords."""
    return copy.deepcopy(FULL_TAXONOMY)


@pytest.fixture
def base_grammar():
    """A grammar with empty keyword/type sections and a variables catch-all."""
    return copy.deepcopy(BASE_GRAMMAR)


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """
    Extension repo next to a compiler checkout:

        tmp_path/
        ├── hew-vscode/              (repo root)
        │   ├── .hewgrammar/
        │   └── syntaxes/hew.tmLanguage.json
        └── hew/docs/syntax-data.json
    """
    monkeypatch.delenv(SYNTAX_DATA_ENV, raising=False)
    repo_root = tmp_path / "hew-vscode"
    (repo_root / ".hewgrammar").mkdir(parents=True)
    return {
        "repo_root": repo_root,
        "grammar": repo_root / "syntaxes" / "hew.tmLanguage.json",
        "syntax_data": tmp_path / "hew" / "docs" / "syntax-data.json",
    }


@pytest.fixture
def populated_workspace(workspace, full_taxonomy, base_grammar):
    """Workspace with both input files written."""
    write_json(workspace["syntax_data"], full_taxonomy)
    write_json(workspace["grammar"], base_grammar)
    return workspace
