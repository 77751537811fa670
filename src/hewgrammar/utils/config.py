"""
hew-grammar configuration loader.

Loads configuration from .hewgrammar/config.yaml and resolves the two input
paths. Every key is optional:

    grammar:
      path: syntaxes/hew.tmLanguage.json
      scope_name: source.hew
    syntax_data:
      path: ../hew/docs/syntax-data.json
    coverage:
      phase: warnings        # warnings | strict

Precedence for the syntax-data.json location:
    --syntax-data flag > HEW_SYNTAX_DATA > config > default
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hewgrammar.utils.repo import CONFIG_DIR_NAME

SYNTAX_DATA_ENV = "HEW_SYNTAX_DATA"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "grammar": {
        "path": "syntaxes/hew.tmLanguage.json",
        "scope_name": "source.hew",
    },
    "syntax_data": {
        # sibling compiler checkout
        "path": "../hew/docs/syntax-data.json",
    },
    "coverage": {
        "phase": "warnings",
    },
}


def config_path(repo_root: Path) -> Path:
    return repo_root / CONFIG_DIR_NAME / "config.yaml"


def load_config(repo_root: Path) -> Dict[str, Any]:
    """
    Load .hewgrammar/config.yaml.

    Args:
        repo_root: Repository root path

    Returns:
        Parsed configuration dict, or empty dict if the file doesn't exist

    Raises:
        yaml.YAMLError: the file exists but is not valid YAML
    """
    path = config_path(repo_root)
    if not path.exists():
        return {}

    with open(path) as f:
        config = yaml.safe_load(f)
    return config if isinstance(config, dict) else {}


def section_with_defaults(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Section of an already loaded config, with defaults applied."""
    values = dict(config.get(section) or {})
    for key, default_value in DEFAULTS.get(section, {}).items():
        if key not in values:
            values[key] = default_value
    return values


def get_section(repo_root: Path, section: str) -> Dict[str, Any]:
    """Config section with defaults applied."""
    return section_with_defaults(load_config(repo_root), section)


@dataclass(frozen=True)
class SyncPaths:
    """Resolved input/output locations for one run."""

    repo_root: Path
    grammar: Path
    syntax_data: Path
    scope_name: str


def _resolve(repo_root: Path, value) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = repo_root / path
    return path.resolve()


def resolve_paths(
    repo_root: Path,
    grammar: Optional[str] = None,
    syntax_data: Optional[str] = None,
) -> SyncPaths:
    """
    Resolve grammar and syntax-data.json paths for a run.

    Args:
        repo_root: Repository root path
        grammar: Explicit grammar path (CLI flag)
        syntax_data: Explicit syntax-data.json path (CLI flag)
    """
    config = load_config(repo_root)
    grammar_config = section_with_defaults(config, "grammar")
    syntax_config = section_with_defaults(config, "syntax_data")

    # flag and env values are relative to cwd, config values to the repo root
    override = syntax_data or os.environ.get(SYNTAX_DATA_ENV)
    if override:
        syntax_path = _resolve(Path.cwd(), override)
    else:
        syntax_path = _resolve(repo_root, syntax_config["path"])
    if grammar:
        grammar_path = _resolve(Path.cwd(), grammar)
    else:
        grammar_path = _resolve(repo_root, grammar_config["path"])

    return SyncPaths(
        repo_root=repo_root,
        grammar=grammar_path,
        syntax_data=syntax_path,
        scope_name=grammar_config["scope_name"],
    )
