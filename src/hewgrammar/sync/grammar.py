"""
TextMate grammar document model (hew.tmLanguage.json).

Only the fields the synchronizer reads are modelled explicitly: name, match,
comment and nested patterns. Every other key of a node (begin, end,
captures, include, ...) is carried verbatim in `extra`, and the original key
order is remembered so a node the synchronizer does not touch is rendered
byte-identically.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from hewgrammar.sync.errors import MalformedInputError
from hewgrammar.sync.files import read_json, write_json

logger = logging.getLogger(__name__)

# Key order for nodes created by the synchronizer
NODE_KEYS = ("comment", "name", "match", "patterns")
DOCUMENT_KEYS = ("scopeName", "patterns", "repository")


class DuplicateKeyError(ValueError):
    """Raised by the JSON hook when an object repeats a key."""


def reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise DuplicateKeyError(key)
        result[key] = value
    return result


def _optional_str(data: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise MalformedInputError(f"{where}: '{key}' must be a string")
    return value


@dataclass
class PatternNode:
    """One entry of a grammar pattern sequence."""

    name: Optional[str] = None
    match: Optional[str] = None
    comment: Optional[str] = None
    patterns: Optional[List["PatternNode"]] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    key_order: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, where: str) -> "PatternNode":
        if not isinstance(data, dict):
            raise MalformedInputError(f"{where}: pattern must be an object")

        patterns = None
        if data.get("patterns") is not None:
            patterns = parse_pattern_list(data["patterns"], f"{where}.patterns")

        return cls(
            name=_optional_str(data, "name", where),
            match=_optional_str(data, "match", where),
            comment=_optional_str(data, "comment", where),
            patterns=patterns,
            # explicit nulls on modelled keys are kept verbatim
            extra={k: v for k, v in data.items() if k not in NODE_KEYS or v is None},
            key_order=list(data.keys()),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the node, keeping the key order it was loaded with."""
        known = {
            "comment": self.comment,
            "name": self.name,
            "match": self.match,
            "patterns": (
                [child.to_dict() for child in self.patterns]
                if self.patterns is not None else None
            ),
        }
        order = list(self.key_order)
        order += [k for k in NODE_KEYS if k not in order and known[k] is not None]
        order += [k for k in self.extra if k not in order]

        result: Dict[str, Any] = {}
        for key in order:
            if known.get(key) is not None:
                result[key] = known[key]
            elif key in self.extra:
                result[key] = self.extra[key]
        return result


def parse_pattern_list(value: Any, where: str) -> List[PatternNode]:
    if not isinstance(value, list):
        raise MalformedInputError(f"{where}: 'patterns' must be a list")
    return [PatternNode.from_dict(item, f"{where}[{i}]") for i, item in enumerate(value)]


@dataclass
class GrammarDocument:
    """A whole grammar: top-level patterns plus the named repository."""

    scope_name: str
    patterns: List[PatternNode]
    repository: Dict[str, PatternNode]
    extra: Dict[str, Any] = field(default_factory=dict)
    key_order: List[str] = field(default_factory=list)
    source: Path = field(default=Path("hew.tmLanguage.json"), compare=False)

    def section(self, key: str) -> Optional[PatternNode]:
        """Repository section by key, or None."""
        return self.repository.get(key)

    def sequences(self) -> Iterator[Tuple[str, List[PatternNode]]]:
        """Yield (path, patterns) for the top level and each repository section."""
        yield "patterns", self.patterns
        for key, section in self.repository.items():
            if section.patterns is not None:
                yield f"repository.{key}", section.patterns

    @classmethod
    def from_dict(cls, data: Any, source: Path = Path("hew.tmLanguage.json")) -> "GrammarDocument":
        """
        Build a GrammarDocument from parsed JSON.

        Raises:
            MalformedInputError: scopeName, patterns or repository missing or malformed
        """
        where = str(source)
        if not isinstance(data, dict):
            raise MalformedInputError(f"{where}: expected a JSON object at top level", path=source)

        missing = [key for key in DOCUMENT_KEYS if key not in data]
        if missing:
            raise MalformedInputError(
                f"{where}: missing required field(s): {', '.join(missing)}", path=source
            )
        if not isinstance(data["scopeName"], str):
            raise MalformedInputError(f"{where}: 'scopeName' must be a string", path=source)
        if not isinstance(data["repository"], dict):
            raise MalformedInputError(f"{where}: 'repository' must be an object", path=source)

        try:
            patterns = parse_pattern_list(data["patterns"], "patterns")
            repository = {
                key: PatternNode.from_dict(value, f"repository.{key}")
                for key, value in data["repository"].items()
            }
        except MalformedInputError as e:
            raise MalformedInputError(f"{where}: {e}", path=source) from e

        return cls(
            scope_name=data["scopeName"],
            patterns=patterns,
            repository=repository,
            extra={k: v for k, v in data.items() if k not in DOCUMENT_KEYS},
            key_order=list(data.keys()),
            source=source,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the document, keeping the top-level key order."""
        known = {
            "scopeName": self.scope_name,
            "patterns": [node.to_dict() for node in self.patterns],
            "repository": {key: node.to_dict() for key, node in self.repository.items()},
        }
        order = list(self.key_order)
        order += [k for k in DOCUMENT_KEYS if k not in order]
        order += [k for k in self.extra if k not in order]
        return {
            key: known[key] if key in known else self.extra[key]
            for key in order
            if key in known or key in self.extra
        }


def load_grammar(path: Path) -> GrammarDocument:
    """
    Load hew.tmLanguage.json.

    Raises:
        MissingInputError: path does not exist
        MalformedInputError: invalid JSON, duplicate keys, or wrong shape
    """
    path = Path(path)
    try:
        data = read_json(path, "hew.tmLanguage.json", object_pairs_hook=reject_duplicate_keys)
    except DuplicateKeyError as e:
        raise MalformedInputError(f"{path}: duplicate key '{e}'", path=path) from e

    document = GrammarDocument.from_dict(data, source=path)
    logger.debug(
        "Loaded grammar %s: %d top-level patterns, %d repository sections",
        document.scope_name,
        len(document.patterns),
        len(document.repository),
    )
    return document


def write_grammar(document: GrammarDocument, path: Path) -> None:
    """Rewrite the grammar file in full."""
    write_json(path, document.to_dict())
