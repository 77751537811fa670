"""
Keyword alternation regexes.
"""
from typing import Iterable


def build_regex(keywords: Iterable[str]) -> str:
    """
    Build a word-bounded alternation of the given keywords.

    Keywords are deduplicated and sorted, so equal sets always produce the
    same string regardless of enumeration order.

    Example:
        build_regex(["if", "else", "if"]) -> r"\\b(else|if)\\b"
    """
    return r"\b(" + "|".join(sorted(set(keywords))) + r")\b"
