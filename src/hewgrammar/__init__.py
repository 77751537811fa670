"""
hew-grammar - keep the Hew TextMate grammar in sync with the compiler taxonomy.

Reads the canonical syntax-data.json published by the Hew compiler and
regenerates the keyword/type match regexes of syntaxes/hew.tmLanguage.json,
leaving every hand-authored pattern untouched.
"""
from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("hew-grammar")
except PackageNotFoundError:
    __version__ = "0.0.0"
