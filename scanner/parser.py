"""Reading schema source documents and extracting their identity."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

from assembler.errors import SourceReadError


# Quoted strings and comments, matched together so that comment markers
# inside strings are left alone
_TOKEN_RE = re.compile(
    r""""(?:\\.|[^"\\])*"|'[^']*'|//[^\n]*|/\*.*?\*/""",
    re.DOTALL,
)

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

_HEADER_RE = re.compile(
    r"""^\s*(module|submodule)\s+(?:"([^"]+)"|'([^']+)'|([A-Za-z_][\w.\-]*))""",
    re.MULTILINE,
)

_REVISION_RE = re.compile(r"\brevision\s+(\d{4}-\d{2}-\d{2})\b")


def _strip_comments(text: str) -> str:
    """Remove comments, keeping quoted strings intact."""
    def replace(match):
        token = match.group(0)
        if token.startswith(("//", "/*")):
            return " "
        return token

    return _TOKEN_RE.sub(replace, text)


def _strip_strings(text: str) -> str:
    """Remove comments and blank out quoted strings, unquoting bare dates."""
    def replace(match):
        token = match.group(0)
        if token.startswith(("//", "/*")):
            return " "
        content = token[1:-1].strip()
        if _DATE_RE.fullmatch(content):
            return content
        return '""'

    return _TOKEN_RE.sub(replace, text)


@dataclass(frozen=True)
class SourceDocument:
    """The contents of one schema source file and the identity it declares."""

    path: Path
    text: str = field(repr=False)
    name: str
    revision: Optional[str] = None
    kind: Optional[str] = None


def extract_header(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the module or submodule header of a schema document.

    Args:
        text: Raw document text.

    Returns:
        (kind, name) tuple, or (None, None) if no header statement is found.
    """
    stripped = _strip_comments(text)
    match = _HEADER_RE.search(stripped)
    if match is None:
        return None, None
    name = match.group(2) or match.group(3) or match.group(4)
    return match.group(1), name.strip()


def extract_revision(text: str) -> Optional[str]:
    """Return the latest revision date declared in the document, if any."""
    revisions = _REVISION_RE.findall(_strip_strings(text))
    if not revisions:
        return None
    return max(revisions)


def name_from_filename(path: Path) -> str:
    """Derive a module name from a file name such as ``name@2020-01-01.yang``."""
    stem = path.name
    if "." in stem:
        stem = stem[: stem.rindex(".")]
    return stem.split("@", 1)[0]


def read_source(path: Union[str, Path]) -> SourceDocument:
    """
    Read a schema source file.

    The module name comes from the document's own header statement, not
    the file name; the file name is used only when no header is found.

    Raises:
        SourceReadError: If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e

    kind, name = extract_header(text)
    if name is None:
        name = name_from_filename(path)

    return SourceDocument(
        path=path,
        text=text,
        name=name,
        revision=extract_revision(text),
        kind=kind,
    )
