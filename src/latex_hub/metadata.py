"""Front-matter extraction from LaTeX sources."""
from __future__ import annotations

import re
from typing import List, Optional

from .models import DocumentMetadata

AUTHOR_PATTERN = re.compile(r"\\author(\[.*?\])?\{")
PACKAGE_PATTERN = re.compile(r"\\usepackage(?:\[.*?\])?\{(?P<name>[^}]+)\}")


def extract_braced_argument(content: str, command: str) -> Optional[str]:
    """Return the brace-balanced argument following the first ``command``.

    ``command`` includes its opening brace, e.g. ``"\\title{"``; nested
    groups are kept verbatim.
    """

    start = content.find(command)
    if start == -1:
        return None

    depth = 0
    started = False
    chars: List[str] = []
    # back up one so the command's own brace opens the group
    for char in content[start + len(command) - 1 :]:
        if char == "{":
            depth += 1
            started = True
            if depth > 1:
                chars.append(char)
        elif char == "}":
            depth -= 1
            if depth == 0:
                break
            chars.append(char)
        elif started:
            chars.append(char)
    return "".join(chars).strip() or None


def extract_environment(content: str, name: str) -> Optional[str]:
    pattern = re.compile(r"\\begin\{%s\}(.*?)\\end\{%s\}" % (re.escape(name), re.escape(name)), re.DOTALL)
    match = pattern.search(content)
    return match.group(1).strip() if match else None


def count_authors(content: str) -> int:
    return len(AUTHOR_PATTERN.findall(content))


def extract_keywords(content: str) -> Optional[str]:
    return (
        extract_environment(content, "keyword")
        or extract_braced_argument(content, "\\keywords{")
        or extract_environment(content, "IEEEkeywords")
    )


def extract_packages(content: str) -> List[str]:
    return [match.group("name") for match in PACKAGE_PATTERN.finditer(content)]


def extract_document_metadata(content: str) -> DocumentMetadata:
    """Collect title, journal, authors and structural flags from ``content``."""

    content = content or ""
    return DocumentMetadata(
        title=extract_braced_argument(content, "\\title{"),
        journal=extract_braced_argument(content, "\\journal{") or extract_braced_argument(content, "\\journalname{"),
        author_count=count_authors(content),
        abstract=extract_environment(content, "abstract"),
        keywords=extract_keywords(content),
        packages=extract_packages(content),
        has_abstract="\\begin{abstract}" in content,
        has_keywords="\\begin{keyword}" in content or "\\keywords{" in content,
        has_bibliography="\\bibliography{" in content or "\\begin{thebibliography}" in content,
    )
