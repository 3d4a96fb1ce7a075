"""Journal family detection for LaTeX sources.

Scoring is a plain substring heuristic over the head of the document: each
publisher family earns its document-class weight when the declared class is
one of its own, plus the weight of every marker command present in the
scanned text. Markers count once no matter how often they occur, and a
marker inside a LaTeX comment still counts.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from .journal_patterns import (
    JOURNAL_PATTERNS,
    SPRINGER_BIB_STYLES,
    SPRINGER_DEFAULT_BIB_STYLE,
    canonical_document_class,
)
from .logging_config import get_logger
from .models import DetectionResult, JournalFamily, JournalPatternSet

logger = get_logger(__name__)

SCAN_LINE_LIMIT = 150

DOCUMENT_CLASS_PATTERN = re.compile(r"\\documentclass(?:\[(?P<options>[^\]]*)\])?\{(?P<name>[^}]+)\}")
BIBLIOGRAPHY_STYLE_PATTERN = re.compile(r"\\bibliographystyle\{(?P<style>[^}]+)\}")
LOGO_GRAPHIC_PATTERN = re.compile(r"\\includegraphics.*?\{(?P<path>[^}]*[Ll][Oo][Gg][Oo][^}]*)\}")

INCLUDE_GRAPHICS = "\\includegraphics"
TMI_LOGO_MARKER = "LOGO-tmi-web"
TMI_LOGO_FILE = "LOGO-tmi-web.eps"

FamilyScore = Tuple[int, Tuple[str, ...]]


def scan_window(text: str, line_limit: int = SCAN_LINE_LIMIT) -> str:
    """Return the leading lines that classification looks at."""
    return "\n".join(text.split("\n")[:line_limit])


def parse_document_class(text: str) -> Tuple[Optional[str], Tuple[str, ...]]:
    """Return ``(class_name, options)`` for the first ``\\documentclass``."""
    match = DOCUMENT_CLASS_PATTERN.search(text)
    if not match:
        return None, ()
    options = match.group("options")
    parsed = tuple(opt.strip() for opt in options.split(",")) if options else ()
    return match.group("name"), parsed


def _class_score(pattern_set: JournalPatternSet, class_name: Optional[str]) -> FamilyScore:
    if class_name is None or class_name not in pattern_set.document_class_names:
        return 0, ()
    return pattern_set.document_class_weight, (f"Document class: {class_name}",)


def _marker_score(pattern_set: JournalPatternSet, text: str) -> FamilyScore:
    hits = [(marker, weight) for marker, weight in pattern_set.command_weights.items() if marker in text]
    signals = tuple(f"{pattern_set.label}: {marker}" for marker, _ in hits)
    return sum(weight for _, weight in hits), signals


def _pick_winner(scores: Dict[str, int], patterns: Sequence[JournalPatternSet]) -> Tuple[str, int]:
    best = max(scores.values()) if scores else 0
    if best <= 0:
        return JournalFamily.GENERIC, 0
    # ties go to the earliest family in declaration order
    for pattern_set in patterns:
        if scores[pattern_set.family] == best:
            return pattern_set.family, best
    return JournalFamily.GENERIC, 0


def requires_logo(text: str, family: str) -> bool:
    """IEEE logos need a logo-looking graphic; Springer needs any graphic."""
    has_graphic = INCLUDE_GRAPHICS in text
    if family == JournalFamily.IEEE:
        return has_graphic and ("LOGO-" in text or "logo" in text)
    if family == JournalFamily.SPRINGER_NATURE:
        return has_graphic
    return False


def detect_logo_name(text: str) -> Optional[str]:
    match = LOGO_GRAPHIC_PATTERN.search(text)
    if match:
        return match.group("path")
    if TMI_LOGO_MARKER in text:
        return TMI_LOGO_FILE
    return None


def detect_bibliography_style(text: str, patterns: Sequence[JournalPatternSet] = JOURNAL_PATTERNS) -> Optional[str]:
    """Explicit ``\\bibliographystyle`` wins, otherwise infer from class names."""
    match = BIBLIOGRAPHY_STYLE_PATTERN.search(text)
    if match:
        return match.group("style")

    by_family = {pattern_set.family: pattern_set for pattern_set in patterns}
    elsevier = by_family.get(JournalFamily.ELSEVIER)
    if elsevier and any(name in text for name in elsevier.document_class_names):
        return "elsarticle-num"
    if "acmart" in text:
        return "ACM-Reference-Format"
    if "IEEEtran" in text or "ieeecolor" in text:
        return "IEEEtran"
    if "sn-jnl" in text:
        for marker, style in SPRINGER_BIB_STYLES:
            if marker in text:
                return style
        return SPRINGER_DEFAULT_BIB_STYLE
    return None


def classify(document_text: str, patterns: Sequence[JournalPatternSet] = JOURNAL_PATTERNS) -> DetectionResult:
    """Score ``document_text`` against every family and return the best match.

    Never raises: text without any recognised signal yields the generic
    family, confidence 0 and document class ``"unknown"``.
    """

    text = scan_window(document_text or "")
    class_name, class_options = parse_document_class(text)

    scores: Dict[str, int] = {}
    signals: List[str] = []
    document_class = "unknown"

    # Class checks run first for every family so their signals lead the list.
    for pattern_set in patterns:
        weight, fired = _class_score(pattern_set, class_name)
        scores[pattern_set.family] = weight
        signals.extend(fired)
        if fired:
            # last matching family keeps the label
            document_class = canonical_document_class(pattern_set, class_name or "")

    for pattern_set in patterns:
        weight, fired = _marker_score(pattern_set, text)
        scores[pattern_set.family] += weight
        signals.extend(fired)

    family, confidence = _pick_winner(scores, patterns)
    logger.debug("Journal scores %s -> %s (%d)", scores, family, confidence)

    return DetectionResult(
        journal_family=family,
        document_class=document_class,
        confidence_score=confidence,
        matched_signals=tuple(signals),
        class_options=class_options,
        bibliography_style=detect_bibliography_style(text, patterns),
        requires_logo=requires_logo(text, family),
        logo_file_name=detect_logo_name(text),
    )


__all__ = [
    "classify",
    "detect_bibliography_style",
    "detect_logo_name",
    "parse_document_class",
    "requires_logo",
    "scan_window",
]
