"""Publisher pattern tables used for journal family scoring."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from .models import JournalFamily, JournalPatternSet


ELSEVIER_PATTERNS = JournalPatternSet(
    family=JournalFamily.ELSEVIER,
    label="Elsevier",
    document_class_names=frozenset({"elsarticle", "cas-sc", "cas-dc"}),
    command_weights={
        "\\journal{": 20,
        "\\ead{": 15,
        "\\address[": 15,
        "\\fntext[": 10,
    },
)

SPRINGER_NATURE_PATTERNS = JournalPatternSet(
    family=JournalFamily.SPRINGER_NATURE,
    label="Springer Nature",
    document_class_names=frozenset({"sn-jnl"}),
    command_weights={
        "\\journalname": 20,
        "\\title[": 15,
        "\\author[": 15,
        "\\affil[": 10,
        "\\email{": 10,
    },
)

IEEE_PATTERNS = JournalPatternSet(
    family=JournalFamily.IEEE,
    label="IEEE",
    document_class_names=frozenset({"IEEEtran", "ieeecolor"}),
    command_weights={
        "\\IEEEtitle": 20,
        "\\IEEEauthor": 15,
        "\\IEEEkeywords": 15,
        "\\thanks{": 10,
        "\\journalname": 10,
    },
)

ACM_PATTERNS = JournalPatternSet(
    family=JournalFamily.ACM,
    label="ACM",
    document_class_names=frozenset({"acmart"}),
    command_weights={
        "\\acmConference": 20,
        "\\acmYear": 15,
        "\\setcopyright": 15,
        "\\ccsdesc": 10,
    },
)

# Declaration order doubles as the tie-break priority.
JOURNAL_PATTERNS: Tuple[JournalPatternSet, ...] = (
    ELSEVIER_PATTERNS,
    SPRINGER_NATURE_PATTERNS,
    IEEE_PATTERNS,
    ACM_PATTERNS,
)

FAMILY_LABELS: Dict[str, str] = {
    JournalFamily.ELSEVIER: "Elsevier",
    JournalFamily.SPRINGER_NATURE: "Springer Nature",
    JournalFamily.IEEE: "IEEE",
    JournalFamily.ACM: "ACM",
    JournalFamily.GENERIC: "Generic",
}

# Springer sub-styles, checked in order; the first marker present wins.
SPRINGER_BIB_STYLES: Tuple[Tuple[str, str], ...] = (
    ("sn-nature", "sn-nature"),
    ("sn-mathphys", "sn-mathphys-num"),
    ("sn-apa", "sn-apa"),
    ("sn-chicago", "sn-chicago"),
)
SPRINGER_DEFAULT_BIB_STYLE = "sn-basic"


def canonical_document_class(pattern_set: JournalPatternSet, class_name: str) -> str:
    """Return the normalized class label recorded for a family match."""
    if pattern_set.family == JournalFamily.ELSEVIER:
        return "elsarticle"
    if pattern_set.family == JournalFamily.SPRINGER_NATURE:
        return "sn-jnl"
    if pattern_set.family == JournalFamily.IEEE:
        return "ieeecolor" if "ieeecolor" in class_name else "IEEEtran"
    return "acmart"


def label_for_family(family: Optional[str]) -> str:
    if not family:
        return FAMILY_LABELS[JournalFamily.GENERIC]
    return FAMILY_LABELS.get(family, FAMILY_LABELS[JournalFamily.GENERIC])


def family_for_override(name: Optional[str]) -> Optional[str]:
    """Map a manual journal choice (key or label, any case) to a family."""
    if not name:
        return None
    key = " ".join(name.replace("_", " ").replace("-", " ").split()).lower()
    if not key:
        return None
    for family, label in FAMILY_LABELS.items():
        if key in {family.replace("_", " ").lower(), label.lower()}:
            return family
    if key in {"springer", "nature"}:
        return JournalFamily.SPRINGER_NATURE
    return None
