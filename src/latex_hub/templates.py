"""Pandoc metadata template selection per journal family."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from .config import DEFAULT_TEMPLATE_DIR
from .journal_patterns import family_for_override
from .logging_config import get_logger
from .models import DetectionResult, JournalFamily

logger = get_logger(__name__)

TEMPLATE_FILES: Dict[str, str] = {
    JournalFamily.ELSEVIER: "elsevier_publication.yaml",
    JournalFamily.SPRINGER_NATURE: "springer_publication.yaml",
    JournalFamily.IEEE: "ieee_publication.yaml",
    JournalFamily.ACM: "acm_publication.yaml",
    JournalFamily.GENERIC: "generic_publication.yaml",
}


def template_name_for(family: Optional[str]) -> str:
    return TEMPLATE_FILES.get(family or JournalFamily.GENERIC, TEMPLATE_FILES[JournalFamily.GENERIC])


def select_template(
    detection: DetectionResult,
    manual_journal: Optional[str] = None,
    template_dir: str | Path = DEFAULT_TEMPLATE_DIR,
) -> Optional[Path]:
    """Return the template for the chosen family, or ``None`` if it is absent.

    A recognised manual journal choice overrides detection; unrecognised
    choices are ignored.
    """

    family = detection.journal_family
    override = family_for_override(manual_journal)
    if override:
        family = override
    elif manual_journal:
        logger.warning("Unknown journal override %r; using detected %s", manual_journal, family)

    path = Path(template_dir) / template_name_for(family)
    if not path.is_file():
        logger.info("Template %s not found; pandoc defaults will be used", path)
        return None
    return path
