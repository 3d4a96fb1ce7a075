"""LaTeX journal detection, asset checking and DOCX conversion toolkit."""

from .app import LatexConversionApp
from .asset_resolver import AssetResolver, extract_references, validate
from .journal_detector import classify
from .models import (
    AssetReferenceSet,
    AssetValidationReport,
    ConversionResult,
    DetectionResult,
    JournalFamily,
    ProjectContents,
    ValidationIssue,
)

__all__ = [
    "LatexConversionApp",
    "AssetResolver",
    "extract_references",
    "validate",
    "classify",
    "AssetReferenceSet",
    "AssetValidationReport",
    "ConversionResult",
    "DetectionResult",
    "JournalFamily",
    "ProjectContents",
    "ValidationIssue",
]
