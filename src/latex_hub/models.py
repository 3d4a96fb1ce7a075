"""Data models for journal detection and asset resolution workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class JournalFamily:
    """Publisher template families recognised by the detector."""

    ELSEVIER = "ELSEVIER"
    SPRINGER_NATURE = "SPRINGER_NATURE"
    IEEE = "IEEE"
    ACM = "ACM"
    GENERIC = "GENERIC"


@dataclass(frozen=True)
class JournalPatternSet:
    """Static scoring configuration for one publisher family."""

    family: str
    label: str
    document_class_names: frozenset
    command_weights: Mapping[str, int]
    document_class_weight: int = 50

    def __post_init__(self) -> None:
        object.__setattr__(self, "document_class_names", frozenset(self.document_class_names))
        object.__setattr__(self, "command_weights", MappingProxyType(dict(self.command_weights)))


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of classifying a LaTeX document into a journal family."""

    journal_family: str = JournalFamily.GENERIC
    document_class: str = "unknown"
    confidence_score: int = 0
    matched_signals: Tuple[str, ...] = ()
    class_options: Tuple[str, ...] = ()
    bibliography_style: Optional[str] = None
    requires_logo: bool = False
    logo_file_name: Optional[str] = None


@dataclass(frozen=True)
class AssetReferenceSet:
    """File paths referenced from a LaTeX document, in source order."""

    figure_references: Tuple[str, ...] = ()
    sub_document_references: Tuple[str, ...] = ()
    bibliography_references: Tuple[str, ...] = ()


@dataclass
class AssetValidationReport:
    """Result of resolving asset references against a file manifest."""

    missing_required: List[str] = field(default_factory=list)
    missing_optional: List[str] = field(default_factory=list)
    resolved: Dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return not self.missing_required and not self.missing_optional


@dataclass
class ValidationIssue:
    """Represents a validation finding."""

    code: str
    message: str
    context: Optional[str] = None
    severity: str = "warning"


@dataclass
class ProjectContents:
    """Materialised upload: main document plus the flat file manifest."""

    main_tex_file: str
    main_tex_content: str
    working_dir: str
    all_files: List[str] = field(default_factory=list)
    tex_files: List[str] = field(default_factory=list)
    bib_files: List[str] = field(default_factory=list)
    figure_files: List[str] = field(default_factory=list)
    style_files: List[str] = field(default_factory=list)


@dataclass
class DocumentMetadata:
    """Front-matter details pulled from the main document."""

    title: Optional[str] = None
    journal: Optional[str] = None
    author_count: int = 0
    abstract: Optional[str] = None
    keywords: Optional[str] = None
    packages: List[str] = field(default_factory=list)
    has_abstract: bool = False
    has_keywords: bool = False
    has_bibliography: bool = False


@dataclass
class ProjectAnalysis:
    """Container for everything learned about a project before conversion."""

    detection: DetectionResult
    references: AssetReferenceSet
    validation: AssetValidationReport
    metadata: DocumentMetadata
    issues: List[ValidationIssue] = field(default_factory=list)


@dataclass
class ConversionResult:
    """Summary of a LaTeX to DOCX conversion attempt."""

    success: bool
    duration_ms: int = 0
    output_file: Optional[str] = None
    output_size: Optional[int] = None
    detected_journal: Optional[str] = None
    document_class: Optional[str] = None
    bib_entry_count: Optional[int] = None
    figure_count: Optional[int] = None
    table_count: Optional[int] = None
    error_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)
