"""High-level orchestrator for LaTeX analysis and conversion workflows."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Tuple

from .asset_resolver import AssetResolver
from .config import HubSettings
from .converter import PandocConverter, count_bib_entries, count_tables
from .errors import ConversionError, ProjectError
from .journal_detector import classify
from .logging_config import get_logger
from .metadata import extract_document_metadata
from .models import (
    AssetReferenceSet,
    ConversionResult,
    DetectionResult,
    DocumentMetadata,
    ProjectAnalysis,
    ProjectContents,
)
from .project import ProjectLoader
from .report import render_report
from .templates import select_template
from .validation import asset_issues, warning_messages

logger = get_logger(__name__)

TEX_SUFFIXES = (".tex", ".latex")
ZIP_SUFFIX = ".zip"


class LatexConversionApp:
    """Coordinates project loading, journal detection, asset checks and pandoc."""

    def __init__(
        self,
        settings: HubSettings | None = None,
        converter: PandocConverter | None = None,
        resolver: AssetResolver | None = None,
        loader: ProjectLoader | None = None,
    ):
        self.settings = settings or HubSettings()
        self.converter = converter or PandocConverter(
            executable=self.settings.pandoc_path, timeout=self.settings.conversion_timeout
        )
        self.resolver = resolver or AssetResolver()
        self.loader = loader or ProjectLoader()

    def load_upload(self, data: bytes, file_name: str, temp_dir: str | Path) -> ProjectContents:
        """Materialise an uploaded ``.zip`` or ``.tex``/``.latex`` file."""

        lowered = (file_name or "").lower()
        if lowered.endswith(ZIP_SUFFIX):
            if len(data) > self.settings.max_zip_size:
                raise ProjectError(f"ZIP file exceeds {self.settings.max_zip_size // (1024 * 1024)}MB limit")
            return self.loader.extract_archive(data, temp_dir)
        if lowered.endswith(TEX_SUFFIXES):
            if len(data) > self.settings.max_tex_size:
                raise ProjectError(f"LaTeX file exceeds {self.settings.max_tex_size // (1024 * 1024)}MB limit")
            return self.loader.load_single_tex(data, file_name, temp_dir)
        raise ProjectError("Invalid file type. Please upload a .tex, .latex, or .zip file.")

    def load_path(self, path: str | Path, temp_dir: str | Path) -> ProjectContents:
        """Load a project from a local file or an already-unpacked directory."""

        source = Path(path)
        if source.is_dir():
            return self.loader.build_contents(source)
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise ProjectError(f"Cannot read {source}: {exc}") from exc
        return self.load_upload(data, source.name, temp_dir)

    def analyze_text(self, text: str) -> Tuple[DetectionResult, AssetReferenceSet, DocumentMetadata]:
        return classify(text), self.resolver.extract_references(text), extract_document_metadata(text)

    def analyze_project(self, contents: ProjectContents) -> ProjectAnalysis:
        detection, references, metadata = self.analyze_text(contents.main_tex_content)
        report = self.resolver.validate(references, contents.all_files, contents.working_dir)
        issues = asset_issues(references, report)
        logger.info(
            "Detected %s (%s, confidence %d); %d asset issue(s)",
            detection.journal_family,
            detection.document_class,
            detection.confidence_score,
            len(issues),
        )
        return ProjectAnalysis(
            detection=detection,
            references=references,
            validation=report,
            metadata=metadata,
            issues=issues,
        )

    def convert(
        self,
        contents: ProjectContents,
        output_dir: str | Path,
        manual_journal: str | None = None,
        analysis: ProjectAnalysis | None = None,
    ) -> ConversionResult:
        """Convert the project to DOCX; failures are returned, not raised.

        Missing assets only add warnings; conversion proceeds regardless.
        """

        started = time.monotonic()
        analysis = analysis or self.analyze_project(contents)
        warnings = warning_messages(analysis.issues)

        try:
            template = select_template(analysis.detection, manual_journal, self.settings.template_dir)
            output_path = Path(output_dir)
            output_path.mkdir(parents=True, exist_ok=True)
            output_file = output_path / "output.docx"
            warnings.extend(
                self.converter.run(contents.main_tex_file, str(output_file), contents.working_dir, template)
            )
            if not output_file.is_file():
                raise ConversionError("Pandoc finished without producing an output file")
            output_size = output_file.stat().st_size
        except (ConversionError, OSError) as exc:
            logger.warning("Conversion of %s failed: %s", contents.main_tex_file, exc)
            return ConversionResult(
                success=False,
                error_message=str(exc),
                warnings=warnings,
                duration_ms=_elapsed_ms(started),
            )

        return ConversionResult(
            success=True,
            output_file=str(output_file),
            output_size=output_size,
            detected_journal=analysis.detection.journal_family,
            document_class=analysis.detection.document_class,
            bib_entry_count=count_bib_entries(contents.bib_files),
            figure_count=len(analysis.references.figure_references),
            table_count=count_tables(contents.main_tex_content),
            warnings=warnings,
            duration_ms=_elapsed_ms(started),
        )

    def report_for_project(self, contents: ProjectContents) -> str:
        return render_report(self.analyze_project(contents))


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
