"""Plain-text reporting for project analyses and conversions."""
from __future__ import annotations

from typing import List

from .journal_patterns import label_for_family
from .models import ConversionResult, ProjectAnalysis


def render_report(analysis: ProjectAnalysis, conversion: ConversionResult | None = None) -> str:
    """Return a human-readable report summarizing detection and asset checks."""

    detection = analysis.detection
    references = analysis.references
    lines: List[str] = ["LaTeX Project Report"]
    lines.append(f"Journal family: {label_for_family(detection.journal_family)} (confidence {detection.confidence_score})")
    lines.append(f"Document class: {detection.document_class}")
    if detection.class_options:
        lines.append(f"Class options: {', '.join(detection.class_options)}")
    if detection.bibliography_style:
        lines.append(f"Bibliography style: {detection.bibliography_style}")
    if detection.requires_logo:
        lines.append(f"Logo required: {detection.logo_file_name or 'yes'}")
    if analysis.metadata.title:
        lines.append(f"Title: {analysis.metadata.title}")
    lines.append(
        "References: {} figures, {} inputs, {} bibliographies".format(
            len(references.figure_references),
            len(references.sub_document_references),
            len(references.bibliography_references),
        )
    )
    if detection.matched_signals:
        lines.append("Signals:")
        lines.extend(f"  - {signal}" for signal in detection.matched_signals)

    if analysis.issues:
        lines.append("Issues:")
        for issue in analysis.issues:
            line = f"[{issue.severity.upper()}] {issue.code}: {issue.message}"
            lines.append(line)
    else:
        lines.append("All referenced assets found.")

    if conversion is not None:
        if conversion.success:
            lines.append(f"Converted to {conversion.output_file} in {conversion.duration_ms} ms")
        else:
            lines.append(f"Conversion failed: {conversion.error_message}")
        for warning in conversion.warnings:
            lines.append(f"Warning: {warning}")
    return "\n".join(lines)
