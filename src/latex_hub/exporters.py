"""Exporters for structured analysis and conversion data."""
from __future__ import annotations

import json
from typing import Any, Dict

from .models import ConversionResult, DetectionResult, ProjectAnalysis


def detection_to_dict(detection: DetectionResult) -> Dict[str, Any]:
    return {
        "journal_family": detection.journal_family,
        "document_class": detection.document_class,
        "confidence_score": detection.confidence_score,
        "matched_signals": list(detection.matched_signals),
        "class_options": list(detection.class_options),
        "bibliography_style": detection.bibliography_style,
        "requires_logo": detection.requires_logo,
        "logo_file_name": detection.logo_file_name,
    }


def analysis_to_dict(analysis: ProjectAnalysis) -> Dict[str, Any]:
    references = analysis.references
    metadata = analysis.metadata
    return {
        "detection": detection_to_dict(analysis.detection),
        "references": {
            "figures": list(references.figure_references),
            "inputs": list(references.sub_document_references),
            "bibliographies": list(references.bibliography_references),
        },
        "validation": {
            "missing_required": list(analysis.validation.missing_required),
            "missing_optional": list(analysis.validation.missing_optional),
        },
        "metadata": {
            "title": metadata.title,
            "journal": metadata.journal,
            "author_count": metadata.author_count,
            "keywords": metadata.keywords,
            "packages": list(metadata.packages),
            "has_abstract": metadata.has_abstract,
            "has_keywords": metadata.has_keywords,
            "has_bibliography": metadata.has_bibliography,
        },
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "context": issue.context,
                "severity": issue.severity,
            }
            for issue in analysis.issues
        ],
    }


def conversion_to_dict(result: ConversionResult) -> Dict[str, Any]:
    return {
        "success": result.success,
        "output_file": result.output_file,
        "output_size": result.output_size,
        "detected_journal": result.detected_journal,
        "document_class": result.document_class,
        "bib_entry_count": result.bib_entry_count,
        "figure_count": result.figure_count,
        "table_count": result.table_count,
        "warning_count": result.warning_count,
        "warnings": list(result.warnings),
        "error_message": result.error_message,
        "duration_ms": result.duration_ms,
    }


def to_json(analysis: ProjectAnalysis, conversion: ConversionResult | None = None) -> str:
    payload = analysis_to_dict(analysis)
    if conversion is not None:
        payload["conversion"] = conversion_to_dict(conversion)
    return json.dumps(payload, indent=2)
