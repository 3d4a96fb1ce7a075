"""Turn asset resolution results into user-facing, non-blocking issues."""
from __future__ import annotations

from typing import List

from .models import AssetReferenceSet, AssetValidationReport, ValidationIssue


def asset_issues(references: AssetReferenceSet, report: AssetValidationReport) -> List[ValidationIssue]:
    """Missing figures become warnings; missing inputs and bibliographies are info."""

    issues: List[ValidationIssue] = []
    for figure in report.missing_required:
        issues.append(
            ValidationIssue(
                code="missing-figure",
                message=f"Figure: {figure}",
                context=figure,
                severity="warning",
            )
        )

    bibliographies = set(references.bibliography_references)
    inputs = set(references.sub_document_references)
    for reference in report.missing_optional:
        if reference in inputs:
            issues.append(
                ValidationIssue(
                    code="missing-input",
                    message=f"Input file not found: {reference}",
                    context=reference,
                    severity="info",
                )
            )
            inputs.discard(reference)
        elif reference in bibliographies:
            issues.append(
                ValidationIssue(
                    code="missing-bibliography",
                    message=f"Bibliography not found: {reference}",
                    context=reference,
                    severity="info",
                )
            )
    return issues


def warning_messages(issues: List[ValidationIssue]) -> List[str]:
    """Flatten asset issues into the warning strings shown after conversion."""

    messages = [issue.message for issue in issues if issue.code != "missing-figure"]
    figures = [issue.message for issue in issues if issue.code == "missing-figure"]
    if figures:
        messages.append("Missing assets: " + ", ".join(figures))
    return messages
