"""Utilities for finding and resolving files referenced from LaTeX sources."""
from __future__ import annotations

import posixpath
import re
from typing import Iterable, List, Optional, Sequence

from .logging_config import get_logger
from .models import AssetReferenceSet, AssetValidationReport

logger = get_logger(__name__)

FIGURE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".pdf", ".eps", ".svg")
SUB_DOCUMENT_EXTENSIONS = (".tex",)
BIBLIOGRAPHY_EXTENSIONS = (".bib",)


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


class AssetResolver:
    """Extract asset references and check them against a file manifest.

    The resolver never touches the filesystem; the manifest is a plain list
    of paths produced by whoever unpacked the project.
    """

    GRAPHICS_PATTERN = re.compile(r"\\includegraphics(?:\[[^\]]*\])?\{(?P<path>[^}]+)\}")
    INPUT_PATTERN = re.compile(r"\\(?:input|include)\{(?P<path>[^}]+)\}")
    BIBLIOGRAPHY_PATTERN = re.compile(r"\\bibliography\{(?P<paths>[^}]+)\}")

    def extract_references(self, text: str) -> AssetReferenceSet:
        text = text or ""
        figures = [match.group("path") for match in self.GRAPHICS_PATTERN.finditer(text)]
        inputs = [match.group("path") for match in self.INPUT_PATTERN.finditer(text)]
        bibliographies: List[str] = []
        for match in self.BIBLIOGRAPHY_PATTERN.finditer(text):
            bibliographies.extend(part.strip() for part in match.group("paths").split(","))
        return AssetReferenceSet(
            figure_references=tuple(figures),
            sub_document_references=tuple(inputs),
            bibliography_references=tuple(bibliographies),
        )

    def resolve(
        self,
        reference: str,
        manifest: Sequence[str],
        extensions: Iterable[str],
        working_dir: Optional[str] = None,
    ) -> Optional[str]:
        """Return the manifest entry ``reference`` points at, if any.

        Tries the path as written, then with each extension appended, and
        finally any entry sharing the basename (with the same extensions).
        """

        suffixes = ("",) + tuple(extensions)
        normalized = [(_normalize(entry), entry) for entry in manifest]

        for suffix in suffixes:
            found = self._match_relative(reference + suffix, normalized, working_dir)
            if found is not None:
                return found

        basename = posixpath.basename(_normalize(reference))
        for suffix in suffixes:
            target = basename + suffix
            for norm, original in normalized:
                if posixpath.basename(norm) == target:
                    return original
        return None

    @staticmethod
    def _match_relative(candidate: str, normalized, working_dir: Optional[str]) -> Optional[str]:
        relative = _normalize(candidate)
        if working_dir is not None:
            expected = _normalize(posixpath.join(_normalize(working_dir), relative))
            for norm, original in normalized:
                if norm == expected:
                    return original
            return None
        tail = "/" + relative.lstrip("/")
        for norm, original in normalized:
            if norm == relative or norm.endswith(tail):
                return original
        return None

    def validate(
        self,
        references: AssetReferenceSet,
        manifest: Sequence[str],
        working_dir: Optional[str] = None,
    ) -> AssetValidationReport:
        report = AssetValidationReport()
        groups = (
            (references.figure_references, FIGURE_EXTENSIONS, report.missing_required),
            (references.sub_document_references, SUB_DOCUMENT_EXTENSIONS, report.missing_optional),
            (references.bibliography_references, BIBLIOGRAPHY_EXTENSIONS, report.missing_optional),
        )
        for refs, extensions, missing in groups:
            seen = set()
            for reference in refs:
                if reference in seen:
                    continue
                seen.add(reference)
                found = self.resolve(reference, manifest, extensions, working_dir)
                if found is None:
                    missing.append(reference)
                else:
                    report.resolved[reference] = found

        if report.missing_required or report.missing_optional:
            logger.debug(
                "Unresolved assets: required=%s optional=%s",
                report.missing_required,
                report.missing_optional,
            )
        return report


_DEFAULT_RESOLVER = AssetResolver()


def extract_references(text: str) -> AssetReferenceSet:
    """Scan ``text`` for figure, input/include and bibliography references."""
    return _DEFAULT_RESOLVER.extract_references(text)


def validate(
    references: AssetReferenceSet, manifest: Sequence[str], working_dir: Optional[str] = None
) -> AssetValidationReport:
    """Resolve ``references`` against ``manifest`` and report what is missing."""
    return _DEFAULT_RESOLVER.validate(references, manifest, working_dir)
