"""Turn uploaded archives or single sources into a LaTeX project manifest."""
from __future__ import annotations

import io
import os
import re
import shutil
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import ProjectError
from .logging_config import get_logger
from .models import ProjectContents

logger = get_logger(__name__)

SKIPPED_DIRECTORIES = {"node_modules", "__pycache__", "build", "dist"}
PROJECT_DIR_NAME = "latex_project"

MAIN_FILE_PRIORITIES = {
    "main.tex": 100,
    "paper.tex": 90,
    "document.tex": 80,
    "manuscript.tex": 70,
}


class ProjectLoader:
    """Extracts uploads and locates the main document of a LaTeX project."""

    TEX_PATTERN = re.compile(r"\.(tex|latex)$", re.IGNORECASE)
    BIB_PATTERN = re.compile(r"\.bib$", re.IGNORECASE)
    FIGURE_PATTERN = re.compile(r"\.(png|jpg|jpeg|pdf|eps|svg|tif|tiff)$", re.IGNORECASE)
    STYLE_PATTERN = re.compile(r"\.(sty|cls|bst)$", re.IGNORECASE)

    def find_all_files(self, root: str | Path) -> List[str]:
        """Return absolute paths of every file under ``root``.

        Hidden entries and common build/dependency directories are skipped.
        """

        files: List[str] = []
        for current, dirnames, filenames in os.walk(Path(root).resolve()):
            dirnames[:] = sorted(
                name for name in dirnames if not name.startswith(".") and name not in SKIPPED_DIRECTORIES
            )
            for name in sorted(filenames):
                if name.startswith(".") or name in SKIPPED_DIRECTORIES:
                    continue
                files.append(os.path.join(current, name))
        return files

    def categorize(self, files: List[str]) -> Dict[str, List[str]]:
        return {
            "tex": [f for f in files if self.TEX_PATTERN.search(f)],
            "bib": [f for f in files if self.BIB_PATTERN.search(f)],
            "figure": [f for f in files if self.FIGURE_PATTERN.search(f)],
            "style": [f for f in files if self.STYLE_PATTERN.search(f)],
        }

    def find_main_tex_file(self, tex_files: List[str]) -> Optional[str]:
        """Pick the most likely entry point among ``tex_files``.

        Files declaring ``\\documentclass`` win, ranked by conventional name
        and then size. Without any, fall back to a conventional name and
        finally to the largest file.
        """

        if not tex_files:
            return None
        if len(tex_files) == 1:
            return tex_files[0]

        ranked: List[Tuple[int, int, str]] = []
        for tex_file in tex_files:
            try:
                content = Path(tex_file).read_text(encoding="utf-8", errors="replace")
                size = os.path.getsize(tex_file)
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", tex_file, exc)
                continue

            if "\\documentclass" not in content:
                continue
            ranked.append((self._name_priority(tex_file), size, tex_file))

        if ranked:
            ranked.sort(key=lambda item: (item[0], item[1]), reverse=True)
            return ranked[0][2]

        for name in MAIN_FILE_PRIORITIES:
            for tex_file in tex_files:
                if os.path.basename(tex_file).lower() == name:
                    return tex_file

        largest, largest_size = tex_files[0], 0
        for tex_file in tex_files:
            try:
                size = os.path.getsize(tex_file)
            except OSError:
                continue
            if size > largest_size:
                largest, largest_size = tex_file, size
        return largest

    @staticmethod
    def _name_priority(tex_file: str) -> int:
        basename = os.path.basename(tex_file).lower()
        if basename in MAIN_FILE_PRIORITIES:
            return MAIN_FILE_PRIORITIES[basename]
        if "main" in basename:
            return 60
        return 50

    def build_contents(self, working_dir: str | Path) -> ProjectContents:
        """Enumerate ``working_dir`` and read its main document."""

        working_dir = str(Path(working_dir).resolve())
        all_files = self.find_all_files(working_dir)
        groups = self.categorize(all_files)
        main_tex = self.find_main_tex_file(groups["tex"])
        if not main_tex:
            raise ProjectError(
                "No main LaTeX file found. Please ensure your ZIP contains a main .tex file with \\documentclass"
            )
        content = Path(main_tex).read_text(encoding="utf-8", errors="replace")
        logger.info("Main document %s (%d files in project)", main_tex, len(all_files))
        return ProjectContents(
            main_tex_file=main_tex,
            main_tex_content=content,
            working_dir=working_dir,
            all_files=all_files,
            tex_files=groups["tex"],
            bib_files=groups["bib"],
            figure_files=groups["figure"],
            style_files=groups["style"],
        )

    def extract_archive(self, data: bytes, temp_dir: str | Path) -> ProjectContents:
        """Unpack a ZIP upload below ``temp_dir`` and analyse the result."""

        target = Path(temp_dir) / PROJECT_DIR_NAME
        try:
            target.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                root = target.resolve()
                for member in archive.namelist():
                    destination = (root / member).resolve()
                    if destination != root and root not in destination.parents:
                        raise ProjectError(f"Archive member escapes project directory: {member}")
                archive.extractall(root)
            return self.build_contents(target)
        except (zipfile.BadZipFile, OSError, ProjectError) as exc:
            raise ProjectError(f"Failed to extract ZIP file: {exc}") from exc

    def load_single_tex(self, data: bytes, file_name: str, temp_dir: str | Path) -> ProjectContents:
        """Store a lone ``.tex`` upload as a one-file project."""

        target = Path(temp_dir) / PROJECT_DIR_NAME
        target.mkdir(parents=True, exist_ok=True)
        name = os.path.basename(file_name)
        if not name or name.startswith("."):
            name = "main.tex"
        (target / name).write_bytes(data)
        return self.build_contents(target)


def cleanup_temp_dir(temp_dir: str | Path) -> None:
    """Remove ``temp_dir``; failures are logged, not raised."""
    try:
        shutil.rmtree(temp_dir)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("Failed to clean up temp directory %s: %s", temp_dir, exc)
