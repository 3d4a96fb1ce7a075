"""Pandoc invocation and post-conversion statistics."""
from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import CONVERSION_TIMEOUT
from .errors import ConversionError
from .logging_config import get_logger

logger = get_logger(__name__)

MAIN_FONT = "Times New Roman"
FONT_SIZE = 12
LINE_SPACING = 1.5
MAX_REPORTED_WARNINGS = 10

BIB_ENTRY_PATTERN = re.compile(r"@\w+\{")
TABLE_PATTERN = re.compile(r"\\begin\{table\*?\}")


@dataclass
class ProcessOutcome:
    returncode: int
    stdout: str = ""
    stderr: str = ""


Runner = Callable[[Sequence[str], Optional[str], float], ProcessOutcome]


def _subprocess_runner(command: Sequence[str], cwd: Optional[str], timeout: float) -> ProcessOutcome:
    completed = subprocess.run(list(command), cwd=cwd, capture_output=True, text=True, timeout=timeout)
    return ProcessOutcome(completed.returncode, completed.stdout or "", completed.stderr or "")


class PandocConverter:
    """Runs ``pandoc`` to turn a LaTeX project into DOCX."""

    def __init__(
        self,
        runner: Runner | None = None,
        executable: str = "pandoc",
        timeout: float = CONVERSION_TIMEOUT,
    ):
        self.runner = runner or _subprocess_runner
        self.executable = executable
        self.timeout = timeout

    def is_installed(self) -> bool:
        try:
            outcome = self.runner([self.executable, "--version"], None, 30)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("pandoc not available: %s", exc)
            return False
        return outcome.returncode == 0

    def build_command(self, input_file: str, output_file: str, template: Optional[Path] = None) -> List[str]:
        command = [
            self.executable,
            input_file,
            "-o",
            output_file,
            "--from=latex",
            "--to=docx",
            "--standalone",
            "--citeproc",
            "--number-sections",
            "--toc",
            "--reference-links",
        ]
        if template is not None:
            command.extend(["--metadata-file", str(template)])
        command.extend(
            [
                "--variable",
                f"mainfont={MAIN_FONT}",
                "--variable",
                f"fontsize={FONT_SIZE}pt",
                "--variable",
                f"linestretch={LINE_SPACING}",
            ]
        )
        return command

    def run(
        self,
        input_file: str,
        output_file: str,
        working_dir: Optional[str] = None,
        template: Optional[Path] = None,
    ) -> List[str]:
        """Convert ``input_file`` and return pandoc's warning lines."""

        command = self.build_command(input_file, output_file, template)
        logger.info("Running pandoc on %s", input_file)
        try:
            outcome = self.runner(command, working_dir, self.timeout)
        except subprocess.TimeoutExpired as exc:
            raise ConversionError(f"Pandoc conversion timed out after {self.timeout:g}s") from exc
        except OSError as exc:
            raise ConversionError(f"Failed to spawn Pandoc: {exc}") from exc

        if outcome.returncode != 0:
            raise ConversionError(f"Pandoc conversion failed: {outcome.stderr.strip()}")
        return extract_warnings(outcome.stderr)


def extract_warnings(stderr: str, limit: int = MAX_REPORTED_WARNINGS) -> List[str]:
    # pandoc prints "[WARNING] ..." so the match is case-insensitive
    lines = [line for line in (stderr or "").splitlines() if "warning" in line.lower()]
    return lines[:limit]


def count_bib_entries(bib_files: Sequence[str]) -> int:
    total = 0
    for bib_file in bib_files:
        try:
            content = Path(bib_file).read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        total += len(BIB_ENTRY_PATTERN.findall(content))
    return total


def count_tables(tex_content: str) -> int:
    return len(TABLE_PATTERN.findall(tex_content or ""))
