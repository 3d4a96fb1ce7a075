import io
import sys
import zipfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest

from latex_hub.converter import PandocConverter, ProcessOutcome


SAMPLE_MAIN = r"""\documentclass[5p,times]{elsarticle}
\usepackage{graphicx}
\usepackage[numbers]{natbib}
\journal{Medical Image Analysis}
\begin{document}
\begin{frontmatter}
\title{Sample {Elsevier} Article}
\author[inst1]{Jane Doe}
\ead{jane@example.org}
\address[inst1]{Example University}
\begin{abstract}
A short abstract.
\end{abstract}
\begin{keyword}
detection \sep assets
\end{keyword}
\end{frontmatter}
\input{sections/intro}
\includegraphics[width=0.5\linewidth]{figures/overview}
\includegraphics{plot2.pdf}
\includegraphics{missing_figure}
\begin{table}
\end{table}
\bibliographystyle{elsarticle-num}
\bibliography{refs, extra}
\end{document}
"""

SAMPLE_FILES = {
    "main.tex": SAMPLE_MAIN,
    "sections/intro.tex": "\\section{Introduction}\nText.\n",
    "figures/overview.png": "png",
    "figures/nested/plot2.pdf": "pdf",
    "refs.bib": "@article{a,\n title={A}}\n@book{b,\n title={B}}\n",
    ".hidden/secret.tex": "\\documentclass{article}",
    "build/main.aux": "aux",
}


def write_project(root: Path, files=None) -> Path:
    for name, content in (files or SAMPLE_FILES).items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def zip_bytes(files=None) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w") as archive:
        for name, content in (files or SAMPLE_FILES).items():
            archive.writestr(name, content)
    return buffer.getvalue()


class FakeRunner:
    """Stands in for subprocess: records commands and writes the output file."""

    def __init__(self, returncode: int = 0, stderr: str = "", create_output: bool = True):
        self.returncode = returncode
        self.stderr = stderr
        self.create_output = create_output
        self.calls = []

    def __call__(self, command, cwd, timeout):
        self.calls.append((list(command), cwd, timeout))
        if "-o" in command and self.create_output and self.returncode == 0:
            Path(command[command.index("-o") + 1]).write_bytes(b"PK docx")
        return ProcessOutcome(self.returncode, "", self.stderr)


@pytest.fixture()
def sample_project(tmp_path: Path) -> Path:
    return write_project(tmp_path / "project")


@pytest.fixture()
def sample_zip() -> bytes:
    return zip_bytes()


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner(stderr="[WARNING] Could not convert TeX math\nprogress 100%\n")


@pytest.fixture()
def fake_converter(fake_runner: FakeRunner) -> PandocConverter:
    return PandocConverter(runner=fake_runner)
