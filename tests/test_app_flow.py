from pathlib import Path

import pytest

from conftest import FakeRunner

from latex_hub.app import LatexConversionApp
from latex_hub.config import HubSettings
from latex_hub.converter import PandocConverter
from latex_hub.errors import ProjectError
from latex_hub.models import JournalFamily


def _app(converter, template_dir=None, **settings):
    if template_dir is not None:
        settings["template_dir"] = template_dir
    return LatexConversionApp(settings=HubSettings(**settings), converter=converter)


def test_analyze_project_reports_missing_assets(tmp_path: Path, sample_zip: bytes, fake_converter):
    app = _app(fake_converter)
    contents = app.load_upload(sample_zip, "paper.zip", tmp_path)

    analysis = app.analyze_project(contents)

    assert analysis.detection.journal_family == JournalFamily.ELSEVIER
    assert analysis.detection.confidence_score == 100
    assert analysis.detection.bibliography_style == "elsarticle-num"
    assert analysis.references.figure_references == ("figures/overview", "plot2.pdf", "missing_figure")
    assert analysis.validation.missing_required == ["missing_figure"]
    assert analysis.validation.missing_optional == ["extra"]
    codes = [issue.code for issue in analysis.issues]
    assert codes == ["missing-figure", "missing-bibliography"]
    assert analysis.metadata.title == "Sample {Elsevier} Article"


def test_convert_succeeds_despite_missing_assets(tmp_path: Path, sample_zip: bytes, fake_runner, fake_converter):
    app = _app(fake_converter)
    contents = app.load_upload(sample_zip, "paper.zip", tmp_path / "work")

    result = app.convert(contents, tmp_path / "out")

    assert result.success
    assert Path(result.output_file).name == "output.docx"
    assert result.output_size == len(b"PK docx")
    assert result.detected_journal == JournalFamily.ELSEVIER
    assert result.document_class == "elsarticle"
    assert result.bib_entry_count == 2
    assert result.figure_count == 3
    assert result.table_count == 1
    assert "Bibliography not found: extra" in result.warnings
    assert "Missing assets: Figure: missing_figure" in result.warnings
    assert "[WARNING] Could not convert TeX math" in result.warnings
    assert result.warning_count == 3

    command, cwd, _ = fake_runner.calls[0]
    assert cwd == contents.working_dir
    assert command[1] == contents.main_tex_file
    assert command[command.index("--metadata-file") + 1].endswith("elsevier_publication.yaml")


def test_manual_journal_override_selects_template(tmp_path: Path, sample_zip: bytes, fake_runner, fake_converter):
    app = _app(fake_converter)
    contents = app.load_upload(sample_zip, "paper.zip", tmp_path / "work")

    result = app.convert(contents, tmp_path / "out", manual_journal="IEEE")

    assert result.success
    assert result.detected_journal == JournalFamily.ELSEVIER
    command = fake_runner.calls[0][0]
    assert command[command.index("--metadata-file") + 1].endswith("ieee_publication.yaml")


def test_missing_template_directory_falls_back_to_pandoc_defaults(tmp_path: Path, fake_runner, fake_converter):
    app = _app(fake_converter, template_dir=tmp_path / "no-templates")
    contents = app.load_upload(b"\\documentclass{article}\nHi", "note.tex", tmp_path / "work")

    result = app.convert(contents, tmp_path / "out")

    assert result.success
    assert result.detected_journal == JournalFamily.GENERIC
    assert "--metadata-file" not in fake_runner.calls[0][0]


def test_convert_failure_is_returned_not_raised(tmp_path: Path):
    converter = PandocConverter(runner=FakeRunner(returncode=1, stderr="! Undefined control sequence."))
    app = _app(converter)
    contents = app.load_upload(b"\\documentclass{acmart}\n\\includegraphics{nope}", "a.tex", tmp_path / "work")

    result = app.convert(contents, tmp_path / "out")

    assert not result.success
    assert "Undefined control sequence" in result.error_message
    assert result.warnings == ["Missing assets: Figure: nope"]


def test_convert_without_output_file_fails(tmp_path: Path):
    app = _app(PandocConverter(runner=FakeRunner(create_output=False)))
    contents = app.load_upload(b"\\documentclass{article}", "a.tex", tmp_path / "work")

    result = app.convert(contents, tmp_path / "out")

    assert not result.success
    assert "without producing an output file" in result.error_message


def test_load_upload_rejects_bad_type_and_size(tmp_path: Path, fake_converter):
    app = _app(fake_converter, max_tex_size=10)

    with pytest.raises(ProjectError, match="Invalid file type"):
        app.load_upload(b"data", "paper.pdf", tmp_path)
    with pytest.raises(ProjectError, match="exceeds"):
        app.load_upload(b"\\documentclass{article}", "paper.tex", tmp_path)


def test_load_path_accepts_unpacked_directory(sample_project: Path, tmp_path: Path, fake_converter):
    app = _app(fake_converter)

    contents = app.load_path(sample_project, tmp_path / "scratch")

    assert Path(contents.main_tex_file).name == "main.tex"
    assert "Journal family: Elsevier" in app.report_for_project(contents)
