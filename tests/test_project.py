import io
import os
import zipfile
from pathlib import Path

import pytest

from conftest import zip_bytes

from latex_hub.errors import ProjectError
from latex_hub.project import ProjectLoader, cleanup_temp_dir


def test_find_all_files_skips_hidden_and_build_directories(sample_project: Path):
    files = ProjectLoader().find_all_files(sample_project)
    names = {os.path.relpath(f, sample_project).replace(os.sep, "/") for f in files}

    assert "main.tex" in names
    assert "figures/nested/plot2.pdf" in names
    assert not any(name.startswith(".hidden") for name in names)
    assert not any(name.startswith("build/") for name in names)
    assert all(os.path.isabs(f) for f in files)


def test_categorize_groups_by_extension():
    groups = ProjectLoader().categorize(["/p/a.TEX", "/p/b.bib", "/p/c.tiff", "/p/d.cls", "/p/e.txt"])

    assert groups["tex"] == ["/p/a.TEX"]
    assert groups["bib"] == ["/p/b.bib"]
    assert groups["figure"] == ["/p/c.tiff"]
    assert groups["style"] == ["/p/d.cls"]


def test_main_file_prefers_documentclass_and_conventional_name(tmp_path: Path):
    (tmp_path / "chapter.tex").write_text("\\input{x}\n" * 50)
    (tmp_path / "paper.tex").write_text("\\documentclass{article}\n")
    (tmp_path / "other.tex").write_text("\\documentclass{article}\n" + "x" * 500)
    files = sorted(str(p) for p in tmp_path.glob("*.tex"))

    assert ProjectLoader().find_main_tex_file(files) == str(tmp_path / "paper.tex")


def test_main_file_falls_back_to_largest_without_documentclass(tmp_path: Path):
    (tmp_path / "a.tex").write_text("short")
    (tmp_path / "b.tex").write_text("much longer content here")
    files = [str(tmp_path / "a.tex"), str(tmp_path / "b.tex")]

    assert ProjectLoader().find_main_tex_file(files) == str(tmp_path / "b.tex")
    assert ProjectLoader().find_main_tex_file([]) is None


def test_extract_archive_builds_manifest(tmp_path: Path, sample_zip: bytes):
    contents = ProjectLoader().extract_archive(sample_zip, tmp_path)

    assert Path(contents.main_tex_file).name == "main.tex"
    assert Path(contents.working_dir) == (tmp_path / "latex_project").resolve()
    assert "\\documentclass" in contents.main_tex_content
    assert len(contents.tex_files) == 2
    assert [Path(f).name for f in contents.bib_files] == ["refs.bib"]
    assert {Path(f).name for f in contents.figure_files} == {"overview.png", "plot2.pdf"}


def test_extract_archive_rejects_path_traversal(tmp_path: Path):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w") as archive:
        archive.writestr("../escape.tex", "\\documentclass{article}")

    with pytest.raises(ProjectError, match="Failed to extract ZIP file"):
        ProjectLoader().extract_archive(buffer.getvalue(), tmp_path)
    assert not (tmp_path / "escape.tex").exists()


def test_extract_archive_errors(tmp_path: Path):
    with pytest.raises(ProjectError, match="Failed to extract ZIP file"):
        ProjectLoader().extract_archive(b"not a zip", tmp_path / "bad")

    with pytest.raises(ProjectError, match="No main LaTeX file found"):
        ProjectLoader().extract_archive(zip_bytes({"figure.png": "png"}), tmp_path / "empty")


def test_load_single_tex_and_cleanup(tmp_path: Path):
    workspace = tmp_path / "upload"
    contents = ProjectLoader().load_single_tex(b"\\documentclass{acmart}", "paper.tex", workspace)

    assert Path(contents.main_tex_file).name == "paper.tex"
    assert contents.all_files == [contents.main_tex_file]

    cleanup_temp_dir(workspace)
    assert not workspace.exists()
    cleanup_temp_dir(workspace)


def test_dotted_single_upload_is_stored_as_main_tex(tmp_path: Path):
    contents = ProjectLoader().load_single_tex(b"\\documentclass{article}", ".paper.tex", tmp_path)

    assert Path(contents.main_tex_file).name == "main.tex"
    assert contents.main_tex_content == "\\documentclass{article}"
