from pathlib import Path

import pytest
from pydantic import ValidationError

from latex_hub.config import DEFAULT_TEMPLATE_DIR, load_settings
from latex_hub.models import DetectionResult, JournalFamily
from latex_hub.templates import TEMPLATE_FILES, select_template, template_name_for


def test_settings_read_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("LATEX_HUB_TEMPLATE_DIR", str(tmp_path))
    monkeypatch.setenv("LATEX_HUB_PANDOC_PATH", " /usr/local/bin/pandoc ")
    monkeypatch.setenv("LATEX_HUB_CONVERSION_TIMEOUT", "42")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings(env_file=tmp_path / "absent.env")

    assert settings.template_dir == tmp_path
    assert settings.pandoc_path == "/usr/local/bin/pandoc"
    assert settings.conversion_timeout == 42
    assert settings.log_level == "DEBUG"


def test_settings_defaults_and_validation(monkeypatch, tmp_path: Path):
    for name in ("LATEX_HUB_TEMPLATE_DIR", "LATEX_HUB_PANDOC_PATH", "LATEX_HUB_MAX_ZIP_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LATEX_HUB_CONVERSION_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        load_settings(env_file=tmp_path / "absent.env")

    monkeypatch.delenv("LATEX_HUB_CONVERSION_TIMEOUT")
    settings = load_settings(env_file=tmp_path / "absent.env")
    assert settings.template_dir == DEFAULT_TEMPLATE_DIR
    assert settings.max_zip_size == 100 * 1024 * 1024


def test_every_family_has_a_bundled_template():
    assert set(TEMPLATE_FILES) == {
        JournalFamily.ELSEVIER,
        JournalFamily.SPRINGER_NATURE,
        JournalFamily.IEEE,
        JournalFamily.ACM,
        JournalFamily.GENERIC,
    }
    for name in TEMPLATE_FILES.values():
        assert (DEFAULT_TEMPLATE_DIR / name).is_file()
    assert template_name_for("UNKNOWN") == "generic_publication.yaml"


def test_select_template_tolerates_missing_files(tmp_path: Path):
    detection = DetectionResult(journal_family=JournalFamily.ACM)

    assert select_template(detection, template_dir=tmp_path) is None
    (tmp_path / "acm_publication.yaml").write_text("x: 1\n")
    assert select_template(detection, template_dir=tmp_path) == tmp_path / "acm_publication.yaml"
    assert select_template(detection, manual_journal="wiley", template_dir=tmp_path) == tmp_path / "acm_publication.yaml"
    assert select_template(detection, manual_journal="ieee", template_dir=tmp_path) is None
