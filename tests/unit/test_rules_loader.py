from pathlib import Path

import pytest

from src.rules.loader import load_rules

ROOT_RULES = Path(__file__).resolve().parents[2] / "rules.yaml"


def test_project_rules_load():
    rules = load_rules(ROOT_RULES)

    assert rules.content.statuses == ["draft", "published", "scheduled"]
    assert [f["name"] for f in rules.content.default_fields][:2] == ["title", "slug"]
    assert rules.media.max_upload_bytes == 50 * 1024 * 1024
    assert "application/pdf" in rules.media.allowlist_mime_types
    assert rules.auth.min_password_length == 6


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rules(tmp_path / "nope.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("project: [unclosed")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_rules(path)


def test_unknown_status_rejected(tmp_path):
    text = ROOT_RULES.read_text().replace(
        "statuses: [draft, published, scheduled]", "statuses: [draft, archived]"
    )
    path = tmp_path / "rules.yaml"
    path.write_text(text)

    with pytest.raises(ValueError, match="Rules validation failed"):
        load_rules(path)


def test_optional_sections_default(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "project: {slug: x, rules_version: '1'}\n"
        "content: {statuses: [draft]}\n"
        "media: {allowlist_mime_types: [image/png], max_upload_bytes: 10}\n"
    )

    rules = load_rules(path)

    assert rules.pagination.default_limit == 50
    assert rules.auth.min_password_length == 6
    assert rules.media.bucket == "media"
