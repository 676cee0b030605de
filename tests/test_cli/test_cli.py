"""Tests for the command-line front end (inpainter stubbed)."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from vanish.cli import main
from vanish.config import settings
from vanish.history.kv import JsonFileKeyValueStore
from vanish.history.store import HistoryStore
from vanish.llm.client import InpaintingError
from tests.conftest import ORIGINAL_BYTES, RESULT_BYTES, StubInpainter


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "vanish_data_dir", tmp_path / "data")
    return tmp_path / "data"


@pytest.fixture
def image(tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(ORIGINAL_BYTES)
    return path


@pytest.fixture
def stub(monkeypatch):
    inpainter = StubInpainter()
    monkeypatch.setattr("vanish.dependencies.get_inpainter", lambda: inpainter)
    return inpainter


def test_remove_with_preset(tmp_path, data_dir, image, stub):
    out = tmp_path / "out"
    result = CliRunner().invoke(
        main, ["remove", str(image), "--preset", "tr", "--container", "800x600", "--output", str(out)]
    )

    assert result.exit_code == 0, result.output
    files = list(out.glob("vanished-*.png"))
    assert len(files) == 1
    assert files[0].read_bytes() == RESULT_BYTES
    assert "top right" in stub.calls[0][1]
    assert len(HistoryStore(JsonFileKeyValueStore(settings.storage_file)).entries()) == 1


def test_remove_with_rect(tmp_path, data_dir, image, stub):
    result = CliRunner().invoke(
        main,
        ["remove", str(image), "--rect", "10", "10", "50", "50", "--container", "300x300", "-o", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    assert "(around 10, 10)" in stub.calls[0][1]


def test_remove_needs_one_selection(data_dir, image, stub):
    result = CliRunner().invoke(main, ["remove", str(image), "--container", "300x300"])
    assert result.exit_code != 0
    assert stub.calls == []


def test_remove_rejects_narrow_rect(tmp_path, data_dir, image, stub):
    result = CliRunner().invoke(
        main,
        ["remove", str(image), "--rect", "10", "10", "3", "50", "--container", "300x300", "-o", str(tmp_path)],
    )
    assert result.exit_code != 0
    assert stub.calls == []


def test_remove_bad_container(data_dir, image, stub):
    result = CliRunner().invoke(main, ["remove", str(image), "--preset", "tl", "--container", "wide"])
    assert result.exit_code != 0


def test_remove_reports_failure(tmp_path, data_dir, image, stub):
    stub.error = InpaintingError("No image was returned by the AI.")
    result = CliRunner().invoke(
        main, ["remove", str(image), "--preset", "bl", "--container", "800x600", "-o", str(tmp_path / "out")]
    )
    assert result.exit_code == 1
    assert "No image was returned" in result.output
    assert not (tmp_path / "out").exists()


def test_history_empty(data_dir):
    result = CliRunner().invoke(main, ["history"])
    assert result.exit_code == 0
    assert "No history yet" in result.output


def test_history_lists_entries(tmp_path, data_dir, image, stub):
    CliRunner().invoke(main, ["remove", str(image), "--preset", "tl", "--container", "800x600", "-o", str(tmp_path)])
    entry = HistoryStore(JsonFileKeyValueStore(settings.storage_file)).entries()[0]

    result = CliRunner().invoke(main, ["history"])

    assert result.exit_code == 0
    assert entry.id in result.output
