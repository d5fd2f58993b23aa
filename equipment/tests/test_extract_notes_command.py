"""
Management command tests: python manage.py extract_notes
"""
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from unittest.mock import patch


@pytest.fixture(autouse=True)
def mock_sink_mode(settings):
    settings.USE_MOCK_SINK = True


def _run(*args, **kwargs):
    out, err = StringIO(), StringIO()
    call_command("extract_notes", *args, stdout=out, stderr=err, **kwargs)
    return out.getvalue(), err.getvalue()


class TestExtractNotesCommand:
    def test_explicit_files(self, note_file, cpap_note, oxygen_note):
        first = note_file(cpap_note, name="a.txt")
        second = note_file(oxygen_note, name="b.txt")
        out, _ = _run(first, second)
        assert "Processing 2 file(s) from command line arguments." in out
        assert "Done: 2 succeeded, 0 failed" in out

    def test_no_send_skips_sink(self, note_file, cpap_note):
        with patch("equipment.services.send_record") as mock_send:
            out, _ = _run(note_file(cpap_note), "--no-send")
        mock_send.assert_not_called()
        assert "Done: 1 succeeded, 0 failed" in out

    def test_discovers_txt_files_in_directory(self, tmp_path, cpap_note):
        (tmp_path / "one.txt").write_text(cpap_note, encoding="utf-8")
        (tmp_path / "two.txt").write_text(cpap_note, encoding="utf-8")
        (tmp_path / "skip.json").write_text(cpap_note, encoding="utf-8")
        out, _ = _run("--dir", str(tmp_path))
        assert "Processing 2 .txt file(s)" in out
        assert "skip.json" not in out
        assert "Done: 2 succeeded, 0 failed" in out

    def test_default_directory_from_settings(self, settings, tmp_path, oxygen_note):
        (tmp_path / "note.txt").write_text(oxygen_note, encoding="utf-8")
        settings.BASE_INPUT_DIRECTORY = str(tmp_path)
        out, _ = _run()
        assert "Done: 1 succeeded, 0 failed" in out

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(CommandError) as exc_info:
            _run("--dir", str(tmp_path / "missing"))
        assert "Base input directory not found" in str(exc_info.value)

    def test_missing_file_uses_default_note(self, tmp_path):
        out, _ = _run(str(tmp_path / "not_there.txt"))
        assert "Done: 1 succeeded, 0 failed" in out

    def test_empty_file_fails(self, note_file, cpap_note):
        good = note_file(cpap_note, name="good.txt")
        empty = note_file("  ", name="empty.txt")
        with pytest.raises(CommandError) as exc_info:
            _run(good, empty)
        assert "1 file(s) failed" in str(exc_info.value)

    def test_unexpected_error_does_not_stop_batch(self, note_file, cpap_note):
        first = note_file(cpap_note, name="a.txt")
        second = note_file(cpap_note, name="b.txt")
        with patch(
            "equipment.management.commands.extract_notes.process_note_file",
            side_effect=[RuntimeError("boom"), 0],
        ):
            with pytest.raises(CommandError):
                _run(first, second)
