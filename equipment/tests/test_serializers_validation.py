"""
Unit tests for request parsing and format validation in serializers.
"""
import json
import pytest

from dme_extractor.exceptions import ValidationError

from equipment.note_source import unwrap_note_envelope
from equipment.serializers import parse_extract_request, validate_extract_data


class TestValidateExtractData:
    """Tests for validate_extract_data."""

    def test_note_field(self):
        assert validate_extract_data({"note": "Needs CPAP"}) == ("Needs CPAP", False)

    def test_send_flag(self):
        assert validate_extract_data({"note": "Needs CPAP", "send": True}) == ("Needs CPAP", True)

    def test_envelope_field(self):
        assert validate_extract_data({"data": "Needs CPAP"}) == ("Needs CPAP", False)

    def test_note_takes_precedence_over_envelope(self):
        note, _ = validate_extract_data({"note": "from note", "data": "from data"})
        assert note == "from note"

    def test_null_note_passes_through(self):
        # 空值交给提取核心判定
        assert validate_extract_data({"note": None}) == (None, False)

    def test_non_dict_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_extract_data([])
        assert exc_info.value.code == "INVALID_REQUEST"

    def test_missing_note_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_extract_data({"send": True})
        assert exc_info.value.code == "VALIDATION_ERROR"
        errors = exc_info.value.detail["errors"]
        assert any(e["field"] == "note" for e in errors)

    def test_note_not_string(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_extract_data({"note": 123})
        errors = exc_info.value.detail["errors"]
        assert any(e["field"] == "note" for e in errors)

    def test_send_not_bool(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_extract_data({"note": "Needs CPAP", "send": "yes"})
        errors = exc_info.value.detail["errors"]
        assert any(e["field"] == "send" for e in errors)

    def test_multiple_errors_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_extract_data({"note": 1, "send": 1})
        fields = {e["field"] for e in exc_info.value.detail["errors"]}
        assert fields == {"note", "send"}

    def test_non_string_envelope_matches_file_reader(self):
        # 与 note 文件的 {"data": ...} 解包结果一致
        content = json.dumps({"data": {"x": 1}})
        note, _ = validate_extract_data(json.loads(content))
        assert note == '{"x": 1}'
        assert note == unwrap_note_envelope(content)

    def test_null_envelope_passes_through(self):
        assert validate_extract_data({"data": None}) == (None, False)


class TestParseExtractRequest:
    """Tests for parse_extract_request."""

    def test_json_body(self):
        body = json.dumps({"note": "Needs oxygen", "send": True}).encode()
        assert parse_extract_request(body, "application/json") == ("Needs oxygen", True)

    def test_json_with_charset(self):
        body = json.dumps({"note": "Needs oxygen"}).encode()
        assert parse_extract_request(body, "application/json; charset=utf-8") == ("Needs oxygen", False)

    def test_plain_text_body(self):
        assert parse_extract_request(b"Needs a walker.", "text/plain") == ("Needs a walker.", False)

    def test_missing_content_type_treated_as_text(self):
        assert parse_extract_request(b'{"note": "x"}', None) == ('{"note": "x"}', False)

    def test_invalid_json(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_extract_request(b"{not json", "application/json")
        assert exc_info.value.code == "INVALID_JSON"

    def test_invalid_encoding(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_extract_request(b"\xff\xfe\x81", "text/plain")
        assert exc_info.value.code == "INVALID_ENCODING"
