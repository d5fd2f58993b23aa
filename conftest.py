"""
Pytest configuration and shared fixtures.
"""
import pytest
from unittest.mock import MagicMock


CPAP_NOTE = (
    "Patient: John Doe\nDOB: 01/15/1980\nDiagnosis: Sleep apnea\n"
    "Patient needs a CPAP with full face mask and humidifier. AHI > 20. Ordered by Dr. Cameron."
)

OXYGEN_NOTE = (
    "Patient: Jane Smith\nDOB: 05/20/1975\nDiagnosis: COPD\n"
    "Patient requires 2.5 L oxygen for sleep and exertion. Ordered by Dr. House."
)


@pytest.fixture(autouse=True)
def statsd_client():
    """StatsD 走 UDP，测试中替换为 MagicMock，避免发包"""
    from equipment import statsd_metrics

    client = MagicMock()
    original = statsd_metrics._client
    statsd_metrics._client = client
    yield client
    statsd_metrics._client = original


@pytest.fixture
def cpap_note():
    """Scenario A: CPAP order with Patient/DOB/Diagnosis labels."""
    return CPAP_NOTE


@pytest.fixture
def oxygen_note():
    """Scenario B: oxygen order with liters and usage."""
    return OXYGEN_NOTE


@pytest.fixture
def note_file(tmp_path):
    """Write a note to a temp file and return its absolute path."""

    def _write(content, name="physician_note.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
