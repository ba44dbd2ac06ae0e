import pytest

from project_utils.starter_class import AppContext
from tests.helpers import SHEET_COLUMNS


@pytest.fixture
def ctx():
    """AppContext mirroring config.yaml, independent of the file on disk."""
    return AppContext({
        "app": {"title": "UCEK Project Hub", "columns": 3},
        "sources": {
            "csv_url": "https://sheets.example.com/pub?output=csv",
            "submission_form_url": "https://forms.example.com/submit",
            "request_timeout": None,
        },
        "fields": dict(SHEET_COLUMNS),
        "dates": {"input_format": "%d/%m/%Y %H:%M:%S"},
        "example_project": {
            "title": "EcoTrack: Campus Sustainability Monitor",
            "description": "EcoTrack is an IoT-based system.",
            "author": "Alex Chen",
            "tags": ["IoT", "Sustainability", "Data Visualization"],
            "feedback_form_url": "https://forms.gle/exampleFeedbackForm",
            "github_repo_url": "https://github.com/example/ecotrack",
        },
    })


@pytest.fixture
def csv_factory():
    """Build CSV text with the full sheet header from a list of row dicts."""
    header = list(SHEET_COLUMNS.values())

    def _quote(val):
        if any(ch in val for ch in ',"\n'):
            return '"' + val.replace('"', '""') + '"'
        return val

    def _build(rows):
        lines = [",".join(_quote(h) for h in header)]
        for row in rows:
            lines.append(",".join(_quote(row.get(h, "")) for h in header))
        return "\n".join(lines) + "\n"

    return _build
