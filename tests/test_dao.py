import pandas as pd
import pytest
import requests

from src.dao import IngestionError, SheetProjectsDAO
from tests.helpers import FakeResponse, FakeSession


def make_dao(ctx, text="", status_code=200, error=None):
    session = FakeSession(FakeResponse(text, status_code), error=error)
    return SheetProjectsDAO(ctx, session=session), session


class TestProjectRows:
    """Row filtering, id assignment and field projection."""

    def test_blank_and_missing_titles_are_dropped(self, ctx, csv_factory):
        text = csv_factory([
            {"Project Title": "First"},
            {"Project Title": "   ", "Author Name": "Nobody"},
            {"Author Name": "No title either"},
            {"Project Title": "Second"},
        ])
        dao, _ = make_dao(ctx, text)

        records = dao.fetch_projects()

        assert [r.title for r in records] == ["First", "Second"]

    def test_ids_are_one_based_among_retained_rows(self, ctx, csv_factory):
        text = csv_factory([
            {"Project Title": ""},
            {"Project Title": "A"},
            {"Project Title": ""},
            {"Project Title": "B"},
            {"Project Title": "C"},
        ])
        dao, _ = make_dao(ctx, text)

        records = dao.fetch_projects()

        assert [(r.id, r.title) for r in records] == [(1, "A"), (2, "B"), (3, "C")]

    def test_tags_are_split_and_trimmed(self, ctx, csv_factory):
        text = csv_factory([{
            "Project Title": "Tagged",
            "Project Tags": "IoT, Sustainability ,Data Visualization",
        }])
        dao, _ = make_dao(ctx, text)

        (record,) = dao.fetch_projects()

        assert record.tags == ("IoT", "Sustainability", "Data Visualization")

    def test_missing_columns_fall_back_to_defaults(self, ctx):
        dao, _ = make_dao(ctx, "Project Title,Unrelated\nLonely,whatever\n")

        (record,) = dao.fetch_projects()

        assert record.title == "Lonely"
        assert record.description == ""
        assert record.author == ""
        assert record.tags == ()
        assert record.image_url is None
        assert record.feedback_form_url is None
        assert record.github_repo_url is None
        assert record.timestamp is None

    def test_column_order_is_irrelevant(self, ctx):
        text = (
            "GitHub Repo URL,Author Name,Project Title\n"
            "https://github.com/x/y,Ada,Engine\n"
        )
        dao, _ = make_dao(ctx, text)

        (record,) = dao.fetch_projects()

        assert record.author == "Ada"
        assert record.github_repo_url == "https://github.com/x/y"

    def test_solar_tracker_row(self, ctx, csv_factory):
        text = csv_factory([{
            "Project Title": "Solar Tracker",
            "Author Name": "Jane Doe",
            "Project Tags": "Hardware, Energy",
        }])
        dao, _ = make_dao(ctx, text)

        (record,) = dao.fetch_projects()

        assert record.id == 1
        assert record.title == "Solar Tracker"
        assert record.author == "Jane Doe"
        assert record.tags == ("Hardware", "Energy")
        assert record.description == ""
        assert record.feedback_form_url is None
        assert record.github_repo_url is None
        assert not record.has_feedback
        assert not record.has_repository

    def test_source_order_is_preserved(self, ctx, csv_factory):
        titles = ["Zeta", "Alpha", "Mu"]
        dao, _ = make_dao(ctx, csv_factory([{"Project Title": t} for t in titles]))

        assert [r.title for r in dao.fetch_projects()] == titles


class TestFetchCsv:
    """HTTP and parse failures surface as IngestionError."""

    def test_requests_configured_url(self, ctx, csv_factory):
        dao, session = make_dao(ctx, csv_factory([]))

        assert dao.fetch_projects() == []
        assert session.calls == [("https://sheets.example.com/pub?output=csv", None)]

    def test_http_error_raises(self, ctx):
        dao, _ = make_dao(ctx, "Not found", status_code=404)

        with pytest.raises(IngestionError):
            dao.fetch_projects()

    def test_network_error_raises(self, ctx):
        dao, _ = make_dao(ctx, error=requests.ConnectionError("offline"))

        with pytest.raises(IngestionError, match="offline"):
            dao.fetch_projects()

    def test_parser_error_raises(self, ctx, monkeypatch):
        def broken_read_csv(*args, **kwargs):
            raise pd.errors.ParserError("Error tokenizing data")

        monkeypatch.setattr(pd, "read_csv", broken_read_csv)
        dao, _ = make_dao(ctx, "Project Title,Author Name\nA,Ann\n")

        with pytest.raises(IngestionError, match="Malformed CSV"):
            dao.fetch_projects()

    def test_ragged_row_is_trimmed_not_fatal(self, ctx, caplog):
        dao, _ = make_dao(ctx, "Project Title,Author Name\nA,Ann\nB,Bob,extra\nC,Cy\n")

        with caplog.at_level("WARNING"):
            records = dao.fetch_projects()

        assert [(r.id, r.title, r.author) for r in records] == [
            (1, "A", "Ann"), (2, "B", "Bob"), (3, "C", "Cy")]
        assert "extra" in caplog.text

    def test_empty_body_yields_no_rows(self, ctx):
        dao, _ = make_dao(ctx, "")

        assert dao.fetch_projects() == []
