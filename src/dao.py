# src/dao.py
import io

import pandas as pd
import requests

from project_utils.starter_class import build_context, get_logger
from src.models import ProjectRecord


class IngestionError(RuntimeError):
    """Raised when the spreadsheet cannot be fetched or parsed."""


class SheetProjectsDAO:
    """
    Data‐access object for the published project spreadsheet.

    Responsibilities:
      - Download the sheet's CSV export over HTTP.
      - Parse it into row mappings keyed by the header row.
      - Drop rows without a project title and project the rest to records.
    """

    def __init__(self, ctx=None, session=None):
        self.logger = get_logger(__name__)

        ctx = ctx or build_context(__name__)
        sources = ctx.get_sources()
        self.csv_url = ctx.get_required("sources.csv_url")
        self.timeout = sources.get("request_timeout")
        self.columns = ctx.get_fields()
        self.title_column = self.columns["title"]
        self.session = session or requests

        self.logger.info("SheetProjectsDAO initialized for %r (timeout=%r)",
                         self.csv_url, self.timeout)

    def fetch_csv(self) -> str:
        """GET the CSV export; any transport or HTTP error becomes IngestionError."""
        self.logger.debug("Requesting %s", self.csv_url)
        try:
            resp = self.session.get(self.csv_url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise IngestionError(f"Could not download {self.csv_url}: {e}") from e
        self.logger.info("Downloaded %d bytes of CSV", len(resp.content))
        return resp.text

    def parse_rows(self, text: str) -> list[dict]:
        """
        Parse CSV text (first row = header) into a list of dicts.
        Every cell is kept as text; empty cells become "".
        """
        if not text or not text.strip():
            self.logger.warning("CSV body is empty")
            return []
        try:
            header = pd.read_csv(io.StringIO(text), nrows=0).columns
            df = pd.read_csv(io.StringIO(text), dtype=str, engine="python",
                             keep_default_na=False, skip_blank_lines=True,
                             on_bad_lines=self._trim_bad_line(len(header)))
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise IngestionError(f"Malformed CSV: {e}") from e
        rows = df.to_dict(orient="records")
        self.logger.debug("Parsed %d rows with columns %s", len(rows), list(df.columns))
        return rows

    def project_rows(self, rows: list[dict]) -> list[ProjectRecord]:
        """
        Keep rows with a non-blank title and number them 1..n in source order.
        """
        kept = [row for row in rows if self._has_title(row)]
        dropped = len(rows) - len(kept)
        if dropped:
            self.logger.info("Dropped %d rows without a %r", dropped, self.title_column)

        return [
            ProjectRecord.from_row(row, index, self.columns)
            for index, row in enumerate(kept, start=1)
        ]

    def fetch_projects(self) -> list[ProjectRecord]:
        """Download, parse and project the sheet in one go."""
        records = self.project_rows(self.parse_rows(self.fetch_csv()))
        self.logger.info("Ingested %d projects from spreadsheet", len(records))
        return records

    # ─── Private helpers ─────────────────────────────────────────────────────────

    def _trim_bad_line(self, width: int):
        """on_bad_lines callback: log a row wider than the header and keep its first `width` cells."""
        def _trim(bad_line: list[str]) -> list[str]:
            self.logger.warning("Row has %d fields, header has %d; extra cells dropped: %r",
                                len(bad_line), width, bad_line[width:])
            return bad_line[:width]
        return _trim

    def _has_title(self, row: dict) -> bool:
        val = row.get(self.title_column)
        return isinstance(val, str) and val.strip() != ""
