# src/models.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from project_utils.date_utils import SHEET_TIMESTAMP_FORMAT

EXAMPLE_PROJECT_ID = 0


def split_tags(raw: Optional[str]) -> tuple[str, ...]:
    """'IoT, Sustainability ,Data Visualization' -> ('IoT', 'Sustainability', 'Data Visualization')."""
    if not raw or not raw.strip():
        return ()
    return tuple(tag.strip() for tag in raw.split(","))


def _text(row: Mapping[str, Any], column: Optional[str]) -> str:
    if not column:
        return ""
    val = row.get(column)
    return val if isinstance(val, str) else ""


def _optional(row: Mapping[str, Any], column: Optional[str]) -> Optional[str]:
    return _text(row, column) or None


@dataclass(frozen=True)
class ProjectRecord:
    """One student project, either the static example or a spreadsheet row."""

    id: int
    title: str
    description: str = ""
    author: str = ""
    image_url: Optional[str] = None
    tags: tuple[str, ...] = ()
    feedback_form_url: Optional[str] = None
    github_repo_url: Optional[str] = None
    timestamp: Optional[str] = None

    @property
    def has_feedback(self) -> bool:
        return bool(self.feedback_form_url)

    @property
    def has_repository(self) -> bool:
        return bool(self.github_repo_url)

    @classmethod
    def from_row(cls, row: Mapping[str, Any], record_id: int,
                 columns: Mapping[str, str]) -> "ProjectRecord":
        """
        Project one CSV row (column name -> cell text) onto a record.

        :param row:       the parsed row; unknown columns are ignored
        :param record_id: 1-based position among retained rows
        :param columns:   record field -> spreadsheet column name
        """
        return cls(
            id=record_id,
            title=_text(row, columns.get("title")),
            description=_text(row, columns.get("description")),
            author=_text(row, columns.get("author")),
            image_url=_optional(row, columns.get("image_url")),
            tags=split_tags(_text(row, columns.get("tags"))),
            feedback_form_url=_optional(row, columns.get("feedback_form_url")),
            github_repo_url=_optional(row, columns.get("github_repo_url")),
            timestamp=_optional(row, columns.get("timestamp")),
        )

    @classmethod
    def from_config(cls, section: Mapping[str, Any],
                    now: Optional[datetime] = None) -> "ProjectRecord":
        """Build the static example record from the `example_project` config section."""
        timestamp = section.get("timestamp") or (now or datetime.now()).strftime(SHEET_TIMESTAMP_FORMAT)
        return cls(
            id=EXAMPLE_PROJECT_ID,
            title=section.get("title", ""),
            description=(section.get("description") or "").strip(),
            author=section.get("author", ""),
            image_url=section.get("image_url") or None,
            tags=tuple(section.get("tags") or ()),
            feedback_form_url=section.get("feedback_form_url") or None,
            github_repo_url=section.get("github_repo_url") or None,
            timestamp=timestamp,
        )
