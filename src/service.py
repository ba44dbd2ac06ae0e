# === src/service.py ===
from concurrent.futures import Executor, Future
from typing import Optional

from project_utils.search_utils import search_projects
from project_utils.starter_class import build_context, get_logger
from src.dao import IngestionError, SheetProjectsDAO
from src.models import ProjectRecord


class ProjectService:
    """
    Owns the in-memory project list shown by the gallery.

    The list starts as [example] and is replaced wholesale by
    [example, *ingested] after each successful ingestion. A failed
    ingestion is logged and the previous list is kept.
    """

    def __init__(self, dao: SheetProjectsDAO, example: Optional[ProjectRecord] = None):
        self.dao     = dao
        self.logger  = get_logger(__name__)
        self.example = example or ProjectRecord.from_config(
            build_context(__name__).get_section("example_project"))
        self._projects: tuple[ProjectRecord, ...] = (self.example,)
        self._future: Optional[Future] = None

    @property
    def projects(self) -> list[ProjectRecord]:
        return list(self._projects)

    @property
    def pending(self) -> bool:
        """True while a fire-and-forget ingestion has not been applied yet."""
        return self._future is not None

    def fetch_projects(self) -> bool:
        """Ingest synchronously; returns True if the list was replaced."""
        try:
            records = self.dao.fetch_projects()
        except IngestionError as e:
            self._log_failure(e)
            return False
        self._replace(records)
        return True

    def start_fetch(self, executor: Executor) -> Future:
        """
        Submit ingestion to `executor` without waiting for it.
        The result is applied later, on the caller's thread, by apply_pending().
        """
        self._future = executor.submit(self.dao.fetch_projects)
        self.logger.info("Spawned background ingestion")
        return self._future

    def apply_pending(self) -> bool:
        """
        Apply a finished background ingestion, if any.
        Returns True when the list was replaced on this call.
        """
        future = self._future
        if future is None or not future.done():
            return False
        self._future = None

        try:
            records = future.result()
        except IngestionError as e:
            self._log_failure(e)
            return False
        self._replace(records)
        return True

    def filtered(self, term: str) -> list[ProjectRecord]:
        results = search_projects(self._projects, term)
        self.logger.info("Filter %r matched %d of %d projects",
                         term, len(results), len(self._projects))
        return results

    # ─── Private helpers ─────────────────────────────────────────────────────────

    def _replace(self, records: list[ProjectRecord]) -> None:
        self._projects = (self.example, *records)
        self.logger.info("Project list replaced: %d records (+ example)", len(records))

    def _log_failure(self, error: Exception) -> None:
        self.logger.error("Error fetching projects: %s", error, exc_info=error)
