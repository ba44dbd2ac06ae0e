from concurrent.futures import ThreadPoolExecutor

import streamlit as st

from project_utils.starter_class import setup_logger, get_logger, build_context
from src.dao import SheetProjectsDAO
from src.service import ProjectService
from src.renderer import GalleryRenderer, UIConfig, details_dialog

# ────────────────────────────────────────────────────────────────
#  Global logging setup
# ────────────────────────────────────────────────────────────────
setup_logger()                                 # configure file + console logging
logger = get_logger(__name__)                  # module‐level logger

SERVICE_KEY = "project_service"
SEARCH_KEY  = "search_term"
DETAILS_KEY = "details_project"


@st.cache_resource
def get_executor(max_workers: int) -> ThreadPoolExecutor:
    """One worker pool per server process, shared by all sessions."""
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ingest")


def get_service(ctx) -> ProjectService:
    """
    The session's ProjectService. Created on the first run, which also
    spawns the one background ingestion for this session.
    """
    if SERVICE_KEY not in st.session_state:
        service = ProjectService(SheetProjectsDAO(ctx))
        service.start_fetch(get_executor(int(ctx.get("sources.max_workers", 2))))
        st.session_state[SERVICE_KEY] = service
        logger.info("New session: project list seeded with the example record")
    return st.session_state[SERVICE_KEY]


def request_details(project) -> None:
    st.session_state[DETAILS_KEY] = project


def watch_ingestion(service: ProjectService, interval: str) -> None:
    """Poll the background ingestion and rerun the page once it has landed."""
    @st.fragment(run_every=interval)
    def _poll():
        if service.apply_pending():
            st.rerun()
        elif not service.pending:
            # failed ingestion: the list is unchanged, just stop polling
            st.rerun()

    _poll()


def main():
    logger.info("Starting Project Hub page run")

    # ────────────────────────────────────────────────────────────────
    # 1) Page config + header
    # ────────────────────────────────────────────────────────────────
    ctx = build_context(__name__)
    UIConfig(ctx).apply()

    # ────────────────────────────────────────────────────────────────
    # 2) Application state
    # ────────────────────────────────────────────────────────────────
    service = get_service(ctx)
    service.apply_pending()

    # ────────────────────────────────────────────────────────────────
    # 3) Toolbar + filter
    # ────────────────────────────────────────────────────────────────
    renderer = GalleryRenderer(ctx)
    term = renderer.render_toolbar(SEARCH_KEY)
    results = service.filtered(term)

    # ────────────────────────────────────────────────────────────────
    # 4) Gallery + details dialog
    # ────────────────────────────────────────────────────────────────
    renderer.render_gallery(results, on_details=request_details)

    project = st.session_state.pop(DETAILS_KEY, None)
    if project is not None:
        logger.info("Opening details for project id=%d", project.id)
        details_dialog(renderer, project)

    # ────────────────────────────────────────────────────────────────
    # 5) Background ingestion
    # ────────────────────────────────────────────────────────────────
    if service.pending:
        watch_ingestion(service, ctx.get("app.poll_interval", "1s"))

if __name__ == "__main__":
    main()
