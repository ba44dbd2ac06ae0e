# src/renderer.py

import html
from typing import Callable, Optional

import streamlit as st

from project_utils.date_utils import SHEET_TIMESTAMP_FORMAT, format_submission_time
from project_utils.starter_class import setup_logger, get_logger, build_context
from src.actions import (
    LinkAction,
    MissingLinkError,
    feedback_action,
    repository_action,
    submission_action,
)
from src.models import ProjectRecord

BADGE_CSS = (
    "display:inline-block; padding:2px 10px; margin:2px 4px 2px 0;"
    " border-radius:9999px; background:#f1f5f9; color:#0f172a;"
    " font-size:0.8rem; font-weight:600;"
)
TITLE_CSS = "margin:0 0 0.25rem 0; padding:0;"
BYLINE_CSS = "color:#6b7280; font-size:0.875rem; margin-bottom:0.5rem;"


class UIConfig:
    """
    Handles set_page_config() and page header.
    Must be invoked before any other st.* call.
    """
    def __init__(self, ctx=None):
        setup_logger()
        self.logger = get_logger(self.__class__.__name__)

        self.ctx    = ctx or build_context(self.__class__.__name__)
        self.app_ui = self.ctx.get_app_ui()

        self.logger.info(
            "UIConfig:init title=%r layout=%r description=%r",
            self.app_ui.get("title"),
            self.app_ui.get("layout"),
            self.app_ui.get("description"),
        )

    def apply(self):
        st.set_page_config(
            page_title = self.app_ui.get("title", ""),
            layout     = self.app_ui.get("layout", "wide")
        )
        st.title(self.app_ui.get("title", ""))
        if self.app_ui.get("description"):
            st.caption(self.app_ui["description"])


def render_badges(tags) -> str:
    """Tags as pill-shaped HTML spans; empty string when there are none."""
    return "".join(
        f'<span style="{BADGE_CSS}">{html.escape(tag)}</span>' for tag in tags
    )


def render_clamped(text: str, max_lines: int) -> str:
    """Paragraph clamped to `max_lines` lines with an ellipsis."""
    css = "; ".join(f"{k}: {v}" for k, v in {
        "display": "-webkit-box",
        "-webkit-box-orient": "vertical",
        "-webkit-line-clamp": str(max_lines),
        "overflow": "hidden",
    }.items())
    return f'<p style="{css}">{html.escape(text)}</p>'


def render_plain(text: str, tag: str = "p", style: str = "") -> str:
    """Spreadsheet text as literal HTML; newlines kept, no Markdown formatting."""
    body = html.escape(text).replace("\n", "<br>")
    return f'<{tag} style="{style}">{body}</{tag}>'


class GalleryRenderer:
    """
    Renders the project gallery:
     - submit button + search box
     - result count / empty state
     - grid of cards, each with a details dialog
    """
    def __init__(self, ctx=None):
        setup_logger()
        self.logger = get_logger(self.__class__.__name__)

        self.ctx     = ctx or build_context(self.__class__.__name__)
        app_ui       = self.ctx.get_app_ui()
        self.columns = int(app_ui.get("columns", 3))
        self.image_h = int(app_ui.get("image_height", 192))
        self.lines   = int(app_ui.get("description_lines", 3))
        self.placeholder = app_ui.get("search_placeholder", "")
        self.empty_msg   = app_ui.get("empty_msg", "No projects found matching your search.")
        self.date_format = self.ctx.get("dates.input_format", SHEET_TIMESTAMP_FORMAT)
        self.submit = submission_action(
            self.ctx.get_required("sources.submission_form_url"),
            app_ui.get("submit_label", "Submit New Project"),
        )

        self.logger.info("GalleryRenderer:init columns=%d image_h=%d", self.columns, self.image_h)

    # ─── Header ──────────────────────────────────────────────────────────────────

    def render_toolbar(self, search_key: str) -> str:
        """Submit button + search box; returns the current search term."""
        col_btn, col_search = st.columns([1, 4], vertical_alignment="bottom")
        with col_btn:
            st.link_button(f"➕ {self.submit.label}", self.submit.open(),
                           width="stretch")
        with col_search:
            term = st.text_input(
                "Search",
                key=search_key,
                placeholder=self.placeholder,
                label_visibility="collapsed",
            )
        return term

    # ─── Gallery ─────────────────────────────────────────────────────────────────

    def render_gallery(self, projects: list[ProjectRecord],
                       on_details: Callable[[ProjectRecord], None]) -> None:
        if not projects:
            self.logger.info("Empty result set, showing empty-state message")
            st.markdown(
                f'<p style="text-align:center; color:#6b7280; margin-top:2rem;">'
                f'{html.escape(self.empty_msg)}</p>',
                unsafe_allow_html=True,
            )
            return

        st.markdown(f"**Search results:** {len(projects)} projects")
        for start in range(0, len(projects), self.columns):
            row = st.columns(self.columns)
            for col, project in zip(row, projects[start:start + self.columns]):
                with col:
                    self.render_card(project, on_details)
        self.logger.info("Rendered %d project cards", len(projects))

    def render_card(self, project: ProjectRecord,
                    on_details: Callable[[ProjectRecord], None]) -> None:
        with st.container(border=True):
            st.markdown(render_plain(project.title, "h3", TITLE_CSS), unsafe_allow_html=True)
            st.markdown(render_plain(f"By {project.author}", style=BYLINE_CSS),
                        unsafe_allow_html=True)
            if project.image_url:
                self._render_image(project.image_url, project.title)
            st.markdown(render_clamped(project.description, self.lines),
                        unsafe_allow_html=True)
            if project.tags:
                st.markdown(render_badges(project.tags), unsafe_allow_html=True)
            st.button("View Details", key=f"details-{project.id}",
                      on_click=on_details, args=(project,))

    # ─── Details ─────────────────────────────────────────────────────────────────

    def render_details(self, project: ProjectRecord) -> None:
        """Body of the details dialog."""
        st.markdown(render_plain(f"By {project.author}", style=BYLINE_CSS),
                    unsafe_allow_html=True)
        if project.image_url:
            self._render_image(project.image_url, project.title)
        st.markdown(render_plain(project.description), unsafe_allow_html=True)
        if project.tags:
            st.markdown(render_badges(project.tags), unsafe_allow_html=True)
        st.caption(
            "Submitted on: "
            + format_submission_time(project.timestamp, self.date_format)
        )

        col_fb, col_gh = st.columns(2)
        with col_fb:
            self.render_action(feedback_action(project), key=f"feedback-{project.id}")
        with col_gh:
            self.render_action(repository_action(project), key=f"github-{project.id}",
                               icon=":material/code:")

    def render_action(self, action: LinkAction, key: str,
                      icon: Optional[str] = None) -> None:
        """Enabled actions open in a new tab; disabled ones show the notice if forced."""
        if action.enabled:
            st.link_button(action.label, action.open(), icon=icon,
                           width="stretch")
            return
        if st.button(action.label, key=key, icon=icon, disabled=True,
                     width="stretch"):
            self.show_notice(action)

    def show_notice(self, action: LinkAction) -> None:
        # disabled buttons never report a click; this runs only when an
        # action is invoked without its URL through another caller
        try:
            action.open()
        except MissingLinkError as e:
            self.logger.info("Blocked action %r: %s", action.label, e.notice)
            st.warning(e.notice)

    def _render_image(self, url: str, alt: str) -> None:
        st.markdown(
            f'<img src="{html.escape(url, quote=True)}" alt="{html.escape(alt, quote=True)}"'
            f' style="width:100%; height:{self.image_h}px; object-fit:cover;'
            f' border-radius:6px; margin-bottom:1rem;">',
            unsafe_allow_html=True,
        )


def details_dialog(renderer: GalleryRenderer, project: ProjectRecord) -> None:
    """Open the expandable detail view for one project."""
    @st.dialog(project.title, width="large")
    def _show():
        renderer.render_details(project)

    _show()
