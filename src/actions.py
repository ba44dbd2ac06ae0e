# src/actions.py
from dataclasses import dataclass
from typing import Optional

from src.models import ProjectRecord

NO_FEEDBACK_MSG = "No feedback form available for this project."
NO_REPOSITORY_MSG = "No GitHub repository available for this project."


class MissingLinkError(LookupError):
    """An action was invoked for a project that has no URL for it."""

    def __init__(self, notice: str):
        super().__init__(notice)
        self.notice = notice


@dataclass(frozen=True)
class LinkAction:
    """
    A button that opens an external URL in a new browsing context.
    Without a URL the button is rendered disabled; forcing it yields `notice`.
    """
    label: str
    url: Optional[str]
    notice: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def open(self) -> str:
        """Return the URL to open, or raise MissingLinkError with the notice."""
        if not self.url:
            raise MissingLinkError(self.notice)
        return self.url


def submission_action(url: str, label: str = "Submit New Project") -> LinkAction:
    return LinkAction(label=label, url=url)


def feedback_action(project: ProjectRecord) -> LinkAction:
    return LinkAction("Provide Feedback", project.feedback_form_url, NO_FEEDBACK_MSG)


def repository_action(project: ProjectRecord) -> LinkAction:
    return LinkAction("View on GitHub", project.github_repo_url, NO_REPOSITORY_MSG)
