"""Test doubles shared by the test modules."""
import requests


SHEET_COLUMNS = {
    "title":             "Project Title",
    "description":       "Project Description",
    "author":            "Author Name",
    "image_url":         "Image URL",
    "tags":              "Project Tags",
    "feedback_form_url": "Feedback Form URL (optional)",
    "github_repo_url":   "GitHub Repo URL",
    "timestamp":         "Timestamp",
}


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, text="", status_code=200):
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Records GET calls and replays a canned response or exception."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


