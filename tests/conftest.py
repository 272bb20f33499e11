import textwrap
from pathlib import PurePosixPath

import pytest


class FakeRepo:
    """
    Minimal in-memory posts repo stand-in.
    Keys are relative source paths, values are raw post text (dedented on read).
    Set track_calls=True to record the order of read() calls.
    """

    def __init__(self, texts: dict, track_calls: bool = False):
        self.texts = texts
        self.track_calls = track_calls
        self.calls = []

    def list_post_paths(self):
        return sorted(PurePosixPath(p) for p in self.texts)

    def identifier_for(self, path) -> str:
        return str(PurePosixPath(path).with_suffix(""))

    def get_path(self, slug: str):
        for path in self.list_post_paths():
            if self.identifier_for(path) == slug:
                return path
        return None

    def read(self, path) -> str:
        if self.track_calls:
            self.calls.append(str(path))
        raw = self.texts[str(path)]
        if isinstance(raw, Exception):
            raise raw
        return textwrap.dedent(raw).lstrip()


def make_post_text(
    title="Welcome to my Blog",
    description="This is the introductory post.",
    date="2021-07-15T10:30:00Z",
    extra="",
    body="Hello and welcome.",
) -> str:
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if description is not None:
        lines.append(f"description: {description}")
    if date is not None:
        lines.append(f"date: {date}")
    if extra:
        lines.append(extra)
    lines.append("---")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def welcome_text():
    return make_post_text(title="'Welcome to my Blog'")
