"""Shared fixtures for podhtml tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from podhtml import Document, Pod, parse
from podhtml.config import reset_parse_config


class RecordingResolvers:
    """Name-resolution callbacks that remember how they were called."""

    def __init__(self) -> None:
        self.filename_calls: list[str] = []
        self.method_calls: list[tuple[bool, str]] = []

    def resolve_filename(self, name: str) -> str:
        self.filename_calls.append(name)
        return name.replace("::", "/") + ".html"

    def resolve_method_anchor(self, is_class_method: bool, name: str) -> str:
        self.method_calls.append((is_class_method, name))
        prefix = "class" if is_class_method else "method"
        return f"{prefix}-{name}"


@pytest.fixture
def resolvers() -> RecordingResolvers:
    return RecordingResolvers()


@pytest.fixture
def parse_pod(resolvers: RecordingResolvers) -> Callable[..., Document]:
    """Parse POD with the recording resolvers."""

    def _parse(source: str, **kwargs: object) -> Document:
        return parse(
            source,
            resolve_filename=resolvers.resolve_filename,
            resolve_method_anchor=resolvers.resolve_method_anchor,
            **kwargs,
        )

    return _parse


@pytest.fixture
def pod(resolvers: RecordingResolvers) -> Pod:
    """Parse-and-render processor using the recording resolvers."""
    return Pod(resolvers.resolve_filename, resolvers.resolve_method_anchor)


@pytest.fixture(autouse=True)
def _default_config() -> None:
    """Every test starts from the default parse configuration."""
    reset_parse_config()
