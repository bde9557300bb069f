"""Parse-time settings for podhtml, carried in a ContextVar.

Every Parser reads the configuration of the context it runs in, so threads
and asyncio tasks can parse with different settings without passing a
config object through each mixin.

Usage:
    pod = Pod(resolve_filename, resolve_method_anchor, config=ParseConfig(strict=True))
    html = pod("=head1 NAME")

    with parse_config_context(ParseConfig(default_indent=2.0)):
        tokens = Parser(source, resolve_filename, resolve_method_anchor).parse()
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Any

DEFAULT_MAN_PAGE_URL = "https://man7.org/linux/man-pages/man{section}/{name}.{section}.html"


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Settings shared by every parser in a context.

    The filename and method-anchor callbacks are constructor arguments of
    Parser, not settings.

    Attributes:
        default_indent: Indent recorded for ``=over`` without an argument
        man_page_url: Format string for man page links, receives ``name``
            and ``section``
        strict: Raise PodSyntaxError on the first diagnostic
    """

    default_indent: float = 4.0
    man_page_url: str = DEFAULT_MAN_PAGE_URL
    strict: bool = False

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "ParseConfig":
        """Build a config from a mapping, ignoring keys it does not know.

        >>> ParseConfig.from_dict({"strict": True, "theme": "dark"}).strict
        True
        """
        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})


_DEFAULT_CONFIG = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "podhtml_parse_config", default=_DEFAULT_CONFIG
)


def get_parse_config() -> ParseConfig:
    """Configuration of the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Replace the configuration of the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Use ``config`` inside the block and restore the previous one after.

    >>> with parse_config_context(ParseConfig(strict=True)):
    ...     get_parse_config().strict
    True
    """
    token = _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.reset(token)


__all__ = [
    "DEFAULT_MAN_PAGE_URL",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
