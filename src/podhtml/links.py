"""Link target resolution for ``L<>`` formatting codes.

A link is tokenized when its paragraph is parsed, but its target is only
turned into an href when the link is rendered. The resolver holds the two
name-resolution callbacks supplied by the surrounding documentation
generator:

- ``resolve_filename(name)`` maps a class or module name to a file name
- ``resolve_method_anchor(is_class_method, name)`` maps a method name to an
  anchor fragment (without the ``#``)

Target forms, checked in this order:

    L<http://example.com>      external URL, used verbatim
    L<crontab(5)>              man page
    L<Foo::Bar#frobnicate>     instance method of Foo::Bar
    L<Foo::Bar::create>        class method of Foo::Bar
    L<perlpod/"Formatting Codes">  section of another document
    L</"SEE ALSO">             section of this document

A target holding ``#`` or ``::`` is always a method reference, even when
it also contains a ``/``.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from podhtml.config import DEFAULT_MAN_PAGE_URL
from podhtml.utils.text import heading_anchor, is_man_page_reference

FilenameResolver = Callable[[str], str]
MethodAnchorResolver = Callable[[bool, str], str]
DiagnosticReporter = Callable[[str, int], None]


def split_link_content(content: str) -> tuple[str, str]:
    """Split raw link content into ``(text, target)``.

    Everything after the first ``|`` is the target. Without a ``|`` the
    whole content is both text and target.

    Examples:
        >>> split_link_content("the docs|Foo::Bar")
        ('the docs', 'Foo::Bar')
        >>> split_link_content("Foo::Bar")
        ('Foo::Bar', 'Foo::Bar')
    """
    text, bar, target = content.partition("|")
    if not bar:
        return content, content
    return text, target


@dataclass(frozen=True, slots=True)
class LinkResolver:
    """Turns link targets into hrefs.

    Attributes:
        resolve_filename: Class/module name -> target file name
        resolve_method_anchor: (is_class_method, method) -> anchor fragment
        man_page_url: Format string with ``{name}`` and ``{section}``
        report: Receives (message, lineno) for unresolvable targets
    """

    resolve_filename: FilenameResolver
    resolve_method_anchor: MethodAnchorResolver
    man_page_url: str = DEFAULT_MAN_PAGE_URL
    report: DiagnosticReporter | None = None

    def href(self, content: str, lineno: int = 0) -> str:
        """Resolve raw link content to an href."""
        _, target = split_link_content(content)
        target = target.strip()

        if "://" in target:
            return target

        man_page = is_man_page_reference(target)
        if man_page is not None:
            name, section = man_page
            return self.man_page_url.format(name=name, section=section)

        if "#" in target or "::" in target:
            return self._method_href(target)

        return self._section_href(target, lineno)

    def _method_href(self, target: str) -> str:
        """Resolve ``doc#method`` (instance) or ``doc::method`` (class)."""
        if "#" in target:
            document, _, method = target.rpartition("#")
            is_class_method = False
        else:
            document, _, method = target.rpartition("::")
            is_class_method = True

        anchor = self.resolve_method_anchor(is_class_method, method)
        if document:
            return f"{self.resolve_filename(document)}#{anchor}"
        return f"#{anchor}"

    def _section_href(self, target: str, lineno: int) -> str:
        """Resolve ``doc``, ``doc/section`` or ``/section``."""
        document, _, section = target.partition("/")
        section = section.strip().strip('"')

        if not document and not section:
            if self.report is not None:
                self.report("empty link target", lineno)
            return ""

        href = self.resolve_filename(document) if document else ""
        if section:
            href += f"#{heading_anchor(section)}"
        return href
