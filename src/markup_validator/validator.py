"""Storage-format markup validation.

Confluence accepts page bodies in its XHTML-like storage format. Before a
body is sent to the store it is run through a lenient structural parse:
void elements close themselves, HTML entities are tolerated and a
mismatched end tag closes whatever is open above its partner. What the
lenient parse still cannot absorb (stray end tags, elements left open at
end of input, a bare '<') is reported as MalformedMarkupError.

A document that parses cleanly can still be refused by the store: it wants
void elements spelled ``<br />`` and ``<hr />``. Those forms are checked
after the parse and reported as DisallowedTagFormError.
"""

import logging
import re
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from .errors import DisallowedTagFormError, MalformedMarkupError

logger = logging.getLogger(__name__)

# Elements that close themselves when no explicit end tag follows.
AUTO_CLOSE_ELEMENTS = frozenset([
    "basefont", "br", "area", "link", "img", "param",
    "hr", "input", "col", "frame", "isindex", "base", "meta",
])

# (forms the store rejects, form it requires)
DISALLOWED_TAG_FORMS: List[Tuple[Tuple[str, ...], str]] = [
    (("<br>", "<br/>"), "<br />"),
    (("<hr>", "<hr/>"), "<hr />"),
]

_OPAQUE_SECTION = re.compile(r"<!\[CDATA\[.*?\]\]>|<!--.*?-->", re.DOTALL)
_BARE_OPEN = re.compile(r"<(?![A-Za-z_:/!?])")
_BARE_CLOSE = re.compile(r"</(?![A-Za-z_:])")

_START_TAG_NAME = re.compile(r"<\s*([^\s/>]+)")
_END_TAG_NAME = re.compile(r"</\s*([^\s/>]+)")
_QUOTED_VALUE = re.compile(r"""=\s*("[^"]*"|'[^']*')""")


def _blank_out(match: "re.Match[str]") -> str:
    # Keep the line count so reported line numbers stay accurate.
    return "\n" * match.group(0).count("\n")


class _LenientStructureParser(HTMLParser):
    """Tracks open elements and raises on structure it cannot repair.

    HTMLParser lowercases tag names, but storage format is XML and element
    names are case-sensitive, so names are re-read from the source text.
    Void element names are matched case-insensitively.
    """

    def __init__(self, text: str):
        super().__init__(convert_charrefs=True)
        self._lines = text.split("\n")
        self._open: List[str] = []
        self._pending_void: Optional[str] = None

    def _fail(self, reason: str, line: Optional[int] = None) -> None:
        raise MalformedMarkupError(line or self.getpos()[0], reason)

    def _raw_start_name(self, tag: str) -> str:
        match = _START_TAG_NAME.match(self.get_starttag_text() or "")
        return match.group(1) if match else tag

    def _raw_end_name(self, tag: str) -> str:
        line, offset = self.getpos()
        match = _END_TAG_NAME.match(self._lines[line - 1], offset)
        return match.group(1) if match else tag

    def _check_attribute_values(self) -> None:
        for match in _QUOTED_VALUE.finditer(self.get_starttag_text() or ""):
            if "<" in match.group(1):
                self._fail("unescaped < inside quoted string")

    def handle_starttag(self, tag, attrs):
        self._check_attribute_values()
        self._pending_void = None
        name = self._raw_start_name(tag)
        if name.lower() in AUTO_CLOSE_ELEMENTS:
            self._pending_void = name
        else:
            self._open.append(name)

    def handle_startendtag(self, tag, attrs):
        self._check_attribute_values()
        self._pending_void = None

    def handle_endtag(self, tag):
        name = self._raw_end_name(tag)
        if self._pending_void is not None and self._pending_void.lower() == name.lower():
            # <br></br> closes the void element explicitly
            self._pending_void = None
            return
        self._pending_void = None

        while self._open:
            if self._open.pop() == name:
                return
        self._fail(f"unexpected end element </{name}>")

    def handle_data(self, data):
        self._pending_void = None

    def handle_decl(self, decl):
        self._pending_void = None

    def handle_pi(self, data):
        self._pending_void = None

    def unknown_decl(self, data):
        self._pending_void = None

    def finish(self, last_line: int) -> None:
        self.close()
        if self._open:
            self._fail("unexpected EOF", last_line)


class MarkupValidator:
    """Checks that a page body is acceptable to the content store.

    Validation is pure: it performs no I/O and never mutates its input.

    Example:
        >>> validator = MarkupValidator()
        >>> validator.check("<p>Hello<br />World</p>")
        >>> validator.is_valid("<p>Hello<br>World</p>")
        False
    """

    def check(self, markup: str) -> None:
        """Validate markup, raising on the first problem found.

        Args:
            markup: Page body in storage format

        Raises:
            MalformedMarkupError: If the markup is structurally broken
            DisallowedTagFormError: If a void element uses a refused form
        """
        self._check_structure(markup)

        for forms, required in DISALLOWED_TAG_FORMS:
            for form in forms:
                if form in markup:
                    logger.debug(f"Rejecting markup containing {form}")
                    raise DisallowedTagFormError(found=form, required=required)

    def is_valid(self, markup: str) -> bool:
        """Return True when check() would accept the markup."""
        try:
            self.check(markup)
        except (MalformedMarkupError, DisallowedTagFormError):
            return False
        return True

    def _check_structure(self, markup: str) -> None:
        # CDATA and comment bodies are opaque to the structural parse.
        text = _OPAQUE_SECTION.sub(_blank_out, markup)
        last_line = text.count("\n") + 1

        last_open = text.rfind("<")
        if last_open != -1 and text.find(">", last_open) == -1:
            raise MalformedMarkupError(last_line, "unexpected EOF")

        for pattern, reason in (
            (_BARE_CLOSE, "expected element name after </"),
            (_BARE_OPEN, "expected element name after <"),
        ):
            match = pattern.search(text)
            if match:
                line = text.count("\n", 0, match.start()) + 1
                raise MalformedMarkupError(line, reason)

        parser = _LenientStructureParser(text)
        parser.feed(text)
        parser.finish(last_line)
