"""Plain-text stripping and the safe-HTML subset used for rich text."""

import logging
import re
from urllib.parse import urlsplit

from lxml import etree
from lxml import html as lxml_html

from .consts import (
    ALLOWED_ATTRIBUTES,
    ALLOWED_TAGS,
    ALLOWED_URL_SCHEMES,
    DROPPED_WITH_CONTENT,
)

logger = logging.getLogger(__name__)

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_WHITESPACE_RE = re.compile(r"\s+")
_INLINE_WHITESPACE_RE = re.compile(r"[ \t\f\v]+")
_URL_ATTRIBUTES = frozenset({"href", "src"})
_DROPPED_WITH_TEXT = frozenset({"script", "style"})


def strip_tags(value: str, keep_newlines: bool = False) -> str:
    """Remove all markup from value.

    Script and style blocks are removed together with their content. Entity
    references are left as written, so stripping a result again changes
    nothing. With ``keep_newlines`` line structure survives and only runs of
    spaces and tabs inside each line collapse; otherwise every whitespace run
    becomes a single space.
    """
    value = _CONTROL_CHARS_RE.sub("", value or "")
    if not value.strip():
        return ""

    try:
        root = lxml_html.fragment_fromstring(value.replace("&", "&amp;"), create_parent="div")
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"Unparseable text, dropping it: {e}")
        return ""

    for element in list(root.iterdescendants()):
        if not isinstance(element.tag, str) or element.tag.lower() in _DROPPED_WITH_TEXT:
            element.drop_tree()

    text = root.text_content()
    if keep_newlines:
        lines = [_INLINE_WHITESPACE_RE.sub(" ", line).strip() for line in text.splitlines()]
        return "\n".join(lines).strip()

    return _WHITESPACE_RE.sub(" ", text).strip()


def _is_safe_url(url: str) -> bool:
    scheme = urlsplit(url.strip()).scheme.lower()
    return not scheme or scheme in ALLOWED_URL_SCHEMES


def _allowed_attributes(tag: str) -> frozenset:
    return ALLOWED_ATTRIBUTES["*"] | ALLOWED_ATTRIBUTES.get(tag, frozenset())


def _clean_element(element) -> None:
    if not isinstance(element.tag, str):
        # comments and processing instructions
        element.drop_tree()
        return

    tag = element.tag.lower()
    if tag in DROPPED_WITH_CONTENT:
        element.drop_tree()
        return

    if tag not in ALLOWED_TAGS:
        element.drop_tag()
        return

    allowed = _allowed_attributes(tag)
    for name in list(element.attrib):
        value = element.attrib[name]
        if name.lower() not in allowed or (name.lower() in _URL_ATTRIBUTES and not _is_safe_url(value)):
            del element.attrib[name]


def clean_html(value: str) -> str:
    """Reduce an HTML fragment to the allowed tag and attribute subset.

    Disallowed tags are unwrapped (their text is kept), script-like tags are
    removed with their content, and links may only use http, https or mailto.
    """
    if not value or not value.strip():
        return ""

    try:
        root = lxml_html.fragment_fromstring(value, create_parent="div")
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"Unparseable HTML fragment, falling back to plain text: {e}")
        return strip_tags(value, keep_newlines=True)

    for element in list(root.iterdescendants()):
        _clean_element(element)

    rendered = lxml_html.tostring(root, encoding="unicode")
    return rendered[len("<div>") : -len("</div>")].strip()
