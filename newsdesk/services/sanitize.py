from __future__ import annotations

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PreformattedString
from bs4.formatter import HTMLFormatter

# Article bodies are fragments, so a snippet that looks like a filename is still markup
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

ALLOWED_TAGS = frozenset({
    "p", "br",
    "strong", "em", "u",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li",
    "a", "img",
    "blockquote", "code", "pre",
    "span", "div",
})

GLOBAL_ATTRIBUTES = frozenset({"class", "id"})

ALLOWED_ATTRIBUTES = {
    "a": frozenset({"href", "target", "rel"}),
    "img": frozenset({"src", "alt", "title"}),
}

# Removed together with everything inside them
DROP_WITH_CONTENT = frozenset({
    "script", "style", "template", "noscript", "noembed", "noframes",
    "iframe", "frame", "frameset", "object", "embed", "applet", "param",
    "svg", "math",
    "form", "input", "button", "select", "option", "optgroup", "textarea", "datalist", "output",
    "audio", "video", "source", "track", "canvas",
    "head", "title", "meta", "link", "base",
    "xmp", "plaintext",
})

URL_ATTRIBUTES = frozenset({"href", "src"})
SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto", "tel"})

_SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
# Browsers skip these inside a scheme, so "java\tscript:" still runs
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f-\x9f]+")

def is_safe_url(value: str, tag_name: str) -> bool:
    compact = _IGNORED_URL_CHARS_RE.sub("", value)
    m = _SCHEME_RE.match(compact)
    if not m:
        # relative path, query or fragment
        return True
    scheme = m.group(1).lower()
    if scheme in SAFE_URL_SCHEMES:
        return True
    return tag_name == "img" and scheme == "data" and compact[5:].lower().startswith("image/")

class _SourceOrderFormatter(HTMLFormatter):
    """Escapes like bs4's "minimal" formatter but keeps attributes in source order."""

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())

SOURCE_ORDER = _SourceOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)

# Same set the tree builder treats as whitespace
_ASCII_SPACES = "\x20\x0a\x09\x0c\x0d"

def _collapse_whitespace(soup) -> None:
    # The parser reduces whitespace-only strings to one character; removing
    # elements can leave longer runs, which a second pass would then shrink
    for node in soup.find_all(string=True):
        if type(node) is not NavigableString or node.strip(_ASCII_SPACES):
            continue
        if node.find_parent("pre") is not None:
            continue
        collapsed = "\n" if "\n" in node else " "
        if collapsed != node:
            node.replace_with(NavigableString(collapsed))

def _clean_attributes(tag) -> None:
    allowed = GLOBAL_ATTRIBUTES | ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
    for name in list(tag.attrs):
        value = tag.attrs[name]
        if name not in allowed:
            del tag.attrs[name]
        elif name in URL_ATTRIBUTES and not is_safe_url(value or "", tag.name):
            del tag.attrs[name]

def sanitize_html(html: str) -> str:
    """
    Reduce an HTML fragment to the allowed tags and attributes.

    Disallowed elements are unwrapped (their children are kept) unless they can
    carry executable or embedded content, in which case they are dropped whole.
    Comments and other markup declarations are removed.

    The stdlib ``html.parser`` tree builder is used because it does not repair
    or restructure markup, so parsing the output again gives back the same tree
    and the function is idempotent.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

    for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        node.extract()

    for tag in soup.find_all(list(DROP_WITH_CONTENT)):
        if not tag.decomposed:
            tag.decompose()

    # Document order: a parent is unwrapped before its children are visited
    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            _clean_attributes(tag)

    soup.smooth()
    _collapse_whitespace(soup)

    return soup.decode(formatter=SOURCE_ORDER)
