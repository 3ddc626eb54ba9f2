"""Input sanitization utilities to prevent XSS and injection attacks.

Two modes are offered:

* ``sanitize_text`` escapes every markup-significant character and is the
  default for user-supplied fields.
* ``sanitize_markup`` is for fields that carry rich text. It is a
  blocklist, NOT a sanitizing HTML parser: it removes script elements, inline
  event handlers and the ``javascript:`` / ``data:text/html`` URL tokens, and
  leaves every other tag alone. It does not defend against every obfuscation
  (malformed or nested tags, entity-encoded payloads, mutation XSS), so its
  output must only ever be rendered as HTML, never re-interpreted elsewhere.

``sanitize_value`` walks a decoded JSON-like structure and applies one of the
two to each string it finds.
"""

import html
import re

MAX_DEPTH = 64

# Upper bound on removal passes; each pass is linear in the input length.
MAX_PASSES = 5

_SCRIPT_OPEN_RE = re.compile(r'<script\b', re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r'</script\s*>', re.IGNORECASE)
# Stray closing tags left behind by the element pass.
_SCRIPT_TAG_RE = re.compile(r'</script\b[^>]*>?', re.IGNORECASE)

_ATTR_NAME_RE = re.compile(r'\b(\w+)\s*=')
_HANDLER_PREFIX_RE = re.compile(r'on\w', re.IGNORECASE)
# Quoted values are tried first; the unquoted form stops at whitespace and
# would leave the tail of a quoted value behind.
_ATTR_VALUE_RE = re.compile(r'\s*(?:["\'][^"\']*["\']|[^\s>]*)')

_JS_SCHEME_RE = re.compile(r'javascript:', re.IGNORECASE)
_DATA_HTML_RE = re.compile(r'data:text/html', re.IGNORECASE)

_LIKE_SPECIAL_RE = re.compile(r'([\\%_])')


class InputTooDeeplyNested(ValueError):
    """Raised when a structure nests containers deeper than allowed."""

    def __init__(self, max_depth):
        super().__init__(f'Input nested deeper than {max_depth} levels')
        self.max_depth = max_depth


def _strip_script_elements(value):
    """Drop each <script ...> together with everything up to its closing tag."""
    parts = []
    pos = 0
    while True:
        opening = _SCRIPT_OPEN_RE.search(value, pos)
        if not opening:
            break
        parts.append(value[pos:opening.start()])
        closing = _SCRIPT_CLOSE_RE.search(value, opening.end())
        if not closing:
            # An unclosed script runs to the end of the document.
            pos = len(value)
            break
        pos = closing.end()
    parts.append(value[pos:])
    return _SCRIPT_TAG_RE.sub('', ''.join(parts))


def _strip_event_handlers(value):
    """Remove ``on<word>=value`` attributes, quoted or unquoted.

    Like the pattern ``on\\w+\\s*=``, a handler name may start inside a longer
    word (``xonclick=``); only the part from ``on`` onwards is removed.
    """
    parts = []
    pos = 0
    for match in _ATTR_NAME_RE.finditer(value):
        if match.start() < pos:
            # Inside a value that has already been removed.
            continue
        handler = _HANDLER_PREFIX_RE.search(match.group(1))
        if not handler:
            continue
        parts.append(value[pos:match.start() + handler.start()])
        pos = _ATTR_VALUE_RE.match(value, match.end()).end()
    parts.append(value[pos:])
    return ''.join(parts)


def _strip_once(value):
    value = _strip_script_elements(value)
    value = _strip_event_handlers(value)
    value = _JS_SCHEME_RE.sub('', value)
    return _DATA_HTML_RE.sub('', value)


def sanitize_markup(value):
    """Strip dangerous constructs from an HTML string, keeping other markup.

    Returns an empty string for non-string or empty input. The removal
    passes repeat until nothing changes, so a removal can never join the
    leftovers into a fresh match. Input that is still changing after
    MAX_PASSES passes is built to defeat the blocklist and degrades to an
    empty string.
    """
    if not value or not isinstance(value, str):
        return ''

    for _ in range(MAX_PASSES):
        cleaned = _strip_once(value)
        if cleaned == value:
            return cleaned
        value = cleaned
    return ''


def sanitize_text(value):
    """Escape HTML entities in a string.

    Converts & < > " ' / to their character references so that
    user-supplied strings cannot inject markup or script tags. Not
    idempotent: escaping twice double-escapes the ampersands.
    """
    if not value or not isinstance(value, str):
        return ''
    return html.escape(value, quote=True).replace('/', '&#x2F;')


def sanitize_value(value, html_mode=False, max_depth=MAX_DEPTH):
    """Recursively walk a dict/list structure and sanitize all string values.

    Strings go through ``sanitize_markup`` when ``html_mode`` is set and
    through ``sanitize_text`` otherwise. Lists and tuples keep their type,
    length and order; dicts keep their keys (which are not sanitized).
    None and non-string leaves (int, float, bool) are returned unchanged.

    Raises:
        InputTooDeeplyNested: containers nest deeper than ``max_depth``.
    """
    return _walk(value, html_mode, 0, max_depth)


def _walk(value, html_mode, depth, max_depth):
    if value is None:
        return None
    if isinstance(value, str):
        return sanitize_markup(value) if html_mode else sanitize_text(value)

    if isinstance(value, (dict, list, tuple)):
        depth += 1
        if depth > max_depth:
            raise InputTooDeeplyNested(max_depth)

    if isinstance(value, dict):
        return {key: _walk(item, html_mode, depth, max_depth) for key, item in value.items()}
    if isinstance(value, list):
        return [_walk(item, html_mode, depth, max_depth) for item in value]
    if isinstance(value, tuple):
        return tuple(_walk(item, html_mode, depth, max_depth) for item in value)
    # int, float, bool, etc. – pass through untouched
    return value


def escape_search_term(value, max_length=100):
    """Prepare free-text search input for use inside a SQL LIKE pattern.

    Trims, caps the length and backslash-escapes the LIKE wildcards so a
    search for ``50%`` matches the literal text. Pair with
    ``ilike(..., escape='\\\\')``.
    """
    if not isinstance(value, str):
        return ''
    value = value.strip()[:max_length]
    return _LIKE_SPECIAL_RE.sub(r'\\\1', value)
