"""Inline styling: one line of raw markdown to one line of safe markup.

:func:`render_inline` runs an ordered cascade of independent pattern
passes over a single line:

1. escape ``&``, ``<`` and ``>``
2. code span          -- ``\\`x\\```       -> ``<code>x</code>``
3. bold + italic      -- ``***x***``   -> ``<strong><em>x</em></strong>``
4. bold               -- ``**x**``     -> ``<strong>x</strong>``
5. italic             -- ``*x*``       -> ``<em>x</em>``
6. link               -- ``[t](url)``  -> ``<a href=... target="_blank" ...>t</a>``

Each pass sees the output of the previous one.  This is deliberately not
a nested inline parser: inputs with mismatched delimiter counts keep
whatever the cascade produces (``**a*b**c*`` becomes
``*<em>a</em>b*<em>c</em>``).  Code spans are the one exception to
"later passes see everything": their content is set aside after step 2
and restored verbatim at the end.
"""

from __future__ import annotations

import re
from collections.abc import Callable as _Callable

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_BOLD_ITALIC_RE = re.compile(r"\*\*\*([^*]+)\*\*\*")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"\*([^*]+)\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Escaped text holds no literal "<", so these markers cannot collide
# with anything the user typed.
_CODE_MARKER = "<code:{index}>"
_CODE_MARKER_RE = re.compile(r"<code:(\d+)>")

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"


def escape_html_text(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for safe embedding as element text.

    ``&`` is replaced first so the entities produced for ``<`` and ``>``
    are not escaped a second time.

    >>> escape_html_text("a < b && c")
    'a &lt; b &amp;&amp; c'
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _link(match: re.Match[str]) -> str:
    label, url = match.group(1), match.group(2)
    href = url.replace('"', "&quot;")
    return f'<a href="{href}" target="{LINK_TARGET}" rel="{LINK_REL}">{label}</a>'


# Steps 3-6, applied in order after code spans have been set aside.
_STYLE_RULES: list[tuple[re.Pattern[str], str | _Callable[[re.Match[str]], str]]] = [
    (_BOLD_ITALIC_RE, r"<strong><em>\1</em></strong>"),
    (_BOLD_RE, r"<strong>\1</strong>"),
    (_ITALIC_RE, r"<em>\1</em>"),
    (_LINK_RE, _link),
]


def render_inline(line: str) -> str:
    """Convert one line of raw markdown into escaped, inline-styled markup.

    Parameters
    ----------
    line:
        A single source line, without its trailing newline.

    Returns
    -------
    str
        Markup-safe text.  Every ``<`` and ``&`` in the result belongs to
        a tag or entity the cascade inserted itself.

    Examples
    --------
    >>> render_inline("This is **bold** text")
    'This is <strong>bold</strong> text'
    >>> render_inline("`**x**`")
    '<code>**x**</code>'
    """
    processed = escape_html_text(line)

    code_spans: list[str] = []

    def _stash(match: re.Match[str]) -> str:
        code_spans.append(match.group(1))
        return _CODE_MARKER.format(index=len(code_spans) - 1)

    processed = _CODE_SPAN_RE.sub(_stash, processed)

    for pattern, replacement in _STYLE_RULES:
        processed = pattern.sub(replacement, processed)

    if code_spans:
        # A span restored inside an href must not close the attribute.
        processed = _CODE_MARKER_RE.sub(
            lambda m: "<code>{}</code>".format(code_spans[int(m.group(1))].replace('"', "&quot;")),
            processed,
        )

    return processed
