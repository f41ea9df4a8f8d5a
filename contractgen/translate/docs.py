"""Documentation translator — XML doc comments to Javadoc blocks.

Canonical documentation arrives as the raw XML comment text
(``<summary>``, ``<remarks>``, ``<see cref="..."/>`` and friends). The
translator flattens it, rewrites cross references into ``{@link}`` syntax,
and word-wraps summary and remarks to fit the 90 column limit of the
generated sources.
"""

from __future__ import annotations

import re
import textwrap

from contractgen.translate.naming import to_camel_case

MAX_LINE_WIDTH = 90
# Width of the " * " prefix on each comment line
COMMENT_PREFIX_WIDTH = 3

_NEWLINE_INDENT = re.compile(r"\n *")
_CODE_TAGS = [
    re.compile(r'<see langword="([^"]+)" ?/>'),
    re.compile(r'<paramref name="([^"]+)" ?/>'),
    re.compile(r'<typeparamref name="([^"]+)" ?/>'),
    re.compile(r"<c>(.*?)</c>"),
]
_SUMMARY = re.compile(r"<summary>(.*)</summary>")
_REMARKS = re.compile(r"<remarks>(.*)</remarks>")
_PARAM = re.compile(r'<param name="([^"]+)">(.*?)</param>')
_RETURNS = re.compile(r"<returns>(.*?)</returns>")


class DocCommentTranslator:
    """Translates XML doc comments into Javadoc for one canonical namespace."""

    def __init__(self, namespace: str, max_width: int = MAX_LINE_WIDTH):
        self.namespace = namespace
        self.max_width = max_width
        ns = re.escape(namespace)
        self._member_ref = re.compile(rf'<see cref="[PFME]:({ns}\.)?(\w+)\.(\w+)" ?/>')
        self._type_ref = re.compile(rf'<see cref=".:({ns}\.)?([^"]+)" ?/>')

    def translate(self, comment: str | None, indent: str) -> str:
        """Return a Javadoc block for ``comment`` at ``indent``, or "" if there is none."""
        if comment is None or not comment.strip():
            return ""

        text = self.flatten(comment)
        summary = _first_group(_SUMMARY, text)
        remarks = _first_group(_REMARKS, text)
        tags = [f"@param {to_camel_case(name)} {desc.strip()}" for name, desc in _PARAM.findall(text)]
        returns = _first_group(_RETURNS, text)
        if returns:
            tags.append(f"@return {returns}")

        width = self.max_width - COMMENT_PREFIX_WIDTH - len(indent)
        lines = [f"{indent}/**"]
        lines.extend(_comment_lines(indent, summary, width))
        if remarks:
            lines.append(f"{indent} *")
            lines.extend(_comment_lines(indent, remarks, width))
        if tags:
            lines.append(f"{indent} *")
            for tag in tags:
                lines.extend(_comment_lines(indent, tag, width))
        lines.append(f"{indent} */")
        return "\n".join(lines) + "\n"

    def flatten(self, comment: str) -> str:
        """Join the comment onto one line and rewrite inline references."""
        text = comment.replace("\r", "")
        text = _NEWLINE_INDENT.sub(" ", text)
        text = self._member_ref.sub(
            lambda m: f"{{@link {m.group(2)}#{to_camel_case(m.group(3))}}}", text
        )
        text = self._type_ref.sub(r"{@link \2}", text)
        for pattern in _CODE_TAGS:
            text = pattern.sub(r"{@code \1}", text)
        return text


def wrap_comment(text: str, width: int) -> list[str]:
    """Wrap ``text`` to ``width`` columns, never splitting a word.

    Runs of spaces inside a line are kept as written.
    """
    if not text:
        return [""]
    return textwrap.wrap(
        text,
        width=max(width, 1),
        break_long_words=False,
        break_on_hyphens=False,
    ) or [""]


def _first_group(pattern: re.Pattern, text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def _comment_lines(indent: str, text: str, width: int) -> list[str]:
    # An empty line is " *", never " * "
    return [f"{indent} * {line}".rstrip() for line in wrap_comment(text, width)]
