"""Expression translator — best-effort rewrite of property initializers.

This is textual substitution, not parsing. It knows a handful of canonical
constructs and assumes that any PascalCase word that is not a call refers to
another member in scope. Anything else passes through untouched; invalid
output is left for the target compiler to report.
"""

from __future__ import annotations

import re

from contractgen.errors import AmbiguousInitializerError
from contractgen.translate.naming import to_camel_case

# Two to four capitalized words, not followed by a call parenthesis
_IDENTIFIER_REF = re.compile(r"([A-Z][a-z]+){2,4}\b(?!\()")

# Initializers that mean "no value" in the canonical language
NULL_INITIALIZERS = frozenset({"null", "null!"})


def extract_initializer(source_text: str | None) -> str | None:
    """Recover the initializer expression from a property's declaration text.

    ``source_text`` is everything after the property name, e.g.
    ``{ get; set; } = "ssh";``. Returns the text between ``=`` and ``;``, or
    None if the first line has no ``=``.

    Raises:
        AmbiguousInitializerError: if ``=`` is present but no ``;`` follows it.
    """
    if not source_text:
        return None

    eol = source_text.find("\n")
    if eol < 0:
        eol = len(source_text)
    equals = source_text.find("=")
    if equals < 0 or equals > eol:
        return None

    semicolon = source_text.find(";", equals)
    if semicolon < 0:
        raise AmbiguousInitializerError(source_text)
    return source_text[equals + 1:semicolon].strip()


class ExpressionTranslator:
    """Rewrites canonical initializer expressions into a target language."""

    # Literal substitutions applied in order
    REPLACEMENTS: list[tuple[str, str]] = []

    def translate(self, expression: str | None) -> str | None:
        if expression is None or not expression.strip():
            return None
        result = expression.strip()
        for old, new in self.REPLACEMENTS:
            result = result.replace(old, new)
        return _IDENTIFIER_REF.sub(lambda m: to_camel_case(m.group(0)), result)


class JavaExpressionTranslator(ExpressionTranslator):
    REPLACEMENTS = [
        ("new Regex", "java.util.regex.Pattern.compile"),
        ("Replace", "replace"),
    ]
