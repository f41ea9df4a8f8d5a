"""Identifier conversion from the canonical leading-capital convention."""


def to_camel_case(name: str) -> str:
    """Lowercase the first character only.

    ``TunnelId`` becomes ``tunnelId`` and ``IPv4`` becomes ``iPv4``; acronyms
    keep their internal capitalization.
    """
    if not name:
        return name
    return name[0].lower() + name[1:]
