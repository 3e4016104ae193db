"""Round-trip helpers: strip markup to plain text, wrap plain text in markup"""

from semmark.core.tags import TAG_FAMILIES, WIKI_PRIMARY


def strip_markup(content: str) -> str:
    """Replace every matched tag pair with its enclosed text, family by family.

    Each family pass runs over the output of the previous one, so nested
    pairs of different families are all removed. No blocks or metadata are
    built; logic-error pairs are stripped too.
    """
    stripped = content
    for family in TAG_FAMILIES:
        stripped = family.pattern.sub(lambda m: m.group('body'), stripped)
    return stripped.strip()


def convert_to_markup(text: str, make_wiki_primary: bool = False) -> str:
    """Wrap text in a wiki-primary pair when requested; otherwise pass it through."""
    if make_wiki_primary:
        return f"{WIKI_PRIMARY.open_marker}\n{text}\n{WIKI_PRIMARY.close_marker}"
    return text
