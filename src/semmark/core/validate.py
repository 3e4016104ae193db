"""Advisory tag-balance and consensus-range checks for raw markup"""

from semmark.core.models import ValidationResult
from semmark.core.tags import CONSENSUS_OPEN_RE, TAG_FAMILIES, to_float


def validate_markup(content: str) -> ValidationResult:
    """Report structural problems without pairing individual tags.

    Open and close markers are counted per family, so an unclosed tag shows
    up as a count mismatch rather than a location. Consensus percentages
    outside 0-100 are flagged. Never raises.
    """
    errors = []
    for family in TAG_FAMILIES:
        opens = content.count(family.open_marker)
        closes = content.count(family.close_marker)
        if opens != closes:
            errors.append(
                f"Mismatched tags: {family.open_marker} ({opens}) and {family.close_marker} ({closes})"
            )

    for m in CONSENSUS_OPEN_RE.finditer(content):
        percentage = to_float(m.group('param'))
        if not 0 <= percentage <= 100:
            shown = int(percentage) if percentage.is_integer() else percentage
            errors.append(f"Invalid consensus percentage: {shown}% (must be 0-100)")

    return ValidationResult(errors=errors)
