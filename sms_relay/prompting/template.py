"""
Prompt template rendering.

Templates mark substitution points with ``{{name}}``. Only whitelisted names
are substituted, in a single pass, so text that is substituted in is never
re-scanned for markers.
"""

import re
from typing import Iterable, Mapping

from ..errors import InvalidTemplateError

INPUT_VARIABLE = "input"

_MARKER = re.compile(r"\{\{(\w+)\}\}")


def placeholder(name: str = INPUT_VARIABLE) -> str:
    return "{{" + name + "}}"


def has_placeholder(template: str, name: str = INPUT_VARIABLE) -> bool:
    return placeholder(name) in template


def render_template(
    template: str,
    values: Mapping[str, str],
    allowed: Iterable[str] = (INPUT_VARIABLE,),
) -> str:
    """
    Replace every ``{{name}}`` whose name is both allowed and supplied.

    Unknown markers are left as-is.

    Raises:
        InvalidTemplateError: if the template lacks the ``{{input}}`` marker.
    """
    if not has_placeholder(template):
        raise InvalidTemplateError(
            f"Template has no {placeholder()} placeholder"
        )

    allowed = set(allowed)

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in allowed and name in values:
            return str(values[name])
        return match.group(0)

    return _MARKER.sub(_substitute, template)
