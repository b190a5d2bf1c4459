# app/utils/sanitize.py
# Markup neutralisation for free-text request fields
from typing import Annotated, Optional

from pydantic import AfterValidator, StringConstraints

_MARKUP = str.maketrans({"<": "&lt;", ">": "&gt;"})


def clean_markup(value: str) -> str:
    """Escape angle brackets so stored text can't be rendered as HTML"""
    return value.translate(_MARKUP)


SanitizedStr = Annotated[str, AfterValidator(clean_markup)]


def sanitized(min_length: Optional[int] = None, max_length: Optional[int] = None):
    """SanitizedStr with length limits checked on the raw input"""
    return Annotated[
        str,
        StringConstraints(min_length=min_length, max_length=max_length),
        AfterValidator(clean_markup),
    ]
