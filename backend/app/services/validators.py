"""
Noteful Backend: Input Validators
=================================

What:  Business-rule checks on folder and note fields before they reach storage.
How:   Pure functions returning an error message, or None when the input is fine.
       Routes turn a message into a ValidationError (400).

Both validators treat an absent field (None) as "not being set", so the same
check serves create and partial update.
"""

import logging
from typing import Iterable, Optional

from app.exceptions import ValidationError

logger = logging.getLogger(__name__)

NO_ERRORS = None


def get_folder_validation_error(name: Optional[str]) -> Optional[str]:
    """Folder names may be omitted from an update but never set to ""."""
    if name is not None and len(name) == 0:
        logger.error("Empty folder name given")
        return "Folder name can't be empty"
    return NO_ERRORS


def get_note_validation_error(name: Optional[str]) -> Optional[str]:
    """Same rule as folders: a note name is never the empty string."""
    if name is not None and len(name) == 0:
        logger.error("Empty note name given")
        return "Note name can't be empty"
    return NO_ERRORS


def require_fields(payload: dict, fields: Iterable[str]) -> None:
    """
    Raise ValidationError for the first field in `fields` that is missing.

    A field counts as missing when it is absent or null, matching
    "Missing '<field>' in request body".
    """
    for field in fields:
        if payload.get(field) is None:
            raise ValidationError(
                message=f"Missing '{field}' in request body",
                field=field,
            )
