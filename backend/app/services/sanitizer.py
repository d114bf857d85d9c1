"""
Noteful Backend: Response Sanitizer
===================================

What:  Escapes markup characters in user-supplied text before it leaves the API.
Why:   Folder and note names/contents are stored verbatim. A name like
       "<script>alert(1)</script>" must reach the browser as inert text.
How:   Angle brackets become &lt; / &gt;, so no tag can be opened. Everything
       else (quotes, ampersands, unicode) is left as typed.
When:  Only at serialization time, from the response schemas. Never on write.

Example:
    >>> escape_markup('Inject <script>alert("xss");</script>')
    'Inject &lt;script&gt;alert("xss");&lt;/script&gt;'
"""

from typing import Optional

_MARKUP_TABLE = str.maketrans({"<": "&lt;", ">": "&gt;"})


def escape_markup(text: Optional[str]) -> Optional[str]:
    """Return `text` with angle brackets escaped; None passes through."""
    if text is None:
        return None
    return text.translate(_MARKUP_TABLE)
