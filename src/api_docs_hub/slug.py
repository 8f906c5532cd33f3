"""URL slugs for document titles."""

import re
import unicodedata

_DISALLOWED = re.compile(r"[^\w\s$*+~.()'\"!:@-]", re.ASCII)


def slugify(title: str) -> str:
    """'Pet Store API (v2)' -> 'pet-store-api-(v2)'."""
    text = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    text = _DISALLOWED.sub("", text).strip()
    return re.sub(r"\s+", "-", text).lower()
