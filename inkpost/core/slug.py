"""URL slug derivation for post titles."""

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^\w-]+", re.ASCII)
_DASHES_RE = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """
    Derive a URL slug from a post title.

    Accents are folded to ASCII, whitespace becomes '-', anything that is not a
    word character or '-' is dropped, and repeated or edge dashes are removed.
    Raises ValueError when nothing usable is left.
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = _WHITESPACE_RE.sub("-", folded.strip().lower())
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _DASHES_RE.sub("-", slug).strip("-")
    if not slug:
        raise ValueError(f"title {title!r} does not produce a usable slug")
    return slug
