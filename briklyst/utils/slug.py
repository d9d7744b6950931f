import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]+")
_DASH_RUNS = re.compile(r"-{2,}")


def slugify(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    slug = normalized.strip().lower().replace(" ", "-")
    slug = _DASH_RUNS.sub("-", _NON_SLUG_CHARS.sub("", slug)).strip("-")
    return slug or "collection"
