"""Domain key normalization."""

WWW_PREFIX = "www."

EMPTY_KEY = ""


def normalize_domain(raw: str | None) -> str:
    """Canonicalize a bare domain into a merge key.

    Trims and lower-cases the domain and removes one leading ``www.``
    label. Other subdomains are kept, so ``m.example.com`` and
    ``example.com`` stay distinct sites.

    Args:
        raw: Domain as published by a source.

    Returns:
        The normalized key, or ``EMPTY_KEY`` for empty input.

    Examples:
        >>> normalize_domain("WWW.Example.COM")
        'example.com'
        >>> normalize_domain("www.www.example.com")
        'www.example.com'
    """
    if not raw:
        return EMPTY_KEY

    normalized = raw.strip().lower()
    if normalized.startswith(WWW_PREFIX):
        normalized = normalized[len(WWW_PREFIX) :]

    return normalized
