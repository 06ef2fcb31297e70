"""Path matching helpers shared by the policy stages."""


def starts_with_segments(path: str, prefix: str) -> bool:
    """
    Check whether ``path`` begins with ``prefix`` on a segment boundary.

    Matching is case-insensitive. ``/test`` matches ``/test`` and
    ``/test/run`` but not ``/testing``.
    """
    normalized = prefix.rstrip("/").lower()
    if not normalized:
        return True
    candidate = path.lower()
    if candidate == normalized:
        return True
    return candidate.startswith(normalized + "/")


def matches_any_prefix(path: str, prefixes) -> bool:
    return any(starts_with_segments(path, prefix) for prefix in prefixes)
