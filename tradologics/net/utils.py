from urllib.parse import urlsplit


def include_protocol(url: str) -> bool:
    """True when the target already carries a scheme (``https://...``)."""
    return "://" in url


def strip_trailing_slash(path: str) -> str:
    if path.endswith("/"):
        return path[:-1]
    return path


def split_path(url: str) -> str:
    """Path plus query of a relative target, e.g. ``/orders?status=open``."""
    parts = urlsplit(url)
    if parts.query:
        return f"{parts.path}?{parts.query}"
    return parts.path
