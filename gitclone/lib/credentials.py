"""
Credential handling for repository URLs.

HTTP(S) clones can carry basic-auth credentials in the URL. These helpers
add them, strip them for comparisons, and mask them for logs.
"""

from urllib.parse import quote, urlsplit, urlunsplit

HTTP_SCHEMES = ("http", "https")


def with_credentials(url: str, user: str, token: str) -> str:
    """Return url with user:token embedded, when both are set and the scheme is HTTP(S)."""
    if not user or not token:
        return url
    parts = urlsplit(url)
    if parts.scheme not in HTTP_SCHEMES:
        return url
    host = parts.netloc.rsplit("@", 1)[-1]
    netloc = f"{quote(user, safe='')}:{quote(token, safe='')}@{host}"
    return urlunsplit(parts._replace(netloc=netloc))


def strip_credentials(url: str) -> str:
    """Remove any userinfo from an HTTP(S) url."""
    parts = urlsplit(url)
    if parts.scheme not in HTTP_SCHEMES or "@" not in parts.netloc:
        return url
    host = parts.netloc.rsplit("@", 1)[-1]
    return urlunsplit(parts._replace(netloc=host))


def mask_url(url: str) -> str:
    """Replace the password part of an HTTP(S) url with ***."""
    parts = urlsplit(url)
    if parts.scheme not in HTTP_SCHEMES or "@" not in parts.netloc:
        return url
    userinfo, host = parts.netloc.rsplit("@", 1)
    user = userinfo.split(":", 1)[0]
    return urlunsplit(parts._replace(netloc=f"{user}:***@{host}"))


def same_repository(url_a: str, url_b: str) -> bool:
    """True when two urls name the same repository, ignoring credentials and a trailing .git."""
    def normalize(url: str) -> str:
        url = strip_credentials(url.strip()).rstrip("/")
        if url.endswith(".git"):
            url = url[:-4]
        return url.lower()

    return normalize(url_a) == normalize(url_b)
