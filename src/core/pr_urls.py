"""Convert GitHub API pull request URLs into browser URLs."""

from urllib.parse import urlsplit, urlunsplit


def to_browser_url(api_url: str) -> str:
    """
    Rewrite an API pull request URL into the link a person opens in a browser.

    - https://api.github.com/repos/org/repo/pulls/42 -> https://github.com/org/repo/pull/42
    - https://ghe.example.com/api/v3/repos/org/repo/pulls/7 -> https://ghe.example.com/org/repo/pull/7

    Apply once per API URL; the result is not meant to be fed back in.
    """
    parts = urlsplit(api_url)
    host = parts.netloc.removeprefix("api.")

    segments = [s for s in parts.path.split("/") if s]
    # GitHub Enterprise serves the REST API under /api/v3
    if segments[:2] == ["api", "v3"]:
        segments = segments[2:]
    if segments[:1] == ["repos"]:
        segments = segments[1:]
    if len(segments) >= 2 and segments[-2] == "pulls":
        segments[-2] = "pull"

    return urlunsplit((parts.scheme, host, "/" + "/".join(segments), parts.query, parts.fragment))
