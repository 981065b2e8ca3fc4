"""Ready-made predicate patterns for common string formats.

Both follow the predicate contract: return False when data is fine,
a Problem otherwise. Neither contacts the network.
"""

import re
from typing import Any, Union
from urllib.parse import ParseResult, SplitResult, quote, urlsplit

from shapecheck.matching.models import Problem, ProblemKind, make_problem

# Schemes with a host and a canonical "/" root path, and their default ports
SPECIAL_SCHEMES = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
    "file": None,
}

# Characters left as-is when re-encoding each URL part; everything else is
# percent-encoded, the way a browser's URL parser would
_PATH_SAFE = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) not in '"#<>?`{}')
_USERINFO_SAFE = "".join(chr(c) for c in range(0x21, 0x7F) if chr(c) not in '"#<>?`{}/:;=@[\\]^|')
_FORBIDDEN_HOST_CHARS = set(" \t\n\r#%/<>?@\\^|")

EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def valid_url(data: Any, root: Any = None, path: str = "") -> Union[bool, Problem]:
    """Data must be an absolute URL that is already in canonical form.

    The URL is parsed and re-serialized; if that changes anything besides a
    single trailing "/" on an empty path, the URL is rejected. This catches
    ambiguous authorities like "http://google.com#@evil.com/".
    """
    if isinstance(data, (SplitResult, ParseResult)):
        data = data.geturl()

    if isinstance(data, str):
        try:
            canonical = _canonical_url(data)
        except ValueError:
            canonical = None
        # Parsing always gives an empty path a "/"
        if canonical is not None and (canonical == data or canonical == data + "/" or canonical + "/" == data):
            return False

    return make_problem("data is not a valid url", data, "validURL", path, kind=ProblemKind.PREDICATE_VIOLATION)


def valid_email(data: Any, root: Any = None, path: str = "") -> Union[bool, Problem]:
    """Data must look like local@domain.tld. Says nothing about deliverability."""
    if isinstance(data, str) and EMAIL_REGEX.fullmatch(data):
        return False
    return make_problem("data is not a valid email", data, "validEmail", path, kind=ProblemKind.PREDICATE_VIOLATION)


def _canonical_url(url: str) -> str:
    """Re-serialize url the way a WHATWG URL parser would print it.

    Raises:
        ValueError: url is relative or its authority cannot be parsed
    """
    parts = urlsplit(url)
    scheme = parts.scheme
    if not scheme:
        raise ValueError("URL has no scheme")

    special = scheme in SPECIAL_SCHEMES
    rest = url[len(scheme) + 1:]
    has_authority = rest.startswith("//")

    canonical = scheme + ":"
    if has_authority:
        canonical += "//" + _canonical_authority(parts, special)

    url_path = quote(parts.path, safe=_PATH_SAFE)
    if special and not url_path:
        url_path = "/"
    canonical += url_path

    if parts.query or "?" in rest.split("#", 1)[0]:
        canonical += "?" + parts.query
    if parts.fragment or "#" in rest:
        canonical += "#" + parts.fragment
    return canonical


def _canonical_authority(parts: SplitResult, special: bool) -> str:
    userinfo, _, hostport = parts.netloc.rpartition("@")

    # .port raises ValueError for "11211:80" and out-of-range values
    port = parts.port

    if hostport.startswith("["):
        host = hostport[: hostport.index("]") + 1]
    else:
        host = hostport.partition(":")[0]

    if special:
        if not host and parts.scheme != "file":
            raise ValueError("URL has an empty host")
        if any(char in _FORBIDDEN_HOST_CHARS for char in host):
            raise ValueError(f"URL host contains forbidden characters: {host!r}")
        host = host.lower()

    authority = ""
    if userinfo:
        username, _, password = userinfo.partition(":")
        authority += quote(username, safe=_USERINFO_SAFE)
        if password:
            authority += ":" + quote(password, safe=_USERINFO_SAFE)
        authority += "@"

    authority += host
    if port is not None and port != SPECIAL_SCHEMES.get(parts.scheme):
        authority += f":{port}"
    return authority
