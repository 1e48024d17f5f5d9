import re
from typing import Mapping

import aiohttp
from aiohttp import hdrs
from multidict import CIMultiDict, CIMultiDictProxy

from rlstats.client.errors import ConstructionError
from rlstats.info import __title__, __version__

USER_AGENT = f"{__title__} (v {__version__})"
DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30, connect=10, sock_connect=10, sock_read=20)

_ILLEGAL_HEADER_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


def build_headers(api_key: str) -> CIMultiDictProxy:
    if not isinstance(api_key, str):
        raise ConstructionError(f"API key must be a string, got {type(api_key).__name__}")
    if _ILLEGAL_HEADER_CHARS.search(api_key):
        raise ConstructionError("API key contains control characters not allowed in a header value")
    try:
        api_key.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ConstructionError("API key contains characters not allowed in a header value") from e

    headers = CIMultiDict()
    headers[hdrs.AUTHORIZATION] = api_key
    headers[hdrs.ACCEPT] = "application/json"
    headers[hdrs.USER_AGENT] = USER_AGENT
    return CIMultiDictProxy(headers)


def create_session(headers: Mapping[str, str], timeout: aiohttp.ClientTimeout = DEFAULT_TIMEOUT) -> aiohttp.ClientSession:
    connector = aiohttp.TCPConnector(limit=100, ttl_dns_cache=300)
    return aiohttp.ClientSession(headers=headers, timeout=timeout, connector=connector)
