# shared_hooks/network_utils.py
from typing import Optional
import httpx

USER_AGENT = "shared-hooks-setup"


class DownloadError(Exception):
    """A remote file could not be fetched (HTTP error status or transport failure)."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def build_file_url(base_url: str, remote_name: str) -> str:
    """Joins the base URL and a remote file path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{remote_name.lstrip('/')}"


def create_http_client(transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """
    Builds the client used for a whole run. Timeouts are httpx's defaults;
    raw.githubusercontent.com may redirect, so redirects are followed.
    """
    return httpx.Client(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


def fetch_file(client: httpx.Client, url: str) -> bytes:
    """
    Issues a single blocking GET and returns the body verbatim.
    Raises DownloadError on any non-2xx status or transport error.
    """
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DownloadError(url, f"HTTP {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise DownloadError(url, str(e) or e.__class__.__name__) from e
    return response.content
