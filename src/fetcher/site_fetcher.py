"""Fetching of the fixed set of site resources an audit needs.

Every retrieval is a single attempt. Redirects are followed by hand so each
hop can pass the private host guard. Failures never raise: the affected
resource is returned with absent fields and the checks downstream degrade
to their documented warn/fail state.

TLS certificate and hostname verification are disabled on purpose so that
misconfigured sites can still be audited. Do not reuse these sessions for
anything that sends or trusts sensitive data.
"""
from __future__ import annotations

import logging
import socket
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from ipaddress import ip_address
from urllib.parse import urljoin, urlparse

import requests
import urllib3
from bs4.dammit import EncodingDetector
from urllib3.exceptions import InsecureRequestWarning

from src.config.settings import FetcherSettings

logger = logging.getLogger(__name__)

urllib3.disable_warnings(InsecureRequestWarning)

RESOURCE_PATHS = {
    "robots": "/robots.txt",
    "sitemap": "/sitemap.xml",
    "llms_txt": "/llms.txt",
    "llms_full_txt": "/llms-full.txt",
    "security_txt": "/.well-known/security.txt",
}

_HTTP_VERSIONS = {10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


@dataclass(frozen=True)
class FetchedResource:
    """Result of one retrieval. ``None`` fields mean the retrieval failed."""
    body: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    effective_url: str | None = None
    ttfb_ms: int | None = None


@dataclass(frozen=True)
class FetchBundle:
    """Everything fetched for one audit, keyed by resource."""
    origin: str
    home: FetchedResource = field(default_factory=FetchedResource)
    robots: FetchedResource = field(default_factory=FetchedResource)
    sitemap: FetchedResource = field(default_factory=FetchedResource)
    llms_txt: FetchedResource = field(default_factory=FetchedResource)
    llms_full_txt: FetchedResource = field(default_factory=FetchedResource)
    security_txt: FetchedResource = field(default_factory=FetchedResource)


def _validate_ip(ip_str: str) -> tuple[bool, str]:
    """Check if an IP address is safe (not private/internal)."""
    try:
        ip = ip_address(ip_str)
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local:
            return False, f"Access to private/internal IP addresses is forbidden: {ip_str}"
        return True, ""
    except ValueError:
        return False, f"Invalid IP address: {ip_str}"


def _resolve_and_validate_url(url: str) -> tuple[str, str, str]:
    """
    Resolve URL hostname to IP and validate it's safe.
    Returns (resolved_ip, hostname, error_message).

    Every IPv4 and IPv6 address the name resolves to must be public.
    """
    parsed = urlparse(url)

    if parsed.scheme not in {"http", "https"}:
        return "", "", "Only http and https schemes are allowed"

    hostname = parsed.hostname
    if not hostname:
        return "", "", "Invalid URL: hostname not found"

    try:
        addresses = list(dict.fromkeys(info[4][0] for info in socket.getaddrinfo(hostname, None)))
    except (socket.gaierror, UnicodeError):
        return "", "", f"Could not resolve hostname: {hostname}"
    if not addresses:
        return "", "", f"Could not resolve hostname: {hostname}"

    for address in addresses:
        is_safe, error_msg = _validate_ip(address)
        if not is_safe:
            return "", "", error_msg

    return addresses[0], hostname, ""


def _open_session(fetcher: FetcherSettings) -> requests.Session:
    session = requests.Session()
    session.verify = fetcher.verify_tls
    session.headers["User-Agent"] = fetcher.user_agent
    return session


def _get(
    session: requests.Session, url: str, fetcher: FetcherSettings, max_redirects: int
) -> requests.Response:
    """GET ``url``, following at most ``max_redirects`` redirects by hand.

    With the private host guard on, each hop is resolved and validated
    before it is requested.

    Raises:
        ValueError: A hop points at a private or unresolvable host
        requests.TooManyRedirects: The redirect cap was exceeded
    """
    for _ in range(max_redirects + 1):
        if fetcher.block_private_hosts:
            _, _, error_msg = _resolve_and_validate_url(url)
            if error_msg:
                raise ValueError(f"SSRF protection: {error_msg}")

        response = session.get(
            url, timeout=fetcher.request_timeout, stream=True, allow_redirects=False
        )
        location = response.headers.get("Location") if response.is_redirect else None
        if not location:
            return response

        response.close()
        url = urljoin(response.url, location)

    raise requests.TooManyRedirects(f"Exceeded {max_redirects} redirects, last target {url}")


def _status_line(response: requests.Response) -> str:
    version = _HTTP_VERSIONS.get(getattr(response.raw, "version", 11), "HTTP/1.1")
    return f"{version} {response.status_code} {response.reason or ''}".rstrip()


def _normalize_headers(response: requests.Response) -> dict[str, str]:
    headers = {name.lower(): value for name, value in response.headers.items()}
    headers["_status"] = _status_line(response)
    return headers


def _body_encoding(response: requests.Response, content: bytes) -> str:
    """Charset from the Content-Type header, else the one the document declares, else UTF-8.

    requests assumes ISO-8859-1 for any text/* response without a charset
    parameter, so its guess is only trusted when the header names one.
    """
    content_type = response.headers.get("Content-Type", "")
    if "charset=" in content_type.lower() and response.encoding:
        return response.encoding
    return EncodingDetector.find_declared_encoding(content, is_html=True) or "utf-8"


def _read_body(response: requests.Response, max_size: int) -> str | None:
    """Read a streamed body, giving up on anything over ``max_size`` bytes."""
    content_length = response.headers.get("Content-Length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        logger.warning(f"Response too large: {content_length} bytes from {response.url}")
        return None

    chunks = []
    total_size = 0
    for chunk in response.iter_content(chunk_size=8192):
        total_size += len(chunk)
        if total_size > max_size:
            logger.warning(f"Response exceeded {max_size} bytes: {response.url}")
            return None
        chunks.append(chunk)

    content_bytes = b"".join(chunks)
    encoding = _body_encoding(response, content_bytes)
    try:
        return content_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return content_bytes.decode("utf-8", errors="replace")


def probe_headers(url: str, fetcher: FetcherSettings) -> FetchedResource:
    """Fetch only the response head of ``url`` and time the round trip.

    The body is never read, so the elapsed time approximates time to first
    byte.
    """
    start = time.perf_counter()
    try:
        with _open_session(fetcher) as session:
            response = _get(session, url, fetcher, fetcher.home_max_redirects)
            ttfb_ms = round((time.perf_counter() - start) * 1000)
            try:
                return FetchedResource(
                    headers=_normalize_headers(response),
                    effective_url=response.url,
                    ttfb_ms=ttfb_ms,
                )
            finally:
                response.close()
    except (requests.RequestException, ValueError) as e:
        logger.debug(f"Header probe failed for {url}: {e}")
        return FetchedResource()


def fetch_body(url: str, fetcher: FetcherSettings, max_redirects: int) -> FetchedResource:
    """Fetch the body of ``url``. Non-2xx responses are still read."""
    try:
        with _open_session(fetcher) as session:
            response = _get(session, url, fetcher, max_redirects)
            try:
                body = _read_body(response, fetcher.max_response_size)
            finally:
                response.close()
    except (requests.RequestException, ValueError) as e:
        logger.debug(f"Fetch failed for {url}: {e}")
        return FetchedResource()
    return FetchedResource(body=body)


def fetch_all(origin_url: str, fetcher: FetcherSettings) -> FetchBundle:
    """Fetch the home page and the five well-known resources of a site.

    Args:
        origin_url: ``https://<domain>`` without a trailing slash
        fetcher: Fetcher settings (timeouts, redirect caps, concurrency)

    Returns:
        FetchBundle; failed retrievals appear as empty resources
    """
    if fetcher.block_private_hosts:
        _, _, error_msg = _resolve_and_validate_url(origin_url)
        if error_msg:
            logger.warning(f"Skipping fetch of {origin_url}: {error_msg}")
            return FetchBundle(origin=origin_url)

    home_url = f"{origin_url}/"

    with ThreadPoolExecutor(max_workers=fetcher.max_workers) as pool:
        probe = pool.submit(probe_headers, home_url, fetcher)
        home_body = pool.submit(fetch_body, home_url, fetcher, fetcher.home_max_redirects)
        resources = {
            key: pool.submit(fetch_body, f"{origin_url}{path}", fetcher, fetcher.resource_max_redirects)
            for key, path in RESOURCE_PATHS.items()
        }

        head = probe.result()
        home = FetchedResource(
            body=home_body.result().body,
            headers=head.headers,
            effective_url=head.effective_url,
            ttfb_ms=head.ttfb_ms,
        )
        fetched = {key: future.result() for key, future in resources.items()}

    return FetchBundle(origin=origin_url, home=home, **fetched)
