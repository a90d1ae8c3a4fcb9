import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

TOTAL_COUNT_HEADER = "x-total-count"


class FetchError(Exception):
    """A page could not be retrieved or decoded."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


@dataclass
class FetchResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    total_count: int = 0


def build_page_url(endpoint: str, page: int, page_size: int) -> str:
    parts = urlsplit(endpoint)
    query = [
        (k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k not in ("_page", "_limit")
    ]
    query.append(("_page", str(page)))
    query.append(("_limit", str(page_size)))
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment)
    )


def parse_total_count(value) -> int:
    if value is None:
        return 0
    text = str(value).strip()
    digits = ""
    for idx, ch in enumerate(text):
        if ch.isdigit() or (idx == 0 and ch in "+-"):
            digits += ch
        else:
            break
    try:
        count = int(digits)
    except ValueError:
        return 0
    return max(0, count)


def decode_records(payload) -> List[Dict[str, Any]]:
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array, got {type(payload).__name__}")
    records = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise FetchError(f"Record {idx} is not an object")
        records.append(item)
    return records


class PageFetcher:
    def __init__(self, endpoint: str, timeout: float = 10.0, headers: Optional[dict] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.headers = {"Accept": "application/json", "User-Agent": "pagegrid"}
        if headers:
            self.headers.update(headers)

    def fetch(self, page: int, page_size: int) -> FetchResult:
        url = build_page_url(self.endpoint, page, page_size)
        logger.debug("GET %s", url)
        request = Request(url, headers=self.headers)
        try:
            with urlopen(request, timeout=self.timeout) as resp:
                raw_total = resp.headers.get(TOTAL_COUNT_HEADER)
                data = resp.read().decode("utf-8", errors="replace")
        except HTTPError as exc:
            raise FetchError(f"HTTP {exc.code} from {url}", exc) from exc
        except (URLError, TimeoutError, OSError) as exc:
            raise FetchError(f"Request to {url} failed: {exc}", exc) from exc

        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}", exc) from exc

        records = decode_records(payload)
        total = parse_total_count(raw_total)
        logger.info("Fetched page %s (%s records, total %s)", page, len(records), total)
        return FetchResult(records=records, total_count=total)
