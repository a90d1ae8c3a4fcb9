import json
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "pagegrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "pagegrid.log")

# default settings
TITLE_DEFAULT = "records"
ENDPOINT_DEFAULT = None
PAGE_SIZE_DEFAULT = 10
TIMEOUT_SECONDS_DEFAULT = 10.0

FLAG_KEYS = ("filter", "search", "sort", "pagination", "column_toggle")


@dataclass(frozen=True)
class TableConfig:
    title: str
    endpoint: str
    page_size: int = PAGE_SIZE_DEFAULT
    filter_enabled: bool = True
    search_enabled: bool = True
    sort_enabled: bool = True
    pagination_enabled: bool = True
    column_toggle_enabled: bool = True
    timeout_seconds: float = TIMEOUT_SECONDS_DEFAULT

    def __post_init__(self):
        if not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValueError(f"page_size must be a positive integer, got {self.page_size!r}")
        if not self.endpoint:
            raise ValueError("endpoint is required")

    @classmethod
    def from_settings(cls, settings: dict) -> "TableConfig":
        return cls(
            title=settings["TITLE"],
            endpoint=settings["ENDPOINT"],
            page_size=settings["PAGE_SIZE"],
            filter_enabled=settings["FILTER"],
            search_enabled=settings["SEARCH"],
            sort_enabled=settings["SORT"],
            pagination_enabled=settings["PAGINATION"],
            column_toggle_enabled=settings["COLUMN_TOGGLE"],
            timeout_seconds=settings["TIMEOUT_SECONDS"],
        )


def default_config() -> dict:
    cfg = {
        "TITLE": TITLE_DEFAULT,
        "ENDPOINT": ENDPOINT_DEFAULT,
        "PAGE_SIZE": PAGE_SIZE_DEFAULT,
        "TIMEOUT_SECONDS": TIMEOUT_SECONDS_DEFAULT,
    }
    for key in FLAG_KEYS:
        cfg[key.upper()] = True
    return cfg


def load_config():
    cfg = default_config()

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg

    if not isinstance(data, dict):
        return cfg

    title = data.get("title")
    if isinstance(title, str) and title.strip():
        cfg["TITLE"] = title.strip()

    endpoint = data.get("endpoint")
    if isinstance(endpoint, str) and endpoint.strip():
        cfg["ENDPOINT"] = endpoint.strip()

    page_size = data.get("page_size")
    if isinstance(page_size, int) and not isinstance(page_size, bool) and page_size > 0:
        cfg["PAGE_SIZE"] = page_size

    timeout = data.get("timeout_seconds")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg["TIMEOUT_SECONDS"] = float(timeout)

    for key in FLAG_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            cfg[key.upper()] = value

    return cfg
