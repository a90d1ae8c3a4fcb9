import argparse
import curses
import logging
import os
import sys

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

import config_paths
from _version import __version__
from config_paths import TableConfig, load_config
from logging_config import setup_logging
from orchestrator import Orchestrator
from page_fetcher import PageFetcher
from table_controller import TableController


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pagegrid",
        description="pagegrid - terminal browser for paginated JSON collections",
    )
    parser.add_argument("endpoint", nargs="?", help="collection URL (?_page=&_limit= are appended)")
    parser.add_argument("--title", help="table title")
    parser.add_argument("--page-size", type=int, help="records per page")
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("--no-filter", action="store_true", help="disable the filter inputs")
    parser.add_argument("--no-search", action="store_true", help="disable page search")
    parser.add_argument("--no-sort", action="store_true", help="disable sorting")
    parser.add_argument("--no-pagination", action="store_true", help="hide page navigation")
    parser.add_argument("--no-column-toggle", action="store_true", help="disable the column menu")
    parser.add_argument("--log-file", help=f"log file (default {config_paths.LOG_PATH})")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    return parser


def merge_args(cfg: dict, args) -> dict:
    cfg = dict(cfg)
    if args.endpoint:
        cfg["ENDPOINT"] = args.endpoint
    if args.title:
        cfg["TITLE"] = args.title
    if args.page_size is not None:
        cfg["PAGE_SIZE"] = args.page_size
    if args.timeout is not None:
        cfg["TIMEOUT_SECONDS"] = args.timeout
    for flag in config_paths.FLAG_KEYS:
        if getattr(args, f"no_{flag}"):
            cfg[flag.upper()] = False
    return cfg


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    log_file = args.log_file or config_paths.LOG_PATH
    setup_logging(logging.DEBUG if args.debug else logging.INFO, log_file)
    logger = logging.getLogger(__name__)

    settings = merge_args(load_config(), args)
    try:
        config = TableConfig.from_settings(settings)
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("Browsing %s (page size %s)", config.endpoint, config.page_size)
    fetcher = PageFetcher(config.endpoint, timeout=config.timeout_seconds)
    controller = TableController(config, fetcher)

    def curses_main(stdscr):
        Orchestrator(stdscr, controller).run()

    try:
        curses.wrapper(curses_main)
    except KeyboardInterrupt:
        pass
    state = controller.state
    if state.error:
        print(f"Last fetch failed: {state.error}", file=sys.stderr)


if __name__ == "__main__":
    main()
