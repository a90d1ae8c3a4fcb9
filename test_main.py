import pytest

import config_paths
from main import build_parser, merge_args


def _settings(argv):
    args = build_parser().parse_args(argv)
    return merge_args(config_paths.default_config(), args)


def test_endpoint_and_options_override_config():
    cfg = _settings(["https://x.test/posts", "--title", "posts", "--page-size", "25"])
    assert cfg["ENDPOINT"] == "https://x.test/posts"
    assert cfg["TITLE"] == "posts"
    assert cfg["PAGE_SIZE"] == 25


def test_defaults_survive_when_flags_absent():
    base = config_paths.default_config()
    base["PAGE_SIZE"] = 50
    cfg = merge_args(base, build_parser().parse_args([]))
    assert cfg["PAGE_SIZE"] == 50
    assert cfg["SORT"] is True


@pytest.mark.parametrize(
    "flag, key",
    [
        ("--no-filter", "FILTER"),
        ("--no-search", "SEARCH"),
        ("--no-sort", "SORT"),
        ("--no-pagination", "PAGINATION"),
        ("--no-column-toggle", "COLUMN_TOGGLE"),
    ],
)
def test_capability_flags(flag, key):
    cfg = _settings([flag])
    assert cfg[key] is False
    others = [k.upper() for k in config_paths.FLAG_KEYS if k.upper() != key]
    assert all(cfg[k] is True for k in others)


def test_version_flag_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        build_parser().parse_args(["-v"])
    assert exc.value.code == 0
