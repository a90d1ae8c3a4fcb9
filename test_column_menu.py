import unittest
from dataclasses import replace

from column_menu import ColumnMenu
from column_model import column_keys
from config_paths import TableConfig
from page_fetcher import FetchResult
from table_controller import TableController


class OnePageFetcher:
    def fetch(self, page, page_size):
        return FetchResult([{"id": 1, "title": "t", "body": "b"}], 1)


class DummyWin:
    def getmaxyx(self):
        return 10, 40


CONFIG = TableConfig(title="posts", endpoint="https://x.test/posts")


class ColumnMenuTests(unittest.TestCase):
    def _menu(self, config=CONFIG):
        ctl = TableController(config, OnePageFetcher(), spawn=lambda fn: fn())
        ctl.mount()
        ctl.poll()
        messages = []
        menu = ColumnMenu(ctl, lambda m, _: messages.append(m))
        menu.open(DummyWin())
        return menu, ctl, messages

    def _keys(self, menu, keys):
        for ch in keys:
            menu.handle_key(ord(ch))

    def test_space_toggles_highlighted_column(self):
        menu, ctl, _ = self._menu()

        self._keys(menu, "j ")

        self.assertEqual([c.visible for c in ctl.columns], [True, False, True])
        self.assertEqual(menu.lines()[1], "≡ [ ] TITLE")

    def test_grab_move_drop_reorders_once(self):
        menu, ctl, _ = self._menu()

        self._keys(menu, "mjj")
        self.assertTrue(menu.dragging)
        self.assertEqual(column_keys(ctl.columns), ["id", "title", "body"])
        self.assertEqual(column_keys(menu.preview()), ["title", "body", "id"])

        self._keys(menu, "m")

        self.assertFalse(menu.dragging)
        self.assertEqual(column_keys(ctl.columns), ["title", "body", "id"])

    def test_escape_cancels_drag(self):
        menu, ctl, _ = self._menu()

        self._keys(menu, "mj")
        menu.handle_key(27)

        self.assertFalse(menu.dragging)
        self.assertTrue(menu.visible)
        self.assertEqual(menu.cursor, 0)
        self.assertEqual(column_keys(ctl.columns), ["id", "title", "body"])

    def test_escape_closes_menu(self):
        menu, _, _ = self._menu()
        menu.handle_key(27)
        self.assertFalse(menu.visible)

    def test_disabled_column_toggle_does_not_open(self):
        menu, ctl, messages = self._menu(replace(CONFIG, column_toggle_enabled=False))

        self.assertFalse(menu.visible)
        self.assertIn("Column toggling is disabled", messages)


if __name__ == "__main__":
    unittest.main()
