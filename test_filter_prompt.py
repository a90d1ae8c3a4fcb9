import unittest
from dataclasses import replace

from config_paths import TableConfig
from filter_prompt import FilterPrompt
from page_fetcher import FetchResult
from table_controller import TableController


class CountingFetcher:
    def __init__(self):
        self.calls = []

    def fetch(self, page, page_size):
        self.calls.append(page)
        records = [{"id": i, "title": f"post {i}"} for i in range(1, 4)]
        return FetchResult(records, 30)


CONFIG = TableConfig(title="posts", endpoint="https://x.test/posts", page_size=3)


class FilterPromptTests(unittest.TestCase):
    def _prompt(self, config=CONFIG):
        fetcher = CountingFetcher()
        ctl = TableController(config, fetcher, spawn=lambda fn: fn())
        ctl.mount()
        ctl.poll()
        messages = []
        prompt = FilterPrompt(ctl, lambda m, _: messages.append(m))
        return prompt, ctl, fetcher, messages

    def _type(self, prompt, text):
        for ch in text:
            prompt.handle_key(ord(ch))

    def test_typing_updates_text_without_fetching(self):
        prompt, ctl, fetcher, _ = self._prompt()

        prompt.start_filter()
        self._type(prompt, "abc")
        prompt.handle_key(127)

        self.assertEqual(ctl.state.filters.title_text, "ab")
        self.assertEqual(fetcher.calls, [1])

    def test_enter_on_body_applies_filter_from_page_one(self):
        prompt, ctl, fetcher, messages = self._prompt()
        ctl.go_to_page(4)
        ctl.poll()

        prompt.start_filter()
        self._type(prompt, "foo")
        prompt.handle_key(10)
        self._type(prompt, "bar")
        prompt.handle_key(10)
        ctl.poll()

        self.assertFalse(prompt.active)
        self.assertEqual(ctl.state.filters.title_text, "foo")
        self.assertEqual(ctl.state.filters.body_text, "bar")
        self.assertEqual(ctl.state.current_page, 1)
        self.assertEqual(fetcher.calls, [1, 4, 1])
        self.assertIn("Filter applied", messages)

    def test_tab_switches_inputs(self):
        prompt, ctl, _, _ = self._prompt()

        prompt.start_filter()
        prompt.handle_key(9)
        self._type(prompt, "x")

        self.assertEqual(prompt.step, "body")
        self.assertEqual(ctl.state.filters.body_text, "x")

    def test_escape_keeps_text_but_does_not_apply(self):
        prompt, ctl, fetcher, _ = self._prompt()

        prompt.start_filter()
        self._type(prompt, "keep")
        prompt.handle_key(27)

        self.assertFalse(prompt.active)
        self.assertEqual(ctl.state.filters.title_text, "keep")
        self.assertEqual(fetcher.calls, [1])

    def test_search_sets_query(self):
        prompt, ctl, _, messages = self._prompt()

        prompt.start_search()
        self._type(prompt, "post 2")
        prompt.handle_key(10)

        self.assertEqual(ctl.matching_rows(), {1})
        self.assertIn("1 matching rows on this page", messages)

    def test_disabled_filter_does_not_open(self):
        prompt, _, _, messages = self._prompt(replace(CONFIG, filter_enabled=False))

        prompt.start_filter()

        self.assertFalse(prompt.active)
        self.assertIn("Filtering is disabled", messages)

    def test_goto_reaches_pages_beyond_the_strip(self):
        prompt, ctl, fetcher, _ = self._prompt()
        self.assertNotIn(10, ctl.page_numbers())

        prompt.start_goto()
        self._type(prompt, "10")
        prompt.handle_key(10)
        ctl.poll()

        self.assertFalse(prompt.active)
        self.assertEqual(ctl.state.current_page, 10)
        self.assertEqual(fetcher.calls, [1, 10])

    def test_goto_clamps_large_numbers(self):
        prompt, ctl, _, _ = self._prompt()

        prompt.start_goto()
        self._type(prompt, "999")
        prompt.handle_key(10)
        ctl.poll()

        self.assertEqual(ctl.state.current_page, 10)

    def test_goto_rejects_non_numbers(self):
        prompt, ctl, fetcher, messages = self._prompt()

        prompt.start_goto()
        self._type(prompt, "ten")
        prompt.handle_key(10)

        self.assertEqual(ctl.state.current_page, 1)
        self.assertEqual(fetcher.calls, [1])
        self.assertIn("Page number required", messages)

    def test_goto_disabled_without_pagination(self):
        prompt, _, _, messages = self._prompt(replace(CONFIG, pagination_enabled=False))

        prompt.start_goto()

        self.assertFalse(prompt.active)
        self.assertIn("Pagination is disabled", messages)


if __name__ == "__main__":
    unittest.main()
