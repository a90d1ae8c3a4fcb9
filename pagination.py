def compute_total_pages(total_count: int, page_size: int) -> int:
    if page_size <= 0 or total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


def page_window(current_page: int, total_pages: int, size: int = 5) -> list[int]:
    # slots start two before the current page; out-of-range slots are dropped
    slots = min(size, max(0, total_pages))
    start = current_page - 2
    return [p for p in range(start, start + slots) if 1 <= p <= total_pages]


class Paginator:
    def __init__(self, page_size: int, current_page: int = 1, total_pages: int = 0):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.total_pages = max(0, total_pages)
        self.current_page = self.clamp(current_page)

    @property
    def last(self) -> int:
        return max(1, self.total_pages)

    def clamp(self, page: int) -> int:
        return max(1, min(page, self.last))

    def go_to(self, page: int) -> int:
        self.current_page = self.clamp(page)
        return self.current_page

    def next_page(self) -> int:
        return self.go_to(self.current_page + 1)

    def prev_page(self) -> int:
        return self.go_to(self.current_page - 1)

    def first_page(self) -> int:
        return self.go_to(1)

    def last_page(self) -> int:
        return self.go_to(self.last)

    def can_go_prev(self, loading: bool = False) -> bool:
        return not loading and self.current_page > 1

    def can_go_next(self, loading: bool = False) -> bool:
        return not loading and self.current_page < self.total_pages

    def window(self, size: int = 5) -> list[int]:
        return page_window(self.current_page, self.total_pages, size)
