import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, loading, title, current_page,
                   total_pages, total_count, rows, sort_column, sort_direction,
                   error
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        mode = 'LOADING' if context.get('loading') else 'VIEW'
        title = context.get('title') or ''
        current = context.get('current_page', 1)
        total_pages = context.get('total_pages', 0)
        total_count = context.get('total_count', 0)
        rows = context.get('rows', 0)
        page_info = f"Page {current}/{total_pages} | {rows} rows of {total_count}"
        parts = [mode, title, page_info]
        sort_column = context.get('sort_column')
        if sort_column:
            parts.append(f"sort {sort_column} {context.get('sort_direction', 'asc')}")
        if context.get('error'):
            parts.append("last fetch failed")
        text = " " + " | ".join(p for p in parts if p)

    return text.ljust(width)[:width]


def page_strip_segments(current_page, page_numbers, can_prev, can_next, loading):
    """Segments of the page strip as (label, enabled, selected) tuples."""
    segments = [("«", can_prev, False), ("‹", can_prev, False)]
    for number in page_numbers:
        segments.append((str(number), not loading, number == current_page))
    segments.append(("›", can_next, False))
    segments.append(("»", can_next, False))
    return segments


def title_banner(title: str) -> str:
    return f"{(title or '').upper()} PAGE"
