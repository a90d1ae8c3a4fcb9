class ShortcutHelpHandler:
    LINES = [
        "pagegrid shortcuts",
        "",
        "  h / l        select column left / right",
        "  j / k        move row down / up",
        "  s / Enter    sort by selected column (again to flip)",
        "  n / p        next / previous page",
        "  g / G        first / last page",
        "  1-9          jump to page number in the strip",
        "  :            go to any page by number",
        "  f            edit filters (Tab switches input, Enter applies)",
        "  /            search rows on this page",
        "  c            column menu",
        "      space    show / hide column",
        "      m        grab column, j/k carry it, m to drop",
        "      Esc      put carried column back / close menu",
        "  r            reload current page",
        "  ?            this help",
        "  q / Ctrl+C   quit",
    ]

    @classmethod
    def get_lines(cls):
        return list(cls.LINES)
