"""
Argline help rendering.

render_options() turns a registry into an aligned rich table:

    -v, --verbose         print more
    -o, --output=<value>  output file

Palette keys (override through a __styles__ mapping in __main__)
- short-name, long-name, metavar, separator, description
"""
from collections import defaultdict

from rich.table import Table
from rich.text import Text


def render_options(options, /, *, colorful=True):
    """
    build a borderless table with one row per option.

    the name column is sized by rich to the longest "-s, --name[=<value>]"
    entry so every description starts at the same column.
    """
    styles = defaultdict(str, {
        "short-name": "bold #22C55E",  # green for aliases
        "long-name": "bold #00E6FF",  # cyan for full names
        "metavar": "bold #FFD600",  # amber for values
        "separator": "#737373",
        "description": "#9CA3AF",  # muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    table = Table.grid(padding=(0, 2))
    table.add_column("names", no_wrap=True)
    table.add_column("description")

    for option in options:
        names = Text.assemble(
            ("-" + option.short, styler("short-name")),
            (", ", styler("separator")),
            ("--" + option.name, styler("long-name")),
        )
        if option.expects_value:
            names.append("=<value>", styler("metavar"))

        descr = option.descr
        if descr is None:
            descr = Text("")
        elif not isinstance(descr, Text):
            descr = Text(descr, styler("description"))
        table.add_row(names, descr)

    return table


__all__ = (
    "render_options",
)
