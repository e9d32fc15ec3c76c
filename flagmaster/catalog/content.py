"""Built-in flag catalog.

Used when no CATALOG_PATH is configured. Deliberately includes the classic
look-alike groups (Indonesia/Monaco/Poland, Chad/Romania, Ireland/Italy/
Côte d'Ivoire, Netherlands/Luxembourg, the Nordic crosses) so that the
distractor selector has real confusions to work with.
"""

from flagmaster.db.models import Item


def _flag(code: str, name: str, continent: str, colors: list[str], layout: str) -> Item:
    return Item(code=code, name=name, category=continent, colors=tuple(colors), layout=layout)


SEED_CATALOG: list[Item] = [
    # Europe
    _flag("FR", "France", "Europe", ["blue", "white", "red"], "vertical-tricolor"),
    _flag("IT", "Italy", "Europe", ["green", "white", "red"], "vertical-tricolor"),
    _flag("IE", "Ireland", "Europe", ["green", "white", "orange"], "vertical-tricolor"),
    _flag("BE", "Belgium", "Europe", ["black", "yellow", "red"], "vertical-tricolor"),
    _flag("RO", "Romania", "Europe", ["blue", "yellow", "red"], "vertical-tricolor"),
    _flag("DE", "Germany", "Europe", ["black", "red", "yellow"], "horizontal-tricolor"),
    _flag("NL", "Netherlands", "Europe", ["red", "white", "blue"], "horizontal-tricolor"),
    _flag("LU", "Luxembourg", "Europe", ["red", "white", "blue"], "horizontal-tricolor"),
    _flag("RU", "Russia", "Europe", ["white", "blue", "red"], "horizontal-tricolor"),
    _flag("PL", "Poland", "Europe", ["white", "red"], "bicolor"),
    _flag("MC", "Monaco", "Europe", ["red", "white"], "bicolor"),
    _flag("UA", "Ukraine", "Europe", ["blue", "yellow"], "bicolor"),
    _flag("SE", "Sweden", "Europe", ["blue", "yellow"], "nordic-cross"),
    _flag("DK", "Denmark", "Europe", ["red", "white"], "nordic-cross"),
    _flag("NO", "Norway", "Europe", ["red", "white", "blue"], "nordic-cross"),
    _flag("FI", "Finland", "Europe", ["white", "blue"], "nordic-cross"),
    _flag("CH", "Switzerland", "Europe", ["red", "white"], "cross"),
    _flag("GB", "United Kingdom", "Europe", ["red", "white", "blue"], "union"),
    # Africa
    _flag("TD", "Chad", "Africa", ["blue", "yellow", "red"], "vertical-tricolor"),
    _flag("CI", "Côte d'Ivoire", "Africa", ["orange", "white", "green"], "vertical-tricolor"),
    _flag("ML", "Mali", "Africa", ["green", "yellow", "red"], "vertical-tricolor"),
    _flag("GN", "Guinea", "Africa", ["red", "yellow", "green"], "vertical-tricolor"),
    _flag("NG", "Nigeria", "Africa", ["green", "white"], "vertical-tricolor"),
    _flag("CD", "DR Congo", "Africa", ["blue", "yellow", "red"], "diagonal"),
    _flag("CF", "Central African Republic", "Africa", ["blue", "white", "green", "yellow", "red"], "emblem"),
    _flag("EG", "Egypt", "Africa", ["red", "white", "black"], "horizontal-tricolor"),
    _flag("LR", "Liberia", "Africa", ["red", "white", "blue"], "stars-and-stripes"),
    # Asia
    _flag("ID", "Indonesia", "Asia", ["red", "white"], "bicolor"),
    _flag("JP", "Japan", "Asia", ["white", "red"], "disc"),
    _flag("BD", "Bangladesh", "Asia", ["green", "red"], "disc"),
    _flag("AE", "United Arab Emirates", "Asia", ["green", "white", "black", "red"], "hoist-band"),
    _flag("YE", "Yemen", "Asia", ["red", "white", "black"], "horizontal-tricolor"),
    # Americas
    _flag("US", "United States", "Americas", ["red", "white", "blue"], "stars-and-stripes"),
    _flag("CO", "Colombia", "Americas", ["yellow", "blue", "red"], "horizontal-tricolor"),
    _flag("EC", "Ecuador", "Americas", ["yellow", "blue", "red"], "emblem"),
    _flag("MX", "Mexico", "Americas", ["green", "white", "red"], "emblem"),
    _flag("PE", "Peru", "Americas", ["red", "white"], "vertical-tricolor"),
    # Oceania
    _flag("AU", "Australia", "Oceania", ["blue", "white", "red"], "ensign"),
    _flag("NZ", "New Zealand", "Oceania", ["blue", "white", "red"], "ensign"),
]
