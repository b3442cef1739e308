"""Curated material vocabulary for inventory cross-referencing.

``EXPLICIT_CODE_MAP`` is authoritative: a lesson material containing one of
its keys is credited with the listed codes and no fuzzier strategy runs.
``GENERIC_HOUSEHOLD_ITEMS`` names everyday items that are never expected to
resolve against the inventory and are kept out of the unmatched report.
"""

# generic name -> inventory code(s)
EXPLICIT_CODE_MAP: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("sandpaper letter", ("LA001",)),
    ("number rod", ("MA001",)),
    ("sandpaper numeral", ("MA002",)),
    ("spindle box", ("MA004",)),
    ("spindles", ("MA004",)),
    ("cards and counters", ("MA005",)),
    ("color tablet", ("SN006", "SN007", "SN008")),
    ("pink tower", ("SN001",)),
    ("brown stair", ("SN002",)),
    ("broad stair", ("SN002",)),
    ("red rod", ("SN003",)),
    ("knobbed cylinder", ("SN004",)),
    ("moveable alphabet", ("LA004",)),
    ("movable alphabet", ("LA004",)),
    ("metal inset", ("LA003",)),
    ("golden bead", ("MA006",)),
    ("teen board", ("MA009",)),
    ("seguin board a", ("MA009",)),
    ("ten board", ("MA010",)),
    ("seguin board b", ("MA010",)),
    ("hundred board", ("MA011",)),
    ("stamp game", ("MA018",)),
    ("globe", ("GG001",)),
    (
        "puzzle map",
        ("GG002", "GG003", "GG004", "GG005", "GG006", "GG007", "GG008", "GG009"),
    ),
    ("geometric solid", ("SN012",)),
    ("constructive triangle", ("SN011",)),
    ("binomial cube", ("SN013",)),
    ("trinomial cube", ("SN024",)),
    ("sound cylinder", ("SN015",)),
    ("geometric cabinet", ("SN014",)),
    ("baric tablet", ("SN016",)),
    ("fraction circle", ("MA022",)),
    ("addition strip board", ("MA012",)),
    ("subtraction strip board", ("MA013",)),
    ("multiplication bead board", ("MA014",)),
    ("division bead board", ("MA015",)),
    ("rough and smooth board", ("SN017",)),
    ("smelling bottle", ("SN021",)),
    ("tasting bottle", ("SN022",)),
    ("knobless cylinder", ("SN005",)),
    ("dressing frame", ("PL007",)),
    ("bead chain", ("MA007", "MA008")),
    ("bead bar", ("MA007", "MA008")),
    ("clock", ("MA026",)),
)

GENERIC_HOUSEHOLD_ITEMS: tuple[str, ...] = (
    "tray", "mat", "water", "towel", "sponge", "basket", "paper", "crayons",
    "pencil", "scissors", "glue", "tape", "book", "cloth", "bowl", "pitcher",
    "blanket", "stuffed animal", "comfortable", "floor mat", "work rug",
    "nature", "outdoor", "garden", "journal", "notebook", "paint", "brush",
    "markers", "colored pencils", "construction paper", "magnifying glass",
    "food", "snack", "ingredients", "apron", "container", "bucket", "rug",
    "timer", "calendar", "chart", "poster", "cards", "pictures", "photos",
    "objects", "items", "music", "song", "instrument", "bell", "drum",
    "mirror", "picture", "small", "large", "set of", "pair of", "index",
    "area", "spot", "reading", "cozy",
)
