"""Curated classification vocabulary.

Keyword lists, subject defaults, asset-template rules and household
substitution rules used by ``ModalityClassifier``. Everything here is
immutable data; ``ClassifierConfig`` bundles it so a classifier is a pure
function of (lesson, config).
"""

from dataclasses import dataclass
from enum import Enum

from ...schemas.findings import Modality
from ...schemas.lesson import Subject

# =============================================================================
# KEYWORDS
# =============================================================================

DIRECT_KEYWORDS: tuple[str, ...] = (
    # Pouring and liquids
    "pouring water", "pitcher to pitcher", "pitcher to glasses", "pouring dry",
    "water transfer", "pouring exercise",
    # Transferring with tools
    "spooning", "tonging", "transferring with tongs", "transferring with tweezers",
    "tweezing", "eyedropper",
    # Care of environment
    "polishing", "scrubbing", "sweeping", "mopping", "washing table",
    "washing dishes", "window washing", "dusting", "sponging",
    "cleaning", "plant care", "watering plants", "flower arranging",
    # Food preparation
    "cooking", "baking", "food prep", "cutting fruit", "spreading",
    "peeling", "juicing", "squeezing", "recipe", "snack", "fruit salad",
    "slicing", "grating",
    # Care of self
    "dressing frame", "buttoning", "zipping", "lacing", "tying",
    "shoe tying", "hand washing", "teeth brushing",
    # Handwork
    "sewing", "stitching", "weaving", "knitting", "cross-stitch",
    "woodworking", "hammering", "sanding",
    # Tactile, thermic, baric, olfactory, gustatory
    "fabric box", "fabric matching", "texture", "thermic",
    "baric", "weight tablet", "mystery bag", "stereognostic",
    "smelling bottles", "tasting", "smell",
    # Auditory
    "sound cylinder", "sound box", "bells", "musical bell",
    # Hands-on science
    "magnifying glass", "magnet", "float and sink", "float or sink",
    "sink or float", "volcano", "experiment",
    # Art
    "finger painting", "watercolor", "painting", "clay", "playdough",
    "collage", "torn paper",
    # Nature
    "nature walk", "nature hike", "outdoor", "garden",
    "planting seeds", "growing",
    # Grace and courtesy
    "grace and courtesy", "manners", "greeting", "conflict resolution",
    "sharing", "taking turns",
    # Read aloud
    "read-aloud", "read aloud", "story time",
)

PRINTABLE_KEYWORDS: tuple[str, ...] = (
    # Math manipulatives
    "number rod", "number card", "golden bead", "stamp game",
    "bead bar", "bead chain", "strip board", "addition strip",
    "subtraction strip", "hundred board", "hundred chart",
    "multiplication board", "division board", "place value",
    "seguin board", "teen board", "ten board",
    "fraction circle", "fraction", "decimal board",
    "dot game", "snake game", "bank game",
    # Sensorial
    "pink tower", "brown stair", "red rod", "long rod",
    "knobbed cylinder", "knobless cylinder", "cylinder block",
    "color tablet", "color box", "color matching", "color grading",
    "geometric cabinet", "geometric solid",
    "constructive triangle", "binomial cube", "trinomial cube",
    # Language
    "sandpaper letter", "sandpaper numeral", "moveable alphabet",
    "movable alphabet", "grammar symbol", "grammar box",
    "three-part card", "3-part card", "nomenclature card",
    "word card", "phonogram card", "blend card",
    "sentence analysis", "parts of speech",
    "writing practice", "letter formation", "handwriting",
    # Geography
    "puzzle map", "continent", "country", "world map",
    "map of", "land and water form", "landform",
    "flag", "flags of",
    # Science cards
    "life cycle", "animal classification", "plant part",
    "body part", "skeleton", "anatomy",
    "vertebrate", "invertebrate",
    # Time
    "clock", "telling time", "time",
    "calendar", "days of the week", "months",
)

# =============================================================================
# SUBJECT DEFAULTS
# =============================================================================


@dataclass(frozen=True)
class SubjectDefault:
    modality: Modality
    reason: str


SUBJECT_DEFAULTS: tuple[tuple[str, SubjectDefault], ...] = (
    (Subject.MATH.value, SubjectDefault(Modality.PRINTABLE, "math/geometry subject defaults to printable")),
    (Subject.GEOMETRY.value, SubjectDefault(Modality.PRINTABLE, "math/geometry subject defaults to printable")),
    (Subject.LANGUAGE.value, SubjectDefault(Modality.PRINTABLE, "language subject defaults to printable")),
    (Subject.PRACTICAL_LIFE.value, SubjectDefault(Modality.DIRECT, "practical life subject defaults to direct")),
    (Subject.SENSORIAL.value, SubjectDefault(Modality.DIRECT, "sensorial subject defaults to direct (sensory input)")),
    (Subject.GEOGRAPHY.value, SubjectDefault(Modality.PRINTABLE, "geography/culture/history defaults to printable (card and map based)")),
    (Subject.CULTURE.value, SubjectDefault(Modality.PRINTABLE, "geography/culture/history defaults to printable (card and map based)")),
    (Subject.HISTORY.value, SubjectDefault(Modality.PRINTABLE, "geography/culture/history defaults to printable (card and map based)")),
    (Subject.SCIENCE.value, SubjectDefault(Modality.DIRECT, "science defaults to direct (observation/experiment)")),
    (Subject.ART_MUSIC.value, SubjectDefault(Modality.DIRECT, "art/music defaults to direct (requires real materials)")),
)

FALLBACK_DEFAULT = SubjectDefault(Modality.DIRECT, "fallback default to direct instruction")

NO_CONVERSION_SUBJECT = Subject.READ_ALOUD.value

# =============================================================================
# PRINTABLE ASSET TEMPLATES
# =============================================================================


class AssetTemplate(str, Enum):
    """Printable asset kinds the renderer knows how to produce."""

    NUMBER_CARDS = "number-cards"
    BEAD_BARS = "bead-bars"
    STRIP_BOARD = "strip-board"
    NUMBER_RODS = "number-rods"
    HUNDRED_BOARD = "hundred-board"
    FRACTION_CIRCLES = "fraction-circles"
    SEGUIN_BOARD = "seguin-board"
    OPERATION_BOARD = "operation-board"
    GRADED_SERIES = "graded-series"
    CYLINDER_BLOCKS = "cylinder-blocks"
    COLOR_TABLETS = "color-tablets"
    GEOMETRY_SHAPES = "geometry-shapes"
    LETTER_CARDS = "letter-cards"
    NUMERAL_CARDS = "numeral-cards"
    GRAMMAR_SYMBOLS = "grammar-symbols"
    THREE_PART_CARDS = "three-part-cards"
    PUZZLE_MAP = "puzzle-map"
    FLAG_CARDS = "flag-cards"
    SCIENCE_CARDS = "science-cards"
    CLOCK_FACE = "clock-face"
    HANDWRITING_PRACTICE = "handwriting-practice"
    WORD_CARDS = "word-cards"
    GENERIC_PRINTABLE = "generic-printable"


@dataclass(frozen=True)
class TemplateRule:
    """Emit ``template`` when any matched printable keyword contains one of ``keywords``."""

    template: AssetTemplate
    keywords: tuple[str, ...]


TEMPLATE_RULES: tuple[TemplateRule, ...] = (
    TemplateRule(AssetTemplate.NUMBER_CARDS, ("number card", "place value", "golden bead", "stamp game", "bank game", "dot game")),
    TemplateRule(AssetTemplate.BEAD_BARS, ("bead bar", "bead chain", "snake game")),
    TemplateRule(AssetTemplate.STRIP_BOARD, ("strip board", "addition strip", "subtraction strip")),
    TemplateRule(AssetTemplate.NUMBER_RODS, ("number rod",)),
    TemplateRule(AssetTemplate.HUNDRED_BOARD, ("hundred board", "hundred chart")),
    TemplateRule(AssetTemplate.FRACTION_CIRCLES, ("fraction",)),
    TemplateRule(AssetTemplate.SEGUIN_BOARD, ("seguin board", "teen board", "ten board")),
    TemplateRule(AssetTemplate.OPERATION_BOARD, ("multiplication board", "division board")),
    TemplateRule(AssetTemplate.GRADED_SERIES, ("pink tower", "brown stair", "red rod", "long rod")),
    TemplateRule(AssetTemplate.CYLINDER_BLOCKS, ("cylinder",)),
    TemplateRule(AssetTemplate.COLOR_TABLETS, ("color tablet", "color box", "color matching", "color grading")),
    TemplateRule(AssetTemplate.GEOMETRY_SHAPES, ("geometric cabinet", "geometric solid", "constructive triangle", "binomial cube", "trinomial cube")),
    TemplateRule(AssetTemplate.LETTER_CARDS, ("sandpaper letter", "moveable alphabet", "movable alphabet")),
    TemplateRule(AssetTemplate.NUMERAL_CARDS, ("sandpaper numeral",)),
    TemplateRule(AssetTemplate.GRAMMAR_SYMBOLS, ("grammar symbol", "grammar box", "parts of speech", "sentence analysis")),
    TemplateRule(AssetTemplate.THREE_PART_CARDS, ("three-part card", "3-part card", "nomenclature card")),
    TemplateRule(AssetTemplate.PUZZLE_MAP, ("puzzle map", "continent", "country", "world map", "map of", "land and water form", "landform")),
    TemplateRule(AssetTemplate.FLAG_CARDS, ("flag",)),
    TemplateRule(AssetTemplate.SCIENCE_CARDS, ("life cycle", "animal classification", "plant part", "body part", "skeleton", "anatomy", "vertebrate", "invertebrate")),
    TemplateRule(AssetTemplate.CLOCK_FACE, ("clock", "telling time")),
    TemplateRule(AssetTemplate.HANDWRITING_PRACTICE, ("writing practice", "letter formation", "handwriting")),
    TemplateRule(AssetTemplate.WORD_CARDS, ("word card", "phonogram card", "blend card")),
)

FALLBACK_TEMPLATE = AssetTemplate.GENERIC_PRINTABLE

# =============================================================================
# HOUSEHOLD SUBSTITUTION RULES
# =============================================================================


@dataclass(frozen=True)
class MatchClause:
    """All of ``title_all`` in the title, and (when given) one of ``title_any``
    in the title or one of ``materials_any`` in the materials."""

    title_all: tuple[str, ...] = ()
    title_any: tuple[str, ...] = ()
    materials_any: tuple[str, ...] = ()

    def matches(self, title: str, materials: str) -> bool:
        if not all(word in title for word in self.title_all):
            return False
        if not self.title_any and not self.materials_any:
            return True
        return any(word in title for word in self.title_any) or any(
            word in materials for word in self.materials_any
        )


@dataclass(frozen=True)
class SubstitutionRule:
    """Household substitutes for a DIRECT lesson; matches when any clause does."""

    name: str
    clauses: tuple[MatchClause, ...]
    substitutes: tuple[str, ...]
    preparation: str
    control_of_error: str
    extensions: tuple[str, ...]

    def matches(self, title: str, materials: str) -> bool:
        return any(clause.matches(title, materials) for clause in self.clauses)


def _any_title(*words: str) -> tuple[MatchClause, ...]:
    return (MatchClause(title_any=words),)


SUBSTITUTION_RULES: tuple[SubstitutionRule, ...] = (
    SubstitutionRule(
        name="pouring-water",
        clauses=(MatchClause(title_all=("pouring",), title_any=("water",), materials_any=("water",)),),
        substitutes=("Two small pitchers or measuring cups", "Baking sheet or tray to catch spills", "Small sponge", "Water", "Towel"),
        preparation="Fill one pitcher halfway with water. Place both on a tray. Have sponge and towel ready.",
        control_of_error="The child can see if water spilled on the tray. The sponge teaches self-correction.",
        extensions=("Try pouring colored water to see it better", "Advance to pouring into smaller cups", "Pour dry rice or beans for a quieter version"),
    ),
    SubstitutionRule(
        name="pouring-dry",
        clauses=(MatchClause(title_all=("pouring",), title_any=("dry", "grain"), materials_any=("rice", "beans")),),
        substitutes=("Two small bowls or cups", "Tray", "Dry rice, lentils, or beans", "Small broom and dustpan"),
        preparation="Fill one bowl with rice/beans. Place both on the tray.",
        control_of_error="Spilled grains on the tray show where control is needed. Child sweeps up any spills.",
        extensions=("Use different sized containers", "Try with a funnel", "Count how many spoonfuls fill a cup"),
    ),
    SubstitutionRule(
        name="spooning",
        clauses=(MatchClause(title_any=("spooning",)), MatchClause(title_all=("spoon", "transfer"))),
        substitutes=("Two small bowls", "Tablespoon", "Dried beans or large beads", "Tray"),
        preparation="Place beans in one bowl. Set both bowls and spoon on tray.",
        control_of_error="Child can see if any beans fell outside the bowls.",
        extensions=("Use a smaller spoon for challenge", "Count the items transferred", "Try with water using a ladle"),
    ),
    SubstitutionRule(
        name="tongs",
        clauses=_any_title("tong", "tweezer", "eyedropper"),
        substitutes=("Kitchen tongs or large tweezers", "Two small bowls", "Cotton balls, pom-poms, or large beads", "Tray"),
        preparation="Place items in one bowl. Set tongs and both bowls on tray.",
        control_of_error="Dropped items show where the child needs more practice.",
        extensions=("Sort by color while transferring", "Use smaller items for challenge", "Time yourself: how fast can you transfer them all?"),
    ),
    SubstitutionRule(
        name="cleaning",
        clauses=_any_title("polish", "scrub", "wash", "clean", "sweep", "mop", "dust"),
        substitutes=("Small spray bottle with water", "Soft cloths or rags", "Small bucket", "Sponge", "Child-sized broom (or cut-down broom)"),
        preparation="Set up a cleaning station with all supplies organized left-to-right in order of use.",
        control_of_error="The surface shows if it is clean or still dirty, which is built-in feedback.",
        extensions=("Clean a mirror (fingerprints are visible feedback)", "Wash a plant's leaves", "Polish shoes or wooden items"),
    ),
    SubstitutionRule(
        name="food-prep",
        clauses=_any_title("cooking", "baking", "recipe", "food prep", "snack", "fruit", "spread", "peel", "slice", "grate"),
        substitutes=("Child-safe knife or butter knife", "Cutting board", "Ingredients as listed in the lesson", "Apron", "Mixing bowls and utensils", "Hand washing supplies"),
        preparation="Wash hands first. Set out all ingredients and tools before calling the child. Pre-wash produce.",
        control_of_error="The finished food item shows the result. Taste-testing is the best self-check!",
        extensions=("Let the child serve the food to family", "Draw or write about what you made", "Try a variation with different ingredients"),
    ),
    SubstitutionRule(
        name="dressing",
        clauses=_any_title("dress", "button", "zip", "lace", "tie", "buckle"),
        substitutes=("A button-down shirt or jacket", "Shoes with laces", "A jacket with a zipper", "Child's own clothing"),
        preparation="Lay out the clothing item flat on a table. Demonstrate slowly before the child tries.",
        control_of_error="The clothing shows if it's done correctly: buttons aligned, zipper closed, laces tied.",
        extensions=("Practice on different types of fasteners", "Time yourself getting dressed independently", "Help a younger sibling or stuffed animal get dressed"),
    ),
    SubstitutionRule(
        name="sewing",
        clauses=_any_title("sew", "stitch", "weave", "knit", "thread"),
        substitutes=("Large plastic needle or blunt tapestry needle", "Yarn or embroidery thread", "Burlap or felt squares", "Hole punch (for pre-punching sewing cards)"),
        preparation="Pre-punch holes in the fabric or card. Thread the needle and tie a knot at the end.",
        control_of_error="The stitching pattern shows whether the child followed the path correctly.",
        extensions=("Sew a simple pouch or felt ornament", "Create a sewing card from cardboard", "Practice different stitch patterns"),
    ),
    SubstitutionRule(
        name="woodworking",
        clauses=_any_title("woodwork", "hammer", "sand"),
        substitutes=("Small piece of soft wood (balsa or pine)", "Sandpaper (fine and coarse grit)", "Non-toxic paint and brush", "Drop cloth or newspaper", "Apron"),
        preparation="Cover the work surface. Pre-cut wood to child-safe size. Demonstrate sanding with the grain.",
        control_of_error="The child can feel if the wood is smooth by running fingers over it.",
        extensions=("Make a gift for someone", "Paint a design or pattern", "Try different sandpaper grits and compare results"),
    ),
    SubstitutionRule(
        name="fabric",
        clauses=_any_title("fabric", "texture"),
        substitutes=("6-8 fabric swatches in pairs (cotton, silk, wool, denim, felt, burlap)", "Blindfold or sleep mask", "Basket or tray"),
        preparation='Cut fabric into matching pairs (about 4" squares). Place in a basket.',
        control_of_error="After matching blindfolded, remove the blindfold to check pairs.",
        extensions=("Add more fabric types for challenge", "Describe textures using descriptive words", "Sort by rough/smooth, thick/thin"),
    ),
    SubstitutionRule(
        name="sound",
        clauses=(MatchClause(title_all=("sound",), title_any=("cylinder", "box", "match")),),
        substitutes=("6 identical small containers with lids (film canisters, pill bottles, or small jars)", "Filling materials: rice, beans, sand, bells, paper clips, beads", "Tape to seal lids", "Matching colored stickers for pairs"),
        preparation="Fill pairs of containers with the same material. Seal with tape. Mark matching pairs with same-colored stickers on the bottom (hidden from child).",
        control_of_error="Child flips containers to check if sticker colors match.",
        extensions=("Grade sounds from quiet to loud", "Make more pairs with new materials", "Play a memory game with the sound pairs"),
    ),
    SubstitutionRule(
        name="thermic",
        clauses=_any_title("thermic", "temperature"),
        substitutes=("Metal spoon", "Wooden spoon", "Smooth stone", "Felt square", "Glass jar", "Ceramic tile"),
        preparation="Gather objects of different materials. Let them sit at room temperature.",
        control_of_error='Discussion-based: "Which feels coldest? Warmest? Why?" (metal conducts heat faster)',
        extensions=("Place objects in the sun and compare again", "Try objects from the fridge vs room temperature", 'Sort by "cold-feeling" to "warm-feeling"'),
    ),
    SubstitutionRule(
        name="baric",
        clauses=_any_title("baric", "weight"),
        substitutes=("3-6 identical small containers (film canisters or small boxes)", "Coins, sand, or small rocks to add different weights", "Tape to seal", "Blindfold"),
        preparation="Fill containers with different amounts of coins/sand to create varying weights. Seal with tape.",
        control_of_error="Number the containers on the bottom from lightest to heaviest. Child checks after sorting.",
        extensions=("Use a kitchen scale to verify weight order", "Add more containers for finer discrimination", 'Compare household objects: "Which is heavier?"'),
    ),
    SubstitutionRule(
        name="mystery-bag",
        clauses=_any_title("mystery bag", "stereognostic"),
        substitutes=("Cloth bag or pillowcase", "5-8 familiar household objects (spoon, ball, key, button, block, coin, crayon, shell)"),
        preparation="Place objects in the bag. Child reaches in without looking.",
        control_of_error="Child names the object by touch, then pulls it out to verify.",
        extensions=("Add new unfamiliar objects", "Describe the object before guessing", "Sort objects by texture or shape after identifying"),
    ),
    SubstitutionRule(
        name="science-experiment",
        clauses=_any_title("magnet", "float", "sink", "magnif", "experiment"),
        substitutes=("Magnifying glass", "Magnets (refrigerator magnets work)", "Basin of water", "Various small objects to test", "Science journal and pencil"),
        preparation="Gather testing objects. Set up the experiment station with all materials visible.",
        control_of_error="Record predictions and results, then compare what the child expected with what happened.",
        extensions=("Test more objects around the house", "Draw results in a science journal", 'Make predictions before testing: "What do you think will happen?"'),
    ),
    SubstitutionRule(
        name="art",
        clauses=_any_title("paint", "watercolor", "drawing", "art", "collage", "clay"),
        substitutes=("Paper (drawing, watercolor, or construction)", "Crayons, colored pencils, or markers", "Watercolor paints and brush", "Smock or old shirt", "Cup of water and paper towels"),
        preparation="Cover the work surface. Set out materials in order of use. Demonstrate technique first.",
        control_of_error="Art is self-expressive, so focus on the process, not the product.",
        extensions=("Display the artwork proudly", "Try the same subject with a different medium", "Look at famous artwork for inspiration"),
    ),
    SubstitutionRule(
        name="nature",
        clauses=_any_title("nature walk", "outdoor", "garden", "plant"),
        substitutes=("Nature journal and pencil", "Magnifying glass", "Collection bag or basket", "Weather-appropriate clothing"),
        preparation="Choose a safe outdoor area. Bring observation tools and journal.",
        control_of_error="Compare observations with field guides or look up findings together.",
        extensions=("Press leaves or flowers", "Start a nature collection", "Photograph interesting finds"),
    ),
    SubstitutionRule(
        name="grace-and-courtesy",
        clauses=_any_title("grace", "courtesy", "manner", "greeting"),
        substitutes=("No materials needed: this is a role-play and discussion lesson",),
        preparation="Think of scenarios to role-play. Keep it playful and positive.",
        control_of_error="Practice in real situations throughout the day.",
        extensions=("Role-play at a pretend restaurant", "Write thank-you notes", "Practice with stuffed animals or dolls"),
    ),
    SubstitutionRule(
        name="music",
        clauses=_any_title("music", "rhythm", "song", "instrument", "bell"),
        substitutes=("Pots, pans, wooden spoons for rhythm", "Homemade shakers (rice in sealed containers)", "Singing voice", "Recorded music to listen to"),
        preparation="Gather sound-making objects. Choose a space where noise is okay.",
        control_of_error="Can the child repeat a rhythm pattern? Can they keep a steady beat?",
        extensions=("Create a simple song together", "Clap rhythm patterns for each other to copy", "Listen to different genres and compare"),
    ),
)


@dataclass(frozen=True)
class FixedRemediation:
    """A remediation payload that does not depend on lesson content."""

    name: str
    household_items: tuple[str, ...]
    preparation: str
    control_of_error: str
    extensions: tuple[str, ...]


DIRECT_FALLBACK = FixedRemediation(
    name="fallback",
    household_items=("See lesson for materials list",),
    preparation="Review the lesson steps. Gather all materials before calling your child to the work area.",
    control_of_error="Observe the child: can they complete the activity independently?",
    extensions=("Repeat the lesson another day", "Let the child show a family member what they learned", "Connect this activity to daily life"),
)

READ_ALOUD_REMEDIATION = FixedRemediation(
    name="read-aloud",
    household_items=("The book mentioned in the lesson", "Comfortable reading area"),
    preparation="Choose a cozy spot. Preview the book before reading it aloud.",
    control_of_error="Discussion-based: ask open-ended questions about the story.",
    extensions=("Draw a favorite scene", "Retell the story in your own words", "Act out a scene together"),
)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class ClassifierConfig:
    """Immutable vocabulary bundle passed to ``ModalityClassifier``."""

    direct_keywords: tuple[str, ...] = DIRECT_KEYWORDS
    printable_keywords: tuple[str, ...] = PRINTABLE_KEYWORDS
    subject_defaults: tuple[tuple[str, SubjectDefault], ...] = SUBJECT_DEFAULTS
    fallback_default: SubjectDefault = FALLBACK_DEFAULT
    no_conversion_subject: str = NO_CONVERSION_SUBJECT
    template_rules: tuple[TemplateRule, ...] = TEMPLATE_RULES
    fallback_template: AssetTemplate = FALLBACK_TEMPLATE
    substitution_rules: tuple[SubstitutionRule, ...] = SUBSTITUTION_RULES
    direct_fallback: FixedRemediation = DIRECT_FALLBACK
    no_conversion_remediation: FixedRemediation = READ_ALOUD_REMEDIATION

    def default_for(self, subject: str) -> SubjectDefault:
        for name, default in self.subject_defaults:
            if name == subject:
                return default
        return self.fallback_default
