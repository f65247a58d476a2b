"""
Parser for the card-list notation used in deck and list blocks.

Format, one entry per line:
    <blank line>                           -> blank
    <text not starting with a digit or #>  -> section heading
    # <text>                               -> comment
    <N>[x] <name> [(SET) NNN] [#comment]   -> card
    <N>[x] <name> ... *CMDR*               -> commander (count is always 1)

Example:
    Creatures
    4x Monastery Swiftspear (BRO) 144 # budget slot
    1 Atraxa, Praetors' Voice *CMDR*

Malformed card lines never abort parsing; they become error lines that carry
a message for that line only.
"""

import re

from deckscribe.models.collection import CollectionCounts
from deckscribe.models.identity import name_to_id
from deckscribe.models.line import Line, LineKind

COMMENT_DELIMITER = "#"
COMMANDER_MARKER = "*CMDR*"

# Pattern: "4 Lightning Bolt" or "4x Lightning Bolt"
# Groups: (quantity, card_name)
CARD_LINE_PATTERN = re.compile(r"^(\d+)x?\s(.*)$")

# Pattern: "(M21) 250" set code annotation
SET_CODE_PATTERN = re.compile(r"\s*\([A-Za-z0-9]{3}\)\s\d+")

# Pattern: "3 Forest (M21) 250" (a card line carrying a set code before any comment)
CARD_WITH_SET_CODE_PATTERN = re.compile(r"^\d+x?\s+[^#]+?\s+\([A-Za-z0-9]{3}\)\s\d+")

# Headings are any line whose first character is neither a digit nor the
# comment delimiter. Prose and card lines are told apart by that alone.
HEADING_PATTERN = re.compile(r"^[^0-9" + re.escape(COMMENT_DELIMITER) + r"]")


def _is_blank(line: str) -> bool:
    return not line or line.isspace()


def _split_card_text(line: str) -> tuple[str, list[str]]:
    """
    Separate the card text from its set code and inline comments.

    The set code is removed first, then the remainder is split on every
    comment delimiter.
    """
    text = line
    if CARD_WITH_SET_CODE_PATTERN.match(text):
        text = SET_CODE_PATTERN.sub("", text, count=1).strip()

    comments: list[str] = []
    if COMMENT_DELIMITER in text:
        text, *comments = text.split(COMMENT_DELIMITER)

    return text, comments


def _lookup_global_count(
    card_name: str,
    collection: CollectionCounts,
    has_collection_data: bool,
) -> int | None:
    if not has_collection_data:
        return None
    return collection.cards.get(name_to_id(card_name), 0)


def _parse_commander(
    line: str,
    collection: CollectionCounts,
    has_collection_data: bool,
) -> Line | None:
    """Parse a commander line, None if it does not follow the card grammar."""
    text, comments = _split_card_text(line.replace(COMMANDER_MARKER, "", 1).strip())
    match = CARD_LINE_PATTERN.match(text.strip())
    if match is None:
        return None

    card_name = match.group(2).strip()
    return Line(
        kind=LineKind.COMMANDER,
        card_count=1,
        global_count=_lookup_global_count(card_name, collection, has_collection_data),
        card_name=card_name,
        comments=comments,
    )


def classify_line(
    line: str,
    collection: CollectionCounts,
    has_collection_data: bool,
) -> Line:
    """
    Classify one raw line of card-list text.

    Args:
        line: Raw line, not stripped
        collection: Owned card counts used to resolve ``global_count``
        has_collection_data: Whether any collection is loaded; decided once
            per document by the caller

    Returns:
        The parsed Line. Never raises for malformed input.
    """
    if _is_blank(line):
        return Line(kind=LineKind.BLANK)

    if HEADING_PATTERN.match(line):
        return Line(kind=LineKind.SECTION, text=line)

    if line.startswith(COMMENT_DELIMITER + " "):
        return Line(kind=LineKind.COMMENT, comments=[line])

    if COMMANDER_MARKER in line:
        commander = _parse_commander(line, collection, has_collection_data)
        if commander is not None:
            return commander
        # Marker without a valid card line: handled like any other card line

    return parse_card_line(line, collection, has_collection_data)


def parse_card_line(
    line: str,
    collection: CollectionCounts,
    has_collection_data: bool,
) -> Line:
    """
    Apply the card grammar to a line.

    Returns a card line, or an error line when there is no leading count.
    """
    text, comments = _split_card_text(line)
    match = CARD_LINE_PATTERN.match(text)
    if match is None:
        return Line(kind=LineKind.ERROR, errors=[f"invalid line: {line}"])

    card_count = int(match.group(1))
    card_name = match.group(2).strip()
    errors: list[str] = []
    if not card_name:
        errors.append(f"Unable to parse card name from: {line}")
    if card_count < 1:
        errors.append(f"Card count must be at least 1: {line}")

    return Line(
        kind=LineKind.CARD,
        card_count=card_count,
        global_count=_lookup_global_count(card_name, collection, has_collection_data),
        card_name=card_name,
        comments=comments,
        errors=errors,
    )


def parse_lines(raw_lines: list[str], collection: CollectionCounts) -> list[Line]:
    """
    Classify every line of a document.

    Whether collection data is available is decided once for the whole
    document, so every line agrees on it.
    """
    has_collection_data = collection.has_data()
    return [classify_line(line, collection, has_collection_data) for line in raw_lines]


def parse_source(text: str, collection: CollectionCounts) -> list[Line]:
    """Split source text on newlines and classify every line."""
    return parse_lines(text.split("\n"), collection)


def distinct_card_names(lines: list[Line]) -> list[str]:
    """Distinct non-empty card names in first-seen order."""
    seen: dict[str, None] = {}
    for line in lines:
        if line.card_name:
            seen.setdefault(line.card_name, None)
    return list(seen)
