"""
Card identity normalization.

Every lookup into the collection, the metadata map, or a grouping table goes
through ``name_to_id`` so that the different parts of the pipeline agree on
which physical card a display name refers to.
"""

MULTI_FACE_SEPARATOR = "//"


def name_to_id(card_name: str | None) -> str:
    """
    Normalize a display name to a card identity.

    Lowercases the name and keeps only the front face of multi-faced cards.

    Examples:
        "Lightning Bolt" -> "lightning bolt"
        "Fire // Ice" -> "fire"
    """
    if not card_name:
        return ""

    identity = card_name.lower()
    if MULTI_FACE_SEPARATOR in identity:
        identity = identity.split(MULTI_FACE_SEPARATOR, 1)[0].strip()
    return identity
