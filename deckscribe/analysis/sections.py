from deckscribe.models.document import Section
from deckscribe.models.line import Line, LineKind


def group_sections(lines: list[Line], default_section_name: str) -> list[Section]:
    """
    Partition parsed lines into named sections.

    Lines before the first heading belong to the default section. A heading
    that appears more than once reuses its existing section, so its lines
    accumulate in one place. Section lines themselves are not kept.

    Args:
        lines: Classified lines in document order
        default_section_name: Name for lines that precede any heading

    Returns:
        Sections in order of first appearance
    """
    sections: dict[str, Section] = {}
    current = default_section_name

    for idx, line in enumerate(lines):
        if idx == 0 and line.kind is not LineKind.SECTION:
            sections.setdefault(current, Section(name=current))

        if line.kind is LineKind.SECTION:
            current = line.text or default_section_name
            sections.setdefault(current, Section(name=current))
        else:
            sections.setdefault(current, Section(name=current)).lines.append(line)

    return list(sections.values())
