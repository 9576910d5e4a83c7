"""Whitespace canonicalisation for cells and whole documents."""


def normalize_line_endings(text: str) -> str:
    """Convert Windows (``\\r\\n``) and old Mac (``\\r``) line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_whitespace(text: str) -> str:
    """Canonicalise the line structure of *text*.

    - trailing whitespace is stripped from every line
    - runs of two or more blank lines collapse to a single blank line
    - leading and trailing blank lines are removed

    Idempotent: ``normalize_whitespace(normalize_whitespace(x)) == normalize_whitespace(x)``.
    """
    lines: list[str] = []
    for line in normalize_line_endings(text).split("\n"):
        line = line.rstrip()
        # Drop a blank line that follows another blank line (or starts the text)
        if not line and (not lines or not lines[-1]):
            continue
        lines.append(line)

    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
