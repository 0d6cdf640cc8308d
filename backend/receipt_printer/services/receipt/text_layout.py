"""
Fixed-width text helpers

Thermal printers lay text out in monospaced cells. Widths here are display
columns (wcwidth), not bytes or code points: a CJK character takes two
cells, a combining accent takes none and stays glued to its base character.
"""

from typing import List

from wcwidth import wcwidth


def char_width(ch: str) -> int:
    """Cells taken by one code point (control characters count as 0)"""
    return max(wcwidth(ch), 0)


def display_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clusters(text: str) -> List[str]:
    """
    Split text into user-perceived characters

    Zero-width code points (combining marks, variation selectors, ZWJ and
    whatever follows a ZWJ) are attached to the preceding cluster.
    """
    result: List[str] = []
    join_next = False
    for ch in text:
        if result and (join_next or char_width(ch) == 0):
            result[-1] += ch
        else:
            result.append(ch)
        join_next = ch == "\u200d"
    return result


def truncate(text: str, width: int) -> str:
    """Longest prefix of whole clusters that fits into `width` cells"""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text

    used = 0
    kept = []
    for cluster in clusters(text):
        w = display_width(cluster)
        if used + w > width:
            break
        kept.append(cluster)
        used += w
    return "".join(kept)


def pad(text: str, width: int, align: str = "left") -> str:
    """Pad with spaces to `width` cells; text already wider is returned as is"""
    gap = width - display_width(text)
    if gap <= 0:
        return text
    if align == "right":
        return " " * gap + text
    if align == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def fit(text: str, width: int, align: str = "left") -> str:
    """Truncate then pad: the result is exactly `width` cells (or fewer for wide chars)"""
    return pad(truncate(text, width), width, align)


def space_letters(text: str, spacing: int) -> str:
    """Insert `spacing` spaces between characters"""
    if spacing <= 0:
        return text
    return (" " * spacing).join(clusters(text))


def wrap(text: str, width: int) -> List[str]:
    """
    Greedy word wrap by display columns

    Words longer than the line are hard-broken. Clusters wider than the
    whole line are dropped so no returned line ever exceeds `width`.
    Always returns at least one line.
    """
    if width <= 0:
        return [""]
    if display_width(text) <= width:
        return [text]

    lines: List[str] = []
    current = ""

    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if display_width(candidate) <= width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        # Word on its own line, hard-broken when needed
        for cluster in clusters(word):
            w = display_width(cluster)
            if w > width:
                continue
            if display_width(current) + w > width:
                lines.append(current)
                current = ""
            current += cluster

    if current or not lines:
        lines.append(current)
    return lines
