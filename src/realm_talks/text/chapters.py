"""
Video description segmentation.

Splits a free-text YouTube description into the prose before a
"Chapters" heading, the chapter list itself and the prose after it, so the
presentation layer can render the chapters as a collapsed list.

Example:
    >>> seg = segment("Intro\\n\\nChapters\\n00:00 Start\\n01:00 Middle\\n")
    >>> seg.pre_text
    'Intro'
    >>> seg.chapter_lines
    ['00:00 Start', '01:00 Middle']
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

CHAPTERS_HEADING = "chapters"

_CHAPTER_LINE = re.compile(r"^(\d{1,2}:\d{2}(?::\d{2})?)\s+(\S.*)$")
_LEADING_JUNK = re.compile(r"^[\s>,]+")
_JUNK_BEFORE_BREAK = re.compile(r"[ \t]*[>,]+[ \t]*(?=\r?\n)")


@dataclass(frozen=True)
class Chapter:
    """A single ``<timestamp> <label>`` chapter line."""

    timestamp: str
    label: str

    @property
    def seconds(self) -> int:
        """Offset of the chapter in seconds (``H:MM:SS`` or ``MM:SS``)."""
        total = 0
        for part in self.timestamp.split(":"):
            total = total * 60 + int(part)
        return total


@dataclass
class SegmentedDescription:
    """
    A description split around its chapter list.

    Attributes:
        pre_text: Trimmed prose before the "Chapters" heading (or all of it)
        chapter_lines: Chapter lines in order, stripped but otherwise raw
        post_text: Trimmed prose after the chapter list
    """

    pre_text: str = ""
    chapter_lines: List[str] = field(default_factory=list)
    post_text: str = ""

    def __bool__(self) -> bool:
        return bool(self.pre_text or self.chapter_lines or self.post_text)

    @property
    def chapters(self) -> List[Chapter]:
        """Chapter lines parsed into timestamp/label pairs."""
        parsed = (parse_chapter_line(line) for line in self.chapter_lines)
        return [chapter for chapter in parsed if chapter is not None]

    def as_text(self) -> str:
        """Reassemble the description, separating parts with blank lines."""
        parts = [self.pre_text]
        if self.chapter_lines:
            parts.append("\n".join(["Chapters", *self.chapter_lines]))
        parts.append(self.post_text)
        return "\n\n".join(part for part in parts if part)


def parse_chapter_line(line: str) -> Optional[Chapter]:
    """Parse ``"01:02 Label"`` into a Chapter, or None if it is not one."""
    match = _CHAPTER_LINE.match(line.strip())
    if match is None:
        return None
    return Chapter(timestamp=match.group(1), label=match.group(2).strip())


def sanitize_description(text: str) -> str:
    """
    Remove feed artifacts from a description.

    Strips ``>``, commas and whitespace from the very start of the text and
    stray ``>`` or ``,`` characters sitting right before a line break.
    """
    text = _LEADING_JUNK.sub("", text)
    return _JUNK_BEFORE_BREAK.sub("", text)


def segment(description: Optional[str], sanitize: bool = True) -> SegmentedDescription:
    """
    Split a description into pre text, chapter lines and post text.

    The chapter block is the first line reading exactly "Chapters"
    (case-insensitive) that is followed by at least one timestamp line,
    together with all consecutive timestamp lines after it. A heading with
    no timestamp lines after it is treated as ordinary prose.

    Args:
        description: Raw description text
        sanitize: Apply ``sanitize_description`` first

    Returns:
        SegmentedDescription; falsy for empty or whitespace-only input
    """
    if not description or not description.strip():
        return SegmentedDescription()

    text = sanitize_description(description) if sanitize else description
    lines = text.splitlines()

    for index, line in enumerate(lines):
        if line.strip().lower() != CHAPTERS_HEADING:
            continue

        end = index + 1
        while end < len(lines) and _CHAPTER_LINE.match(lines[end].strip()):
            end += 1

        if end == index + 1:
            continue

        return SegmentedDescription(
            pre_text="\n".join(lines[:index]).strip(),
            chapter_lines=[chapter.strip() for chapter in lines[index + 1:end]],
            post_text="\n".join(lines[end:]).strip(),
        )

    return SegmentedDescription(pre_text=text.strip())
