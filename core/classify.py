"""
Line classification for template-driven certificates.

Operator templates carry no markup, so each line's role is decided from
its content: equality with the title word or the recipient's name,
containment of the course name, or a run of underscores marking a
signature line. Rules are checked in priority order and the first match
wins.
"""

import re
from typing import List

from core.models import CertificateData, ComposedLine, LineRole

TITLE_WORD = "CERTIFICADO"
SIGNATURE_MARK = "___"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def classify_line(line: str, data: CertificateData) -> LineRole:
    """
    Assign a role to one line of resolved template text.

    Args:
        line: Raw line (surrounding whitespace is ignored)
        data: Record providing the recipient and course names

    Returns:
        The first matching role: BLANK, TITLE, RECIPIENT, COURSE,
        SIGNATURE, otherwise BODY
    """
    text = line.strip()

    if not text:
        return LineRole.BLANK
    if text.casefold() == TITLE_WORD.casefold():
        return LineRole.TITLE
    if text == data.recipient_name:
        return LineRole.RECIPIENT
    if data.course_name and data.course_name in text:
        return LineRole.COURSE
    if SIGNATURE_MARK in text:
        return LineRole.SIGNATURE
    return LineRole.BODY


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def classify_template(text: str, data: CertificateData) -> List[ComposedLine]:
    """Split resolved text into trimmed lines tagged with their roles, in order."""
    lines = []
    for raw in split_lines(text):
        role = classify_line(raw, data)
        lines.append(ComposedLine(
            text="" if role is LineRole.BLANK else raw.strip(),
            role=role,
        ))
    return lines
