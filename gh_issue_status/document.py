"""Locate GitHub issue references in an HTML document."""

import re

from bs4 import BeautifulSoup

ISSUE_SELECTOR = ".issue[data-number]"

# Base-10 integer prefix: "12", " 12", "+12", "12abc" all parse as 12
INTEGER_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_issue_number(value: str | None) -> int | None:
    """Parse the leading integer of value, or None if there is none."""
    if value is None:
        return None
    match = INTEGER_PREFIX.match(value)
    return int(match.group(1)) if match else None


def find_issue_references(document: str | BeautifulSoup) -> list[int]:
    """Return issue numbers referenced by .issue[data-number] elements.

    Missing, zero, negative and unparseable numbers are dropped. Each number
    appears once, in document order of its first reference.

    Args:
        document: HTML source or an already parsed document

    Returns:
        List of positive issue numbers
    """
    if isinstance(document, str):
        document = BeautifulSoup(document, "html.parser")

    numbers = []
    for element in document.select(ISSUE_SELECTOR):
        value = element.get("data-number")
        if isinstance(value, list):
            value = " ".join(value)
        number = parse_issue_number(value)
        if number is not None and number > 0:
            numbers.append(number)

    return list(dict.fromkeys(numbers))
