"""Exercise number detection in page content streams.

Exercise pages start with a heading such as "Exercice 105". Depending on how
the heading was typeset, the content stream draws it either as a single
string or as two kerned fragments, followed by the number in its own
string operand:

    [(EXER)31(CICE)]TJ ... (105)Tj
    (Exercice)Tj ... (105)Tj

The functions here never raise: any page that cannot be read or does not
carry a parsable marker simply has no exercise number.
"""

import re
import zlib

from pypdf.errors import PyPdfError
from pypdf.generic import ArrayObject, DictionaryObject, PdfObject, StreamObject

from exoserve.lib.logging_config import get_logger

logger = get_logger(__name__)

# Kerned form first, then the plain form.
EXERCISE_MARKERS: tuple[str, ...] = ("(EXER)31(CICE)", "(Exercice)")

LABEL_MIN = -(2**31)
LABEL_MAX = 2**31 - 1

_LABEL_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_label(token: str) -> int | None:
    """Parse a signed 32-bit decimal integer, rejecting anything else.

    Unlike int(), surrounding whitespace and digit separators are not
    accepted.

    Args:
        token: Text to parse

    Returns:
        Parsed integer, or None if the token is not a valid label
    """
    if not _LABEL_PATTERN.fullmatch(token):
        return None
    value = int(token)
    if value < LABEL_MIN or value > LABEL_MAX:
        return None
    return value


def read_exercise_number(content: bytes | None) -> int | None:
    """Find the exercise number drawn in a page content stream.

    Each marker form is tried in turn. For the first occurrence of a marker,
    the next parenthesized string operand is parsed as the exercise number.

    Args:
        content: Decoded content stream bytes, or None

    Returns:
        The exercise number, or None if no marker yields a valid number
    """
    if content is None:
        return None
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return None

    for marker in EXERCISE_MARKERS:
        start = text.find(marker)
        if start < 0:
            continue
        l_paren = text.find("(", start + len(marker))
        if l_paren < 0:
            continue
        r_paren = text.find(")", l_paren + 1)
        if r_paren < 0:
            continue
        label = parse_label(text[l_paren + 1 : r_paren])
        if label is not None:
            return label
    return None


def _stream_data(obj: PdfObject) -> bytes | None:
    stream = obj.get_object()
    if not isinstance(stream, StreamObject):
        return None
    try:
        return stream.get_data()
    except (PyPdfError, NotImplementedError, ValueError, zlib.error) as e:
        logger.debug(f"Could not decode content stream: {e}")
        return None


def read_page_content(page: DictionaryObject) -> bytes | None:
    """Return the decoded content bytes of a page.

    A /Contents array is concatenated with newlines, in order.

    Args:
        page: Page dictionary

    Returns:
        Decoded content bytes, or None if absent or undecodable
    """
    contents = page.get("/Contents")
    if contents is None:
        return None
    contents = contents.get_object()

    if isinstance(contents, ArrayObject):
        parts = []
        for item in contents:
            data = _stream_data(item)
            if data is None:
                return None
            parts.append(data)
        return b"\n".join(parts)

    return _stream_data(contents)


def read_page_label(page: DictionaryObject) -> int | None:
    """Return the exercise number drawn on a page, if any."""
    return read_exercise_number(read_page_content(page))
