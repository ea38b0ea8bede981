"""Pytest configuration and shared fixtures for exoserve tests.

Test documents are written object by object so that the page tree shape
(nesting, untyped or unknown nodes, outlines) is fully under test control.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Union

import pytest
from pypdf import PdfReader

from exoserve.lib.pdf_processor.marker_scanner import read_page_content


@dataclass(frozen=True)
class RawNode:
    """A page tree node written verbatim, e.g. "<< /Type /Foo >>"."""

    body: str
    leaves: int = 0


# A page tree layout: a list is a /Pages node, str or bytes is a page with
# that content stream, None is a page without /Contents.
Layout = Union[list["Layout"], str, bytes, None, RawNode]


def page_text(tag: str, exercise: int | str | None = None, kerned: bool = False) -> str:
    """Content stream for a page tagged `tag`, optionally with a heading."""
    parts = [f"BT /F1 12 Tf 72 720 Td ({tag}) Tj"]
    if exercise is not None:
        if kerned:
            parts.append(f"[(EXER)31(CICE)] TJ ({exercise}) Tj")
        else:
            parts.append(f"(Exercice) Tj ({exercise}) Tj")
    parts.append("ET")
    return " ".join(parts)


def build_pdf(tree: list[Layout], outlines: bool = True) -> bytes:
    """Serialize a page tree layout as a minimal PDF with a valid xref."""
    objects: list[bytes] = []

    def reserve() -> int:
        objects.append(b"")
        return len(objects)

    def add_node(node: Layout, parent: int | None) -> tuple[int, int]:
        num = reserve()
        if isinstance(node, RawNode):
            objects[num - 1] = node.body.encode()
            return num, node.leaves
        if isinstance(node, list):
            kids: list[int] = []
            total = 0
            for child in node:
                kid, leaves = add_node(child, num)
                kids.append(kid)
                total += leaves
            parent_entry = f" /Parent {parent} 0 R" if parent else ""
            refs = " ".join(f"{k} 0 R" for k in kids)
            objects[num - 1] = (
                f"<< /Type /Pages{parent_entry} /Kids [{refs}] /Count {total} >>"
            ).encode()
            return num, total

        contents = ""
        if node is not None:
            data = node.encode() if isinstance(node, str) else node
            stream = reserve()
            objects[stream - 1] = (
                f"<< /Length {len(data)} >>\nstream\n".encode()
                + data
                + b"\nendstream"
            )
            contents = f" /Contents {stream} 0 R"
        objects[num - 1] = (
            f"<< /Type /Page /Parent {parent} 0 R "
            f"/MediaBox [0 0 200 200]{contents} >>"
        ).encode()
        return num, 1

    catalog = reserve()
    root, _ = add_node(tree, None)
    outline_entry = ""
    if outlines:
        outline = reserve()
        objects[outline - 1] = b"<< /Type /Outlines /Count 0 >>"
        outline_entry = f" /Outlines {outline} 0 R"
    objects[catalog - 1] = (
        f"<< /Type /Catalog /Pages {root} 0 R{outline_entry} >>"
    ).encode()

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root {catalog} 0 R >>\n"
        f"startxref\n{xref}\n%%EOF\n"
    ).encode()
    return bytes(out)


_TAG_PATTERN = re.compile(rb"\((p\d+)\) Tj")


def page_tags(pdf_bytes: bytes) -> list[str]:
    """Return the tags of the pages of a PDF, in document order."""
    reader = PdfReader(BytesIO(pdf_bytes))
    tags = []
    for page in reader.pages:
        content = read_page_content(page) or b""
        match = _TAG_PATTERN.search(content)
        tags.append(match.group(1).decode() if match else "?")
    return tags


# Reference document. Labels by the sticky rule:
#   p0 -, p1 1, p2 1, p3 2, p4 2, p5 3, p6 3, p7 4, p8 4, p9 5
REFERENCE_LAYOUT: list[Layout] = [
    [page_text("p0"), page_text("p1", 1), page_text("p2")],
    [[page_text("p3", 2, kerned=True), page_text("p4")], page_text("p5", 3)],
    page_text("p6"),
    [page_text("p7", 4), [page_text("p8"), page_text("p9", 5, kerned=True)]],
]

REFERENCE_LABELS: dict[str, int | None] = {
    "p0": None,
    "p1": 1,
    "p2": 1,
    "p3": 2,
    "p4": 2,
    "p5": 3,
    "p6": 3,
    "p7": 4,
    "p8": 4,
    "p9": 5,
}


@pytest.fixture
def pdf_builder() -> Callable[..., bytes]:
    """Return the PDF builder for tests that need custom page trees."""
    return build_pdf


@pytest.fixture
def reference_pdf() -> bytes:
    """Ten-page exercise document with a nested page tree and outlines."""
    return build_pdf(REFERENCE_LAYOUT)


@pytest.fixture
def reference_labels() -> dict[str, int | None]:
    """Sticky exercise label of every page of the reference document."""
    return dict(REFERENCE_LABELS)


@pytest.fixture
def tags_of() -> Callable[[bytes], list[str]]:
    """Return the helper that lists page tags of a PDF."""
    return page_tags


@pytest.fixture
def make_page() -> Callable[..., str]:
    """Return the helper that writes a tagged page content stream."""
    return page_text


@pytest.fixture
def raw_node() -> type[RawNode]:
    """Return the RawNode type for verbatim page tree nodes."""
    return RawNode


# Configure pytest
def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
