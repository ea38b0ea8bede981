"""Page tree filtering.

A PDF page tree is made of interior /Pages nodes, each holding an ordered
/Kids array and a cached /Count of leaf descendants, and leaf /Page nodes.
filter_page_tree() walks the tree in document order, asks a predicate about
every leaf, deletes the leaves it rejects and keeps every /Count consistent.

Deletion counts flow bottom-up: each interior node only needs the number of
leaves removed from its own subtree, which its kids return from the
recursive call, so a single pass is enough.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from pypdf.generic import ArrayObject, DictionaryObject, NameObject, NumberObject

from exoserve.lib.errors import StructuralError
from exoserve.lib.logging_config import get_logger

logger = get_logger(__name__)

PAGE_TYPE = "/Page"
PAGES_TYPE = "/Pages"

# Real page trees are shallow; anything deeper is a reference cycle.
MAX_TREE_DEPTH = 64

PagePredicate = Callable[[DictionaryObject], bool]


@dataclass(frozen=True)
class KeepLeaf:
    """Leaf matched the predicate and stays in place."""


@dataclass(frozen=True)
class RemoveLeaf:
    """Leaf did not match; the parent must delete it from /Kids."""


@dataclass(frozen=True)
class SubtreeResult:
    """Interior (or untyped) node processed.

    Attributes:
        deleted_count: Number of leaf descendants removed under the node
    """

    deleted_count: int


FilterOutcome = KeepLeaf | RemoveLeaf | SubtreeResult


def node_type(node: object) -> str | None:
    """Return the /Type name of a page tree node, or None if untyped."""
    if not isinstance(node, DictionaryObject):
        return None
    value = node.get("/Type")
    if value is None:
        return None
    value = value.get_object()
    if not isinstance(value, NameObject):
        return None
    return str(value)


def _kids(node: DictionaryObject) -> ArrayObject | None:
    kids = node.get("/Kids")
    if kids is None:
        return None
    kids = kids.get_object()
    if not isinstance(kids, ArrayObject):
        raise StructuralError(f"/Kids must be an array, got {type(kids).__name__}")
    return kids


def _subtract_count(node: DictionaryObject, removed: int) -> None:
    count = node.get("/Count")
    count = count.get_object() if count is not None else None
    if not isinstance(count, int):
        raise StructuralError("/Pages node has no integer /Count")
    node[NameObject("/Count")] = NumberObject(int(count) - removed)


def filter_node(
    node: object, predicate: PagePredicate, depth: int = 0
) -> FilterOutcome:
    """Filter one page tree node and everything beneath it.

    Kids are visited strictly left to right. A rejected leaf is deleted at
    the current index and the index is not advanced, so the kid shifted into
    its place is visited next.

    Args:
        node: Resolved page tree node
        predicate: Called once per leaf, in document order
        depth: Current nesting depth

    Returns:
        KeepLeaf or RemoveLeaf for a leaf, SubtreeResult otherwise

    Raises:
        StructuralError: If a node has an unknown /Type, malformed /Kids or
            /Count, or the tree nests deeper than MAX_TREE_DEPTH
    """
    if depth > MAX_TREE_DEPTH:
        raise StructuralError(f"page tree deeper than {MAX_TREE_DEPTH} levels")

    kind = node_type(node)
    if kind is None:
        return SubtreeResult(0)

    if kind == PAGE_TYPE:
        return KeepLeaf() if predicate(node) else RemoveLeaf()

    if kind != PAGES_TYPE:
        raise StructuralError(f"unexpected node type {kind}")

    removed = 0
    kids = _kids(node)
    if kids is not None:
        i = 0
        while i < len(kids):
            outcome = filter_node(kids[i].get_object(), predicate, depth + 1)
            if isinstance(outcome, RemoveLeaf):
                del kids[i]
                removed += 1
                continue
            if isinstance(outcome, SubtreeResult):
                removed += outcome.deleted_count
            i += 1
        if removed:
            _subtract_count(node, removed)

    return SubtreeResult(removed)


def filter_page_tree(root: DictionaryObject, predicate: PagePredicate) -> int:
    """Remove every leaf rejected by predicate from the tree rooted at root.

    The tree is mutated in place.

    Args:
        root: The page tree root (catalog /Pages)
        predicate: Called once per leaf, in document order

    Returns:
        Total number of leaves removed
    """
    if node_type(root) == PAGE_TYPE:
        raise StructuralError("page tree root is a /Page, expected /Pages")
    outcome = filter_node(root, predicate)
    assert isinstance(outcome, SubtreeResult)
    logger.debug(f"Removed {outcome.deleted_count} pages from page tree")
    return outcome.deleted_count


def iter_leaves(node: object, depth: int = 0) -> Iterator[DictionaryObject]:
    """Yield every leaf of a page tree in document order without mutating it."""
    if depth > MAX_TREE_DEPTH:
        raise StructuralError(f"page tree deeper than {MAX_TREE_DEPTH} levels")
    kind = node_type(node)
    if kind == PAGE_TYPE:
        yield node
    elif kind == PAGES_TYPE:
        kids = _kids(node)
        for kid in kids or []:
            yield from iter_leaves(kid.get_object(), depth + 1)
    elif kind is not None:
        raise StructuralError(f"unexpected node type {kind}")


def count_leaves(node: object) -> int:
    """Count the leaves reachable under a page tree node."""
    return sum(1 for _ in iter_leaves(node))
