"""Immutable document model for KML compilation.

Loads KML text with lxml and flattens the element tree into an arena of
``KmlNode`` records in document order. Each node knows its parent, its
direct children, its direct text nodes and its *folder scope* (nearest
ancestor ``<Folder>``), so every scoping question the compiler asks is a
lookup instead of a walk back up the tree.

Tag names are stored as local names: ``<gx:Track>`` and ``<Track>`` are
both ``"Track"``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kml_layers.core.constants import FOLDER_TAG, ROOT_TAG
from kml_layers.core.exceptions import MalformedKmlError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_layers.parse_kml")

KmlSource = bytes | str


@dataclass(frozen=True, slots=True)
class KmlNode:
    """One element of the document.

    Attributes:
        index: Position in document order; also the node's id.
        tag: Local element name.
        parent: Index of the parent element, ``None`` for the root.
        children: Indices of direct child elements, in order.
        text: Leading text of the element, before any child element.
        texts: Direct text nodes (element text and child tails).
        attrib: Element attributes, keyed by local name.
        scope: Index of the nearest ancestor ``<Folder>``, ``None`` at
            document level.
    """

    index: int
    tag: str
    parent: int | None
    children: tuple[int, ...]
    text: str | None
    texts: tuple[str, ...]
    attrib: Mapping[str, str]
    scope: int | None


class KmlDocument:
    """Read-only arena of ``KmlNode`` records."""

    __slots__ = ("_by_tag", "_members", "nodes")

    def __init__(self, nodes: tuple[KmlNode, ...]) -> None:
        self.nodes = nodes
        by_tag: dict[str, list[int]] = {}
        members: dict[tuple[int | None, str], list[int]] = {}
        for node in nodes:
            by_tag.setdefault(node.tag, []).append(node.index)
            members.setdefault((node.scope, node.tag), []).append(node.index)
        self._by_tag = {tag: tuple(idx) for tag, idx in by_tag.items()}
        self._members = {key: tuple(idx) for key, idx in members.items()}

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def root(self) -> KmlNode:
        return self.nodes[0]

    def node(self, index: int) -> KmlNode:
        return self.nodes[index]

    def iter(self, tag: str) -> Iterator[KmlNode]:
        """Yield every node named ``tag`` in document order."""
        for index in self._by_tag.get(tag, ()):
            yield self.nodes[index]

    def children(self, node: KmlNode, tag: str | None = None) -> Iterator[KmlNode]:
        """Yield direct children of ``node``, optionally only those named ``tag``."""
        for index in node.children:
            child = self.nodes[index]
            if tag is None or child.tag == tag:
                yield child

    def child(self, node: KmlNode, tag: str) -> KmlNode | None:
        """Return the first direct child named ``tag``."""
        return next(self.children(node, tag), None)

    def descendants(self, node: KmlNode, tag: str) -> Iterator[KmlNode]:
        """Yield descendants of ``node`` named ``tag`` in document order."""
        stack = list(reversed(node.children))
        while stack:
            current = self.nodes[stack.pop()]
            if current.tag == tag:
                yield current
            stack.extend(reversed(current.children))

    def first_descendant(self, node: KmlNode, tag: str) -> KmlNode | None:
        return next(self.descendants(node, tag), None)

    def scope_members(self, scope: KmlNode | None, tag: str) -> Iterator[KmlNode]:
        """Yield nodes named ``tag`` whose nearest ancestor Folder is ``scope``.

        ``scope=None`` selects nodes with no ancestor Folder at all.
        """
        key = (scope.index if scope is not None else None, tag)
        for index in self._members.get(key, ()):
            yield self.nodes[index]

    @staticmethod
    def text(node: KmlNode) -> str:
        """All direct text of ``node`` joined (text split across nodes or CDATA)."""
        return "".join(node.texts)

    @staticmethod
    def first_text(node: KmlNode) -> str | None:
        """Leading text of ``node`` (before any child element), if any."""
        return node.text


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def build_document(root: _Element) -> KmlDocument:
    """Flatten an lxml element tree into a ``KmlDocument``.

    Comments and processing instructions are dropped; their tails are
    kept as text of the enclosing element.
    """
    from lxml import etree  # type: ignore[attr-defined]

    tags: list[str] = []
    parents: list[int | None] = []
    children: list[list[int]] = []
    leading: list[str | None] = []
    texts: list[tuple[str, ...]] = []
    attribs: list[dict[str, str]] = []
    scopes: list[int | None] = []

    stack: list[tuple[_Element, int | None, int | None]] = [(root, None, None)]
    while stack:
        element, parent, scope = stack.pop()
        index = len(tags)
        tag = etree.QName(element).localname

        tags.append(tag)
        parents.append(parent)
        children.append([])
        leading.append(element.text)
        texts.append(
            tuple(t for t in (element.text, *(child.tail for child in element)) if t is not None)
        )
        attribs.append({etree.QName(k).localname: v for k, v in element.attrib.items()})
        scopes.append(scope)
        if parent is not None:
            children[parent].append(index)

        child_scope = index if tag == FOLDER_TAG else scope
        elements = [child for child in element if isinstance(child.tag, str)]
        for child in reversed(elements):
            stack.append((child, index, child_scope))

    nodes = tuple(
        KmlNode(
            index=i,
            tag=tags[i],
            parent=parents[i],
            children=tuple(children[i]),
            text=leading[i],
            texts=texts[i],
            attrib=attribs[i],
            scope=scopes[i],
        )
        for i in range(len(tags))
    )
    return KmlDocument(nodes)


def load_document(source: KmlSource | _Element, *, huge_tree: bool = False) -> KmlDocument:
    """Parse KML text (or adopt a parsed lxml tree) into a ``KmlDocument``.

    Raises:
        MalformedKmlError: If the input is empty, not well-formed XML, or
            its root element is not ``<kml>``.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if isinstance(source, etree._ElementTree):
        root = source.getroot()
    elif isinstance(source, etree._Element):
        root = source
    else:
        content = source.encode("utf-8") if isinstance(source, str) else source
        if not content.strip():
            msg = "KML document is empty"
            raise MalformedKmlError(msg)

        # Text input is already decoded; the XML declaration must not re-decode it.
        parser = etree.XMLParser(
            encoding="utf-8" if isinstance(source, str) else None,
            resolve_entities=False,
            no_network=True,
            huge_tree=huge_tree,
        )
        try:
            root = etree.fromstring(content, parser=parser)
        except etree.XMLSyntaxError as exc:
            msg = f"Not valid XML: {exc}"
            raise MalformedKmlError(msg) from exc

    tag = etree.QName(root).localname
    if tag != ROOT_TAG:
        msg = f"Not a KML document: root element is <{tag}>"
        raise MalformedKmlError(msg)

    document = build_document(root)
    logger.debug("Loaded KML document with %d element(s)", len(document))
    return document
