"""Raw document deserialization.

This module turns document text into an untyped tree of mappings,
sequences and scalars. It performs no semantic checks; the only
failures it reports are syntax failures, each carried by a single
`SYNTAX` diagnostic.

Besides the tree, the reader records the source position of every
mapping value and sequence item, so that later structural diagnostics
can point at the offending line.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from yaml import MappingNode, SafeLoader, SequenceNode
from yaml.constructor import ConstructorError
from yaml.error import MarkedYAMLError, YAMLError

from screendoc.diagnostics import Diagnostic, DiagnosticKind
from screendoc.errors import DocumentSyntaxError

if TYPE_CHECKING:
    from io import TextIOBase

if TYPE_CHECKING:
    from yaml import Node

if TYPE_CHECKING:
    from screendoc.values import Location, RawValue

#: Source positions (0-based line and column) keyed by node location.
type Positions = dict['Location', tuple[int, int]]

_MERGE_TAG = 'tag:yaml.org,2002:merge'
_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'


class DocumentLoader(SafeLoader):
    """Safe YAML loader used for screen documents.

    Compared with `yaml.SafeLoader` this loader:
    - rejects mappings with duplicated keys instead of silently keeping
      the last value;
    - keeps timestamp-looking scalars (`2024-01-01`) as plain text.
    """

    yaml_implicit_resolvers = {
        first: [
            (tag, regexp)
            for tag, regexp in resolvers
            if tag != _TIMESTAMP_TAG
        ]
        for first, resolvers in SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node: 'Node', deep: bool = False) -> dict[Any, Any]:
        """Construct a mapping, rejecting duplicated keys.

        Keys brought in by merge keys (`<<`) may be overridden locally
        and are not considered duplicates.

        Raises:
            ConstructorError: If the same key appears twice in the mapping.
        """
        if isinstance(node, MappingNode):
            seen: set[Any] = set()
            for key_node, _ in node.value:
                if key_node.tag == _MERGE_TAG:
                    continue

                key = self.construct_object(key_node, deep=True)
                try:
                    duplicated = key in seen
                except TypeError:
                    continue

                if duplicated:
                    raise ConstructorError(
                        'while constructing a mapping',
                        node.start_mark,
                        f'found duplicate key "{key}"',
                        key_node.start_mark,
                    )
                seen.add(key)

        return super().construct_mapping(node, deep=deep)


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Deserialized document tree with the source positions of its nodes."""

    tree: 'RawValue'
    positions: Positions = field(default_factory=dict)


def index_positions(root: 'Node | None', limit: int) -> Positions:
    """Record the start position of every node reachable from the root.

    Mapping values are located by the text of their (scalar) key and
    sequence items by their index. Nodes shared through YAML aliases are
    indexed at their first location only, and nodes nested deeper than
    the limit are skipped, so cyclic aliases cannot stall the walk.

    Args:
        root: Root node of the composed document.
        limit: Maximum nesting depth to index.

    Returns:
        Mapping of node locations to 0-based `(line, column)` pairs.
    """
    if root is None:
        return {}

    positions: Positions = {(): (root.start_mark.line, root.start_mark.column)}
    visited: set[int] = set()
    stack: list[tuple[Node, Location]] = [(root, ())]

    while stack:
        node, location = stack.pop()
        if id(node) in visited or len(location) > limit:
            continue
        visited.add(id(node))

        children: list[tuple[str | int, Node]] = []
        if isinstance(node, MappingNode):
            children = [
                (key_node.value, value_node)
                for key_node, value_node in node.value
                if isinstance(key_node.value, str) and key_node.tag != _MERGE_TAG
            ]
        elif isinstance(node, SequenceNode):
            children = list(enumerate(node.value))

        for key, child in children:
            child_location = (*location, key)
            positions.setdefault(child_location, (child.start_mark.line, child.start_mark.column))
            stack.append((child, child_location))

    return positions


def read_document(content: 'TextIOBase | str | bytes', *,
                  loader: type[SafeLoader] = DocumentLoader,
                  limit: int = 32) -> RawDocument:
    """Deserialize a single YAML document.

    Empty text produces a `None` tree. Source positions are indexed
    before the tree is constructed, because construction rewrites
    merge keys in place.

    Args:
        content: Document text as a string, UTF-8 bytes or file-like object.
        loader: YAML loader class to use.
        limit: Maximum nesting depth of indexed positions.

    Returns:
        The raw tree and the positions of its nodes.

    Raises:
        DocumentSyntaxError: If the text is not a single well-formed
            YAML document.
    """
    instance: SafeLoader | None = None

    try:
        instance = loader(content)
        root = instance.get_single_node()
        positions = index_positions(root, limit)
        tree = instance.construct_document(root) if root is not None else None

    except MarkedYAMLError as base:
        raise DocumentSyntaxError(Diagnostic.from_yaml_error(base)) from base

    except YAMLError as base:
        raise DocumentSyntaxError(Diagnostic(
            kind=DiagnosticKind.SYNTAX,
            message=f'Invalid YAML: {base}',
        )) from base

    except RecursionError as base:
        raise DocumentSyntaxError(Diagnostic(
            kind=DiagnosticKind.SYNTAX,
            message='Invalid YAML: document is nested too deeply',
        )) from base

    finally:
        if instance is not None:
            instance.dispose()

    return RawDocument(tree=tree, positions=positions)
