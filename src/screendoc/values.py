"""Raw value types for the untyped document tree.

This module defines the vocabulary used to talk about a deserialized
document before it is validated: scalars, mappings and sequences exactly
as the YAML loader produced them, plus small predicates used by both the
structural validator and the shape normalizer.
"""

from typing import Any, TypeGuard

#: Scalars produced by the document loader. Timestamps are kept as text.
type Scalar = str | int | float | bool

#: A raw value is anything the loader may produce for a document node.
type RawValue = Scalar | list['RawValue'] | dict[Any, 'RawValue'] | None

#: A raw mapping node (YAML mapping).
type RawMapping = dict[Any, RawValue]

#: A raw sequence node (YAML sequence).
type RawSequence = list[RawValue]

#: Location of a node inside the raw tree. Strings are mapping keys,
#: integers are sequence indexes.
type Location = tuple[str | int, ...]

MAPPINGS = (dict,)
SCALARS = (str, int, float, bool)
SEQUENCES = (list, tuple)


def is_defined(value: RawValue) -> bool:
    """Check that a value is present (not missing and not null)."""
    return value is not None


def is_mapping(value: RawValue) -> TypeGuard[RawMapping]:
    """Check that a value is a mapping node."""
    return isinstance(value, MAPPINGS)


def is_sequence(value: RawValue) -> TypeGuard[RawSequence]:
    """Check that a value is a sequence node."""
    return isinstance(value, SEQUENCES)


def is_string(value: RawValue) -> TypeGuard[str]:
    """Check that a value is a string scalar."""
    return isinstance(value, str)


def is_scalar(value: RawValue) -> TypeGuard[Scalar]:
    """Check that a value is a non-null scalar."""
    return isinstance(value, SCALARS)


def measure_depth(value: RawValue, limit: int) -> Location | None:
    """Find the first location nested deeper than a limit.

    The tree is walked iteratively, so arbitrarily deep input cannot
    exhaust the interpreter stack.

    Args:
        value: Root of the raw tree.
        limit: Maximum number of nested containers allowed.

    Returns:
        Location of the first container exceeding the limit,
        or `None` when the whole tree fits.
    """
    stack: list[tuple[RawValue, Location]] = [(value, ())]

    while stack:
        node, location = stack.pop()
        children: list[tuple[str | int, RawValue]]
        if is_mapping(node):
            children = [(str(key), item) for key, item in node.items()]
        elif is_sequence(node):
            children = list(enumerate(node))
        else:
            continue

        if len(location) >= limit:
            return location

        for key, item in reversed(children):
            stack.append((item, (*location, key)))

    return None


def count_nodes(value: RawValue, limit: int) -> int:
    """Count the nodes of a raw tree, stopping past a limit.

    Nodes shared through YAML aliases are counted at every place they
    are referenced, as every later stage visits them that many times.
    The walk stops as soon as the limit is exceeded, so neither alias
    fan-out nor cyclic aliases can stall it.

    Args:
        value: Root of the raw tree.
        limit: Maximum number of nodes allowed.

    Returns:
        The number of nodes, or `limit + 1` when the tree has more
        nodes than the limit.
    """
    count = 0
    stack: list[RawValue] = [value]

    while stack and count <= limit:
        node = stack.pop()
        count += 1
        if is_mapping(node):
            stack.extend(node.values())
        elif is_sequence(node):
            stack.extend(node)

    return count


def coalesce(*values: RawValue) -> RawValue:
    """Return the first present value, or `None` when none is present."""
    return next((value for value in values if is_defined(value)), None)
