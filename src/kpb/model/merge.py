# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Keyed merge helpers shared by every entity of the composition algebra."""

from __future__ import annotations

from collections.abc import Callable, Collection, Hashable, Iterable
from typing import TypeVar

_T = TypeVar("_T")
_K = TypeVar("_K", bound=Hashable)


def first_wins(items: Iterable[_T], *, key: Callable[[_T], _K]) -> tuple[_T, ...]:
    """Return ``items`` de-duplicated by ``key`` keeping the first occurrence.

    Args:
        items: Items ordered left operand first, right operand second.
        key: Callable returning the identity key of an item.

    Returns:
        tuple[_T, ...]: Items in first-seen order with later duplicates dropped.
    """

    merged: dict[_K, _T] = {}
    for item in items:
        identifier = key(item)
        if identifier not in merged:
            merged[identifier] = item
    return tuple(merged.values())


def distinct(items: Iterable[_T]) -> tuple[_T, ...]:
    """Return ``items`` de-duplicated as whole values, preserving first-seen order."""

    return tuple(dict.fromkeys(items))


def merge_by_key(
    items: Iterable[_T],
    *,
    key: Callable[[_T], _K],
    combine: Callable[[_T, _T], _T],
) -> tuple[_T, ...]:
    """Fold items sharing a key together with ``combine``.

    Args:
        items: Items ordered left operand first, right operand second.
        key: Callable returning the identity key of an item.
        combine: Binary merge applied as ``combine(existing, incoming)``.

    Returns:
        tuple[_T, ...]: One merged item per key, ordered by first appearance.
    """

    merged: dict[_K, _T] = {}
    for item in items:
        identifier = key(item)
        existing = merged.get(identifier)
        merged[identifier] = item if existing is None else combine(existing, item)
    return tuple(merged.values())


def remove_by_key(
    items: Iterable[_T],
    removed: Collection[_K],
    *,
    key: Callable[[_T], _K],
) -> tuple[_T, ...]:
    """Return ``items`` whose key does not appear in ``removed``."""

    return tuple(item for item in items if key(item) not in removed)


def duplicate_keys(items: Iterable[_T], *, key: Callable[[_T], _K]) -> tuple[_K, ...]:
    """Return keys occurring more than once in ``items``, in first-seen order."""

    seen: set[_K] = set()
    duplicates: dict[_K, None] = {}
    for item in items:
        identifier = key(item)
        if identifier in seen:
            duplicates[identifier] = None
        seen.add(identifier)
    return tuple(duplicates)


__all__ = [
    "distinct",
    "duplicate_keys",
    "first_wins",
    "merge_by_key",
    "remove_by_key",
]
