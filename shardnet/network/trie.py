# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""VirtualTree: a binary trie over IPv4 addresses.

Every inserted address becomes a 32-level path of 0/1 branches. The tree tells
apart how many *distinct* addresses were seen from how many insert calls were
made, and its branch structure reveals the prefix shared by all addresses,
which is what subnet inference relies on.

Nodes live in a contiguous numpy arena and refer to their children by index:

- ``_children[i]`` holds the indices of node ``i``'s 0- and 1-children
  (``-1`` when absent)
- ``_terminal[i]`` marks nodes that complete an inserted address
- ``_weights[i]`` counts distinct addresses at or below node ``i``

The root is node ``0``.
"""

from typing import Optional, Union

import numpy as np
from numpy.typing import NDArray

from shardnet.errors import ValidationError
from shardnet.network.codec import ADDRESS_BITS, BitsLike, address_to_bits, to_bit_array

__all__ = ['VirtualTree']

_NO_CHILD = -1


class VirtualTree:
    """Bit-level trie recording inserted addresses.

    Args:
        capacity (int): Initial number of node slots in the arena. The arena
            doubles whenever it fills up. Defaults to ``64``.

    Example:
        >>> from shardnet import VirtualTree, address_to_binary_string
        >>> tree = VirtualTree()
        >>> for ip in ['192.168.0.2', '192.168.0.2', '192.168.12.2']:
        ...     tree.insert(address_to_binary_string(ip))
        >>> tree.unique_branch_count(), tree.total_branch_count()
        (2, 3)
    """

    def __init__(self, capacity: int = 64) -> None:
        capacity = max(int(capacity), 1)
        self._children = np.full((capacity, 2), _NO_CHILD, dtype=np.int32)
        self._terminal = np.zeros(capacity, dtype=bool)
        self._weights = np.zeros(capacity, dtype=np.int64)
        self._size = 1
        self._total_insertions = 0
        self._unique_insertions = 0

    def _allocate(self) -> int:
        """Reserve a slot for a new node, growing the arena when full."""
        if self._size == len(self._children):
            extra = len(self._children)
            self._children = np.concatenate(
                [self._children, np.full((extra, 2), _NO_CHILD, dtype=np.int32)])
            self._terminal = np.concatenate([self._terminal, np.zeros(extra, dtype=bool)])
            self._weights = np.concatenate([self._weights, np.zeros(extra, dtype=np.int64)])
        index = self._size
        self._size += 1
        return index

    def insert(self, bits: BitsLike) -> bool:
        """Record one 32-bit path.

        Args:
            bits: 32 zeros and ones, as an array, a sequence, or a string (the
                dotted form from :func:`address_to_binary_string` is accepted).

        Returns:
            bool: True if this path had not been inserted before.
        """
        arr = to_bit_array(bits, ADDRESS_BITS)

        node = 0
        path = [node]
        for bit in arr.tolist():
            child = int(self._children[node, bit])
            if child == _NO_CHILD:
                child = self._allocate()
                self._children[node, bit] = child
            node = child
            path.append(node)

        self._total_insertions += 1
        if self._terminal[node]:
            return False

        self._terminal[node] = True
        self._weights[path] += 1
        self._unique_insertions += 1
        return True

    def insert_address(self, address: str) -> bool:
        """Record a dotted-decimal address. See :meth:`insert`."""
        return self.insert(address_to_bits(address))

    def unique_branch_count(self) -> int:
        """Number of distinct paths inserted so far."""
        return self._unique_insertions

    def total_branch_count(self) -> int:
        """Number of :meth:`insert` calls made so far, duplicates included."""
        return self._total_insertions

    @property
    def num_nodes(self) -> int:
        """Nodes currently allocated, root included."""
        return self._size

    def _single_chain(self) -> list[int]:
        """Bits along the path from the root while each node has exactly one child."""
        bits: list[int] = []
        if self._unique_insertions == 0:
            return bits

        node = 0
        while not self._terminal[node]:
            kids = self._children[node]
            present = np.flatnonzero(kids != _NO_CHILD)
            if len(present) != 1:
                break
            bit = int(present[0])
            bits.append(bit)
            node = int(kids[bit])
        return bits

    def common_prefix_length(self) -> int:
        """Length of the longest bit prefix shared by every inserted address.

        Descends from the root through nodes with a single child and stops at
        the first node that branches both ways. A tree holding one distinct
        address yields ``32``; an empty tree yields ``0``.
        """
        return len(self._single_chain())

    def common_prefix_bits(self) -> NDArray[np.uint8]:
        """The bits of the prefix measured by :meth:`common_prefix_length`."""
        return np.array(self._single_chain(), dtype=np.uint8)

    def hottest_prefix(self, depth: int) -> tuple[NDArray[np.uint8], int]:
        """Find the most populated branch at a given depth.

        Args:
            depth (int): Prefix length to inspect, in [0, 32].

        Returns:
            tuple[NDArray[np.uint8], int]: Bits of the winning prefix and the
            number of distinct addresses beneath it. Ties go to the
            lexicographically smaller prefix. An empty tree returns an empty
            array and ``0``.
        """
        if isinstance(depth, bool) or not 0 <= depth <= ADDRESS_BITS:
            raise ValidationError(f'Depth {depth!r} is outside [0, {ADDRESS_BITS}]')
        if self._unique_insertions == 0:
            return np.array([], dtype=np.uint8), 0

        frontier: list[tuple[int, list[int]]] = [(0, [])]
        for _ in range(depth):
            next_frontier = []
            for node, bits in frontier:
                for bit in (0, 1):
                    child = int(self._children[node, bit])
                    if child != _NO_CHILD:
                        next_frontier.append((child, bits + [bit]))
            frontier = next_frontier

        best_node, best_bits = frontier[0]
        for node, bits in frontier[1:]:
            if self._weights[node] > self._weights[best_node]:
                best_node, best_bits = node, bits
        return np.array(best_bits, dtype=np.uint8), int(self._weights[best_node])

    def _locate(self, bits: NDArray[np.uint8]) -> Optional[int]:
        node = 0
        for bit in bits.tolist():
            node = int(self._children[node, bit])
            if node == _NO_CHILD:
                return None
        return node

    def __contains__(self, key: Union[str, BitsLike]) -> bool:
        try:
            bits = to_bit_array(key)
        except ValidationError:
            if not isinstance(key, str):
                raise
            bits = address_to_bits(key)
        node = self._locate(bits)
        return node is not None and bool(self._terminal[node])

    def __len__(self) -> int:
        return self._unique_insertions

    def __repr__(self) -> str:
        return (f'VirtualTree(unique={self._unique_insertions}, '
                f'total={self._total_insertions}, nodes={self._size})')
