# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""NetworkOrganizer: choose shard and backup addresses from discovered nodes.

The organizer fixes one subnet at construction, either the one it is given or
one inferred from the addresses themselves, and reduces the registry to a
candidate pool holding at most one address per node. Shard and backup groups
are then read off that pool.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from shardnet.cluster.node import NodeInfo
from shardnet.errors import ConfigError, ValidationError
from shardnet.network.codec import ADDRESS_BITS, OCTET_BITS, address_to_bits
from shardnet.network.subnet import SubnetSpec, parse_subnet
from shardnet.network.trie import VirtualTree

__all__ = ['NetworkOrganizer', 'ShardAssignment']

logger = logging.getLogger(__name__)

NodeLike = Union[NodeInfo, str, Iterable[str]]


@dataclass(frozen=True)
class ShardAssignment:
    """Result of :meth:`NetworkOrganizer.assign`.

    Attributes:
        shards: Primary addresses.
        backups: Standby addresses, disjoint from ``shards``.
        subnet: Subnet the addresses were drawn from.
    """

    shards: tuple[str, ...]
    backups: tuple[str, ...]
    subnet: SubnetSpec

    def is_complete(self, num_shards: int, num_backups: Optional[int] = None) -> bool:
        """Whether both groups reached the requested sizes."""
        if num_backups is None:
            num_backups = num_shards
        return len(self.shards) >= num_shards and len(self.backups) >= num_backups


def _as_node(node: NodeLike) -> NodeInfo:
    if isinstance(node, NodeInfo):
        return node
    if isinstance(node, str):
        return NodeInfo([node])
    return NodeInfo(list(node))


class NetworkOrganizer:
    """Partition discovered nodes into shard and backup address groups.

    Args:
        nodes (Sequence[NodeInfo]): Registry of discovered machines. Plain
            address strings or lists of strings are wrapped in :class:`NodeInfo`.
        subnet (str | SubnetSpec, optional): Subnet to draw addresses from, e.g.
            ``"192.168.0.0/24"``. If ``None``, the subnet is inferred from the
            longest bit prefix shared by every address, rounded down to a whole
            octet. Defaults to ``None``.
        shuffle_seed (int, optional): When set, the candidate pool is permuted
            once with this seed. Otherwise candidates keep registry order.
            Defaults to ``None``.
        fallback_to_hottest (bool): When inference finds no shared octet, use
            the most populated ``/8`` instead of ``0.0.0.0/0``. Defaults to
            ``False``.

    Raises:
        ConfigError: If ``subnet`` is malformed or ``shuffle_seed`` is negative.
        ValidationError: If any node carries a malformed address or no address
            at all.

    Example:
        >>> from shardnet import NetworkOrganizer, NodeInfo
        >>> nodes = [NodeInfo.of(f'10.0.0.{i}', '8.8.8.8') for i in range(1, 6)]
        >>> organizer = NetworkOrganizer(nodes, '10.0.0.0/24')
        >>> organizer.get_subset(2)
        ['10.0.0.1', '10.0.0.2']
        >>> organizer.get_subset(2, ['10.0.0.1', '10.0.0.2'])
        ['10.0.0.3', '10.0.0.4']
    """

    def __init__(
        self,
        nodes: Sequence[NodeLike],
        subnet: Optional[Union[str, SubnetSpec]] = None,
        *,
        shuffle_seed: Optional[int] = None,
        fallback_to_hottest: bool = False,
    ) -> None:
        if shuffle_seed is not None and shuffle_seed < 0:
            raise ConfigError(f'shuffle_seed must be non-negative, got {shuffle_seed}')
        self._nodes = tuple(_as_node(node) for node in nodes)
        for index, node in enumerate(self._nodes):
            if not node.addresses:
                raise ValidationError(f'Node {node.name or index} has no addresses')
        self._tree: Optional[VirtualTree] = None

        if subnet is None:
            self._subnet = self._infer_subnet(fallback_to_hottest)
            self._inferred = True
            logger.info(f'Inferred subnet {self._subnet} from {len(self._nodes)} nodes')
        else:
            self._subnet = subnet if isinstance(subnet, SubnetSpec) else parse_subnet(subnet)
            self._inferred = False

        pool = self._build_pool()
        if shuffle_seed is not None:
            order = np.random.default_rng(shuffle_seed).permutation(len(pool))
            pool = [pool[i] for i in order]
        self._pool = tuple(pool)

        logger.info(f'{len(self._pool)} of {len(self._nodes)} nodes have an address in {self._subnet}')

    def _infer_subnet(self, fallback_to_hottest: bool) -> SubnetSpec:
        """Build a trie over every address and derive the shared subnet from it."""
        tree = VirtualTree()
        first_bits = None
        for node in self._nodes:
            for address in node.addresses:
                bits = address_to_bits(address)
                if first_bits is None:
                    first_bits = bits
                tree.insert(bits)
        self._tree = tree

        if first_bits is None:
            return SubnetSpec((0, 0, 0, 0), 0)

        prefix_len = tree.common_prefix_length() // OCTET_BITS * OCTET_BITS
        if prefix_len == 0 and fallback_to_hottest and tree.unique_branch_count() > 1:
            bits, weight = tree.hottest_prefix(OCTET_BITS)
            logger.debug(f'No shared octet, falling back to the busiest /8 ({weight} addresses)')
            padded = np.zeros(ADDRESS_BITS, dtype=np.uint8)
            padded[:OCTET_BITS] = bits
            return SubnetSpec.from_bits(padded, OCTET_BITS)

        return SubnetSpec.from_bits(first_bits, prefix_len)

    def _build_pool(self) -> list[str]:
        """First matching address of every node, without repeats."""
        seen: set[str] = set()
        pool: list[str] = []
        for index, node in enumerate(self._nodes):
            address = node.matching_address(self._subnet)
            if address is None:
                logger.debug(f'Node {node.name or index} has no address in {self._subnet}')
                continue
            if address in seen:
                continue
            seen.add(address)
            pool.append(address)
        return pool

    @property
    def subnet(self) -> SubnetSpec:
        """The subnet addresses are drawn from."""
        return self._subnet

    @property
    def inferred(self) -> bool:
        """Whether :attr:`subnet` was inferred rather than supplied."""
        return self._inferred

    @property
    def candidates(self) -> tuple[str, ...]:
        """The candidate pool, in selection order."""
        return self._pool

    @property
    def nodes(self) -> tuple[NodeInfo, ...]:
        return self._nodes

    @property
    def tree(self) -> Optional[VirtualTree]:
        """Trie built for subnet inference, or ``None`` if a subnet was supplied."""
        return self._tree

    def get_matching_address(self, node: NodeLike) -> Optional[str]:
        """First address of ``node`` inside the active subnet, or ``None``."""
        return _as_node(node).matching_address(self._subnet)

    def get_subset(self, n: int, exclude: Optional[Iterable[str]] = None) -> list[str]:
        """Select up to ``n`` distinct candidate addresses.

        If fewer than ``n`` candidates remain, all of them are returned. A short
        result is not an error; compare its length against ``n`` when a
        complete group is required.

        Args:
            n (int): Number of addresses wanted. ``n <= 0`` selects nothing.
            exclude (Iterable[str], optional): Addresses that must not be
                selected, typically an earlier shard group. A single string is
                treated as one address. Defaults to ``None``.

        Returns:
            list[str]: Selected addresses, in pool order.

        Raises:
            TypeError: If ``n`` is not an integer.
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise TypeError(f'Subset size must be an integer, got {n!r}')
        if n <= 0:
            return []

        if exclude is None:
            excluded: set[str] = set()
        elif isinstance(exclude, str):
            excluded = {exclude}
        else:
            excluded = set(exclude)
        selected: list[str] = []
        for address in self._pool:
            if address in excluded:
                continue
            selected.append(address)
            if len(selected) == n:
                break

        if len(selected) < n:
            logger.warning(
                f'Requested {n} addresses from {self._subnet} but only {len(selected)} '
                f'are available'
            )
        return selected

    def assign(self, num_shards: int, num_backups: Optional[int] = None) -> ShardAssignment:
        """Select a shard group, then a disjoint backup group.

        Args:
            num_shards (int): Size of the shard group.
            num_backups (int, optional): Size of the backup group. Defaults to
                ``num_shards``.

        Returns:
            ShardAssignment: Both groups and the subnet they came from.
        """
        if num_backups is None:
            num_backups = num_shards
        shards = self.get_subset(num_shards)
        backups = self.get_subset(num_backups, shards)
        return ShardAssignment(tuple(shards), tuple(backups), self._subnet)

    def __repr__(self) -> str:
        return (f'NetworkOrganizer(subnet={self._subnet}, nodes={len(self._nodes)}, '
                f'candidates={len(self._pool)})')
