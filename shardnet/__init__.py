# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shardnet: topology-aware selection of shard and backup nodes.

Given the machines discovered in a cluster, pick a primary group of addresses
and a disjoint backup group, restricted to one subnet that is either supplied
or inferred from the addresses.

Example:
    >>> from shardnet import NetworkOrganizer, NodeInfo
    >>>
    >>> nodes = [NodeInfo.of(f'192.168.0.{i}', '10.1.2.3') for i in range(1, 21)]
    >>> organizer = NetworkOrganizer(nodes, '192.168.0.0/24')
    >>> shards = organizer.get_subset(10)
    >>> backups = organizer.get_subset(10, shards)
"""

from shardnet.cluster import NetworkConfig, NetworkOrganizer, NodeInfo, ShardAssignment
from shardnet.errors import ConfigError, ShardnetError, ValidationError
from shardnet.network import (
    SubnetSpec,
    VirtualTree,
    address_to_binary_string,
    address_to_bits,
    matches,
    octet_to_binary,
    parse_subnet,
)

__all__ = [
    'ConfigError',
    'NetworkConfig',
    'NetworkOrganizer',
    'NodeInfo',
    'ShardAssignment',
    'ShardnetError',
    'SubnetSpec',
    'ValidationError',
    'VirtualTree',
    'address_to_binary_string',
    'address_to_bits',
    'matches',
    'octet_to_binary',
    'parse_subnet',
]
__version__ = '0.1.0'
