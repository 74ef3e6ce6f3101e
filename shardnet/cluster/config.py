# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""Read shard placement settings from environment variables."""

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from shardnet.cluster.node import NodeInfo
from shardnet.cluster.organizer import NetworkOrganizer, ShardAssignment
from shardnet.errors import ConfigError
from shardnet.network.subnet import parse_subnet

__all__ = ['NetworkConfig']


@dataclass
class NetworkConfig:
    """Shard placement settings.

    Attributes:
        subnet: CIDR subnet to draw addresses from, or ``None`` to infer one.
        num_shards: Size of the shard group.
        num_backups: Size of the backup group; ``None`` means ``num_shards``.
        shuffle_seed: Seed for permuting the candidate pool, or ``None`` to keep
            registry order.
    """

    subnet: Optional[str] = None
    num_shards: int = 1
    num_backups: Optional[int] = None
    shuffle_seed: Optional[int] = None

    @staticmethod
    def detect() -> 'NetworkConfig':
        """Build a config from ``SHARDNET_*`` environment variables.

        Reads ``SHARDNET_SUBNET``, ``SHARDNET_NUM_SHARDS``,
        ``SHARDNET_NUM_BACKUPS`` and ``SHARDNET_SHUFFLE_SEED``. Unset or empty
        variables keep their defaults.

        Returns:
            NetworkConfig: Validated configuration.
        """
        config = NetworkConfig()

        subnet = os.environ.get('SHARDNET_SUBNET', '').strip()
        if subnet:
            config.subnet = subnet

        num_shards = _env_int('SHARDNET_NUM_SHARDS')
        if num_shards is not None:
            config.num_shards = num_shards
        config.num_backups = _env_int('SHARDNET_NUM_BACKUPS')
        config.shuffle_seed = _env_int('SHARDNET_SHUFFLE_SEED')

        config.validate()
        return config

    def validate(self) -> None:
        """Check sizes and seed are non-negative and the subnet parses.

        Raises:
            ConfigError: On the first invalid setting.
        """
        if self.num_shards < 0:
            raise ConfigError(f'num_shards must be non-negative, got {self.num_shards}')
        if self.num_backups is not None and self.num_backups < 0:
            raise ConfigError(f'num_backups must be non-negative, got {self.num_backups}')
        if self.shuffle_seed is not None and self.shuffle_seed < 0:
            raise ConfigError(f'shuffle_seed must be non-negative, got {self.shuffle_seed}')
        if self.subnet is not None:
            parse_subnet(self.subnet)

    def organize(self, nodes: Sequence[NodeInfo]) -> ShardAssignment:
        """Run shard and backup selection over ``nodes`` with these settings."""
        self.validate()
        organizer = NetworkOrganizer(nodes, self.subnet, shuffle_seed=self.shuffle_seed)
        return organizer.assign(self.num_shards, self.num_backups)


def _env_int(key: str) -> Optional[int]:
    """Read an integer from an environment variable."""
    val = os.environ.get(key, '').strip()
    if not val:
        return None
    try:
        return int(val)
    except ValueError as e:
        raise ConfigError(f'{key} must be an integer, got {val!r}') from e
