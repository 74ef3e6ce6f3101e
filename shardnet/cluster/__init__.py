# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""Node registry and shard/backup selection."""

from shardnet.cluster.config import NetworkConfig
from shardnet.cluster.node import NodeInfo
from shardnet.cluster.organizer import NetworkOrganizer, ShardAssignment

__all__ = ['NetworkConfig', 'NetworkOrganizer', 'NodeInfo', 'ShardAssignment']
