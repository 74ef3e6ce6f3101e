# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""A discovered cluster machine and the addresses it exposes."""

import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from shardnet.network.codec import parse_address
from shardnet.network.subnet import SubnetSpec

__all__ = ['NodeInfo']


@dataclass(eq=False)
class NodeInfo:
    """Registry entry for one machine.

    Memory figures and the timestamp are carried along for the coordination
    layer and play no part in address selection.

    Attributes:
        addresses: IPv4 addresses exposed by the machine, in discovery order.
        name: Optional human-readable identifier.
        total_memory: Total memory in bytes, if reported.
        available_memory: Free memory in bytes, if reported.
        timestamp: When the entry was created (seconds since the epoch).
    """

    addresses: list[str] = field(default_factory=list)
    name: Optional[str] = None
    total_memory: int = 0
    available_memory: int = 0
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        addresses = self.addresses
        self.addresses = []
        for address in addresses:
            self.add_address(address)

    @staticmethod
    def of(*addresses: str, name: Optional[str] = None) -> 'NodeInfo':
        """Shorthand for ``NodeInfo(list(addresses), name=name)``."""
        return NodeInfo(list(addresses), name=name)

    def add_address(self, address: str) -> None:
        """Append an address.

        Raises:
            ValidationError: If ``address`` is not a dotted-decimal IPv4 address.
        """
        parse_address(address)
        self.addresses.append(address.strip())

    def extend(self, addresses: Iterable[str]) -> None:
        for address in addresses:
            self.add_address(address)

    def matching_address(self, subnet: SubnetSpec) -> Optional[str]:
        """First address inside ``subnet``, or ``None``."""
        for address in self.addresses:
            if subnet.contains(address):
                return address
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeInfo):
            return NotImplemented
        return set(self.addresses) == set(other.addresses)

    __hash__ = None  # type: ignore[assignment]
