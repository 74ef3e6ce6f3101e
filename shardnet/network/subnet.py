# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""CIDR subnet parsing and membership tests.

Membership is decided on bit arrays produced by :mod:`shardnet.network.codec`,
so a ``/12`` mask compares twelve bits rather than a string prefix.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np

from shardnet.errors import ConfigError, ValidationError
from shardnet.network.codec import (
    ADDRESS_BITS,
    BitsLike,
    address_to_bits,
    bits_to_address,
    parse_address,
    to_bit_array,
)

__all__ = ['SubnetSpec', 'matches', 'parse_subnet']


@dataclass(frozen=True)
class SubnetSpec:
    """An IPv4 subnet in CIDR form.

    Attributes:
        base: Base address octets as given (host bits are kept).
        prefix_len: Number of leading bits that must match, in [0, 32].
    """

    base: tuple[int, int, int, int]
    prefix_len: int

    def __post_init__(self) -> None:
        if isinstance(self.prefix_len, bool) or not isinstance(self.prefix_len, int):
            raise ConfigError(f'Prefix length must be an integer, got {self.prefix_len!r}')
        if not 0 <= self.prefix_len <= ADDRESS_BITS:
            raise ConfigError(f'Prefix length {self.prefix_len} is outside [0, {ADDRESS_BITS}]')
        try:
            base = tuple(self.base)
        except TypeError as e:
            raise ConfigError(f'Base address must be a sequence of octets, got {self.base!r}') from e
        if len(base) != 4 or any(
            isinstance(octet, bool) or not isinstance(octet, (int, np.integer))
            or not 0 <= octet <= 255 for octet in base
        ):
            raise ConfigError(f'Invalid base address octets {self.base!r}')
        object.__setattr__(self, 'base', tuple(int(octet) for octet in base))

    @staticmethod
    def from_bits(bits: BitsLike, prefix_len: int) -> 'SubnetSpec':
        """Build a subnet from a 32-bit sequence, zeroing the host bits."""
        arr = to_bit_array(bits).copy()
        if 0 <= prefix_len <= ADDRESS_BITS:
            arr[prefix_len:] = 0
        return SubnetSpec(parse_address(bits_to_address(arr)), prefix_len)

    @property
    def base_address(self) -> str:
        """Base address as given."""
        return '.'.join(str(octet) for octet in self.base)

    @property
    def network_address(self) -> str:
        """Base address with every host bit cleared."""
        bits = self.bits.copy()
        bits[self.prefix_len:] = 0
        return bits_to_address(bits)

    @property
    def bits(self) -> np.ndarray:
        """Base address as a 32-bit array."""
        return np.unpackbits(np.array(self.base, dtype=np.uint8))

    def contains(self, address: str) -> bool:
        """Whether ``address`` falls inside this subnet."""
        return matches(self, address)

    def __str__(self) -> str:
        return f'{self.base_address}/{self.prefix_len}'


def parse_subnet(spec: str) -> SubnetSpec:
    """Parse a ``"a.b.c.d/len"`` subnet specifier.

    Args:
        spec (str): CIDR literal.

    Returns:
        SubnetSpec: Parsed subnet.

    Raises:
        ConfigError: If the literal is malformed or the prefix length is out of range.
    """
    if not isinstance(spec, str):
        raise ConfigError(f'Subnet must be a string, got {type(spec).__name__}')

    address, sep, length = spec.strip().partition('/')
    if not sep:
        raise ConfigError(f'Subnet {spec!r} is missing a "/prefix" length')

    try:
        base = parse_address(address)
    except ValidationError as e:
        raise ConfigError(f'Subnet {spec!r} has an invalid base address: {e}') from e

    length = length.strip()
    if not length.isascii() or not length.isdigit():
        raise ConfigError(f'Subnet {spec!r} has a non-numeric prefix length {length!r}')

    return SubnetSpec(base, int(length))


def matches(subnet: Union[SubnetSpec, str], address: str) -> bool:
    """Test whether an address lies inside a subnet.

    Args:
        subnet (SubnetSpec | str): Subnet, or a CIDR literal to parse.
        address (str): Dotted-decimal IPv4 address.

    Returns:
        bool: True iff the leading ``prefix_len`` bits agree.

    Raises:
        ValidationError: If ``address`` is malformed.
    """
    if isinstance(subnet, str):
        subnet = parse_subnet(subnet)
    bits = address_to_bits(address)
    n = subnet.prefix_len
    return bool(np.array_equal(bits[:n], subnet.bits[:n]))
