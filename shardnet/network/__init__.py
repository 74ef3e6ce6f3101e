# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""IPv4 address codec, CIDR matching and the address trie."""

from shardnet.network.codec import (
    address_to_binary_string,
    address_to_bits,
    bits_to_address,
    is_valid_address,
    octet_to_binary,
    parse_address,
)
from shardnet.network.subnet import SubnetSpec, matches, parse_subnet
from shardnet.network.trie import VirtualTree

__all__ = [
    'SubnetSpec',
    'VirtualTree',
    'address_to_binary_string',
    'address_to_bits',
    'bits_to_address',
    'is_valid_address',
    'matches',
    'octet_to_binary',
    'parse_address',
    'parse_subnet',
]
