# Copyright 2026 Shardnet Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversions between dotted-decimal IPv4 addresses and their bit representations.

Addresses travel through shardnet as plain strings. Whenever one has to be
compared bit-wise (subnet matching, trie insertion) it is converted here into a
``uint8`` array of 32 zeros and ones, most significant bit first.
"""

import re
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from shardnet.errors import ValidationError

__all__ = [
    'ADDRESS_BITS',
    'OCTET_BITS',
    'address_to_binary_string',
    'address_to_bits',
    'bits_to_address',
    'is_valid_address',
    'octet_to_binary',
    'parse_address',
    'to_bit_array',
]

ADDRESS_BITS = 32
OCTET_BITS = 8

_OCTET_RE = re.compile(r'\d+', re.ASCII)

BitsLike = Union[str, Sequence[int], NDArray]


def _check_octet(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(f'Octet must be an integer, got {value!r}')
    if not 0 <= value <= 255:
        raise ValidationError(f'Octet {value} is outside [0, 255]')
    return int(value)


def parse_address(address: str) -> tuple[int, int, int, int]:
    """Parse a dotted-decimal IPv4 address into its four octets.

    Args:
        address (str): Address such as ``"192.168.0.1"``. Surrounding whitespace
            is ignored.

    Returns:
        tuple[int, int, int, int]: The octets, most significant first.

    Raises:
        ValidationError: If the address does not consist of exactly four decimal
            octets, each in [0, 255].
    """
    if not isinstance(address, str):
        raise ValidationError(f'Address must be a string, got {type(address).__name__}')

    parts = address.strip().split('.')
    if len(parts) != 4:
        raise ValidationError(f'Address {address!r} must have exactly 4 octets, got {len(parts)}')

    octets = []
    for part in parts:
        if not _OCTET_RE.fullmatch(part):
            raise ValidationError(f'Address {address!r} has a non-numeric octet {part!r}')
        value = int(part)
        if value > 255:
            raise ValidationError(f'Address {address!r} has octet {value} outside [0, 255]')
        octets.append(value)

    return octets[0], octets[1], octets[2], octets[3]


def is_valid_address(address: str) -> bool:
    """Whether ``address`` parses as a dotted-decimal IPv4 address."""
    try:
        parse_address(address)
    except ValidationError:
        return False
    return True


def octet_to_binary(value: int) -> str:
    """Format a single octet as an 8-character binary string.

    Args:
        value (int): Integer in [0, 255].

    Returns:
        str: Zero-padded binary digits, most significant bit first.
    """
    return np.binary_repr(_check_octet(value), width=OCTET_BITS)


def address_to_binary_string(address: str) -> str:
    """Render an address as four dot-separated 8-bit blocks.

    ``"192.168.0.1"`` becomes ``"11000000.10101000.00000000.00000001"``, always
    35 characters long.

    Args:
        address (str): Dotted-decimal IPv4 address.

    Returns:
        str: Binary form of the address.
    """
    return '.'.join(octet_to_binary(octet) for octet in parse_address(address))


def address_to_bits(address: str) -> NDArray[np.uint8]:
    """Convert an address to its 32-bit sequence.

    Args:
        address (str): Dotted-decimal IPv4 address.

    Returns:
        NDArray[np.uint8]: 32 zeros and ones, most significant bit first.
    """
    octets = np.array(parse_address(address), dtype=np.uint8)
    return np.unpackbits(octets)


def to_bit_array(bits: BitsLike, length: int = ADDRESS_BITS) -> NDArray[np.uint8]:
    """Coerce a bit sequence into a validated ``uint8`` array.

    Accepts a string of ``'0'``/``'1'`` characters (dots between blocks are
    dropped, so the output of :func:`address_to_binary_string` is accepted), or
    any one-dimensional sequence of 0/1 values.

    Args:
        bits: The bit sequence.
        length (int): Required number of bits. Defaults to ``32``.

    Returns:
        NDArray[np.uint8]: The bits.

    Raises:
        ValidationError: On a wrong length or a value other than 0 or 1.
    """
    if isinstance(bits, str):
        digits = bits.replace('.', '')
        if not set(digits) <= {'0', '1'}:
            raise ValidationError(f'Bit string {bits!r} may only contain 0, 1 and dots')
        arr = np.frombuffer(digits.encode('ascii'), dtype=np.uint8) - ord('0')
    else:
        arr = np.asarray(bits)
        if arr.ndim != 1:
            raise ValidationError(f'Bit sequence must be one-dimensional, got shape {arr.shape}')
        if arr.size and not np.isin(arr, (0, 1)).all():
            raise ValidationError('Bit sequence may only contain 0 and 1')
        arr = arr.astype(np.uint8)

    if len(arr) != length:
        raise ValidationError(f'Bit sequence must have {length} bits, got {len(arr)}')
    return arr


def bits_to_address(bits: BitsLike) -> str:
    """Inverse of :func:`address_to_bits`.

    Args:
        bits: 32-bit sequence.

    Returns:
        str: Dotted-decimal IPv4 address.
    """
    octets = np.packbits(to_bit_array(bits))
    return '.'.join(str(int(octet)) for octet in octets)
