import numpy as np
import pytest

from shardnet import ValidationError
from shardnet.network.codec import (
    address_to_binary_string,
    address_to_bits,
    bits_to_address,
    is_valid_address,
    octet_to_binary,
    parse_address,
    to_bit_array,
)


def test_octet_to_binary_all_values():
    for i in range(256):
        octet = octet_to_binary(i)
        assert len(octet) == 8
        assert int(octet, 2) == i


def test_octet_to_binary_padding():
    assert octet_to_binary(0) == '00000000'
    assert octet_to_binary(5) == '00000101'
    assert octet_to_binary(255) == '11111111'
    assert octet_to_binary(np.uint8(192)) == '11000000'


@pytest.mark.parametrize('value', [-1, 256, 1000, 1.5, '7', True, None])
def test_octet_to_binary_rejects(value):
    with pytest.raises(ValidationError):
        octet_to_binary(value)


def test_address_to_binary_string(random_ip):
    assert address_to_binary_string('192.168.0.1') == '11000000.10101000.00000000.00000001'
    for _ in range(1000):
        assert len(address_to_binary_string(random_ip())) == 35


@pytest.mark.parametrize('address', [
    '192.168.0',
    '192.168.0.1.5',
    '192.168.0.256',
    '192.168..1',
    '192.168.0.-1',
    '192.168.0.+1',
    'a.b.c.d',
    '',
    '١٢٣.1.1.1',
])
def test_parse_address_rejects(address):
    with pytest.raises(ValidationError):
        parse_address(address)
    assert not is_valid_address(address)


def test_parse_address_rejects_non_string():
    with pytest.raises(ValidationError):
        parse_address(3232235521)


def test_parse_address_strips_whitespace():
    assert parse_address(' 10.0.0.1\n') == (10, 0, 0, 1)


def test_address_to_bits():
    bits = address_to_bits('128.0.0.1')
    assert bits.dtype == np.uint8
    assert len(bits) == 32
    assert bits[0] == 1 and bits[-1] == 1
    assert bits[1:-1].sum() == 0


def test_bits_to_address_inverts(random_ip):
    for _ in range(100):
        ip = random_ip()
        assert bits_to_address(address_to_bits(ip)) == ip


def test_to_bit_array_accepts_dotted_binary():
    arr = to_bit_array(address_to_binary_string('10.1.2.3'))
    assert np.array_equal(arr, address_to_bits('10.1.2.3'))


@pytest.mark.parametrize('bits', ['0101', [0, 1, 2] + [0] * 29, 'x' * 32, np.zeros((4, 8))])
def test_to_bit_array_rejects(bits):
    with pytest.raises(ValidationError):
        to_bit_array(bits)
