import numpy as np
import pytest

from shardnet import ConfigError, SubnetSpec, ValidationError, matches, parse_subnet


def test_parse_subnet():
    subnet = parse_subnet('192.168.0.0/24')
    assert subnet.base == (192, 168, 0, 0)
    assert subnet.prefix_len == 24
    assert str(subnet) == '192.168.0.0/24'


@pytest.mark.parametrize('spec', [
    '192.168.0.0',
    '192.168.0.0/',
    '192.168.0.0/33',
    '192.168.0.0/-1',
    '192.168.0.0/abc',
    '192.168.0/24',
    '300.1.1.1/8',
    '/24',
])
def test_parse_subnet_rejects(spec):
    with pytest.raises(ConfigError):
        parse_subnet(spec)


def test_parse_subnet_chains_validation_error():
    with pytest.raises(ConfigError) as info:
        parse_subnet('1.2.3/8')
    assert isinstance(info.value.__cause__, ValidationError)


def test_matches_octet_boundary():
    subnet = parse_subnet('192.168.0.0/24')
    assert matches(subnet, '192.168.0.1')
    assert matches(subnet, '192.168.0.255')
    assert not matches(subnet, '192.168.1.1')
    # starts with "192.168.0" as a string but is 192.168.1.1
    assert not matches(subnet, '192.168.01.1')


def test_matches_non_octet_prefix():
    subnet = parse_subnet('172.16.0.0/12')
    assert matches(subnet, '172.16.0.1')
    assert matches(subnet, '172.31.255.255')
    assert not matches(subnet, '172.32.0.1')
    assert not matches(subnet, '172.15.255.255')


def test_matches_string_subnet_and_zero_prefix():
    assert matches('10.0.0.0/8', '10.200.3.4')
    assert matches('0.0.0.0/0', '8.8.8.8')


def test_matches_invalid_address():
    with pytest.raises(ValidationError):
        matches(parse_subnet('10.0.0.0/8'), '10.0.0')


def test_host_bits_ignored():
    subnet = parse_subnet('192.168.0.77/24')
    assert subnet.network_address == '192.168.0.0'
    assert subnet.contains('192.168.0.1')


def test_from_bits_zeroes_host_bits():
    subnet = SubnetSpec.from_bits('10101100.00010011.00000001.00000010', 8)
    assert subnet.base == (172, 0, 0, 0)
    assert subnet.prefix_len == 8


def test_spec_validation():
    with pytest.raises(ConfigError):
        SubnetSpec((10, 0, 0, 0), 40)
    with pytest.raises(ConfigError):
        SubnetSpec((10, 0, 0), 8)


@pytest.mark.parametrize('base', [(10, 0, 0, 'a'), (10, 0, 0, 1.5), (10, 0, 0, True), 10, None])
def test_spec_rejects_bad_octets(base):
    with pytest.raises(ConfigError):
        SubnetSpec(base, 8)


def test_spec_coerces_base_to_tuple():
    subnet = SubnetSpec([10, np.uint8(1), 0, 0], 16)
    assert subnet.base == (10, 1, 0, 0)
    assert type(subnet.base[1]) is int
    assert hash(subnet) == hash(SubnetSpec((10, 1, 0, 0), 16))
