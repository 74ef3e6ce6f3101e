import numpy as np

from shardnet import NodeInfo


def random_addresses(rng: np.random.Generator, n: int, first_octet=None) -> list[str]:
    octets = rng.integers(1, 255, size=(n, 4))
    if first_octet is not None:
        octets[:, 0] = first_octet
    return [".".join(str(o) for o in row) for row in octets.tolist()]


def make_registry(rng: np.random.Generator, num_nodes: int, subnet_prefix: str = "10.20") -> list[NodeInfo]:
    """Each node gets one address in ``subnet_prefix`` plus one decoy outside it."""
    low = rng.integers(0, 256, size=num_nodes)
    high = rng.integers(1, 255, size=num_nodes)
    decoys = random_addresses(rng, num_nodes, first_octet=rng.integers(100, 172))
    return [
        NodeInfo.of(f"{subnet_prefix}.{a}.{b}", decoy)
        for a, b, decoy in zip(low.tolist(), high.tolist(), decoys)
    ]
