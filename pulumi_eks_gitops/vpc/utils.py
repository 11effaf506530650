"""Subnet layout validation."""

from __future__ import annotations

import ipaddress
from typing import Sequence


def validate_subnet_layout(
    vpc_cidr: str,
    subnet_cidrs: Sequence[str],
    availability_zones: Sequence[str],
) -> None:
    """Check that one subnet CIDR is given per AZ and that the subnets fit the VPC.

    Raises:
        ValueError: if the layout cannot be declared as-is.
    """
    if not availability_zones:
        raise ValueError("At least one availability zone is required")
    if len(subnet_cidrs) != len(availability_zones):
        raise ValueError(
            f"Got {len(subnet_cidrs)} subnet CIDRs for {len(availability_zones)} "
            "availability zones; the counts must match"
        )
    if len(set(availability_zones)) != len(availability_zones):
        raise ValueError(f"Availability zones must be unique: {list(availability_zones)}")

    try:
        vpc_network = ipaddress.IPv4Network(vpc_cidr)
        subnets = [ipaddress.IPv4Network(cidr) for cidr in subnet_cidrs]
    except ValueError as e:
        raise ValueError(f"Invalid CIDR block: {e}") from e

    for subnet in subnets:
        if not subnet.subnet_of(vpc_network):
            raise ValueError(f"Subnet {subnet} is not within VPC {vpc_network}")

    for i, a in enumerate(subnets):
        for b in subnets[i + 1 :]:
            if a.overlaps(b):
                raise ValueError(f"Subnets {a} and {b} overlap")
