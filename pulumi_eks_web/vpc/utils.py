import ipaddress


def calculate_private_subnets(
    cidr_block: str, num_azs: int, prefix: int = 27
) -> list[str]:
    """Carve `num_azs` contiguous /`prefix` private subnets from the start of the VPC.

    Args:
        cidr_block: VPC CIDR block, e.g. "172.27.0.0/16".
        num_azs: Number of availability zones, one private subnet each.
        prefix: Prefix length of every private subnet.
    """
    vpc_network = ipaddress.IPv4Network(cidr_block, strict=False)
    if prefix < vpc_network.prefixlen or prefix > 28:
        raise ValueError(
            f"Subnet prefix /{prefix} is invalid for VPC {vpc_network} "
            f"(must be between /{vpc_network.prefixlen} and /28)"
        )

    available = 1 << (prefix - vpc_network.prefixlen)
    if num_azs > available:
        raise ValueError(
            f"VPC {vpc_network} cannot provide {num_azs} /{prefix} subnets "
            f"(only {available} available)"
        )

    subnets = vpc_network.subnets(new_prefix=prefix)
    return [str(next(subnets)) for _ in range(num_azs)]
