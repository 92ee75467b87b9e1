from __future__ import annotations

import pulumi

from ..config import StackConfig
from ..vpc import VPC
from .iam import NodeRole


def create_node_resources(
    config: StackConfig,
) -> tuple[VPC, NodeRole, list[pulumi.Output[str]]]:
    """Create the node IAM role and the VPC with its private subnets.

    Returns the VPC, the node role and the private subnet IDs. Any failure is
    logged and re-raised so the deployment aborts.
    """
    node_role = NodeRole(config.cluster_name)

    try:
        vpc = VPC(
            config.vpc_name,
            cidr_block=config.network.vpc_cidr,
            availability_zones=config.availability_zone_names,
            subnet_prefix=config.network.subnet_prefix,
        )
    except ValueError as e:
        pulumi.log.error(f"Failed to create VPC: {e}")
        raise

    return vpc, node_role, vpc.private_subnet_ids
