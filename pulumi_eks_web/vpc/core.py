from __future__ import annotations

import pulumi
import pulumi_aws as aws

from .utils import calculate_private_subnets


class VPC(pulumi.ComponentResource):
    """VPC with one private subnet per availability zone.

    Subnets share a single private route table so gateway endpoints can be
    attached to it. Nothing here routes to the internet; AWS APIs are reached
    through VPC endpoints.
    """

    vpc_id: pulumi.Output[str]
    vpc_cidr_block: pulumi.Output[str]
    private_subnet_ids: list[pulumi.Output[str]]
    private_route_table_id: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cidr_block: str,
        availability_zones: list[str],
        subnet_prefix: int = 27,
        tags: dict[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        if not availability_zones:
            pulumi.log.error("No subnets were created")
            raise ValueError("no subnets created: at least one availability zone is required")

        subnet_cidrs = calculate_private_subnets(
            cidr_block, len(availability_zones), subnet_prefix
        )

        super().__init__("pulumi-eks-web:aws:VPC", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        tags = tags or {}

        pulumi.log.info("Creating VPC")
        self.vpc = aws.ec2.Vpc(
            f"{name}-eks-vpc",
            cidr_block=cidr_block,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags={**tags, "Name": name},
            opts=child_opts,
        )

        self.private_route_table = aws.ec2.RouteTable(
            f"{name}-private-rt",
            vpc_id=self.vpc.id,
            tags={**tags, "Name": f"{name}-private"},
            opts=child_opts,
        )

        self.private_subnets: list[aws.ec2.Subnet] = []
        self.route_table_associations: list[aws.ec2.RouteTableAssociation] = []
        for i, (subnet_cidr, az) in enumerate(zip(subnet_cidrs, availability_zones)):
            subnet_name = f"{name}-{i + 1}"
            pulumi.log.info(
                f"Creating subnet: {subnet_name} with CIDR {subnet_cidr} in AZ {az}"
            )
            subnet = aws.ec2.Subnet(
                subnet_name,
                vpc_id=self.vpc.id,
                cidr_block=subnet_cidr,
                availability_zone=az,
                map_public_ip_on_launch=False,
                tags={
                    **tags,
                    "Name": subnet_name,
                    "kubernetes.io/role/internal-elb": "1",
                },
                opts=child_opts,
            )
            self.route_table_associations.append(
                aws.ec2.RouteTableAssociation(
                    f"{subnet_name}-rta",
                    subnet_id=subnet.id,
                    route_table_id=self.private_route_table.id,
                    opts=child_opts,
                )
            )
            self.private_subnets.append(subnet)

        pulumi.log.info(f"Successfully created {len(self.private_subnets)} subnets")

        self.vpc_id = self.vpc.id
        self.vpc_cidr_block = self.vpc.cidr_block
        self.private_subnet_ids = [subnet.id for subnet in self.private_subnets]
        self.private_route_table_id = self.private_route_table.id

        self.register_outputs(
            {
                "vpc_id": self.vpc_id,
                "private_subnet_ids": self.private_subnet_ids,
                "private_route_table_id": self.private_route_table_id,
            }
        )
