"""Private VPC endpoints for the AWS APIs the cluster nodes depend on."""

from __future__ import annotations

import pulumi
import pulumi_aws as aws

# Resource-name aliases for services whose suffix alone is ambiguous
_ENDPOINT_SHORT_NAMES = {
    "ecr.api": "ecr",
    "ecr.dkr": "dkr",
}


def endpoint_service_name(region: str, service: str) -> str:
    """Return the AWS service name of a VPC endpoint, e.g. com.amazonaws.us-east-1.ec2."""
    return f"com.amazonaws.{region}.{service}"


def endpoint_short_name(service: str) -> str:
    return _ENDPOINT_SHORT_NAMES.get(service, service.replace(".", "-"))


def build_s3_endpoint_policy(
    region: str, bucket_prefix: str, bucket_suffix: str
) -> dict:
    """Build the S3 gateway endpoint policy scoped to the ECR image layer bucket."""
    return {
        "Statement": [
            {
                "Sid": "Access-to-specific-bucket-only",
                "Principal": "*",
                "Action": ["s3:*"],
                "Effect": "Allow",
                "Resource": [
                    f"arn:aws:s3:::{bucket_prefix}-{region}-{bucket_suffix}/*"
                ],
            }
        ]
    }


class VPCEndpoints(pulumi.ComponentResource):
    """Interface endpoints in the private subnets plus an S3 gateway endpoint."""

    interface_endpoints: dict[str, aws.ec2.VpcEndpoint]
    s3_endpoint: aws.ec2.VpcEndpoint
    endpoint_arns: dict[str, pulumi.Output[str]]

    def __init__(
        self,
        name: str,
        region: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        route_table_ids: list[pulumi.Input[str]],
        interface_services: list[str],
        s3_bucket_prefix: str,
        s3_bucket_suffix: str,
        opts: pulumi.ResourceOptions | None = None,
    ):
        if not subnet_ids:
            pulumi.log.error("No subnets returned for the VPC endpoints")
            raise ValueError("no private subnets available")

        super().__init__("pulumi-eks-web:aws:VPCEndpoints", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.interface_endpoints = {}
        for service in interface_services:
            short_name = endpoint_short_name(service)
            self.interface_endpoints[short_name] = aws.ec2.VpcEndpoint(
                f"{name}-{short_name}-endpoint",
                vpc_id=vpc_id,
                service_name=endpoint_service_name(region, service),
                vpc_endpoint_type="Interface",
                subnet_ids=subnet_ids,
                private_dns_enabled=True,
                tags={"Name": f"{name}-{short_name}-endpoint"},
                opts=child_opts,
            )

        self.s3_endpoint = aws.ec2.VpcEndpoint(
            f"{name}-s3-endpoint",
            vpc_id=vpc_id,
            service_name=endpoint_service_name(region, "s3"),
            vpc_endpoint_type="Gateway",
            route_table_ids=route_table_ids,
            policy=pulumi.Output.json_dumps(
                build_s3_endpoint_policy(region, s3_bucket_prefix, s3_bucket_suffix)
            ),
            tags={"Name": f"{name}-s3-endpoint"},
            opts=child_opts,
        )

        self.endpoint_arns = {
            short_name: endpoint.arn
            for short_name, endpoint in self.interface_endpoints.items()
        }
        self.endpoint_arns["s3"] = self.s3_endpoint.arn

        self.register_outputs({"endpoint_arns": self.endpoint_arns})
