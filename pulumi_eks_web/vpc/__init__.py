"""VPC components."""

from .core import VPC
from .endpoints import VPCEndpoints, build_s3_endpoint_policy, endpoint_service_name
from .utils import calculate_private_subnets

__all__ = [
    "VPC",
    "VPCEndpoints",
    "build_s3_endpoint_policy",
    "calculate_private_subnets",
    "endpoint_service_name",
]
