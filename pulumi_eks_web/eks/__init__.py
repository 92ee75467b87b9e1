"""EKS cluster components."""

from .cluster import EKSCluster
from .iam import NodeRole, build_assume_role_policy
from .node_resources import create_node_resources

__all__ = [
    "EKSCluster",
    "NodeRole",
    "build_assume_role_policy",
    "create_node_resources",
]
