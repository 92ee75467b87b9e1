from __future__ import annotations

import pulumi
import pulumi_aws as aws
import pulumi_eks as eks
import pulumi_kubernetes as k8s

from ..config import NodeGroupConfig
from .config import K8S_PROVIDER_NAME


class EKSCluster(pulumi.ComponentResource):
    """EKS cluster with a managed default node group in private subnets.

    - Nodes get no public IPs; the control plane is reachable privately and publicly
    - Access is managed through EKS access entries (API authentication mode)
    - Exposes the kubeconfig as JSON and a Kubernetes provider bound to it
    """

    k8s: eks.Cluster
    k8s_provider: k8s.Provider
    kubeconfig: pulumi.Output[str]
    cluster_name: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        instance_role: aws.iam.Role | None = None,
        node_group: NodeGroupConfig | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-web:eks:EKSCluster", name, None, opts)

        node_group = node_group or NodeGroupConfig()
        self.name = name

        self.k8s = eks.Cluster(
            name,
            name=name,
            vpc_id=vpc_id,
            private_subnet_ids=subnet_ids,
            node_associate_public_ip_address=False,
            endpoint_private_access=True,
            endpoint_public_access=True,
            authentication_mode=eks.AuthenticationMode.API,
            instance_type=node_group.instance_type,
            desired_capacity=node_group.desired_capacity,
            min_size=node_group.min_size,
            max_size=node_group.max_size,
            instance_role=instance_role,
            skip_default_node_group=False,
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.kubeconfig = self.k8s.kubeconfig_json
        self.cluster_name = pulumi.Output.from_input(name)

        self.k8s_provider = k8s.Provider(
            f"{name}-{K8S_PROVIDER_NAME}",
            kubeconfig=self.kubeconfig,
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.k8s]),
        )

        self.register_outputs(
            {
                "kubeconfig": self.kubeconfig,
                "cluster_name": self.cluster_name,
            }
        )
