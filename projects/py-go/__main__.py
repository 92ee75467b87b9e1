"""
Pulumi program for the py-go EKS stack.

This script sets up:
1. A VPC with private subnets and an IAM role for the worker nodes.
2. Interface endpoints (EC2, EKS, ECR) and an S3 gateway endpoint.
3. An EKS cluster and a Kubernetes provider for it.
4. The Python and Go web apps behind a load balancer and an ALB ingress.
"""

import pulumi
from pulumi_eks_web import eks, eks_apps, vpc
from pulumi_eks_web.config import load_stack_config

# ------------------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------------------
config = load_stack_config(
    pulumi.Config(), region=pulumi.Config("aws").get("region")
)

# ------------------------------------------------------------------------------
# Networking Resources
# ------------------------------------------------------------------------------
network, node_role, private_subnet_ids = eks.create_node_resources(config)

endpoints = vpc.VPCEndpoints(
    config.cluster_name,
    region=config.region,
    vpc_id=network.vpc_id,
    subnet_ids=private_subnet_ids,
    route_table_ids=[network.private_route_table_id],
    interface_services=config.network.interface_endpoint_services,
    s3_bucket_prefix=config.network.s3_bucket_name_prefix,
    s3_bucket_suffix=config.network.s3_bucket_name_suffix,
)

for short_name, endpoint_arn in endpoints.endpoint_arns.items():
    pulumi.export(f"{short_name}EndpointUrl", endpoint_arn)

# ------------------------------------------------------------------------------
# Cluster Resources
# ------------------------------------------------------------------------------
cluster = eks.EKSCluster(
    config.cluster_name,
    vpc_id=network.vpc_id,
    subnet_ids=private_subnet_ids,
    instance_role=node_role.iam_role,
    node_group=config.node_group,
)

pulumi.export("kubeconfig", pulumi.Output.secret(cluster.kubeconfig))

# ------------------------------------------------------------------------------
# Workloads
# ------------------------------------------------------------------------------
if config.deploy_workloads:
    web_apps = eks_apps.WebApps.from_cluster(
        pulumi.get_project(),
        cluster=cluster,
        apps=config.apps,
        app_group=config.app_group,
    )
    pulumi.export("lbUrl", web_apps.lb_url)
else:
    pulumi.log.info("Workload deployment disabled; skipping Deployments, Service and Ingress")

# ------------------------------------------------------------------------------
# Outputs
# ------------------------------------------------------------------------------
pulumi.export("vpcId", network.vpc_id)
pulumi.export("clusterName", cluster.cluster_name)
