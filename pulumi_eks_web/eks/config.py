"""Configuration constants for EKS components."""

# AWS managed policies for EKS nodes, keyed by attachment suffix
EKS_NODE_POLICIES = {
    "eks-worker": "arn:aws:iam::aws:policy/AmazonEKSWorkerNodePolicy",
    "vpc-controller": "arn:aws:iam::aws:policy/AmazonEKSVPCResourceController",
    "ecr-ro": "arn:aws:iam::aws:policy/AmazonEC2ContainerRegistryReadOnly",
    "eks-cni": "arn:aws:iam::aws:policy/AmazonEKS_CNI_Policy",
}

NODE_ROLE_DESCRIPTION = "IAM role for EKS node group"
NODE_ROLE_SERVICE_PRINCIPAL = "ec2.amazonaws.com"

K8S_PROVIDER_NAME = "k8s-provider"
