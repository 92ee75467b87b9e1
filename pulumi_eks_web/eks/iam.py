from __future__ import annotations

import pulumi
import pulumi_aws as aws

from .config import (
    EKS_NODE_POLICIES,
    NODE_ROLE_DESCRIPTION,
    NODE_ROLE_SERVICE_PRINCIPAL,
)


def build_assume_role_policy(service: str = NODE_ROLE_SERVICE_PRINCIPAL) -> dict:
    """Trust policy letting an AWS service principal assume the role."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"Service": service},
                "Action": "sts:AssumeRole",
            }
        ],
    }


class NodeRole(pulumi.ComponentResource):
    """IAM role for EKS worker nodes with the AWS managed node policies attached."""

    iam_role: aws.iam.Role
    iam_role_arn: pulumi.Output[str]
    policy_attachments: list[aws.iam.RolePolicyAttachment]

    def __init__(
        self,
        name: str,
        policies: dict[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-web:aws:NodeRole", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.iam_role = aws.iam.Role(
            f"{name}-node-role",
            assume_role_policy=pulumi.Output.json_dumps(build_assume_role_policy()),
            description=NODE_ROLE_DESCRIPTION,
            opts=child_opts,
        )

        self.policy_attachments = [
            aws.iam.RolePolicyAttachment(
                f"{name}-{suffix}",
                role=self.iam_role.name,
                policy_arn=policy_arn,
                opts=child_opts,
            )
            for suffix, policy_arn in (policies or EKS_NODE_POLICIES).items()
        ]

        self.iam_role_arn = self.iam_role.arn
        self.register_outputs({"iam_role_arn": self.iam_role_arn})
