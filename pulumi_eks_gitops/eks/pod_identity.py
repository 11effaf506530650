"""IAM role bound to a Kubernetes service account through EKS Pod Identity."""

from __future__ import annotations

import json

import pulumi
import pulumi_aws as aws

from .cluster import EKSCluster
from .policies import build_pod_identity_trust_policy


class PodIdentityRole(pulumi.ComponentResource):
    """IAM role for a service account, associated via EKS Pod Identity.

    Workloads running under `namespace/service_account` receive the role's
    permissions from the pod identity agent, with no static credentials.
    """

    role: aws.iam.Role
    policy: aws.iam.Policy
    association: aws.eks.PodIdentityAssociation
    role_arn: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cluster_name: pulumi.Input[str],
        namespace: str,
        service_account: str,
        policy_document: dict,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-gitops:eks:PodIdentityRole", name, None, opts)

        dependencies = (opts.depends_on if opts else None) or []

        self.role = aws.iam.Role(
            f"{name}-role",
            assume_role_policy=json.dumps(build_pod_identity_trust_policy()),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.policy = aws.iam.Policy(
            f"{name}-policy",
            policy=json.dumps(policy_document),
            opts=pulumi.ResourceOptions(parent=self),
        )

        attachment = aws.iam.RolePolicyAttachment(
            f"{name}-policy-attachment",
            role=self.role.name,
            policy_arn=self.policy.arn,
            opts=pulumi.ResourceOptions(parent=self),
        )

        # Needs both the cluster (via dependencies) and the role
        self.association = aws.eks.PodIdentityAssociation(
            f"{name}-association",
            cluster_name=cluster_name,
            role_arn=self.role.arn,
            namespace=namespace,
            service_account=service_account,
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=[*dependencies, self.role, attachment],
            ),
        )

        self.role_arn = self.role.arn

        self.register_outputs(
            {
                "role_arn": self.role_arn,
                "association_id": self.association.id,
            }
        )

    @classmethod
    def from_cluster(
        cls,
        cluster: EKSCluster,
        namespace: str,
        service_account: str,
        policy_document: dict,
        parent: pulumi.Resource | None = None,
    ) -> "PodIdentityRole":
        """Create a PodIdentityRole on an EKSCluster once its pod identity agent exists."""
        return cls(
            name=f"{cluster.name}-{service_account}",
            cluster_name=cluster.cluster_name,
            namespace=namespace,
            service_account=service_account,
            policy_document=policy_document,
            opts=pulumi.ResourceOptions(
                parent=parent,
                depends_on=[cluster.k8s, cluster.pod_identity_addon],
            ),
        )
