from __future__ import annotations

import pulumi
import pulumi_aws as aws

from .cluster import EKSCluster
from .config import CLUSTER_ADMIN_POLICY_ARN


class ClusterAdminAccess(pulumi.ComponentResource):
    """Grants an IAM principal cluster-wide admin through an EKS access entry."""

    access_entry: aws.eks.AccessEntry
    policy_association: aws.eks.AccessPolicyAssociation

    def __init__(
        self,
        name: str,
        cluster_name: pulumi.Input[str],
        principal_arn: pulumi.Input[str],
        policy_arn: str = CLUSTER_ADMIN_POLICY_ARN,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-gitops:eks:ClusterAdminAccess", name, None, opts)

        child_opts = pulumi.ResourceOptions(
            parent=self,
            depends_on=(opts.depends_on if opts else None) or [],
        )

        self.access_entry = aws.eks.AccessEntry(
            f"{name}-entry",
            cluster_name=cluster_name,
            principal_arn=principal_arn,
            opts=child_opts,
        )

        self.policy_association = aws.eks.AccessPolicyAssociation(
            f"{name}-policy",
            cluster_name=cluster_name,
            principal_arn=principal_arn,
            policy_arn=policy_arn,
            access_scope=aws.eks.AccessPolicyAssociationAccessScopeArgs(
                type="cluster",
            ),
            opts=child_opts.merge(
                pulumi.ResourceOptions(depends_on=[self.access_entry])
            ),
        )

        self.register_outputs(
            {
                "access_entry": self.access_entry,
                "policy_association": self.policy_association,
            }
        )

    @classmethod
    def from_cluster(
        cls,
        cluster: EKSCluster,
        principal_arn: pulumi.Input[str],
        parent: pulumi.Resource | None = None,
    ) -> "ClusterAdminAccess":
        """Create a ClusterAdminAccess for an EKSCluster instance."""
        return cls(
            name=f"{cluster.name}-admin-access",
            cluster_name=cluster.cluster_name,
            principal_arn=principal_arn,
            opts=pulumi.ResourceOptions(parent=parent, depends_on=[cluster.k8s]),
        )
