"""The full platform: network, cluster, identities, Argo CD and its access token."""

from __future__ import annotations

import pulumi

from . import eks, vpc
from .config import ProjectConfig
from .eks import config as eks_config
from .eks_apps import ArgoCD, PulumiAccessTokenSecret


class GitOpsPlatform(pulumi.ComponentResource):
    """EKS cluster in a public VPC, running Argo CD.

    Declaration order follows the dependency graph:
        PublicVPC -> EKSCluster -> ClusterAdminAccess / PodIdentityRole
                  -> ArgoCD -> PulumiAccessTokenSecret
    Each step consumes only the outputs of the steps before it.
    """

    kubeconfig: pulumi.Output[dict]

    def __init__(
        self,
        name: str,
        project_config: ProjectConfig,
        initial_objects: str,
        access_token: pulumi.Input[str] | None = None,
        tags: dict[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__("pulumi-eks-gitops:index:GitOpsPlatform", name, None, opts)

        versions = project_config.component_versions

        self.vpc = vpc.PublicVPC(
            f"{name}-vpc",
            cidr_block=project_config.vpc_network_cidr,
            subnet_cidrs=project_config.public_subnet_cidrs,
            availability_zones=project_config.availability_zones,
            tags=tags,
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.cluster = eks.EKSCluster(
            f"{name}-cls",
            vpc_id=self.vpc.vpc_id,
            subnet_ids=self.vpc.public_subnet_ids,
            instance_type=project_config.eks_node_instance_type,
            min_size=project_config.min_cluster_size,
            max_size=project_config.max_cluster_size,
            desired_capacity=project_config.desired_cluster_size,
            versions=versions,
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.vpc]),
        )

        self.admin_access: eks.ClusterAdminAccess | None = None
        if project_config.admin_principal_arn:
            self.admin_access = eks.ClusterAdminAccess.from_cluster(
                self.cluster,
                principal_arn=project_config.admin_principal_arn,
                parent=self,
            )
        else:
            pulumi.log.warn(
                "adminPrincipalArn is not set; no cluster admin access entry is declared",
                resource=self,
            )

        self.image_updater_identity = eks.PodIdentityRole.from_cluster(
            self.cluster,
            namespace=eks_config.ARGOCD_NAMESPACE,
            service_account=eks_config.IMAGE_UPDATER_SA_NAME,
            policy_document=eks.build_ecr_access_policy(),
            parent=self,
        )

        self.argocd = ArgoCD.from_cluster(
            self.cluster,
            initial_objects=initial_objects,
            versions=versions,
            parent=self,
        )

        self.access_token_secret = PulumiAccessTokenSecret(
            f"{name}-pulumi-access-token",
            namespace=self.argocd.namespace,
            access_token=access_token,
            depends_on=[self.argocd],
            opts=pulumi.ResourceOptions(
                parent=self,
                provider=self.cluster.k8s_provider,
            ),
        )

        self.kubeconfig = self.cluster.kubeconfig

        self.register_outputs(
            {
                "vpc_id": self.vpc.vpc_id,
                "cluster_name": self.cluster.cluster_name,
                "argocd_namespace": self.argocd.namespace,
                "kubeconfig": self.kubeconfig,
            }
        )
