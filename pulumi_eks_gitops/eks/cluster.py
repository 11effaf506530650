from __future__ import annotations

import pulumi
import pulumi_aws as aws
import pulumi_eks as eks
import pulumi_kubernetes as k8s

from . import config


def validate_node_group_sizes(min_size: int, desired_capacity: int, max_size: int) -> None:
    """Raise ValueError unless 0 <= min_size <= desired_capacity <= max_size."""
    if min_size < 0:
        raise ValueError(f"min_size must be non-negative, got {min_size}")
    if not min_size <= desired_capacity <= max_size:
        raise ValueError(
            "Node group sizes must satisfy min <= desired <= max, got "
            f"min={min_size}, desired={desired_capacity}, max={max_size}"
        )


class EKSCluster(pulumi.ComponentResource):
    """EKS cluster with a managed node group, public API endpoint and the pod identity agent.

    Exposes a Kubernetes provider bound to the generated kubeconfig so later
    components install into this control plane.
    """

    cluster_name: pulumi.Output[str]
    kubeconfig: pulumi.Output[dict]
    k8s: eks.Cluster
    k8s_provider: k8s.Provider
    pod_identity_addon: aws.eks.Addon

    def __init__(
        self,
        name: str,
        vpc_id: pulumi.Input[str],
        subnet_ids: pulumi.Input[list[str]],
        instance_type: str = config.DEFAULT_INSTANCE_TYPE,
        min_size: int = config.DEFAULT_MIN_SIZE,
        max_size: int = config.DEFAULT_MAX_SIZE,
        desired_capacity: int = config.DEFAULT_DESIRED_CAPACITY,
        versions: config.ComponentVersions | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        validate_node_group_sizes(min_size, desired_capacity, max_size)

        super().__init__("pulumi-eks-gitops:eks:EKSCluster", name, None, opts)

        versions = versions or config.ComponentVersions()

        self.name = name

        self.k8s = eks.Cluster(
            f"{name}-eks",
            name=name,
            vpc_id=vpc_id,
            private_subnet_ids=subnet_ids,
            instance_type=instance_type,
            desired_capacity=desired_capacity,
            min_size=min_size,
            max_size=max_size,
            endpoint_private_access=False,
            endpoint_public_access=True,
            create_oidc_provider=True,
            node_root_volume_size=config.NODE_ROOT_VOLUME_SIZE,
            authentication_mode=config.AUTHENTICATION_MODE,
            opts=pulumi.ResourceOptions(parent=self),
        )
        # The physical name is pinned above, so dependents reference it directly
        # and order themselves after the cluster through depends_on.
        self.cluster_name = pulumi.Output.from_input(name)

        self.pod_identity_addon = aws.eks.Addon(
            f"{name}-pod-identity",
            cluster_name=self.cluster_name,
            addon_name=config.POD_IDENTITY_ADDON_NAME,
            addon_version=versions.pod_identity_agent,
            resolve_conflicts_on_create="OVERWRITE",
            resolve_conflicts_on_update="OVERWRITE",
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.k8s]),
        )

        self.k8s_provider = k8s.Provider(
            f"{name}-k8s",
            kubeconfig=self.k8s.kubeconfig_json,
            enable_server_side_apply=True,
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.kubeconfig = pulumi.Output.secret(self.k8s.kubeconfig)

        pulumi.log.info(
            f"Declared EKS cluster {name} ({instance_type}, "
            f"{min_size}/{desired_capacity}/{max_size} nodes)",
            resource=self,
        )

        self.register_outputs(
            {
                "cluster_name": self.cluster_name,
                "kubeconfig": self.kubeconfig,
            }
        )
