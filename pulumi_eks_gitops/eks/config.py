"""Configuration constants and data classes for EKS components."""

from dataclasses import dataclass, fields


# Node group defaults
DEFAULT_INSTANCE_TYPE = "t3.medium"
DEFAULT_MIN_SIZE = 3
DEFAULT_MAX_SIZE = 6
DEFAULT_DESIRED_CAPACITY = 3
NODE_ROOT_VOLUME_SIZE = 150

# EKS access management
AUTHENTICATION_MODE = "API"
CLUSTER_ADMIN_POLICY_ARN = (
    "arn:aws:eks::aws:cluster-access-policy/AmazonEKSClusterAdminPolicy"
)

# Pod identity
POD_IDENTITY_ADDON_NAME = "eks-pod-identity-agent"
POD_IDENTITY_SERVICE_PRINCIPAL = "pods.eks.amazonaws.com"

# Argo CD
ARGOCD_NAMESPACE = "argocd"
ARGOCD_RELEASE_NAME = "argocd"
IMAGE_UPDATER_RELEASE_NAME = "argocd-image-updater"
# Pinned so the pod identity association can target it before the chart renders
IMAGE_UPDATER_SA_NAME = "argocd-argocd-image-updater"

# Secret handed to the Pulumi operator running under Argo CD
ACCESS_TOKEN_SECRET_NAME = "pulumi-access-token"
ACCESS_TOKEN_SECRET_KEY = "PULUMI_ACCESS_TOKEN"


@dataclass
class ComponentVersions:
    """Pinned versions of the add-ons and charts installed on the cluster."""

    pod_identity_agent: str = "v1.3.0-eksbuild.1"
    argocd: str = "7.7.11"
    argocd_image_updater: str = "0.11.2"

    @classmethod
    def from_dict(cls, data: dict | None) -> "ComponentVersions":
        """Create ComponentVersions from a config payload, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})
