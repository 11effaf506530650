"""EKS cluster components."""

from .access import ClusterAdminAccess
from .cluster import EKSCluster
from .config import ComponentVersions
from .pod_identity import PodIdentityRole
from .policies import build_ecr_access_policy, build_pod_identity_trust_policy

__all__ = [
    "ClusterAdminAccess",
    "ComponentVersions",
    "EKSCluster",
    "PodIdentityRole",
    "build_ecr_access_policy",
    "build_pod_identity_trust_policy",
]
