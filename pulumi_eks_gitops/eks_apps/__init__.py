"""EKS applications."""

from .argocd import ArgoCD, PulumiAccessTokenSecret

__all__ = [
    "ArgoCD",
    "PulumiAccessTokenSecret",
]
