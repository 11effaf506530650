"""Argo CD EKS applications."""

from .controller import ArgoCD
from .credentials import PulumiAccessTokenSecret

__all__ = [
    "ArgoCD",
    "PulumiAccessTokenSecret",
]
