"""Helm values for the Argo CD charts."""

from __future__ import annotations

from ...eks.config import IMAGE_UPDATER_SA_NAME


def build_argocd_values() -> dict:
    """Build the Helm values for the argo-cd chart."""
    return {
        "crds": {"install": True, "keep": True},
        "dex": {"enabled": False},
        "server": {"service": {"type": "ClusterIP"}},
        "configs": {
            "params": {"server.insecure": True},
        },
    }


def build_image_updater_values(argocd_namespace: str) -> dict:
    """Build the Helm values for the argocd-image-updater chart.

    The service account name is fixed so a pod identity association can be
    declared for it independently of the chart's naming.
    """
    return {
        "serviceAccount": {"create": True, "name": IMAGE_UPDATER_SA_NAME},
        "config": {
            "argocd": {
                "grpcWeb": True,
                "serverAddress": f"http://argocd-server.{argocd_namespace}",
                "insecure": True,
                "plaintext": True,
            },
        },
    }
