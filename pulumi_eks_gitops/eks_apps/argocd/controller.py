"""Argo CD installation for EKS."""

from __future__ import annotations

import os
from collections.abc import Mapping

import pulumi
import pulumi_kubernetes as k8s

from ...eks import config
from ...eks.cluster import EKSCluster
from .config_builder import build_argocd_values, build_image_updater_values


def _kubernetes_provider(opts: pulumi.ResourceOptions) -> pulumi.ProviderResource:
    """Pick the Kubernetes provider from `provider` or `providers["kubernetes"]`."""
    providers = opts.providers if isinstance(opts.providers, Mapping) else {}
    provider = opts.provider or providers.get("kubernetes")
    if provider is None:
        raise ValueError(
            "ArgoCD needs a Kubernetes provider: pass opts with "
            "provider=... or providers={'kubernetes': ...}"
        )
    return provider


class ArgoCD(pulumi.ComponentResource):
    """Argo CD with the image updater, seeded with an initial set of objects.

    - Installs the argo-cd and argocd-image-updater Helm charts into `namespace`
    - Applies `initial_objects` (a YAML manifest, usually Applications) verbatim
      once the controller and its CRDs are installed
    - Exposes `namespace` for components that place resources next to Argo CD
    """

    namespace: pulumi.Output[str]
    helm_release: k8s.helm.v3.Release
    image_updater_release: k8s.helm.v3.Release
    initial_objects: k8s.yaml.v2.ConfigFile

    def __init__(
        self,
        name: str,
        initial_objects: str,
        versions: config.ComponentVersions | None = None,
        namespace: str = config.ARGOCD_NAMESPACE,
        opts: pulumi.ResourceOptions | None = None,
    ):
        if not os.path.isfile(initial_objects):
            raise FileNotFoundError(
                f"Argo CD initial objects manifest not found: {initial_objects}"
            )
        opts = opts or pulumi.ResourceOptions()
        provider = _kubernetes_provider(opts)

        super().__init__("pulumi-eks-gitops:eks_apps:ArgoCD", name, None, opts)

        versions = versions or config.ComponentVersions()
        resource_opts = pulumi.ResourceOptions(parent=self, provider=provider)
        dependencies = opts.depends_on or []

        namespace_res = k8s.core.v1.Namespace(
            f"{name}-ns",
            metadata={"name": namespace},
            opts=resource_opts.merge(pulumi.ResourceOptions(depends_on=dependencies)),
        )
        self.namespace = namespace_res.metadata.apply(lambda metadata: metadata["name"])

        self.helm_release = k8s.helm.v3.Release(
            f"{name}-release",
            name=config.ARGOCD_RELEASE_NAME,
            chart="argo-cd",
            repository_opts=k8s.helm.v3.RepositoryOptsArgs(
                repo="https://argoproj.github.io/argo-helm",
            ),
            version=versions.argocd,
            namespace=self.namespace,
            values=build_argocd_values(),
            opts=resource_opts.merge(pulumi.ResourceOptions(depends_on=[namespace_res])),
        )

        self.image_updater_release = k8s.helm.v3.Release(
            f"{name}-image-updater",
            name=config.IMAGE_UPDATER_RELEASE_NAME,
            chart="argocd-image-updater",
            repository_opts=k8s.helm.v3.RepositoryOptsArgs(
                repo="https://argoproj.github.io/argo-helm",
            ),
            version=versions.argocd_image_updater,
            namespace=self.namespace,
            values=build_image_updater_values(namespace),
            skip_await=True,
            opts=resource_opts.merge(
                pulumi.ResourceOptions(depends_on=[self.helm_release])
            ),
        )

        # Applications and projects need the CRDs from the argo-cd chart
        self.initial_objects = k8s.yaml.v2.ConfigFile(
            f"{name}-initial-objects",
            file=initial_objects,
            opts=resource_opts.merge(
                pulumi.ResourceOptions(depends_on=[self.helm_release])
            ),
        )

        pulumi.log.info(
            f"Declared Argo CD {versions.argocd} in namespace {namespace} "
            f"with initial objects from {initial_objects}",
            resource=self,
        )

        self.register_outputs(
            {
                "namespace": self.namespace,
                "helm_release": self.helm_release,
                "image_updater_release": self.image_updater_release,
            }
        )

    @classmethod
    def from_cluster(
        cls,
        cluster: EKSCluster,
        initial_objects: str,
        versions: config.ComponentVersions | None = None,
        parent: pulumi.Resource | None = None,
        extra_dependencies: list[pulumi.Resource] | None = None,
    ) -> "ArgoCD":
        """Create an ArgoCD installation from an EKSCluster instance."""
        return cls(
            name=f"{cluster.name}-argocd",
            initial_objects=initial_objects,
            versions=versions,
            opts=pulumi.ResourceOptions(
                parent=parent,
                depends_on=[
                    cluster.k8s,
                    *(extra_dependencies or []),
                ],
                providers={
                    "kubernetes": cluster.k8s_provider,
                },
            ),
        )
