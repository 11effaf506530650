"""Pulumi access token secret for workloads managed by Argo CD."""

from __future__ import annotations

from typing import ClassVar

import pulumi
import pulumi_kubernetes as k8s

from ...eks.config import ACCESS_TOKEN_SECRET_KEY, ACCESS_TOKEN_SECRET_NAME


class PulumiAccessTokenSecret(pulumi.ComponentResource):
    """Creates the Opaque secret holding the Pulumi access token.

    A missing token is stored as an empty string so the key is always present.
    """

    secret_name: pulumi.Output[str]

    _SECRET_NAME: ClassVar[str] = ACCESS_TOKEN_SECRET_NAME
    _SECRET_KEY: ClassVar[str] = ACCESS_TOKEN_SECRET_KEY

    def __init__(
        self,
        name: str,
        namespace: pulumi.Input[str],
        access_token: pulumi.Input[str] | None = None,
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__(
            "pulumi-eks-gitops:eks_apps:PulumiAccessTokenSecret", name, None, opts
        )

        if access_token is None:
            pulumi.log.warn(
                "No Pulumi access token configured; the secret will hold an empty value",
                resource=self,
            )

        self.secret = k8s.core.v1.Secret(
            f"{name}-secret",
            metadata={
                "name": PulumiAccessTokenSecret._SECRET_NAME,
                "namespace": namespace,
            },
            type="Opaque",
            string_data={
                PulumiAccessTokenSecret._SECRET_KEY: (
                    access_token if access_token is not None else ""
                ),
            },
            opts=(opts or pulumi.ResourceOptions()).merge(
                pulumi.ResourceOptions(parent=self, depends_on=depends_on)
            ),
        )

        self.secret_name = pulumi.Output.from_input(PulumiAccessTokenSecret._SECRET_NAME)

        self.register_outputs({"secret_name": self.secret_name})
