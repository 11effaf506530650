"""Configuration models and loaders for the EKS GitOps platform."""

from __future__ import annotations

import pulumi
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .eks import config as eks_config
from .eks.cluster import validate_node_group_sizes
from .vpc.utils import validate_subnet_layout


class VersionsConfig(BaseModel):
    pod_identity_agent: str | None = None
    argocd: str | None = None
    argocd_image_updater: str | None = None

    def to_component_versions(self) -> eks_config.ComponentVersions:
        return eks_config.ComponentVersions.from_dict(
            self.model_dump(exclude_none=True)
        )


class ProjectConfig(BaseModel):
    """Stack configuration, keyed by the camelCase names used in Pulumi.<stack>.yaml."""

    model_config = ConfigDict(populate_by_name=True)

    min_cluster_size: int = Field(eks_config.DEFAULT_MIN_SIZE, alias="minClusterSize")
    max_cluster_size: int = Field(eks_config.DEFAULT_MAX_SIZE, alias="maxClusterSize")
    desired_cluster_size: int = Field(
        eks_config.DEFAULT_DESIRED_CAPACITY, alias="desiredClusterSize"
    )
    eks_node_instance_type: str = Field(
        eks_config.DEFAULT_INSTANCE_TYPE, alias="eksNodeInstanceType"
    )
    vpc_network_cidr: str = Field("10.0.0.0/16", alias="vpcNetworkCidr")
    public_subnet_cidrs: list[str] = Field(
        default_factory=lambda: ["10.0.0.0/20", "10.0.16.0/20"],
        alias="publicSubnetCIDRs",
    )
    availability_zones: list[str] = Field(
        default_factory=lambda: ["eu-central-1a", "eu-central-1b"],
        alias="availabilityZones",
    )
    # Principal granted cluster admin; no access entry is declared when unset
    admin_principal_arn: str | None = Field(None, alias="adminPrincipalArn")
    versions: VersionsConfig = Field(default_factory=VersionsConfig)

    @model_validator(mode="after")
    def validate_layout(self):
        validate_subnet_layout(
            self.vpc_network_cidr, self.public_subnet_cidrs, self.availability_zones
        )
        validate_node_group_sizes(
            self.min_cluster_size, self.desired_cluster_size, self.max_cluster_size
        )
        return self

    @property
    def component_versions(self) -> eks_config.ComponentVersions:
        return self.versions.to_component_versions()


def load_project_config(pulumi_config: pulumi.Config) -> ProjectConfig:
    """Load and validate project configuration.

    Unset keys fall back to the model defaults.
    """
    values = {
        "minClusterSize": pulumi_config.get_int("minClusterSize"),
        "maxClusterSize": pulumi_config.get_int("maxClusterSize"),
        "desiredClusterSize": pulumi_config.get_int("desiredClusterSize"),
        "eksNodeInstanceType": pulumi_config.get("eksNodeInstanceType"),
        "vpcNetworkCidr": pulumi_config.get("vpcNetworkCidr"),
        "publicSubnetCIDRs": pulumi_config.get_object("publicSubnetCIDRs"),
        "availabilityZones": pulumi_config.get_object("availabilityZones"),
        "adminPrincipalArn": pulumi_config.get("adminPrincipalArn"),
        "versions": pulumi_config.get_object("versions"),
    }
    return ProjectConfig(**{k: v for k, v in values.items() if v is not None})
