from __future__ import annotations

import pulumi
import pulumi_aws as aws

from .utils import validate_subnet_layout


class PublicVPC(pulumi.ComponentResource):
    """VPC with one public subnet per AZ, all routed through a single internet gateway."""

    vpc_id: pulumi.Output[str]
    public_subnet_ids: pulumi.Output[list[str]]
    route_table_id: pulumi.Output[str]
    internet_gateway_id: pulumi.Output[str]

    def __init__(
        self,
        name: str,
        cidr_block: str,
        subnet_cidrs: list[str],
        availability_zones: list[str],
        tags: dict[str, str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        # Fail before anything is registered
        validate_subnet_layout(cidr_block, subnet_cidrs, availability_zones)

        super().__init__("pulumi-eks-gitops:aws:PublicVPC", name, None, opts)

        tags = tags or {}

        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=cidr_block,
            enable_dns_hostnames=True,
            tags={"Name": f"{name}-vpc", **tags},
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.internet_gateway = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags={"Name": f"{name}-igw", **tags},
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.route_table = aws.ec2.RouteTable(
            f"{name}-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    gateway_id=self.internet_gateway.id,
                )
            ],
            tags={"Name": f"{name}-rt", **tags},
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.subnets: list[aws.ec2.Subnet] = []
        self.route_table_associations: list[aws.ec2.RouteTableAssociation] = []
        for i, (subnet_cidr, az) in enumerate(zip(subnet_cidrs, availability_zones)):
            subnet = aws.ec2.Subnet(
                f"{name}-public-subnet-{i}",
                vpc_id=self.vpc.id,
                cidr_block=subnet_cidr,
                availability_zone=az,
                map_public_ip_on_launch=False,
                assign_ipv6_address_on_creation=False,
                tags={"Name": f"{name}-public-subnet-{i}", **tags},
                opts=pulumi.ResourceOptions(parent=self),
            )
            self.subnets.append(subnet)

            self.route_table_associations.append(
                aws.ec2.RouteTableAssociation(
                    f"{name}-rt-association-{i}",
                    subnet_id=subnet.id,
                    route_table_id=self.route_table.id,
                    opts=pulumi.ResourceOptions(parent=self),
                )
            )

        pulumi.log.info(
            f"Declared VPC {cidr_block} with {len(self.subnets)} public subnets "
            f"in {', '.join(availability_zones)}",
            resource=self,
        )

        self.vpc_id = self.vpc.id
        self.public_subnet_ids = pulumi.Output.from_input(
            [subnet.id for subnet in self.subnets]
        )
        self.route_table_id = self.route_table.id
        self.internet_gateway_id = self.internet_gateway.id

        self.register_outputs(
            {
                "vpc_id": self.vpc_id,
                "public_subnet_ids": self.public_subnet_ids,
                "route_table_id": self.route_table_id,
                "internet_gateway_id": self.internet_gateway_id,
            }
        )
