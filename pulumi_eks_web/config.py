"""Configuration models and loaders for the py-go EKS stack."""

from __future__ import annotations

import ipaddress

import pulumi
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_REGION = "us-east-1"


class AppConfig(BaseModel):
    """A single web workload behind the shared load balancer."""

    name: str
    label: str
    container_name: str
    image: str
    container_port: int = Field(gt=0, lt=65536)
    service_port: int = Field(gt=0, lt=65536)
    path: str
    replicas: int = Field(default=1, ge=0)

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Ingress path must start with '/', got {value!r}")
        return value

    @property
    def backend_service_name(self) -> str:
        """Name of the ClusterIP Service the Ingress routes this app's path to."""
        return f"{self.label}-service"


def _default_apps() -> list[AppConfig]:
    return [
        AppConfig(
            name="python-app",
            label="python",
            container_name="fastapi",
            image="your-registry/python-app:latest",
            container_port=8000,
            service_port=80,
            path="/python",
        ),
        AppConfig(
            name="go-app",
            label="go",
            container_name="gorilla",
            image="your-registry/go-app:latest",
            container_port=8080,
            service_port=8080,
            path="/go",
        ),
    ]


class NodeGroupConfig(BaseModel):
    instance_type: str = "t3.small"
    desired_capacity: int = 2
    min_size: int = 1
    max_size: int = 3

    @model_validator(mode="after")
    def validate_sizes(self):
        if not (self.min_size <= self.desired_capacity <= self.max_size):
            raise ValueError(
                "Invalid node group sizing: min_size <= desired_capacity <= max_size "
                f"must hold, got {self.min_size}/{self.desired_capacity}/{self.max_size}"
            )
        return self


class NetworkConfig(BaseModel):
    # AZ suffixes appended to the region; EKS requires two
    availability_zones: list[str] = Field(default_factory=lambda: ["a", "b"])
    vpc_cidr: str = "172.27.0.0/16"
    subnet_prefix: int = 27
    interface_endpoint_services: list[str] = Field(
        default_factory=lambda: ["ec2", "eks", "ecr.api", "ecr.dkr"]
    )
    s3_bucket_name_prefix: str = "prod"
    s3_bucket_name_suffix: str = "starport-layer-bucket"

    @field_validator("vpc_cidr")
    @classmethod
    def validate_vpc_cidr(cls, value: str) -> str:
        ipaddress.IPv4Network(value, strict=True)
        return value

    @model_validator(mode="after")
    def validate_availability_zones(self):
        if len(self.availability_zones) < 2:
            raise ValueError(
                f"EKS requires at least 2 availability zones, got {self.availability_zones}"
            )
        if len(self.availability_zones) != len(set(self.availability_zones)):
            raise ValueError(
                f"Availability zones must be unique. Found duplicates in: {self.availability_zones}"
            )
        return self


class StackConfig(BaseModel):
    name: str = "gore"
    identifier: str = "100"
    region: str = DEFAULT_REGION
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    node_group: NodeGroupConfig = Field(default_factory=NodeGroupConfig)
    deploy_workloads: bool = True
    app_group: str = "py-go-app"
    apps: list[AppConfig] = Field(default_factory=_default_apps)

    @model_validator(mode="after")
    def validate_unique_apps(self):
        for attr in ("name", "label", "path", "service_port"):
            values = [getattr(app, attr) for app in self.apps]
            if len(values) != len(set(values)):
                raise ValueError(
                    f"App {attr}s must be unique. Found duplicates in: {values}"
                )
        return self

    @property
    def cluster_name(self) -> str:
        return f"{self.name}-{self.identifier}"

    @property
    def vpc_name(self) -> str:
        return self.cluster_name

    @property
    def availability_zone_names(self) -> list[str]:
        return [f"{self.region}{suffix}" for suffix in self.network.availability_zones]


def load_stack_config(
    pulumi_config: pulumi.Config, region: str | None = None
) -> StackConfig:
    """Load and validate the stack configuration.

    Keys missing from the stack file keep their model defaults.
    """
    data: dict = {"region": region or DEFAULT_REGION}
    for key in ("name", "identifier", "app_group"):
        value = pulumi_config.get(key)
        if value is not None:
            data[key] = value
    for key in ("network", "node_group", "apps"):
        value = pulumi_config.get_object(key)
        if value is not None:
            data[key] = value
    deploy_workloads = pulumi_config.get_bool("deploy_workloads")
    if deploy_workloads is not None:
        data["deploy_workloads"] = deploy_workloads
    return StackConfig.model_validate(data)
