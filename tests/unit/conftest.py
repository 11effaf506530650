from __future__ import annotations

import json

import pulumi
import pytest

ACCOUNT_ID = "123456789012"
REGION = "eu-central-1"

# Pulumi's wire signature for secret values
_SECRET_SIG_KEY = "4dabf18193072939515e22adb298388d"
_SECRET_SIG = "1b47061264138c4ac30d75fd1eb44270"

MINIMAL_KUBECONFIG = {
    "apiVersion": "v1",
    "clusters": [{"cluster": {"server": "https://mock.eks.local"}, "name": "mock"}],
    "contexts": [{"context": {"cluster": "mock", "user": "mock"}, "name": "mock"}],
    "current-context": "mock",
    "kind": "Config",
    "users": [{"name": "mock", "user": {"token": "fake"}}],
}


class PlatformMocks(pulumi.runtime.Mocks):
    """Records every registered resource and fills in the outputs the components read."""

    def __init__(self) -> None:
        self.resources: list[pulumi.runtime.MockResourceArgs] = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append(args)
        resource_type = args.typ
        outputs = dict(args.inputs)

        if resource_type == "eks:index:Cluster":
            outputs.update(
                {
                    "kubeconfig": MINIMAL_KUBECONFIG,
                    "kubeconfig_json": json.dumps(MINIMAL_KUBECONFIG),
                }
            )
            return "ekscluster-id", outputs

        if resource_type == "aws:iam/role:Role":
            role_name = outputs.get("name") or args.name
            outputs.setdefault("name", role_name)
            outputs.setdefault("arn", f"arn:aws:iam::{ACCOUNT_ID}:role/{role_name}")
            return f"{role_name}-id", outputs

        if resource_type == "aws:iam/policy:Policy":
            policy_name = outputs.get("name") or args.name
            outputs.setdefault("arn", f"arn:aws:iam::{ACCOUNT_ID}:policy/{policy_name}")
            return f"{policy_name}-id", outputs

        if resource_type == "pulumi:providers:kubernetes":
            return f"provider-{args.name}", outputs

        outputs.setdefault("id", f"{args.name}-id")
        return outputs["id"], outputs

    def call(self, args: pulumi.runtime.MockCallArgs):
        if args.token in {
            "aws:getCallerIdentity",
            "aws:index/getCallerIdentity:getCallerIdentity",
        }:
            return {
                "accountId": ACCOUNT_ID,
                "arn": f"arn:aws:iam::{ACCOUNT_ID}:user/mock",
                "userId": "AIDACKCEVSQ6C2EXAMPLE",
            }
        if args.token in {"aws:getRegion", "aws:index/getRegion:getRegion"}:
            return {"name": REGION, "region": REGION}
        return {}

    def of_type(self, resource_type: str) -> list[pulumi.runtime.MockResourceArgs]:
        return [r for r in self.resources if r.typ == resource_type]

    def named(self, resource_type: str, name: str) -> pulumi.runtime.MockResourceArgs:
        return next(r for r in self.of_type(resource_type) if r.name == name)


class DependencySpy:
    """Records the explicit depends_on of watched resource types, keyed by resource name."""

    def __init__(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._monkeypatch = monkeypatch
        self.dependencies: dict[str, list[pulumi.Resource]] = {}

    def watch(self, *resource_types: type) -> None:
        for resource_type in resource_types:
            original = resource_type.__init__

            def __init__(resource, resource_name, *args, _original=original, **kwargs):
                opts = kwargs.get("opts")
                self.dependencies[resource_name] = list(
                    (opts.depends_on if opts else None) or []
                )
                _original(resource, resource_name, *args, **kwargs)

            self._monkeypatch.setattr(resource_type, "__init__", __init__)

    def depends_on(self, resource_name: str) -> list[pulumi.Resource]:
        return self.dependencies[resource_name]


def get_input(args: pulumi.runtime.MockResourceArgs, camel: str, snake: str):
    """Read a resource input regardless of the casing the engine used."""
    return args.inputs.get(camel, args.inputs.get(snake))


def unwrap_secret(value):
    """Strip the engine's secret envelope from a mocked input value."""
    if isinstance(value, dict) and value.get(_SECRET_SIG_KEY) == _SECRET_SIG:
        return value["value"]
    return value


def secret_string_data(args: pulumi.runtime.MockResourceArgs) -> dict:
    """Return a Secret's stringData with the map and each of its values unwrapped."""
    payload = unwrap_secret(get_input(args, "stringData", "string_data")) or {}
    return {key: unwrap_secret(value) for key, value in payload.items()}


def parse_policy_document(policy_document: str | dict) -> dict:
    if isinstance(policy_document, dict):
        return policy_document
    return json.loads(policy_document)


@pytest.fixture
def mocks() -> PlatformMocks:
    platform_mocks = PlatformMocks()
    pulumi.runtime.set_mocks(platform_mocks, preview=False)
    return platform_mocks


@pytest.fixture
def dependency_spy(monkeypatch) -> DependencySpy:
    return DependencySpy(monkeypatch)


@pytest.fixture
def initial_objects(tmp_path) -> str:
    manifest = tmp_path / "argocd-initial-objects.yaml"
    manifest.write_text(
        "apiVersion: argoproj.io/v1alpha1\n"
        "kind: AppProject\n"
        "metadata:\n"
        "  name: platform\n"
        "  namespace: argocd\n"
        "spec:\n"
        "  sourceRepos: ['*']\n"
    )
    return str(manifest)
