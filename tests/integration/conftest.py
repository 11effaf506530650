from __future__ import annotations

import os
import uuid
from pathlib import Path

import boto3
import pulumi.automation as auto
import pulumi_aws as aws
import pytest
from testcontainers.localstack import LocalStackContainer

AWS_REGION = "eu-central-1"
AWS_ACCESS_KEY_ID = "test"
AWS_SECRET_ACCESS_KEY = "test"
PULUMI_PROJECT_NAME = "pulumi-eks-gitops-integration-tests"


@pytest.fixture(scope="session")
def localstack_container() -> LocalStackContainer:
    with LocalStackContainer("localstack/localstack:latest").with_services(
        "ec2", "sts"
    ) as localstack:
        yield localstack


@pytest.fixture(scope="session")
def localstack_endpoint(localstack_container: LocalStackContainer) -> str:
    return localstack_container.get_url()


@pytest.fixture(scope="session")
def ec2_client(localstack_endpoint: str):
    return boto3.client(
        "ec2",
        endpoint_url=localstack_endpoint,
        region_name=AWS_REGION,
        aws_access_key_id=AWS_ACCESS_KEY_ID,
        aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
    )


@pytest.fixture(scope="session", autouse=True)
def localstack_env(localstack_endpoint: str):
    with pytest.MonkeyPatch.context() as mp:
        mp.setenv("AWS_ACCESS_KEY_ID", AWS_ACCESS_KEY_ID)
        mp.setenv("AWS_SECRET_ACCESS_KEY", AWS_SECRET_ACCESS_KEY)
        mp.setenv("AWS_REGION", AWS_REGION)
        mp.setenv("AWS_DEFAULT_REGION", AWS_REGION)
        mp.setenv("AWS_ENDPOINT_URL", localstack_endpoint)
        mp.setenv("PULUMI_CONFIG_PASSPHRASE", "localstack")
        mp.setenv("PULUMI_SKIP_UPDATE_CHECK", "true")
        yield


@pytest.fixture
def create_stack(tmp_path: Path):
    """Yield a factory for stacks on a throwaway file backend; each is destroyed after the test."""
    pulumi_home = tmp_path / "pulumi-home"
    pulumi_home.mkdir()
    env_vars = {
        **os.environ,
        "PULUMI_BACKEND_URL": f"file://{tmp_path}",
        "PULUMI_HOME": str(pulumi_home),
    }
    stacks: list[auto.Stack] = []

    def _create(program, config: dict[str, str]) -> auto.Stack:
        stack = auto.create_or_select_stack(
            stack_name=f"test-{uuid.uuid4().hex[:8]}",
            project_name=PULUMI_PROJECT_NAME,
            program=program,
            opts=auto.LocalWorkspaceOptions(env_vars=env_vars),
        )
        stack.set_all_config(
            {
                key: auto.ConfigValue(value=value)
                for key, value in {"aws:region": AWS_REGION, **config}.items()
            }
        )
        stacks.append(stack)
        return stack

    yield _create

    for stack in stacks:
        stack.destroy(on_output=None)
        stack.workspace.remove_stack(stack.name)


def localstack_provider() -> aws.Provider:
    """AWS provider for programs run against the LocalStack container."""
    return aws.Provider(
        "localstack",
        region=AWS_REGION,
        access_key=AWS_ACCESS_KEY_ID,
        secret_key=AWS_SECRET_ACCESS_KEY,
        skip_credentials_validation=True,
        skip_metadata_api_check=True,
        skip_requesting_account_id=True,
    )
