#!/usr/bin/env python3
"""
CloudFormation stack CLI commands.
"""

import json
import logging
import sys
from dataclasses import replace
from typing import Any, Dict, Tuple

import click

from .client import Credential
from .config import load_config
from .exceptions import ServiceError
from .mapper import decode_exceptions
from .stack_manager import StackManager


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _fail(e: Exception) -> None:
    if isinstance(e, ServiceError):
        click.echo(json.dumps(decode_exceptions(e)[0], default=str), err=True)
    else:
        click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _parse_parameters(values: Tuple[str, ...]) -> Dict[str, str]:
    parameters = {}
    for value in values:
        key, sep, param_value = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {value!r}", param_hint="--parameter"
            )
        parameters[key] = param_value
    return parameters


def _stack_params(
    stack_name: str,
    template_file: Any,
    parameter: Tuple[str, ...],
    capability: Tuple[str, ...],
) -> Dict[str, Any]:
    params: Dict[str, Any] = {"stack-name": stack_name}
    if template_file is not None:
        params["template-body"] = template_file.read()
    if parameter:
        params["parameters"] = _parse_parameters(parameter)
    if capability:
        params["capabilities"] = list(capability)
    return params


@click.group()
@click.version_option(package_name="aws-cf")
@click.option("--region", help="AWS region")
@click.option("--profile", help="AWS profile to use")
@click.option("--endpoint-url", help="Override the CloudFormation endpoint")
@click.option("--access-key", envvar="AWS_CF_ACCESS_KEY", help="AWS access key ID")
@click.option("--secret-key", envvar="AWS_CF_SECRET_KEY", help="AWS secret access key")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, region, profile, endpoint_url, access_key, secret_key, verbose) -> None:
    """CloudFormation stack management commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    overrides = {
        "region": region,
        "profile": profile,
        "endpoint_url": endpoint_url,
    }
    try:
        config = replace(load_config(), **{k: v for k, v in overrides.items() if v})
        ctx.obj = {
            "manager": StackManager(config=config),
            "cred": Credential(access_key=access_key, secret_key=secret_key),
        }
    except Exception as e:
        _fail(e)


@main.command()
@click.option("--stack-name", "-s", help="CloudFormation stack name (optional)")
@click.pass_obj
def describe(obj, stack_name) -> None:
    """Describe one stack or all stacks."""
    try:
        _echo_json(obj["manager"].describe_stacks(obj["cred"], stack_name))
    except Exception as e:
        _fail(e)


@main.command()
@click.option("--stack-name", "-s", required=True, help="CloudFormation stack name")
@click.pass_obj
def template(obj, stack_name) -> None:
    """Print the template body of a stack."""
    try:
        click.echo(obj["manager"].get_template(obj["cred"], stack_name))
    except Exception as e:
        _fail(e)


@main.command("estimate-cost")
@click.option(
    "--template-file", "-t", required=True, type=click.File("r"), help="Template file"
)
@click.pass_obj
def estimate_cost(obj, template_file) -> None:
    """Print a URL estimating the template's monthly cost."""
    try:
        click.echo(obj["manager"].estimate_cost_url(obj["cred"], template_file.read()))
    except Exception as e:
        _fail(e)


@main.command()
@click.option("--stack-name", "-s", required=True, help="CloudFormation stack name")
@click.option(
    "--template-file", "-t", required=True, type=click.File("r"), help="Template file"
)
@click.option("--parameter", "-p", multiple=True, help="Stack parameter as KEY=VALUE")
@click.option("--capability", multiple=True, help="Capability such as CAPABILITY_IAM")
@click.pass_obj
def create(obj, stack_name, template_file, parameter, capability) -> None:
    """Create a stack and print its ID."""
    params = _stack_params(stack_name, template_file, parameter, capability)
    try:
        click.echo(obj["manager"].create_stack(obj["cred"], params))
    except Exception as e:
        _fail(e)


@main.command()
@click.option("--stack-name", "-s", required=True, help="CloudFormation stack name")
@click.option("--template-file", "-t", type=click.File("r"), help="Template file")
@click.option("--parameter", "-p", multiple=True, help="Stack parameter as KEY=VALUE")
@click.option("--capability", multiple=True, help="Capability such as CAPABILITY_IAM")
@click.pass_obj
def update(obj, stack_name, template_file, parameter, capability) -> None:
    """Update a stack and print its ID."""
    params = _stack_params(stack_name, template_file, parameter, capability)
    if template_file is None:
        params["use-previous-template"] = True
    try:
        click.echo(obj["manager"].update_stack(obj["cred"], params))
    except Exception as e:
        _fail(e)


@main.command()
@click.option("--stack-name", "-s", required=True, help="CloudFormation stack name")
@click.pass_obj
def delete(obj, stack_name) -> None:
    """Delete a stack."""
    try:
        obj["manager"].delete_stack(obj["cred"], stack_name)
        click.echo(f"Deletion of stack {stack_name} requested")
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    main()
