import asyncio
import sys

import click

from sambactl.errors import SambaCtlError


def run(coro):
    """Run a session coroutine, turning domain errors into a message and exit status 1."""
    try:
        return asyncio.run(coro)
    except SambaCtlError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def echo_warnings(warnings):
    for warning in warnings:
        click.echo(f"Warning: {warning}", err=True)
