import logging
import os

import click
import yaml

from sambactl import __version__
from sambactl.cli.service import service
from sambactl.cli.shares import shares
from sambactl.cli.users import users
from sambactl.cli.utils import run


@click.group()
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log what is being run.")
@click.pass_context
def main(ctx, verbose):
    """Samba share and service management"""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

main.add_command(shares)
main.add_command(service)
main.add_command(users)


@main.command()
def status():
    """Show installation, service state, shares and users at a glance."""
    from sambactl.session import get_session
    snapshot = run(get_session().load())
    detection = snapshot.detection
    if not detection.installed:
        click.echo("Samba is not installed. Install the samba package to manage shares.")
        return

    click.echo(f"Samba: installed (service: {detection.service_name}, found by: {detection.method})")
    click.echo(f"Service: {snapshot.status.state.value}")
    click.echo(f"Shares ({len(snapshot.shares)}):")
    for share in snapshot.shares:
        click.echo(f"  {share.name} -> {share.path}")
    enabled = sum(1 for user in snapshot.users if user.samba_enabled)
    click.echo(f"Users: {len(snapshot.users)} regular, {enabled} with Samba access")


@main.command()
@click.option("--config", help="Path to the configuration file.")
def apply(config):
    """Apply the share definitions from a file."""
    if config:
        config_path = config
    elif os.path.exists("sambactl.yaml"):
        config_path = "sambactl.yaml"
    elif os.path.exists(os.path.expanduser("~/.config/sambactl/config.yaml")):
        config_path = os.path.expanduser("~/.config/sambactl/config.yaml")
    elif os.path.exists("/etc/sambactl/config.yaml"):
        config_path = "/etc/sambactl/config.yaml"
    else:
        raise click.FileError("sambactl.yaml", hint="Configuration file not found.")

    with open(config_path, "r") as f:
        full_config = yaml.safe_load(f) or {}

    from sambactl.session import get_session
    for message in run(get_session().apply(full_config)):
        click.echo(message)


@main.command()
@click.option('--host', default='127.0.0.1', help='The host to bind to.')
@click.option('--port', default=8000, help='The port to bind to.')
def server(host, port):
    """Run the HTTP API server."""
    import uvicorn

    from sambactl.api.server import app
    uvicorn.run(app, host=host, port=port)
