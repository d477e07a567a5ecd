import click

from sambactl.cli.utils import run


@click.group()
def service():
    """Inspect and control the Samba service."""
    pass


@service.command(name="detect")
def detect_service():
    """Check if Samba is installed."""
    from sambactl.session import get_session
    detection = run(get_session().detect(require=True))
    click.echo(f"Samba is installed (service: {detection.service_name}, found by: {detection.method}).")


@service.command(name="status")
def service_status():
    """Show whether the Samba service is running."""
    from sambactl.session import get_session

    async def _status(session):
        await session.detect()
        return await session.refresh_status()

    status = run(_status(get_session()))
    click.echo(f"Samba ({status.service_name or 'smb/smbd'}): {status.state.value}")


def _make_action_command(action):
    def command():
        from sambactl.service.models import ServiceAction
        from sambactl.session import get_session

        async def _act(session):
            await session.detect()
            return await session.service_action(ServiceAction(action))

        status = run(_act(get_session()))
        click.echo(f"Samba service {action} done. State: {status.state.value}")

    command.__doc__ = f"{action.capitalize()} the Samba service."
    return command


for _action in ("start", "stop", "restart", "reload"):
    service.command(name=_action)(_make_action_command(_action))
