import click

from sambactl.cli.utils import run


@click.group()
def users():
    """Manage Samba access for system users."""
    pass


@users.command(name="list")
def list_users():
    """List regular system accounts and their Samba enrollment."""
    from sambactl.session import get_session
    accounts = run(get_session().list_users())
    if not accounts:
        click.echo("No regular user accounts found on this system.")
        return
    for user in accounts:
        state = "enabled" if user.samba_enabled else "disabled"
        click.echo(f"{user.username} ({user.full_name}) uid={user.uid} samba={state}")


@users.command(name="enable")
@click.argument("username")
@click.password_option(help="Samba password for the user")
def enable_user(username, password):
    """Enroll a user with Samba and set their Samba password."""
    from sambactl.session import get_session
    run(get_session().enable_user(username, password))
    click.echo(f"Samba password set for user '{username}'.")


@users.command(name="disable")
@click.argument("username")
def disable_user(username):
    """Remove a user from Samba's password database."""
    from sambactl.session import get_session
    run(get_session().disable_user(username))
    click.echo(f"Samba access disabled for user '{username}'.")
