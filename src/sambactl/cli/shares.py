import click

from sambactl.cli.utils import echo_warnings, run


@click.group()
def shares():
    """Manage Samba shares."""
    pass


def _echo_share(share):
    click.echo(f"Name: {share.name}")
    click.echo(f"  Path: {share.path}")
    click.echo(f"  Comment: {share.comment or '-'}")
    click.echo(f"  Read Only: {'yes' if share.readonly else 'no'}")
    click.echo(f"  Guest OK: {'yes' if share.guest else 'no'}")
    click.echo(f"  Browseable: {'yes' if share.browseable else 'no'}")
    if share.valid_users:
        click.echo(f"  Valid Users: {share.valid_users}")


@shares.command(name="list")
@click.option("--filter", "query", default=None, help="Only show shares whose name, path or comment contains this text.")
def list_shares(query):
    """List Samba shares."""
    from sambactl.session import get_session
    session = get_session()
    shares = run(session.list_shares(query))
    if not shares:
        click.echo("No shares found.")
        return

    for share in shares:
        _echo_share(share)
        click.echo("-" * 20)


@shares.command(name="show")
@click.argument("name")
def show_share(name):
    """Show a single share."""
    from sambactl.session import get_session
    session = get_session()
    _echo_share(run(session.get_share(name)))


def share_options(f):
    f = click.option("--users", "valid_users", default=None, help="Comma-separated users and @groups allowed to connect")(f)
    f = click.option("--browseable/--no-browseable", default=True, help="Show the share in browse lists")(f)
    f = click.option("--guest-ok", "guest", is_flag=True, help="Allow guest access")(f)
    f = click.option("--readonly", is_flag=True, help="Set read only")(f)
    f = click.option("--comment", default="", help="Share comment")(f)
    return f


@shares.command(name="create")
@click.argument("name")
@click.argument("path")
@share_options
def create_share(name, path, comment, readonly, guest, browseable, valid_users):
    """Create a Samba share."""
    from sambactl.session import get_session
    from sambactl.shares.models import Share
    session = get_session()
    share = Share(
        name=name.strip(),
        path=path.strip(),
        comment=comment.strip() or None,
        readonly=readonly,
        guest=guest,
        browseable=browseable,
        valid_users=(valid_users or "").strip() or None,
    )
    result = run(session.create_share(share))
    echo_warnings(result.warnings)
    click.echo(f"Share '{name}' created.")


@shares.command(name="update")
@click.argument("name")
@click.argument("path")
@click.option("--rename", default=None, help="New name for the share")
@share_options
def update_share(name, path, rename, comment, readonly, guest, browseable, valid_users):
    """Replace the definition of an existing Samba share."""
    from sambactl.session import get_session
    from sambactl.shares.models import Share
    session = get_session()
    share = Share(
        name=(rename or name).strip(),
        path=path.strip(),
        comment=comment.strip() or None,
        readonly=readonly,
        guest=guest,
        browseable=browseable,
        valid_users=(valid_users or "").strip() or None,
    )
    result = run(session.update_share(name, share))
    echo_warnings(result.warnings)
    click.echo(f"Share '{share.name}' updated. Backup: {result.backup_path}")


@shares.command(name="delete")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete_share(name, yes):
    """Delete a Samba share."""
    from sambactl.session import get_session
    if not yes:
        click.confirm(f"Are you sure you want to delete the share '{name}'?", abort=True)
    session = get_session()
    result = run(session.delete_share(name))
    echo_warnings(result.warnings)
    click.echo(f"Share '{name}' deleted. Backup: {result.backup_path}")
