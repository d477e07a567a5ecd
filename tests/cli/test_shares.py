from unittest.mock import patch

import pytest
from click.testing import CliRunner

from sambactl.cli import main
from sambactl.session import ManagementSession
from sambactl.shares.parser import parse_one

from conftest import CONF_PATH, FakeExecutor

CONF = "[global]\n    workgroup = WORKGROUP\n\n[docs]\n    path = /srv/docs\n    comment = Documents\n"


@pytest.fixture
def executor():
    executor = FakeExecutor({CONF_PATH: CONF})
    executor.respond(["which", "smbd"], output="/usr/sbin/smbd\n")
    executor.respond(["testparm", "-s"])
    executor.respond(["systemctl", "reload", "smb"])
    executor.respond(["getent", "passwd", "alice"], output="alice:x:1000:1000::/home/alice:/bin/bash\n")
    return executor


@pytest.fixture
def session(executor):
    session = ManagementSession(executor, conf_path=CONF_PATH)
    with patch("sambactl.session.get_session", return_value=session):
        yield session


def test_shares_help():
    runner = CliRunner()
    result = runner.invoke(main, ['shares', '--help'])
    assert result.exit_code == 0
    assert "Manage Samba shares." in result.output


def test_list_shares(session):
    result = CliRunner().invoke(main, ['shares', 'list'])
    assert result.exit_code == 0
    assert "Name: docs" in result.output
    assert "Path: /srv/docs" in result.output
    assert "Comment: Documents" in result.output


def test_list_shares_filter_without_match(session):
    result = CliRunner().invoke(main, ['shares', 'list', '--filter', 'movies'])
    assert result.exit_code == 0
    assert "No shares found." in result.output


def test_show_missing_share(session):
    result = CliRunner().invoke(main, ['shares', 'show', 'nope'])
    assert result.exit_code == 1
    assert 'Share "nope" not found' in result.output


def test_create_share(session, executor):
    result = CliRunner().invoke(main, [
        'shares', 'create', 'media', '/srv/media',
        '--comment', 'Films', '--readonly', '--users', 'alice',
    ])
    assert result.exit_code == 0, result.output
    assert "Share 'media' created." in result.output
    share = parse_one(executor.files[CONF_PATH], "media")
    assert share.readonly is True
    assert share.comment == "Films"
    assert share.valid_users == "alice"


def test_create_rejects_bad_name(session, executor):
    result = CliRunner().invoke(main, ['shares', 'create', 'my share', '/srv/x'])
    assert result.exit_code == 1
    assert "letters, numbers, hyphens, and underscores" in result.output
    assert executor.files[CONF_PATH] == CONF


def test_create_unknown_user(session):
    result = CliRunner().invoke(main, ['shares', 'create', 'media', '/srv/media', '--users', 'mallory'])
    assert result.exit_code == 1
    assert "Users not found: mallory" in result.output


def test_update_with_rename(session, executor):
    result = CliRunner().invoke(main, ['shares', 'update', 'docs', '/srv/docs', '--rename', 'papers'])
    assert result.exit_code == 0, result.output
    assert "Share 'papers' updated." in result.output
    assert parse_one(executor.files[CONF_PATH], "docs") is None


def test_delete_asks_for_confirmation(session, executor):
    result = CliRunner().invoke(main, ['shares', 'delete', 'docs'], input="n\n")
    assert result.exit_code == 1
    assert executor.files[CONF_PATH] == CONF

    result = CliRunner().invoke(main, ['shares', 'delete', 'docs', '--yes'])
    assert result.exit_code == 0
    assert "Share 'docs' deleted." in result.output
    assert parse_one(executor.files[CONF_PATH], "docs") is None


def test_apply_from_yaml(session, executor, tmp_path):
    config_file = tmp_path / "shares.yaml"
    config_file.write_text("shares:\n  - name: media\n    path: /srv/media\n    guest: true\n")

    result = CliRunner().invoke(main, ['apply', '--config', str(config_file)])

    assert result.exit_code == 0, result.output
    assert "Share 'media' created." in result.output
    assert parse_one(executor.files[CONF_PATH], "media").guest is True


def test_list_shares_requires_installation(session, executor):
    del executor.responses[("which", "smbd")]
    result = CliRunner().invoke(main, ['shares', 'list'])
    assert result.exit_code == 1
    assert "Samba is not installed" in result.output
    assert ["cat", CONF_PATH] not in executor.commands()


def test_create_requires_installation(session, executor):
    del executor.responses[("which", "smbd")]
    result = CliRunner().invoke(main, ['shares', 'create', 'media', '/srv/media'])
    assert result.exit_code == 1
    assert "Samba is not installed" in result.output
    assert executor.files[CONF_PATH] == CONF


def test_status_overview(session, executor):
    executor.respond(["systemctl", "show", "-p", "LoadState", "-p", "ActiveState", "smbd"],
                     output="LoadState=loaded\nActiveState=active\n")
    executor.respond(["getent", "passwd"], output="alice:x:1000:1000:Alice:/home/alice:/bin/bash\n")
    executor.respond(["pdbedit", "-L"], output="alice:1000:Alice\n")

    result = CliRunner().invoke(main, ['status'])

    assert result.exit_code == 0, result.output
    assert "Samba: installed (service: smbd, found by: binary)" in result.output
    assert "Service: active" in result.output
    assert "Shares (1):" in result.output
    assert "  docs -> /srv/docs" in result.output
    assert "Users: 1 regular, 1 with Samba access" in result.output


def test_status_overview_not_installed(session, executor):
    del executor.responses[("which", "smbd")]
    result = CliRunner().invoke(main, ['status'])
    assert result.exit_code == 0
    assert "Samba is not installed." in result.output
    assert ["cat", CONF_PATH] not in executor.commands()


def test_apply_rejects_list_document(session, executor, tmp_path):
    config_file = tmp_path / "shares.yaml"
    config_file.write_text("- name: media\n  path: /srv/media\n")

    result = CliRunner().invoke(main, ['apply', '--config', str(config_file)])

    assert result.exit_code == 1
    assert "Configuration must be a mapping" in result.output
    assert executor.files[CONF_PATH] == CONF
