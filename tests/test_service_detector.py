import pytest

from sambactl.service.detector import ServiceDetector


@pytest.mark.asyncio
async def test_binary_on_path_wins(executor):
    executor.respond(["which", "smbd"], output="/usr/sbin/smbd\n")
    executor.respond(["systemctl", "status", "smb"])

    detection = await ServiceDetector(executor).detect()

    assert detection.installed is True
    assert detection.service_name == "smbd"
    assert detection.method == "binary"
    assert executor.commands() == [["which", "smbd"]]


@pytest.mark.asyncio
async def test_service_units_in_order(executor):
    executor.respond(["systemctl", "status", "smbd"])

    detection = await ServiceDetector(executor).detect()

    assert detection.service_name == "smbd"
    assert detection.method == "service"
    assert executor.commands() == [
        ["which", "smbd"],
        ["systemctl", "status", "smb"],
        ["systemctl", "status", "smbd"],
    ]


@pytest.mark.asyncio
async def test_debian_package_record(executor):
    executor.respond(["dpkg", "-l", "samba"], output="ii  samba 4.19\n")

    detection = await ServiceDetector(executor).detect()

    assert detection.method == "package"
    assert detection.service_name == "smbd"


@pytest.mark.asyncio
async def test_process_probe_needs_output(executor):
    executor.respond(["pgrep", "-f", "smbd"], output="")
    assert (await ServiceDetector(executor).detect()).installed is False

    executor.respond(["pgrep", "-f", "smbd"], output="812\n")
    detection = await ServiceDetector(executor).detect()
    assert detection.installed is True
    assert detection.service_name == "smbd (process)"
    assert detection.method == "process"


@pytest.mark.asyncio
async def test_nothing_found(executor):
    detection = await ServiceDetector(executor).detect()

    assert detection.installed is False
    assert len(executor.calls) == 6
    assert executor.elevated() == []

