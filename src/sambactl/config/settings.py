import os


class Config:
    smb_conf_path = os.getenv("SAMBACTL_SMB_CONF", "/etc/samba/smb.conf")

    # Service unit names tried for reload/start/restart, in order
    primary_service = os.getenv("SAMBACTL_PRIMARY_SERVICE", "smb")
    secondary_service = os.getenv("SAMBACTL_SECONDARY_SERVICE", "smbd")

    # Seconds to let the daemon settle before polling status again
    start_settle_seconds = float(os.getenv("SAMBACTL_START_SETTLE_SECONDS", "2"))
    stop_settle_seconds = float(os.getenv("SAMBACTL_STOP_SETTLE_SECONDS", "1"))

    elevate_command = os.getenv("SAMBACTL_ELEVATE_COMMAND", "sudo -n")

    # Remote execution. Local subprocesses are used when no host is set.
    ssh_host = os.getenv("SAMBACTL_SSH_HOST", "")
    ssh_port = int(os.getenv("SAMBACTL_SSH_PORT", "22"))
    ssh_user = os.getenv("SAMBACTL_SSH_USER", "root")
    ssh_key_path = os.getenv("SAMBACTL_SSH_KEY_PATH") or None

config = Config()
