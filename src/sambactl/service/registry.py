# Names used to find and drive the Samba daemon.

DAEMON_BINARY = "smbd"
PACKAGE_NAME = "samba"

# Service name reported when only the binary or package was found
DEFAULT_SERVICE = "smbd"

# Pseudo service name for a daemon only seen in the process table
PROCESS_MARKER = "smbd (process)"

# Units queried, in order, when reconciling the running state
CANDIDATE_UNITS = ["smb", "smbd", "samba"]

PORT_TOKEN = ":445 "
