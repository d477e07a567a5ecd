"""
Line-oriented reader and writer for share sections of smb.conf.

Parsing is lossy: only the fields carried by :class:`Share` survive, so the
store never rewrites untouched sections from parsed data. It edits the raw
text instead (see :func:`range_delete`).
"""

from typing import Callable, Dict, List, Optional

from sambactl.shares.models import Share

GLOBAL_SECTION = "global"

_TRUE_VALUES = ("yes", "true")
_FALSE_VALUES = ("no", "false")


def _is_header(line: str) -> bool:
    return line.startswith("[") and line.endswith("]")


def _apply_property(fields: Dict, line: str):
    key, value = line.split("=", 1)
    key = key.strip().lower()
    value = value.strip()

    if key == "path":
        fields["path"] = value
    elif key == "comment":
        fields["comment"] = value
    elif key in ("read only", "readonly"):
        fields["readonly"] = value.lower() in _TRUE_VALUES
    elif key in ("guest ok", "public"):
        fields["guest"] = value.lower() in _TRUE_VALUES
    elif key in ("browseable", "browsable"):
        fields["browseable"] = value.lower() not in _FALSE_VALUES
    elif key == "valid users":
        fields["valid_users"] = value


def _scan(text: str, until: Optional[Callable[[Share], bool]] = None) -> List[Share]:
    """
    Walk ``text`` once, collecting shares in file order.

    ``current`` holds the fields of the section being read. When ``until``
    returns true for a finished share the scan stops and that share is the
    last element of the result.
    """
    shares: List[Share] = []
    current: Optional[Dict] = None

    def finish() -> bool:
        share = Share(**current)
        shares.append(share)
        return until is not None and until(share)

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith(";"):
            continue

        if _is_header(line):
            if current is not None and finish():
                return shares
            name = line[1:-1]
            current = None if name.lower() == GLOBAL_SECTION else {"name": name}
        elif current is not None and "=" in line:
            _apply_property(current, line)

    if current is not None:
        finish()
    return shares


def parse(text: str) -> List[Share]:
    """Return every non-global share defined in ``text``."""
    return _scan(text)


def parse_one(text: str, name: str) -> Optional[Share]:
    """Return the first share called ``name``, or None."""
    shares = _scan(text, until=lambda share: share.name == name)
    if shares and shares[-1].name == name:
        return shares[-1]
    return None


def serialize(share: Share) -> str:
    lines = ["", f"[{share.name}]", f"    path = {share.path}"]
    if share.comment:
        lines.append(f"    comment = {share.comment}")
    lines.append(f"    read only = {'yes' if share.readonly else 'no'}")
    lines.append(f"    guest ok = {'yes' if share.guest else 'no'}")
    lines.append(f"    browseable = {'yes' if share.browseable else 'no'}")
    if share.valid_users:
        lines.append(f"    valid users = {share.valid_users}")
    return "\n".join(lines) + "\n"


def section_exists(text: str, name: str) -> bool:
    """True when some line of ``text`` is exactly the header ``[name]``."""
    header = f"[{name}]"
    return any(line.strip() == header for line in text.splitlines())


def range_delete(text: str, name: str) -> str:
    """
    Remove the ``[name]`` section and everything up to the next header.

    Every other byte of ``text`` is kept as-is, including comments,
    unknown directives and line endings. All sections with that header are
    removed.
    """
    header = f"[{name}]"
    kept = []
    deleting = False
    for line in text.splitlines(keepends=True):
        stripped = line.strip()
        if _is_header(stripped):
            deleting = stripped == header
        if not deleting:
            kept.append(line)
    return "".join(kept)


def filter_shares(shares: List[Share], query: str) -> List[Share]:
    """Case-insensitive search over share name, path and comment."""
    query = query.strip().lower()
    if not query:
        return list(shares)
    return [
        share for share in shares
        if query in share.name.lower()
        or query in share.path.lower()
        or query in (share.comment or "").lower()
    ]
