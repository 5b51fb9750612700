"""Per-user launch agent that starts the application at login."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from xml.sax.saxutils import escape

PLIST_NAME = "com.yourdomain.tystnad.plist"

_PLIST_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
  <dict>
    <key>Label</key>
    <string>com.yourdomain.tystnad</string>

    <key>ProgramArguments</key>
    <array>
      <string>{app_path}</string>
    </array>

    <key>RunAtLoad</key>
    <true/>

    <key>KeepAlive</key>
    <false/>
  </dict>
</plist>
"""


def get_executable_path() -> str:
    """Return the absolute path of the running program, or "" if unknown."""
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or not os.path.exists(argv0):
        return ""
    return os.path.realpath(argv0)


def get_home_dir() -> str:
    """Return the user's home directory, or "" if it cannot be found."""
    home = os.environ.get("HOME")
    if home is not None:
        return home
    try:
        import pwd
    except ImportError:
        return ""
    try:
        return pwd.getpwuid(os.getuid()).pw_dir
    except KeyError:
        return ""


def launch_agent_path(home_dir: str | os.PathLike[str] | None = None) -> Path:
    """Return where the launch agent file lives for `home_dir`."""
    home = os.fspath(home_dir) if home_dir is not None else get_home_dir()
    if not home:
        raise RuntimeError("Failed to get home directory")
    return Path(home) / "Library" / "LaunchAgents" / PLIST_NAME


def render_plist(app_path: str) -> str:
    """Return the launch agent property list that runs `app_path`."""
    return _PLIST_TEMPLATE.format(app_path=escape(app_path))


def write_launch_agent(app_path: str, home_dir: str | os.PathLike[str] | None = None) -> Path:
    """Write the launch agent unless one already exists; return its path."""
    plist_path = launch_agent_path(home_dir)
    if plist_path.is_file():
        return plist_path
    plist_path.parent.mkdir(parents=True, exist_ok=True)
    plist_path.write_text(render_plist(app_path), encoding="utf-8")
    return plist_path


def remove_launch_agent(home_dir: str | os.PathLike[str] | None = None) -> None:
    """Delete the launch agent file if present."""
    launch_agent_path(home_dir).unlink(missing_ok=True)