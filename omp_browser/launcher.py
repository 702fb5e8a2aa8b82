"""
Game client launching.

Finds the SA-MP/open.mp client executable and starts it against a server.
"""

import sys
import subprocess
from pathlib import Path
from typing import Optional

from .exceptions import LaunchError
from .logging_config import get_logger


REGISTRY_KEY = r"Software\SAMP"
REGISTRY_VALUE = "gta_sa_exe"
CLIENT_EXECUTABLE = "samp.exe"


def find_registry_executable() -> Optional[Path]:
    """Locate samp.exe next to the GTA:SA path stored by the SA-MP installer."""
    if sys.platform != "win32":
        return None

    import winreg

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, REGISTRY_KEY) as key:
            gta_path, _ = winreg.QueryValueEx(key, REGISTRY_VALUE)
    except OSError:
        return None

    if not isinstance(gta_path, str) or not gta_path:
        return None
    return Path(gta_path).parent / CLIENT_EXECUTABLE


class GameLauncher:
    """Starts the game client with a host and port."""

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable
        self.logger = get_logger(__name__)

    def locate(self) -> Path:
        """
        Resolve the client executable.

        The configured path wins; otherwise the Windows registry is consulted.

        Raises:
            LaunchError: if no executable can be found
        """
        if self.executable:
            path = Path(self.executable).expanduser()
        else:
            path = find_registry_executable()
            if path is None:
                raise LaunchError("Game executable not found; set 'game_executable' in the config")

        if not path.exists():
            raise LaunchError(f"Game executable does not exist: {path}")
        return path

    def launch(self, host: str, port: str):
        """Start the client detached; its exit status is never consulted."""
        path = self.locate()
        cmd = [str(path), host, port]
        self.logger.info(f"Launching {' '.join(cmd)}")

        kwargs = {}
        if sys.platform == "win32":
            kwargs["creationflags"] = subprocess.DETACHED_PROCESS
        else:
            kwargs["start_new_session"] = True

        try:
            subprocess.Popen(
                cmd,
                cwd=str(path.parent),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **kwargs
            )
        except OSError as e:
            raise LaunchError(f"Failed to start {path}: {e}") from e
