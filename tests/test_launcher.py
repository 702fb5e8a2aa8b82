"""Tests for launching the game client."""

import subprocess
import sys
from unittest.mock import patch

import pytest

from omp_browser.exceptions import LaunchError
from omp_browser.launcher import GameLauncher, find_registry_executable


class TestGameLauncher:
    """Test executable lookup and process start."""

    def test_launch_configured_executable(self, tmp_path):
        exe = tmp_path / "samp.exe"
        exe.write_text("")
        launcher = GameLauncher(str(exe))

        with patch("omp_browser.launcher.subprocess.Popen") as popen:
            launcher.launch("1.1.1.1", "7777")

        popen.assert_called_once()
        args, kwargs = popen.call_args
        assert args[0] == [str(exe), "1.1.1.1", "7777"]
        assert kwargs["cwd"] == str(tmp_path)
        assert kwargs["stdout"] is subprocess.DEVNULL

    def test_configured_executable_missing(self, tmp_path):
        launcher = GameLauncher(str(tmp_path / "missing.exe"))
        with patch("omp_browser.launcher.subprocess.Popen") as popen:
            with pytest.raises(LaunchError, match="does not exist"):
                launcher.launch("1.1.1.1", "7777")
        popen.assert_not_called()

    def test_no_executable_found(self):
        launcher = GameLauncher()
        with patch("omp_browser.launcher.find_registry_executable", return_value=None):
            with pytest.raises(LaunchError, match="game_executable"):
                launcher.locate()

    def test_registry_executable_used(self, tmp_path):
        exe = tmp_path / "samp.exe"
        exe.write_text("")
        launcher = GameLauncher()
        with patch("omp_browser.launcher.find_registry_executable", return_value=exe):
            assert launcher.locate() == exe

    def test_popen_failure(self, tmp_path):
        exe = tmp_path / "samp.exe"
        exe.write_text("")
        launcher = GameLauncher(str(exe))

        with patch("omp_browser.launcher.subprocess.Popen", side_effect=PermissionError("denied")):
            with pytest.raises(LaunchError, match="denied"):
                launcher.launch("1.1.1.1", "7777")

    @pytest.mark.skipif(sys.platform == "win32", reason="registry lookup is Windows only")
    def test_registry_lookup_off_windows(self):
        assert find_registry_executable() is None
