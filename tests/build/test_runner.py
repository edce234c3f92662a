"""
Tests for build tool invocation.
"""

import json
import os
import signal
import sys
from unittest.mock import Mock, patch

import pytest

from crossbuild.build.runner import (
    BuildInvocation,
    build_command,
    child_environment,
    prepare_invocation,
    run_build,
    target_environment,
)
from crossbuild.config.parser import CrossBuildConfig
from crossbuild.core.exceptions import BuildToolNotFoundError
from crossbuild.cross.targets import parse_target_triple

TRIPLE = "aarch64-unknown-linux-gnu"


class TestBuildCommand:
    """Test build_command()."""

    def test_default(self):
        assert build_command(parse_target_triple(TRIPLE)) == [
            "cargo",
            "build",
            "--target",
            TRIPLE,
        ]

    def test_extra_args(self):
        command = build_command(
            parse_target_triple(TRIPLE), tool="cross", extra_args=["--release"]
        )

        assert command == ["cross", "build", "--target", TRIPLE, "--release"]


class TestTargetEnvironment:
    """Test target_environment()."""

    def test_no_linker(self, default_config):
        assert target_environment(default_config) == {}

    def test_linker_uses_target_suffix(self):
        config = CrossBuildConfig(
            target="armv7-unknown-linux-gnueabihf", linker="arm-linux-gnueabihf-gcc"
        )

        assert target_environment(config) == {
            "CARGO_TARGET_ARMV7_UNKNOWN_LINUX_GNUEABIHF_LINKER": "arm-linux-gnueabihf-gcc"
        }


class TestPrepareInvocation:
    """Test prepare_invocation()."""

    def test_default_config(self, default_config, fake_environ):
        """Test the default invocation for HOME=/home/user."""
        invocation = prepare_invocation(default_config, fake_environ)

        assert invocation.sysroot == "/home/user/build/root"
        assert invocation.command == ["cargo", "build", "--target", TRIPLE]
        assert invocation.env_overlay == {
            "PKG_CONFIG_DIR": "",
            "PKG_CONFIG_LIBDIR": "/home/user/build/root/usr/lib/pkgconfig:"
            "/home/user/build/root/usr/share/pkgconfig",
            "PKG_CONFIG_SYSROOT_DIR": "/home/user/build/root",
            "PKG_CONFIG_ALLOW_CROSS": "1",
            "PKG_CONFIG_PATH": "/usr/lib/pkgconfig",
        }

    @pytest.mark.parametrize("home", ["/home/user", "/root", "", "/tmp/x y"])
    def test_command_independent_of_home(self, default_config, home):
        """Test the command is the same for any home directory."""
        invocation = prepare_invocation(default_config, {"HOME": home})

        assert invocation.command == ["cargo", "build", "--target", TRIPLE]
        assert invocation.sysroot == f"{home}/build/root"

    def test_missing_home(self, default_config):
        invocation = prepare_invocation(default_config, {})

        assert invocation.env_overlay["PKG_CONFIG_SYSROOT_DIR"] == "/build/root"

    def test_extra_env_applied_last(self, fake_environ):
        config = CrossBuildConfig(env={"RUSTFLAGS": "-g", "PKG_CONFIG_PATH": ""})

        invocation = prepare_invocation(config, fake_environ)

        assert invocation.env_overlay["RUSTFLAGS"] == "-g"
        assert invocation.env_overlay["PKG_CONFIG_PATH"] == ""

    def test_linker_exported(self, fake_environ):
        config = CrossBuildConfig(linker="aarch64-linux-gnu-gcc")

        invocation = prepare_invocation(config, fake_environ)

        assert (
            invocation.env_overlay["CARGO_TARGET_AARCH64_UNKNOWN_LINUX_GNU_LINKER"]
            == "aarch64-linux-gnu-gcc"
        )

    def test_cwd_passed_through(self, default_config, fake_environ):
        invocation = prepare_invocation(default_config, fake_environ, cwd="/src")

        assert invocation.cwd == "/src"


class TestChildEnvironment:
    """Test child_environment()."""

    def test_overlay_applied_without_mutation(self, fake_environ):
        invocation = BuildInvocation(
            command=["cargo"], env_overlay={"PKG_CONFIG_DIR": "", "PATH": "/x"}
        )
        before = dict(fake_environ)

        env = child_environment(invocation, fake_environ)

        assert env["HOME"] == "/home/user"
        assert env["PKG_CONFIG_DIR"] == ""
        assert env["PATH"] == "/x"
        assert fake_environ == before


class TestRunBuild:
    """Test run_build()."""

    @patch("crossbuild.build.runner.subprocess.run")
    def test_invokes_once(self, mock_run, default_config, fake_environ):
        """Test the tool runs exactly once with the merged environment."""
        mock_run.return_value = Mock(returncode=0)
        invocation = prepare_invocation(default_config, fake_environ)

        result = run_build(invocation, fake_environ)

        assert result == 0
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        assert args[0] == ["cargo", "build", "--target", TRIPLE]
        assert kwargs["env"]["PKG_CONFIG_ALLOW_CROSS"] == "1"
        assert kwargs["env"]["HOME"] == "/home/user"
        assert "capture_output" not in kwargs
        assert "check" not in kwargs

    @pytest.mark.parametrize("code", [0, 1, 101, 255])
    @patch("crossbuild.build.runner.subprocess.run")
    def test_exit_code_propagates(self, mock_run, code, default_config, fake_environ):
        mock_run.return_value = Mock(returncode=code)
        invocation = prepare_invocation(default_config, fake_environ)

        assert run_build(invocation, fake_environ) == code

    @patch("crossbuild.build.runner.subprocess.run")
    def test_signal_reported_like_shell(self, mock_run, default_config, fake_environ):
        """Test a tool killed by signal N yields 128 + N."""
        mock_run.return_value = Mock(returncode=-signal.SIGTERM)
        invocation = prepare_invocation(default_config, fake_environ)

        assert run_build(invocation, fake_environ) == 128 + signal.SIGTERM

    @patch("crossbuild.build.runner.subprocess.run")
    def test_tool_not_found(self, mock_run, default_config, fake_environ):
        mock_run.side_effect = FileNotFoundError("cargo")
        invocation = prepare_invocation(default_config, fake_environ)

        with pytest.raises(BuildToolNotFoundError) as exc_info:
            run_build(invocation, fake_environ)

        assert exc_info.value.tool == "cargo"

    def test_real_process(self, tmp_path):
        """Test a real child sees the target argument and environment."""
        environ = dict(os.environ, HOME="/home/user")
        out = tmp_path / "seen.json"
        code = (
            "import json, os, sys; "
            f"json.dump({{'argv': sys.argv[1:], 'env': dict(os.environ)}}, open({str(out)!r}, 'w')); "
            "sys.exit(7)"
        )
        config = CrossBuildConfig(tool=sys.executable, subcommand="-c")
        invocation = prepare_invocation(config, environ)
        invocation.command.insert(2, code)

        result = run_build(invocation, environ)

        assert result == 7
        seen = json.loads(out.read_text())
        assert seen["argv"] == ["--target", TRIPLE]
        assert seen["env"]["PKG_CONFIG_SYSROOT_DIR"] == "/home/user/build/root"
        assert seen["env"]["PKG_CONFIG_DIR"] == ""

    def test_real_process_killed_by_signal(self, tmp_path):
        """Test a real child that terminates itself with SIGTERM."""
        tool = tmp_path / "cargo"
        tool.write_text("#!/bin/sh\nkill -TERM $$\n")
        tool.chmod(0o755)
        config = CrossBuildConfig(tool=str(tool))
        environ = dict(os.environ, HOME="/home/user")
        invocation = prepare_invocation(config, environ)

        assert run_build(invocation, environ) == 143

    def test_real_missing_tool(self, tmp_path, fake_environ):
        config = CrossBuildConfig(tool=str(tmp_path / "no-such-cargo"))
        invocation = prepare_invocation(config, fake_environ)

        with pytest.raises(BuildToolNotFoundError):
            run_build(invocation, fake_environ)
