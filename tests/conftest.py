"""
Pytest configuration and shared fixtures for crossbuild tests.
"""

import pytest

from crossbuild.config.parser import CrossBuildConfig


@pytest.fixture
def fake_environ():
    """Minimal process environment with a known home directory."""
    return {"HOME": "/home/user", "PATH": "/usr/bin:/bin"}


@pytest.fixture
def default_config():
    """Configuration equivalent to the hand-written aarch64 build script."""
    return CrossBuildConfig()


@pytest.fixture
def project_dir(tmp_path):
    """Empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def sysroot_home(tmp_path):
    """Home directory containing a populated build/root sysroot."""
    home = tmp_path / "home"
    for subdir in ("usr/lib/pkgconfig", "usr/share/pkgconfig"):
        (home / "build" / "root" / subdir).mkdir(parents=True)
    return home
