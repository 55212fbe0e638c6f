"""Pytest configuration and fixtures."""
import json
import subprocess

import pytest

from bumpall.classifier import UpgradePolicy, UpgradeStyle

SAMPLE_MANIFEST = {
    "name": "my_app",
    "version": "0.1.0",
    "dependencies": {
        "package": "^1.2.3",
        "@org/package": "^5.0.0",
        "p": "1.0.0",
    },
    "devDependencies": {
        "something": "^0.0.1",
        "@abc/tree": "^6.0.0",
        "blob": "1135.3.0",
    },
}


@pytest.fixture
def sample_manifest():
    return SAMPLE_MANIFEST


@pytest.fixture
def wanted_policy():
    return UpgradePolicy(UpgradeStyle.WANTED, "my_dir")


@pytest.fixture
def latest_policy():
    return UpgradePolicy(UpgradeStyle.LATEST, "my_dir")


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """An npm project directory named my_app, used as the working directory."""
    root = tmp_path / "my_app"
    root.mkdir()
    (root / "package.json").write_text(json.dumps(SAMPLE_MANIFEST, indent=2), encoding="utf-8")
    monkeypatch.chdir(root)
    return root


class FakeNpm:
    """Stands in for subprocess.run inside bumpall.npm_cmd.

    Records every command with its keyword arguments and answers ``outdated``
    with ``outdated_stdout`` and ``i`` with ``install_returncode``.
    ``on_outdated`` is called with the working directory while ``outdated``
    runs.
    """

    def __init__(self):
        self.calls = []
        self.kwargs = []
        self.outdated_stdout = ""
        self.install_returncode = 0
        self.raise_on_run = None
        self.manifest_during_outdated = None
        self.on_outdated = None

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self.raise_on_run is not None:
            raise self.raise_on_run

        if cmd[1] == "outdated":
            manifest = kwargs["cwd"] / "package.json"
            if manifest.exists():
                self.manifest_during_outdated = json.loads(manifest.read_text(encoding="utf-8"))
            if self.on_outdated is not None:
                self.on_outdated(kwargs["cwd"])
            return subprocess.CompletedProcess(cmd, 1, stdout=self.outdated_stdout, stderr="")

        return subprocess.CompletedProcess(cmd, self.install_returncode)

    @property
    def install_calls(self):
        return [c for c in self.calls if c[1] == "i"]


@pytest.fixture
def fake_npm(monkeypatch):
    npm = FakeNpm()
    monkeypatch.setattr("bumpall.npm_cmd.subprocess.run", npm)
    return npm
