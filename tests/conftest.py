import os
import subprocess

import pytest

from snmpsimctl import log
from snmpsimctl import process
from snmpsimctl.settings import Settings

AGENT_SCRIPT = '#!/bin/sh\nexec sleep 30\n'


class FakePopen(object):
    """Stands in for subprocess.Popen, never starts anything"""

    instances = []

    def __init__(self, args, **kwargs):
        self.args = args
        self.pid = 4242 + len(self.instances)
        self.returncode = None
        self.stdin = self.stdout = self.stderr = None
        self.killed = False
        self.instances.append(self)

    def poll(self):
        return self.returncode

    def kill(self):
        self.killed = True
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode


@pytest.fixture
def logged(monkeypatch):
    """Collect log lines, everything down to DEBUG"""
    lines = []
    monkeypatch.setattr(log, 'msg', lines.append)
    monkeypatch.setattr(log, 'logLevel', log.LOG_DEBUG)
    monkeypatch.setattr(log, 'log_success', True)
    monkeypatch.setattr(log, 'logged_failure', False)

    yield lines

    if isinstance(log.msg, log.AbstractLogger):
        log.msg.close()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        global_dependencies_dir=str(tmp_path / 'GlobalDependencies'),
        test_dependencies_dir=str(tmp_path / 'TestDependencies'),
        simulations_dir=str(tmp_path / 'Simulations'),
        ready_timeout=5.0,
        grace_period=0)


@pytest.fixture
def write_file():
    def write(path, content='', mode=None):
        directory = os.path.dirname(path)
        if not os.path.isdir(directory):
            os.makedirs(directory)

        with open(path, 'w') as fd:
            fd.write(content)

        if mode is not None:
            os.chmod(path, mode)

        return path

    return write


@pytest.fixture
def install_agent(settings, write_file):
    """Put a stand-in agent executable where the settings expect one"""
    def install(path=None):
        return write_file(path or settings.latest_device_simulator,
                          AGENT_SCRIPT, 0o755)

    return install


@pytest.fixture
def add_simulation(settings, write_file):
    def add(name, content='<Simulation/>'):
        return write_file(os.path.join(settings.simulations_dir, name), content)

    return add


@pytest.fixture
def fake_popen(monkeypatch):
    monkeypatch.setattr(FakePopen, 'instances', [])
    monkeypatch.setattr(subprocess, 'Popen', FakePopen)
    monkeypatch.setattr(
        process, 'wait_for_input_idle', lambda proc, timeout: True)
    return FakePopen.instances
