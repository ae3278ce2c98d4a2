#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Spawned agent process handle
#
import subprocess
import sys

from snmpsimctl import log
from snmpsimctl.error import AlreadyExited

RUNNING = 'running'
KILLED = 'killed'
CLOSED = 'closed'

# how long close() waits for a killed process to be reaped
REAP_TIMEOUT = 5.0


# WaitForInputIdle() results
WAIT_OBJECT_0 = 0
WAIT_FAILED = 0xFFFFFFFF


def input_idle_reached(process, result):
    """Tell whether a WaitForInputIdle() result means the process is ready"""
    if result == WAIT_FAILED:
        # console applications have no message queue to wait on
        return process.poll() is None

    return result == WAIT_OBJECT_0


if sys.platform[:3] == 'win':
    import ctypes
    from ctypes import wintypes

    WaitForInputIdle = ctypes.windll.user32.WaitForInputIdle
    WaitForInputIdle.argtypes = (wintypes.HANDLE, wintypes.DWORD)
    WaitForInputIdle.restype = wintypes.DWORD

    def wait_for_input_idle(process, timeout):
        """Block until the process waits for user input with no input pending"""
        result = WaitForInputIdle(int(process._handle), int(timeout * 1000))

        return input_idle_reached(process, result)

else:
    def wait_for_input_idle(process, timeout):
        """No input queue to wait on, settle for the process being alive"""
        return process.poll() is None


class AgentProcess(object):
    """Owns a spawned agent process.

    The handle moves from `running` to `killed` to `closed`, each
    step taken at most once. `release()` jumps straight to `closed`
    leaving the process running. Use as a context manager to have the
    process stopped on exit.
    """

    def __init__(self, process, command_line=None):
        self._process = process
        self._command_line = command_line
        self._state = RUNNING

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.stop()

    def __str__(self):
        return 'agent process %s (%s)' % (self.pid, self._state)

    @property
    def state(self):
        return self._state

    @property
    def pid(self):
        if self._process is not None:
            return self._process.pid

    @property
    def command_line(self):
        return self._command_line

    @property
    def returncode(self):
        if self._process is not None:
            return self._process.returncode

    def wait_for_input_idle(self, timeout):
        if self._process is None or self._state != RUNNING:
            return False

        return wait_for_input_idle(self._process, timeout)

    def stop(self):
        """Kill the process and free its resources"""
        self.kill()
        self.close()

    def _terminate(self):
        if self._process.poll() is not None:
            raise AlreadyExited(
                'process %s has exited with status '
                '%s' % (self._process.pid, self._process.returncode))

        try:
            self._process.kill()

        except ProcessLookupError:
            raise AlreadyExited('process %s has exited' % self._process.pid)

    def kill(self):
        if self._state != RUNNING:
            return

        if self._process is not None:
            try:
                self._terminate()

            except AlreadyExited as exc:
                log.debug(str(exc))

            else:
                log.debug('Killed %s' % self)

        self._state = KILLED

    def close(self):
        if self._state == CLOSED:
            return

        killed = self._state == KILLED

        self._state = CLOSED

        if self._process is None:
            return

        if killed and self._process.returncode is None:
            try:
                self._process.wait(REAP_TIMEOUT)

            except subprocess.TimeoutExpired:
                log.info('Process %s did not exit within %s seconds' % (
                    self._process.pid, REAP_TIMEOUT))

        for stream in (self._process.stdin, self._process.stdout,
                       self._process.stderr):
            if stream is not None:
                stream.close()

    def release(self):
        """Forget about the process without stopping it"""
        if self._state == CLOSED:
            return

        log.debug('Releasing %s' % self)

        self._state = CLOSED
        self._process = None

    def has_exited(self):
        if self._process is None or self._state == CLOSED:
            return True

        try:
            return self._process.poll() is not None

        except OSError:
            return True
