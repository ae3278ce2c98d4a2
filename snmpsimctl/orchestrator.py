#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Start SNMP agent simulator processes
#
import os
import subprocess
import sys
import time

from snmpsimctl import log
from snmpsimctl import probe
from snmpsimctl import process
from snmpsimctl.catalog import Catalog
from snmpsimctl.error import NotFound
from snmpsimctl.error import SnmpsimctlError
from snmpsimctl.error import SpawnFailure


class Orchestrator(object):
    """Spawn the agent executable for a set of simulation files.

    The agent is started with the simulation file names it should run,
    each of them validated against the catalog first. The caller gets
    an :class:`~snmpsimctl.process.AgentProcess` back and is in charge
    of stopping it.
    """

    def __init__(self, settings, catalog=None):
        self._settings = settings
        self._catalog = catalog or Catalog(settings)

    @property
    def catalog(self):
        return self._catalog

    def resolve_latest(self):
        """Pick the default executable, device simulator first"""
        for path in (self._settings.latest_device_simulator,
                     self._settings.latest_agent):
            if os.path.isfile(path):
                return path

        raise NotFound(
            'Neither DeviceSimulator or Agent executable file could be '
            'found. ("%s" or "%s")' % (self._settings.latest_device_simulator,
                                       self._settings.latest_agent))

    def select_simulations(self, simulation_file_names):
        """Keep the simulation files the agent can be started with"""
        selected = []

        for simulation_file_name in simulation_file_names:
            if self._catalog.is_simulation_available(simulation_file_name):
                selected.append(simulation_file_name)

            else:
                log.info('Skipping unavailable simulation '
                         '\'%s\'.' % simulation_file_name)

        return selected

    def build_arguments(self, simulation_file_names, enable_logging=False,
                        validate=True):
        if validate:
            simulation_file_names = self.select_simulations(
                simulation_file_names)

        arguments = ['"%s" ' % x for x in simulation_file_names]

        if not enable_logging:
            arguments.append(self._settings.no_log_flag)

        return ''.join(arguments)

    def start_simulations(self, simulation_file_names, enable_logging=False,
                          agent_version=None):
        """Start the agent running the given simulation files.

        Without `agent_version` the latest device simulator (or agent)
        is used, otherwise the executable of that version. Returns
        `None` if the agent could not be found or started.
        """
        try:
            if agent_version is None:
                executable = self.resolve_latest()

            else:
                executable = self._catalog.check_agent_version(agent_version)

        except SnmpsimctlError as exc:
            log.info(str(exc))
            return

        simulation_file_names = self.select_simulations(simulation_file_names)

        arguments = self.build_arguments(
            simulation_file_names, enable_logging, validate=False)

        if sys.platform[:3] == 'win':
            command = '"%s" %s' % (executable, arguments)

        else:
            command = [executable] + simulation_file_names
            if not enable_logging:
                command.append(self._settings.no_log_flag)

        try:
            agent = self._spawn(executable, arguments, command)

        except Exception as exc:
            log.info('Failed to start simulator process: %s' % exc)
            return

        if agent is None:
            return

        self._wait_ready(agent, simulation_file_names)

        return agent

    def _spawn(self, executable, arguments, command):
        log.info('Starting %s %s' % (executable, arguments))

        try:
            proc = subprocess.Popen(command)

        except (OSError, ValueError) as exc:
            raise SpawnFailure(exc)

        if proc is None:
            return

        return process.AgentProcess(
            proc, command_line='"%s" %s' % (executable, arguments))

    def _wait_ready(self, agent, simulation_file_names):
        deadline = time.time() + self._settings.ready_timeout

        if not agent.wait_for_input_idle(self._settings.ready_timeout):
            log.info('Simulator process did not become idle, exit '
                     'status %s' % agent.returncode)

        if self._settings.probe_agents:
            endpoints = []

            for simulation_file_name in simulation_file_names:
                info = self._catalog.get_simulation_info(simulation_file_name)
                if info is not None:
                    endpoints.extend(info.endpoints())

            probe.wait_until_responsive(
                endpoints, deadline,
                community=self._settings.probe_community,
                timeout=self._settings.probe_timeout)

        # the agent does not shut down cleanly when stopped right away
        time.sleep(self._settings.grace_period)
