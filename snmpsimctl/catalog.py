#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Installed agent versions and simulation files discovery
#
import os
import shutil

from snmpsimctl import log
from snmpsimctl import simulation
from snmpsimctl.error import InvalidName
from snmpsimctl.error import NotFound
from snmpsimctl.error import SnmpsimctlError

SEPARATORS = ('/', '\\')


def check_plain_name(name, what):
    for sep in SEPARATORS:
        if sep in name:
            raise InvalidName(
                '%s \'%s\' should not contain slashes.' % (what, name))


class Catalog(object):
    """Find agent executables and simulation files on disk.

    Lookups never raise on expected conditions: a missing directory, a
    missing file or a malformed name end up logged and reported as an
    empty sequence, `False` or `None`.
    """

    def __init__(self, settings):
        self._settings = settings

    def __str__(self):
        return '%s (agents %s, simulations %s)' % (
            self.__class__.__name__, self._settings.agents_dir,
            self._settings.simulations_dir)

    def _device_simulator_path(self, agent_version):
        return os.path.join(self._settings.agents_dir, agent_version,
                            self._settings.device_simulator_file)

    def _agent_path(self, agent_version):
        return os.path.join(self._settings.agents_dir, agent_version,
                            self._settings.agent_file)

    def get_agent_path(self, agent_version):
        """Executable for the version, device simulator preferred"""
        path = self._device_simulator_path(agent_version)

        if not os.path.isfile(path):
            path = self._agent_path(agent_version)

        return path

    def list_agent_versions(self):
        agents_dir = self._settings.agents_dir

        if not os.path.isdir(agents_dir):
            log.debug('SNMP Agents folder (%s) does not exist yet in the '
                      'global dependencies.' % agents_dir)
            return

        for entry in sorted(os.listdir(agents_dir)):
            if not os.path.isdir(os.path.join(agents_dir, entry)):
                continue

            if (os.path.isfile(self._agent_path(entry)) or
                    os.path.isfile(self._device_simulator_path(entry))):
                yield entry

    def check_agent_version(self, agent_version):
        check_plain_name(agent_version, 'Agent version')

        path = self.get_agent_path(agent_version)

        if not os.path.isfile(path):
            raise NotFound(
                'Neither DeviceSimulator or Agent executable file could be '
                'found. ("%s" or "%s")' % (
                    self._agent_path(agent_version),
                    self._device_simulator_path(agent_version)))

        return path

    def is_agent_version_available(self, agent_version):
        try:
            path = self.check_agent_version(agent_version)

        except SnmpsimctlError as exc:
            log.info(str(exc))
            return False

        log.debug('Found simulator \'%s\'.' % path)

        return True

    def list_available_simulations(self):
        simulations_dir = self._settings.simulations_dir

        if not os.path.isdir(simulations_dir):
            log.debug('SNMP Simulations folder (%s) does not '
                      'exist.' % simulations_dir)
            return

        for entry in sorted(os.listdir(simulations_dir)):
            if not self._has_simulation_ext(entry):
                continue

            if os.path.isfile(os.path.join(simulations_dir, entry)):
                yield entry

    def _has_simulation_ext(self, name):
        return name.lower().endswith(self._settings.simulation_ext.lower())

    def check_simulation_name(self, simulation_file_name):
        check_plain_name(simulation_file_name, 'Simulation file name')

        if not self._has_simulation_ext(simulation_file_name):
            raise InvalidName(
                'Simulation file name \'%s\' should end with '
                '\'%s\'.' % (simulation_file_name,
                             self._settings.simulation_ext))

    def is_simulation_available(self, simulation_file_name):
        try:
            self.check_simulation_name(simulation_file_name)

        except SnmpsimctlError as exc:
            log.info(str(exc))
            return False

        return os.path.isfile(
            os.path.join(self._settings.simulations_dir,
                         simulation_file_name))

    def get_simulation_info(self, simulation_file_name):
        """Parse a simulation file, return `None` if unusable"""
        try:
            self.check_simulation_name(simulation_file_name)

        except SnmpsimctlError as exc:
            log.info(str(exc))
            return

        try:
            info = simulation.parse(
                self._settings.simulations_dir, simulation_file_name)

        except SnmpsimctlError as exc:
            log.info('Failed to parse the simulation file \'%s\', make sure '
                     'the syntax is correct.' % simulation_file_name)
            log.debug(str(exc))
            return

        for diagnostic in info.diagnostics:
            log.debug('%s: ignoring %s' % (simulation_file_name, diagnostic))

        return info

    def copy_simulation_from_dependencies(self, simulation_file_name,
                                          test_name, overwrite=True):
        """Copy a simulation file from a test's dependencies folder"""
        try:
            self.check_simulation_name(simulation_file_name)
            check_plain_name(test_name, 'Test name')

        except SnmpsimctlError as exc:
            log.info(str(exc))
            return False

        source_path = os.path.join(
            self._settings.test_dependencies_dir, test_name,
            simulation_file_name)

        if not os.path.isfile(source_path):
            log.info('Could not copy simulation file \'%s\' because it does '
                     'not exist.' % source_path)
            return False

        destination_path = os.path.join(
            self._settings.simulations_dir, simulation_file_name)

        try:
            if not os.path.isdir(self._settings.simulations_dir):
                os.makedirs(self._settings.simulations_dir)

            if not overwrite and os.path.exists(destination_path):
                raise OSError('file \'%s\' already exists' % destination_path)

            shutil.copyfile(source_path, destination_path)

        except OSError as exc:
            log.info('Failed to copy the simulation \'%s\': '
                     '%s' % (simulation_file_name, exc))
            return False

        log.debug('Copied simulation \'%s\' to \'%s\'.' % (
            source_path, destination_path))

        return True
