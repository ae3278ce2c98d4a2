#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Run-time configuration shared by catalog and orchestrator
#
import os

from snmpsimctl import confdir
from snmpsimctl.error import SnmpsimctlError


class Settings(object):
    """Directory roots, executable names and timing knobs.

    Built once at start-up, from the platform defaults in
    :mod:`snmpsimctl.confdir` updated with any keyword overrides,
    then handed to every component that touches the filesystem or
    spawns the agent.
    """

    defaults = {
        'global_dependencies_dir': confdir.global_dependencies,
        'test_dependencies_dir': confdir.test_dependencies,
        'simulations_dir': confdir.simulations,
        'agent_folder': 'QASNMPAgent',
        'agent_file': 'QASNMPAgent.exe',
        'device_simulator_folder': 'QADeviceSimulator',
        'device_simulator_file': 'QADeviceSimulator.exe',
        'simulation_ext': '.xml',
        'no_log_flag': '/d',
        'ready_timeout': 59.0,
        'grace_period': 1.0,
        'probe_agents': False,
        'probe_community': 'public',
        'probe_timeout': 1.0,
    }

    def __init__(self, **options):
        unknown = set(options) - set(self.defaults)
        if unknown:
            raise SnmpsimctlError(
                'Unknown setting(s): %s' % ', '.join(sorted(unknown)))

        for key, value in self.defaults.items():
            if options.get(key) is None:
                options[key] = value
            setattr(self, key, options[key])

    @property
    def agents_dir(self):
        return os.path.join(self.global_dependencies_dir, self.agent_folder)

    @property
    def device_simulator_dir(self):
        return os.path.join(
            self.global_dependencies_dir, self.device_simulator_folder)

    @property
    def latest_device_simulator(self):
        return os.path.join(
            self.device_simulator_dir, self.device_simulator_file)

    @property
    def latest_agent(self):
        return os.path.join(self.agents_dir, self.agent_file)

    def __repr__(self):
        return '%s(%s)' % (
            self.__class__.__name__,
            ', '.join(['%s=%r' % (key, getattr(self, key))
                       for key in sorted(self.defaults)]))
