#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# SNMP simulation launcher: start the agent with a simulation file
#
import argparse
import sys
import time
import traceback

from snmpsimctl import log
from snmpsimctl import utils
from snmpsimctl.catalog import Catalog
from snmpsimctl.orchestrator import Orchestrator

DESCRIPTION = (
    'Start the SNMP agent simulator with a named simulation file so that '
    'tests can talk to simulated SNMP devices.')


def main(argv=None):

    parser = argparse.ArgumentParser(description=DESCRIPTION)

    utils.add_common_arguments(parser)

    parser.add_argument(
        '--simulation-name', metavar='<FILE>', type=str, required=True,
        help='Simulation file to start the agent with.')

    parser.add_argument(
        '--agent-version', type=str,
        help='Agent version (folder name) to run, latest device simulator '
             'if not given.')

    parser.add_argument(
        '--copy-from-test', metavar='<TEST>', type=str,
        help='Copy the simulation file from this test\'s dependencies '
             'first.')

    parser.add_argument(
        '--no-overwrite', action='store_true',
        help='Keep an already present simulation file when copying.')

    parser.add_argument(
        '--enable-agent-logging', action='store_true',
        help='Let the agent write its own log output.')

    parser.add_argument(
        '--log-success', action='store_true',
        help='Also log SUCCESS messages.')

    parser.add_argument(
        '--probe-agents', action='store_true',
        help='Wait for the simulated agents to answer SNMP requests.')

    parser.add_argument(
        '--probe-community', type=str,
        help='SNMP community name to probe simulated agents with.')

    parser.add_argument(
        '--ready-timeout', type=float,
        help='Seconds to wait for the agent to become ready.')

    parser.add_argument(
        '--grace-period', type=float,
        help='Seconds to pause after the agent became ready.')

    parser.add_argument(
        '--wait', action='store_true',
        help='Stay in foreground and stop the agent on interrupt, '
             'otherwise leave it running.')

    args = parser.parse_args(argv)

    settings = utils.setup(
        parser, args, log_success=args.log_success,
        probe_agents=args.probe_agents or None,
        probe_community=args.probe_community,
        ready_timeout=args.ready_timeout,
        grace_period=args.grace_period)

    if settings is None:
        return 1

    log.reset()

    log.info('Script started')

    catalog = Catalog(settings)

    if args.copy_from_test:
        if not catalog.copy_simulation_from_dependencies(
                args.simulation_name, args.copy_from_test,
                overwrite=not args.no_overwrite):
            log.error('Simulation could not be copied from test '
                      '%s! %s' % (args.copy_from_test, args.simulation_name))
            return 1

    if not catalog.is_simulation_available(args.simulation_name):
        log.error('Simulation is not present! %s' % args.simulation_name)
        return 1

    orchestrator = Orchestrator(settings, catalog)

    agent = orchestrator.start_simulations(
        [args.simulation_name], enable_logging=args.enable_agent_logging,
        agent_version=args.agent_version)

    if agent is None:
        log.error('Simulation could not be started! %s' % args.simulation_name)
        return 1

    log.success('Simulation %s started as process '
                '%s' % (args.simulation_name, agent.pid))

    if not args.wait:
        log.info('Leaving %s running' % agent)
        agent.release()
        return 0

    with agent:
        try:
            while not agent.has_exited():
                time.sleep(1)

        except KeyboardInterrupt:
            log.info('Stopping %s' % agent)

        else:
            log.error('Agent process exited with status '
                      '%s' % agent.returncode)

    return log.has_logged_failure() and 1 or 0


if __name__ == '__main__':
    try:
        rc = main()

    except KeyboardInterrupt:
        sys.stderr.write('shutting down process...')
        rc = 0

    except Exception as exc:
        sys.stderr.write('process terminated: %s' % exc)

        for line in traceback.format_exception(*sys.exc_info()):
            sys.stderr.write(line.replace('\n', ';'))
        rc = 1

    sys.exit(rc)
