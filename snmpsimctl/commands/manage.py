#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# SNMP simulation launcher: agent versions and simulation files catalog
#
import argparse
import sys
import traceback

from snmpsimctl import utils
from snmpsimctl.catalog import Catalog

DESCRIPTION = (
    'List installed SNMP agent versions and simulation files, show the '
    'devices a simulation declares or fetch a simulation file from a '
    'test\'s dependencies.')


def show_simulation(catalog, simulation_file_name, output):
    info = catalog.get_simulation_info(simulation_file_name)
    if info is None:
        return False

    output.write('# Simulation %s, %d agent(s)\n' % (
        info.name, len(info.agents)))

    for agent in info.agents:
        if agent.ports:
            ports = '%s-%s' % (agent.ports[0], agent.ports[-1])

        else:
            ports = str(agent.port)

        output.write('%s|%s|%s|%s\n' % (
            agent.name or '', agent.ip or '', agent.snmp_version, ports))

    for diagnostic in info.diagnostics:
        output.write('# ignored: %s\n' % (diagnostic,))

    return True


def main(argv=None, output=None):

    output = output or sys.stdout

    parser = argparse.ArgumentParser(description=DESCRIPTION)

    utils.add_common_arguments(parser)

    action_group = parser.add_mutually_exclusive_group(required=True)

    action_group.add_argument(
        '--list-versions', action='store_true',
        help='List installed agent versions.')

    action_group.add_argument(
        '--list-simulations', action='store_true',
        help='List available simulation files.')

    action_group.add_argument(
        '--show', metavar='<FILE>', type=str,
        help='Print the agents declared by a simulation file.')

    action_group.add_argument(
        '--copy', metavar='<FILE>', type=str,
        help='Copy a simulation file from a test\'s dependencies.')

    parser.add_argument(
        '--test', metavar='<TEST>', type=str,
        help='Test whose dependencies folder to copy from.')

    parser.add_argument(
        '--no-overwrite', action='store_true',
        help='Keep an already present simulation file when copying.')

    args = parser.parse_args(argv)

    if args.copy and not args.test:
        sys.stderr.write('ERROR: --copy requires --test\r\n')
        parser.print_usage(sys.stderr)
        return 1

    settings = utils.setup(parser, args)
    if settings is None:
        return 1

    catalog = Catalog(settings)

    if args.list_versions:
        for version in catalog.list_agent_versions():
            output.write('%s\n' % version)

    elif args.list_simulations:
        for simulation_file_name in catalog.list_available_simulations():
            output.write('%s\n' % simulation_file_name)

    elif args.show:
        if not show_simulation(catalog, args.show, output):
            sys.stderr.write('ERROR: simulation %s is not usable\r\n' % args.show)
            return 1

    elif not catalog.copy_simulation_from_dependencies(
            args.copy, args.test, overwrite=not args.no_overwrite):
        sys.stderr.write('ERROR: simulation %s not copied\r\n' % args.copy)
        return 1

    return 0


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
