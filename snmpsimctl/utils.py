#
# This file is part of snmpsimctl software.
#
# License: BSD
#
import os
import sys

import pysnmp
import snmpsimctl

from snmpsimctl import log
from snmpsimctl.error import SnmpsimctlError
from snmpsimctl.settings import Settings

TITLE = """\
SNMP simulation launcher version %s
Using foundation libraries: pysnmp %s.
Python interpreter: %s
""" % (snmpsimctl.__version__, pysnmp.__version__, sys.version)


def add_common_arguments(parser):
    parser.add_argument(
        '-v', '--version', action='version',
        version=TITLE)

    parser.add_argument(
        '--logging-method', type=lambda x: x.split(':'),
        metavar='=<%s[:args]>]' % '|'.join(log.METHODS_MAP),
        default='stderr', help='Logging method.')

    parser.add_argument(
        '--log-level', choices=log.LEVELS_MAP,
        type=str, default='info', help='Logging level.')

    parser.add_argument(
        '--global-dependencies-dir', metavar='<DIR>', type=str,
        help='Directory holding the agent and device simulator '
             'executables.')

    parser.add_argument(
        '--test-dependencies-dir', metavar='<DIR>', type=str,
        help='Directory holding per-test simulation files.')

    parser.add_argument(
        '--simulations-dir', metavar='<DIR>', type=str,
        help='Directory the agent loads simulation files from.')


def configure_logging(args, log_success=False):
    """Set up logging from command-line options, raise on bad options"""
    proc_name = os.path.basename(sys.argv[0])

    logging_method = args.logging_method
    if isinstance(logging_method, str):
        logging_method = logging_method.split(':')

    log.set_logger(proc_name, *logging_method, force=True)

    if args.log_level:
        log.set_level(args.log_level)

    log.set_log_success(log_success)


def make_settings(args, **options):
    options.update(
        global_dependencies_dir=args.global_dependencies_dir,
        test_dependencies_dir=args.test_dependencies_dir,
        simulations_dir=args.simulations_dir)

    return Settings(**options)


def setup(parser, args, **options):
    """Configure logging and build settings, return `None` on failure"""
    try:
        configure_logging(args, options.pop('log_success', False))

        return make_settings(args, **options)

    except SnmpsimctlError as exc:
        sys.stderr.write('%s\r\n' % exc)
        parser.print_usage(sys.stderr)
