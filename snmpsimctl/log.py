#
# This file is part of snmpsimctl software.
#
# License: BSD
#
import os
import sys
import logging
import socket
import time
from logging import handlers
from snmpsimctl.error import SnmpsimctlError

LOG_DEBUG = 0
LOG_INFO = 1
LOG_SUCCESS = 2
LOG_WARN = 3
LOG_ERROR = 4


class AbstractLogger(object):
    def __init__(self, progId, *priv):
        self._logger = logging.getLogger(progId)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._progId = progId
        self.init(*priv)

    def __call__(self, s):
        self._logger.debug(s)

    def init(self, *priv):
        pass

    def close(self):
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()


class SyslogLogger(AbstractLogger):
    SYSLOG_SOCKET_PATHS = (
        '/dev/log',
        '/var/run/syslog'
    )

    def init(self, *priv):
        if len(priv) < 1:
            raise SnmpsimctlError(
                'Bad syslog params, need at least facility, also accept '
                'host, port, socktype (tcp|udp)')
        if len(priv) < 2:
            priv = [priv[0], 'debug']
        if len(priv) < 3:
            for dev in self.SYSLOG_SOCKET_PATHS:
                if os.path.exists(dev):
                    priv = [priv[0], priv[1], dev]
                    break
            else:
                priv = [priv[0], priv[1], 'localhost', 514, 'udp']

        if not priv[2].startswith('/'):
            if len(priv) < 5:
                priv = [priv[0], priv[1], priv[2], 514, 'udp']
            priv = [priv[0], priv[1], priv[2], int(priv[3]), priv[4]]

        try:
            handler = handlers.SysLogHandler(
                address=priv[2].startswith('/') and priv[2] or (priv[2], int(priv[3])),
                facility=priv[0].lower(),
                socktype=len(priv) > 4 and priv[4] == 'tcp' and socket.SOCK_STREAM or socket.SOCK_DGRAM
            )

        except Exception as exc:
            raise SnmpsimctlError('Bad syslog option(s): %s' % exc)

        handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))

        self._logger.addHandler(handler)


class FileLogger(AbstractLogger):
    """Append log lines to a file, optionally rotating it by size or age"""

    def init(self, *priv):
        if not priv:
            raise SnmpsimctlError('Bad log file params, need filename')
        if sys.platform[:3] == 'win':
            # fix possibly corrupted absolute windows path
            if len(priv[0]) == 1 and priv[0].isalpha() and len(priv) > 1:
                priv = [priv[0] + ':' + priv[1]] + list(priv[2:])

        maxsize = 0
        maxage = None
        if len(priv) > 1 and priv[1]:
            try:
                if priv[1][-1] == 'k':
                    maxsize = int(priv[1][:-1]) * 1024
                elif priv[1][-1] == 'm':
                    maxsize = int(priv[1][:-1]) * 1024 * 1024
                elif priv[1][-1] in 'SMHD':
                    maxage = (priv[1][-1], int(priv[1][:-1]))
                else:
                    raise ValueError('Unknown log rotation criterion: %s' % priv[1][-1])

            except ValueError:
                raise SnmpsimctlError(
                    'Error in log rotation specification. Use <NNN>k,m '
                    'for size or <NNN>S,M,H,D for time limits'
                )

        try:
            if maxsize:
                handler = handlers.RotatingFileHandler(priv[0], backupCount=30, maxBytes=maxsize)
            elif maxage:
                handler = handlers.TimedRotatingFileHandler(priv[0], backupCount=30, when=maxage[0], interval=maxage[1])
            else:
                handler = handlers.WatchedFileHandler(priv[0])

        except Exception as exc:
            raise SnmpsimctlError('Failure configure logging: %s' % exc)

        handler.setFormatter(logging.Formatter('%(message)s'))

        self._logger.addHandler(handler)


class StreamLogger(AbstractLogger):
    stream = sys.stderr

    def init(self, *priv):
        try:
            handler = logging.StreamHandler(self.stream)

        except AttributeError as exc:
            raise SnmpsimctlError('Stream logger failure: %s' % exc)

        handler.setFormatter(logging.Formatter('%(message)s'))

        self._logger.addHandler(handler)


class StdoutLogger(StreamLogger):
    stream = sys.stdout


class StderrLogger(StreamLogger):
    stream = sys.stderr


class NullLogger(AbstractLogger):
    def init(self, *priv):
        self._logger.addHandler(logging.NullHandler())

    def __call__(self, s):
        pass


METHODS_MAP = {
    'syslog': SyslogLogger,
    'file': FileLogger,
    'stdout': StdoutLogger,
    'stderr': StderrLogger,
    'null': NullLogger
}

LEVELS_MAP = {
    'debug': LOG_DEBUG,
    'info': LOG_INFO,
    'success': LOG_SUCCESS,
    'warn': LOG_WARN,
    'error': LOG_ERROR,
}

LEVEL_NAMES = dict((v, k.upper()) for k, v in LEVELS_MAP.items())

msg = lambda x: None

logLevel = LOG_INFO
log_success = False
logged_failure = False


def format_line(level, message):
    now = time.time()
    timestamp = time.strftime('%Y/%m/%d %H:%M:%S', time.localtime(now))
    return '%s.%02d|[%s]|%s' % (timestamp, now % 1 * 100, LEVEL_NAMES[level], message)


def _write(level, message, ctx):
    if ctx:
        message = '%s %s' % (message, ctx)
    msg(format_line(level, message))


def error(message, ctx=''):
    global logged_failure

    logged_failure = True

    if logLevel <= LOG_ERROR:
        _write(LOG_ERROR, message, ctx)


def warn(message, ctx=''):
    if logLevel <= LOG_WARN:
        _write(LOG_WARN, message, ctx)


def success(message, ctx=''):
    if log_success and logLevel <= LOG_SUCCESS:
        _write(LOG_SUCCESS, message, ctx)


def info(message, ctx=''):
    if logLevel <= LOG_INFO:
        _write(LOG_INFO, message, ctx)


def debug(message, ctx=''):
    if logLevel <= LOG_DEBUG:
        _write(LOG_DEBUG, message, ctx)


def has_logged_failure():
    """Tell whether an ERROR line went through since the last reset"""
    return logged_failure


def reset():
    global logged_failure

    logged_failure = False


def set_log_success(flag):
    global log_success

    log_success = bool(flag)


def set_level(level):
    global logLevel

    try:
        logLevel = LEVELS_MAP[level]

    except KeyError:
        raise SnmpsimctlError('Unknown log level "%s", known levels are: %s' % (level, ', '.join(LEVELS_MAP)))


def set_logger(progId, *priv, **options):
    global msg

    try:
        if not isinstance(msg, AbstractLogger) or options.get('force'):
            if isinstance(msg, AbstractLogger):
                msg.close()
            msg = METHODS_MAP[priv[0]](progId, *priv[1:])

    except KeyError:
        raise SnmpsimctlError('Unknown logging method "%s", known methods are: %s' % (priv[0], ', '.join(METHODS_MAP)))
