#
# This file is part of snmpsimctl software.
#
# License: BSD
#
class SnmpsimctlError(Exception): pass


class InvalidName(SnmpsimctlError): pass


class NotFound(SnmpsimctlError): pass


class ParseFailure(SnmpsimctlError): pass


class SpawnFailure(SnmpsimctlError): pass


class AlreadyExited(SnmpsimctlError): pass
