#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Simulation definition parser
#
import collections
import codecs
import os
import re
from xml.etree import ElementTree

from snmpsimctl.error import ParseFailure

AGENT_TAG = 'Agent'

INT16_RANGE = (-0x8000, 0x7fff)
UINT16_RANGE = (0, 0xffff)

NO_SNMP_VERSION = -1

# Characters XML 1.0 does not allow, either raw or as character references
BAD_CHARS = (
    r'[\x00-\x08\x0b\x0c\x0e-\x1f]|'
    r'&#(?:0*(?:[0-8]|1[124-9]|2[0-9]|3[01])|[xX]0*(?:[0-8bBcCeEfF]|1[0-9a-fA-F]));'
)

BAD_BYTES = re.compile(BAD_CHARS.encode('ascii'))
BAD_TEXT = re.compile(BAD_CHARS)

# UTF-32 marks go first, they start with the UTF-16 ones
WIDE_BOMS = (
    (codecs.BOM_UTF32_LE, 'utf-32'),
    (codecs.BOM_UTF32_BE, 'utf-32'),
    (codecs.BOM_UTF16_LE, 'utf-16'),
    (codecs.BOM_UTF16_BE, 'utf-16'),
)

SIGNED = re.compile(r'^\s*[+-]?[0-9]+\s*$')
UNSIGNED = re.compile(r'^\s*\+?[0-9]+\s*$')


class ParseDiagnostic(collections.namedtuple(
        'ParseDiagnostic', 'agent_index agent_name attribute value reason')):
    """An attribute value of an Agent element that could not be used"""

    def __str__(self):
        return 'Agent #%d (%s): %s="%s" %s' % (
            self.agent_index, self.agent_name or '<unnamed>',
            self.attribute, self.value, self.reason)


class AgentEntry(collections.namedtuple(
        'AgentEntry', 'name ip snmp_version port ports')):
    """One simulated SNMP agent as declared in a simulation file"""

    def __new__(cls, name=None, ip=None, snmp_version=NO_SNMP_VERSION,
                port=0, ports=()):
        return super(AgentEntry, cls).__new__(
            cls, name, ip, snmp_version, port, tuple(ports))

    def endpoints(self):
        if self.ports:
            return [(self.ip, port) for port in self.ports]

        if self.port:
            return [(self.ip, self.port)]

        return []


class SimulationDefinition(collections.namedtuple(
        'SimulationDefinition', 'name agents diagnostics')):

    def __new__(cls, name, agents=(), diagnostics=()):
        return super(SimulationDefinition, cls).__new__(
            cls, name, tuple(agents), tuple(diagnostics))

    def endpoints(self):
        """All (ip, port, SNMP version) triples served by this simulation"""
        return [(ip, port, agent.snmp_version)
                for agent in self.agents
                for ip, port in agent.endpoints()]


def parse_int(value, bounds, grammar=SIGNED):
    """Parse an integer within `bounds`, return `None` on failure"""
    if value is None or not grammar.match(value):
        return

    value = int(value)

    if bounds[0] <= value <= bounds[1]:
        return value


def parse_port(value):
    """Turn a `Port` attribute value into a (port, ports) pair.

    A well-formed `start-end` range wins, a single port number is used
    otherwise. Returns `None` when neither form applies.
    """
    if '-' in value:
        start, end = value.split('-', 1)

        start = parse_int(start, UINT16_RANGE, UNSIGNED)
        end = parse_int(end, UINT16_RANGE, UNSIGNED)

        if start is not None and end is not None and start <= end:
            return start, tuple(range(start, end + 1))

    port = parse_int(value, UINT16_RANGE, UNSIGNED)
    if port is not None:
        return port, ()


def parse_agent(element, index=0):
    """Build an AgentEntry from the attributes of an Agent element.

    Returns the entry along with a list of diagnostics for the
    attribute values it had to ignore.
    """
    attrs = element.attrib
    name = attrs.get('Name')
    snmp_version = NO_SNMP_VERSION
    port, ports = 0, ()
    diagnostics = []

    if 'SNMPVersion' in attrs:
        version = parse_int(attrs['SNMPVersion'], INT16_RANGE)
        if version is None:
            diagnostics.append(
                ParseDiagnostic(index, name, 'SNMPVersion',
                                attrs['SNMPVersion'],
                                'is not a 16-bit integer'))
        else:
            snmp_version = version

    if 'Port' in attrs:
        parsed = parse_port(attrs['Port'])
        if parsed is None:
            diagnostics.append(
                ParseDiagnostic(index, name, 'Port', attrs['Port'],
                                'is neither a port nor a start-end port range'))
        else:
            port, ports = parsed

    agent = AgentEntry(name=name, ip=attrs.get('ip'),
                       snmp_version=snmp_version, port=port, ports=ports)

    return agent, diagnostics


def sanitize(data):
    """Drop characters XML 1.0 forbids from a raw document"""
    for bom, encoding in WIDE_BOMS:
        if data.startswith(bom):
            return BAD_TEXT.sub('', data.decode(encoding))

    return BAD_BYTES.sub(b'', data)


def is_agent_tag(tag):
    return tag == AGENT_TAG or (
        isinstance(tag, str) and tag.endswith('}' + AGENT_TAG))


def parse(simulations_folder, simulation_file_name):
    """Read simulation topology from its XML definition.

    Every `Agent` element below the document element yields an
    :class:`AgentEntry`, in document order. Raises
    :class:`~snmpsimctl.error.ParseFailure` if the file can not be read
    or is not well-formed XML.
    """
    path = os.path.join(simulations_folder, simulation_file_name)

    try:
        with open(path, 'rb') as fd:
            data = fd.read()

        root = ElementTree.fromstring(sanitize(data))

    except (OSError, ValueError, ElementTree.ParseError) as exc:
        raise ParseFailure('cannot parse %s: %s' % (path, exc))

    agents = []
    diagnostics = []

    for element in root.iter():
        if element is root or not is_agent_tag(element.tag):
            continue

        agent, problems = parse_agent(element, len(agents))

        agents.append(agent)
        diagnostics.extend(problems)

    return SimulationDefinition(
        simulation_file_name, agents, diagnostics)
