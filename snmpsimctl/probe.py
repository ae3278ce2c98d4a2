#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Check that simulated SNMP agents answer requests
#
import asyncio
import time

from pysnmp.hlapi.v3arch.asyncio import CommunityData
from pysnmp.hlapi.v3arch.asyncio import ContextData
from pysnmp.hlapi.v3arch.asyncio import ObjectIdentity
from pysnmp.hlapi.v3arch.asyncio import ObjectType
from pysnmp.hlapi.v3arch.asyncio import SnmpEngine
from pysnmp.hlapi.v3arch.asyncio import UdpTransportTarget
from pysnmp.hlapi.v3arch.asyncio import get_cmd

from snmpsimctl import log

SYS_OBJECT_ID = '1.3.6.1.2.1.1.2.0'

# SNMP version as written in simulation files to message processing model
MP_MODELS = {
    1: 0,  # SNMPv1
    2: 1,  # SNMPv2c
}


async def _get(host, port, mp_model, community, timeout, retries):
    snmp_engine = SnmpEngine()

    try:
        target = await UdpTransportTarget.create(
            (host, port), timeout=timeout, retries=retries)

        (error_indication,
         error_status,
         error_index,
         var_binds) = await get_cmd(
            snmp_engine,
            CommunityData(community, mpModel=mp_model),
            target,
            ContextData(),
            ObjectType(ObjectIdentity(SYS_OBJECT_ID)))

    finally:
        snmp_engine.close_dispatcher()

    if error_indication:
        return '%s' % error_indication

    if error_status:
        return '%s at %s' % (
            error_status.prettyPrint(),
            error_index and var_binds[int(error_index) - 1][0] or '?')


def probe_agent(host, port, snmp_version=-1, community='public',
                timeout=1.0, retries=0):
    """Send one SNMP GET for sysObjectID.0, tell whether it got answered"""
    mp_model = MP_MODELS.get(snmp_version, 1)

    try:
        problem = asyncio.run(
            _get(host or '127.0.0.1', port, mp_model, community,
                 timeout, retries))

    except Exception as exc:
        problem = 'probe failure: %s' % exc

    if problem:
        log.debug('SNMP agent at %s:%s not responding: '
                  '%s' % (host, port, problem))
        return False

    log.debug('SNMP agent at %s:%s is responding' % (host, port))

    return True


def wait_until_responsive(endpoints, deadline, interval=0.5,
                          community='public', timeout=1.0):
    """Poll (host, port, SNMP version) endpoints until all of them answer.

    Gives up once `deadline` (as returned by :func:`time.time`) passes,
    leaving the endpoints not yet polled in this round unanswered.
    Returns the endpoints that never answered.
    """
    pending = list(endpoints)

    while pending:
        unanswered = []

        for index, (host, port, version) in enumerate(pending):
            if time.time() >= deadline:
                unanswered.extend(pending[index:])
                break

            if not probe_agent(host, port, version, community=community,
                               timeout=timeout):
                unanswered.append((host, port, version))

        pending = unanswered

        remaining = deadline - time.time()

        if not pending or remaining <= 0:
            break

        time.sleep(min(interval, remaining))

    for host, port, _ in pending:
        log.info('SNMP agent at %s:%s did not respond in time' % (host, port))

    return pending
