import re

import pytest

from snmpsimctl import log
from snmpsimctl.error import SnmpsimctlError

LINE = re.compile(r'^\d{4}/\d\d/\d\d \d\d:\d\d:\d\d\.\d\d\|\[(\w+)\]\|(.*)$')


def levels(lines):
    return [LINE.match(line).group(1) for line in lines]


def test_line_format(logged):
    log.info('Script started')

    match = LINE.match(logged[0])

    assert match.group(1) == 'INFO'
    assert match.group(2) == 'Script started'


def test_all_levels(logged):
    log.debug('d')
    log.info('i')
    log.success('s')
    log.warn('w')
    log.error('e', ctx='(ctx)')

    assert levels(logged) == ['DEBUG', 'INFO', 'SUCCESS', 'WARN', 'ERROR']
    assert logged[-1].endswith('|e (ctx)')


def test_error_marks_failure(logged):
    log.info('fine')
    assert log.has_logged_failure() is False

    log.error('broken')
    assert log.has_logged_failure() is True

    log.reset()
    assert log.has_logged_failure() is False


def test_error_marks_failure_when_filtered(logged, monkeypatch):
    monkeypatch.setattr(log, 'logLevel', log.LOG_ERROR + 1)

    log.error('broken')

    assert logged == []
    assert log.has_logged_failure() is True


def test_success_needs_opt_in(logged):
    log.set_log_success(False)
    log.success('done')

    assert logged == []

    log.set_log_success(True)
    assert log.log_success is True
    log.success('done')

    assert levels(logged) == ['SUCCESS']


def test_level_threshold(logged):
    log.set_level('warn')

    log.debug('d')
    log.info('i')
    log.warn('w')
    log.error('e')

    assert levels(logged) == ['WARN', 'ERROR']


def test_unknown_level(logged):
    with pytest.raises(SnmpsimctlError):
        log.set_level('verbose')


def test_unknown_method(logged):
    with pytest.raises(SnmpsimctlError):
        log.set_logger('test', 'carrier-pigeon', force=True)


def test_file_logger(logged, tmp_path):
    path = tmp_path / 'run.txt'

    log.set_logger('snmpsimctl-test', 'file', str(path), force=True)
    log.info('written')
    log.error('failed')
    log.msg.close()

    lines = path.read_text().splitlines()

    assert levels(lines) == ['INFO', 'ERROR']
    assert lines[0].endswith('|written')


def test_null_logger(logged):
    log.set_logger('snmpsimctl-test', 'null', force=True)

    log.error('nowhere')

    assert logged == []
    assert log.has_logged_failure() is True
