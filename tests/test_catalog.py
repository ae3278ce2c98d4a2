import os

import pytest

from snmpsimctl import catalog as catalog_module
from snmpsimctl.catalog import Catalog


@pytest.fixture
def catalog(settings):
    return Catalog(settings)


class Untouchable(object):
    def __getattr__(self, name):
        raise AssertionError('filesystem touched: os.%s' % name)


@pytest.fixture
def no_filesystem(monkeypatch):
    monkeypatch.setattr(catalog_module, 'os', Untouchable())


def test_list_agent_versions(settings, catalog, write_file):
    write_file(os.path.join(settings.agents_dir, '1.0', settings.agent_file))
    write_file(os.path.join(settings.agents_dir, '2.0',
                            settings.device_simulator_file))
    write_file(os.path.join(settings.agents_dir, 'empty', 'readme.txt'))
    write_file(os.path.join(settings.agents_dir, 'stray.exe'))

    versions = catalog.list_agent_versions()

    assert list(versions) == ['1.0', '2.0']
    assert list(catalog.list_agent_versions()) == ['1.0', '2.0']


def test_list_agent_versions_without_root(catalog, logged):
    assert list(catalog.list_agent_versions()) == []
    assert any('[DEBUG]' in line and 'does not exist' in line
               for line in logged)


@pytest.mark.parametrize('version', ['../1.0', '..\\1.0', 'a/b', '/'])
def test_agent_version_with_separator(catalog, logged, no_filesystem, version):
    assert catalog.is_agent_version_available(version) is False
    assert any('should not contain slashes' in line for line in logged)


def test_agent_version_prefers_device_simulator(settings, catalog, write_file,
                                                logged):
    version_dir = os.path.join(settings.agents_dir, '3.1')
    write_file(os.path.join(version_dir, settings.agent_file))
    write_file(os.path.join(version_dir, settings.device_simulator_file))

    assert catalog.is_agent_version_available('3.1') is True
    assert catalog.get_agent_path('3.1') == os.path.join(
        version_dir, settings.device_simulator_file)
    assert any('[DEBUG]' in line and 'Found simulator' in line
               for line in logged)


def test_agent_version_falls_back_to_agent(settings, catalog, write_file):
    version_dir = os.path.join(settings.agents_dir, '3.0')
    write_file(os.path.join(version_dir, settings.agent_file))

    assert catalog.is_agent_version_available('3.0') is True
    assert catalog.get_agent_path('3.0') == os.path.join(
        version_dir, settings.agent_file)


def test_agent_version_missing(catalog, logged):
    assert catalog.is_agent_version_available('9.9') is False
    assert any('[INFO]' in line and 'Neither DeviceSimulator' in line
               for line in logged)


def test_list_available_simulations(settings, catalog, add_simulation):
    add_simulation('a.xml')
    add_simulation('B.XML')
    add_simulation('notes.txt')
    os.makedirs(os.path.join(settings.simulations_dir, 'folder.xml'))

    assert list(catalog.list_available_simulations()) == ['B.XML', 'a.xml']


def test_list_available_simulations_without_root(catalog):
    assert list(catalog.list_available_simulations()) == []


@pytest.mark.parametrize('name', ['../a.xml', 'sub\\a.xml', 'sub/a.xml'])
def test_simulation_name_with_separator(catalog, no_filesystem, name):
    assert catalog.is_simulation_available(name) is False


@pytest.mark.parametrize('name', ['a.txt', 'a.xml.bak', 'xml', 'a'])
def test_simulation_name_without_extension(catalog, add_simulation, logged,
                                           name):
    add_simulation(name)

    assert catalog.is_simulation_available(name) is False
    assert any('should end with' in line for line in logged)


def test_simulation_available(catalog, add_simulation):
    add_simulation('Lab.XML')

    assert catalog.is_simulation_available('Lab.XML') is True
    assert catalog.is_simulation_available('Other.xml') is False


def test_get_simulation_info(catalog, add_simulation):
    add_simulation('lab.xml', '<S><Agent Name="A" Port="161"/></S>')

    info = catalog.get_simulation_info('lab.xml')

    assert info.name == 'lab.xml'
    assert info.agents[0].name == 'A'


def test_get_simulation_info_broken(catalog, add_simulation, logged):
    add_simulation('broken.xml', '<S><Agent>')

    assert catalog.get_simulation_info('broken.xml') is None
    assert any('[INFO]' in line and 'Failed to parse' in line
               for line in logged)


def test_get_simulation_info_bad_name(catalog, no_filesystem):
    assert catalog.get_simulation_info('../lab.xml') is None


def test_copy_missing_source(settings, catalog, logged):
    assert catalog.copy_simulation_from_dependencies('lab.xml', 'T1') is False
    assert any('does not exist' in line for line in logged)
    assert not os.path.exists(settings.simulations_dir)


def test_copy_creates_simulations_dir(settings, catalog, write_file):
    write_file(os.path.join(settings.test_dependencies_dir, 'T1', 'lab.xml'),
               '<S/>')

    assert catalog.copy_simulation_from_dependencies('lab.xml', 'T1') is True

    destination = os.path.join(settings.simulations_dir, 'lab.xml')
    assert os.path.isfile(destination)
    assert catalog.is_simulation_available('lab.xml') is True


def test_copy_overwrite(settings, catalog, write_file, add_simulation):
    write_file(os.path.join(settings.test_dependencies_dir, 'T1', 'lab.xml'),
               '<New/>')
    destination = add_simulation('lab.xml', '<Old/>')

    assert catalog.copy_simulation_from_dependencies(
        'lab.xml', 'T1', overwrite=False) is False
    with open(destination) as fd:
        assert fd.read() == '<Old/>'

    assert catalog.copy_simulation_from_dependencies(
        'lab.xml', 'T1', overwrite=True) is True
    with open(destination) as fd:
        assert fd.read() == '<New/>'


def test_copy_io_error(settings, catalog, write_file, monkeypatch, logged):
    write_file(os.path.join(settings.test_dependencies_dir, 'T1', 'lab.xml'))

    def broken_copy(*args):
        raise OSError('disk full')

    monkeypatch.setattr(catalog_module.shutil, 'copyfile', broken_copy)

    assert catalog.copy_simulation_from_dependencies('lab.xml', 'T1') is False
    assert any('Failed to copy' in line and 'disk full' in line
               for line in logged)
