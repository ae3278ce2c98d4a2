#
# This file is part of snmpsimctl software.
#
# License: BSD
#
"""SNMP simulation launcher

   Starts and supervises an external SNMP agent simulator process
   running named simulation files, so that automated test runs can
   bring up simulated SNMP devices on demand.
"""
import os
import sys
import setuptools

classifiers = """\
Development Status :: 5 - Production/Stable
Environment :: Console
Intended Audience :: Developers
Intended Audience :: Information Technology
Intended Audience :: System Administrators
Intended Audience :: Telecommunications Industry
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Topic :: Communications
Topic :: Software Development :: Testing
Topic :: System :: Networking :: Monitoring
"""

if sys.version_info[:2] < (3, 9):
    print("ERROR: this package requires Python 3.9 or later!")
    sys.exit(1)

params = {
    'install_requires': ['pysnmp>=7.1,<8.0'],
    'extras_require': {
        'tests': ['pytest'],
    },
    'python_requires': '>=3.9',
    'zip_safe': False
}

doclines = [x.strip() for x in (__doc__ or '').split('\n') if x]

params.update(
    {'name': 'snmpsimctl',
     'version': open(os.path.join('snmpsimctl', '__init__.py')).read().split('\'')[1],
     'description': doclines[0],
     'long_description': ' '.join(doclines[1:]),
     'license': 'BSD',
     'platforms': ['any'],
     'classifiers': [x for x in classifiers.split('\n') if x],
     'packages': setuptools.find_packages(exclude=['tests', 'tests.*']),
     'entry_points': {
        'console_scripts': [
            'snmpsimctl-start-simulation = snmpsimctl.commands.start:main',
            'snmpsimctl-manage-simulations = snmpsimctl.commands.manage:main',
        ]
     }}
)

setuptools.setup(**params)
