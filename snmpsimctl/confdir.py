#
# This file is part of snmpsimctl software.
#
# License: BSD
#
# Default locations of agent executables and simulation files
#
import os
import sys

if sys.platform[:3] == 'win':
    root = os.path.join('C:' + os.sep, 'RTManager')
    simulations = os.path.join('C:' + os.sep, 'QASNMPSimulations')
else:
    root = os.path.join(os.path.expanduser('~'), '.snmpsimctl')
    simulations = os.path.join(root, 'simulations')

global_dependencies = os.path.join(root, 'GlobalDependencies')
test_dependencies = os.path.join(root, 'TestDependencies')
