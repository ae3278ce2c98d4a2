#
# This file is part of snmpsimctl software.
#
# License: BSD
#
__version__ = '1.0.0'
