'''
Runtime value types, the Dynamic container and their text forms
'''

from .numeric import *
from .dynamic import *
from .format import to_display, to_debug, format_map, format_float
