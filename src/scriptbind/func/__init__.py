'''
Native function adapters
'''

from .native import CallStyle, Mut, NativeFunction, Param, normalize_type

__all__ = ["CallStyle", "Mut", "NativeFunction", "Param", "normalize_type"]
