'''
Public registration API built on top of the engine
'''

from .build_type import CustomType, TypeBuilder

__all__ = ["CustomType", "TypeBuilder"]
