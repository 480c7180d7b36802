'''
Dynamic value - type-erased container for anything a script can hold
'''

import copy
from typing import Any, Optional, Type, TypeVar

from .numeric import F32, SIZED_INTS

__all__ = [
    'Char', 'INT', 'FLOAT', 'ImmutableString', 'Array', 'Map', 'Unit',
    'Dynamic', 'default_type_name',
]

T = TypeVar('T')


class Char(str):
    '''A single character, distinct from a one-character string'''

    def __new__(cls, value: str):
        if len(value) != 1:
            raise ValueError(f'Char needs exactly one character, got {value!r}')

        return super().__new__(cls, value)

    def __repr__(self):
        return f'Char({str(self)!r})'


# Runtime value types
INT = int
FLOAT = float
ImmutableString = str
Array = list
Map = dict
Unit = type(None)


_BUILTIN_TYPE_NAMES: dict[type, str] = {
    int: 'i64',
    float: 'f64',
    bool: 'bool',
    str: 'string',
    Char: 'char',
    list: 'array',
    dict: 'map',
    Unit: '()',
    F32: F32.TYPE_NAME,
}
_BUILTIN_TYPE_NAMES.update({t: t.TYPE_NAME for t in SIZED_INTS})


def default_type_name(t: type) -> str:
    '''Name a type the way the engine does when no pretty name is given'''
    name = _BUILTIN_TYPE_NAMES.get(t)
    if name is not None:
        return name

    if t is Dynamic:
        return 'Dynamic'

    if t.__module__ == 'builtins':
        return t.__qualname__

    return f'{t.__module__}.{t.__qualname__}'


class Dynamic:
    '''Owns one payload and reports its runtime type

    Type identity is exact: a ``bool`` payload is never an ``int`` and a
    ``Char`` is never a ``str``.
    '''

    __slots__ = ('_value',)

    def __init__(self, value: Any = None):
        if isinstance(value, Dynamic):
            value = value._value

        self._value = value

    @classmethod
    def unit(cls) -> 'Dynamic':
        return cls(None)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def type_id(self) -> type:
        return type(self._value)

    def type_name(self) -> str:
        return default_type_name(self.type_id)

    def is_unit(self) -> bool:
        return self._value is None

    def is_type(self, t: type) -> bool:
        return t is Dynamic or type(self._value) is t

    def try_cast(self, t: Type[T]) -> Optional[T]:
        '''Copy of the payload if it is exactly ``t``, otherwise None'''
        if t is Dynamic:
            return self.clone()

        if type(self._value) is not t:
            return None

        return copy.deepcopy(self._value)

    def cast(self, t: Type[T]) -> T:
        if not self.is_type(t):
            raise TypeError(f'Cannot cast {self.type_name()} to {default_type_name(t)}')

        return self.try_cast(t)

    def clone(self) -> 'Dynamic':
        return Dynamic(copy.deepcopy(self._value))

    def _replace(self, value: Any):
        # Only reachable through an exclusive Mut handle
        if isinstance(value, Dynamic):
            value = value._value

        self._value = value

    def __eq__(self, other):
        if not isinstance(other, Dynamic):
            return NotImplemented

        return type(self._value) is type(other._value) and self._value == other._value

    __hash__ = None

    def __repr__(self):
        return f'Dynamic({self._value!r})'

    def __str__(self):
        from .format import to_display
        return to_display(self._value)
