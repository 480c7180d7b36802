'''
Function table

Maps a function key - (name, parameter types) - to a native function.
Several keys may share a name; they are overloads told apart by argument
count and types.

Collision policy: registering a key that is already present replaces the
earlier function (last write wins). It is logged, never an error.
'''

import logging
from typing import Any, Callable, Iterator, Optional, Sequence

from .func.native import CallStyle, NativeFunction
from .types.dynamic import Dynamic

logger = logging.getLogger(__name__)

FnKey = tuple[str, tuple[type, ...]]


class Module:
    '''A table of native functions

    Usage:
        lib = Module('my_lib')
        lib.set_fn_2('+', concat, str, Char)
        lib.set_fn_2_mut('append', append_char, str, Char)

        fn = lib.get_fn('+', (str, Char))
    '''

    def __init__(self, name: Optional[str] = None):
        self.name = name
        self._functions: dict[str, dict[tuple[type, ...], NativeFunction]] = {}
        self._frozen = False

    # Registration

    def set_native_fn(self, fn: NativeFunction) -> FnKey:
        '''Insert an adapter under its key, replacing any previous one'''
        if self._frozen:
            raise RuntimeError(f'Module {self.name or "<anonymous>"} is frozen')

        overloads = self._functions.setdefault(fn.name, {})
        if fn.param_types in overloads:
            logger.debug('Replacing %s', fn.signature())
        else:
            logger.debug('Registering %s', fn.signature())

        overloads[fn.param_types] = fn
        return fn.key

    def set_fn(
        self,
        name: str,
        func: Callable,
        *params: Any,
        style: Optional[CallStyle] = None,
        fallible: bool = True,
        receiver: Optional[type] = None,
    ) -> FnKey:
        '''Register ``func`` under ``name``

        Parameter types come from ``params`` when given, from annotations
        otherwise. Functions in a module are fallible by default: a
        ScriptError they raise reaches the script unchanged.
        '''
        fn = NativeFunction.create(
            name, func, params or None,
            style = style, fallible = fallible, receiver = receiver,
        )
        return self.set_native_fn(fn)

    def _set_fn_n(self, arity: int, style: CallStyle, name: str, func: Callable, types: Sequence[Any]) -> FnKey:
        params = None if all(t is None for t in types) else list(types)
        fn = NativeFunction.create(name, func, params, style = style, fallible = True)
        if fn.arity != arity:
            raise TypeError(f'{name}: expected a function of {arity} parameter(s), got {fn.arity}')

        return self.set_native_fn(fn)

    def set_fn_0(self, name: str, func: Callable) -> FnKey:
        return self._set_fn_n(0, CallStyle.PURE, name, func, ())

    def set_fn_1(self, name: str, func: Callable, t1: Any = None) -> FnKey:
        return self._set_fn_n(1, CallStyle.PURE, name, func, (t1,))

    def set_fn_1_mut(self, name: str, func: Callable, t1: Any = None) -> FnKey:
        '''Register a one parameter function whose argument is the receiver'''
        return self._set_fn_n(1, CallStyle.METHOD, name, func, (t1,))

    def set_fn_2(self, name: str, func: Callable, t1: Any = None, t2: Any = None) -> FnKey:
        return self._set_fn_n(2, CallStyle.PURE, name, func, (t1, t2))

    def set_fn_2_mut(self, name: str, func: Callable, t1: Any = None, t2: Any = None) -> FnKey:
        return self._set_fn_n(2, CallStyle.METHOD, name, func, (t1, t2))

    def set_fn_3(self, name: str, func: Callable, t1: Any = None, t2: Any = None, t3: Any = None) -> FnKey:
        return self._set_fn_n(3, CallStyle.PURE, name, func, (t1, t2, t3))

    def set_fn_3_mut(self, name: str, func: Callable, t1: Any = None, t2: Any = None, t3: Any = None) -> FnKey:
        return self._set_fn_n(3, CallStyle.METHOD, name, func, (t1, t2, t3))

    def merge(self, other: 'Module') -> 'Module':
        '''Copy every function of ``other`` into this table'''
        for fn in other.iter_fn():
            self.set_native_fn(fn)

        return self

    def freeze(self) -> 'Module':
        '''Make the table read-only so it can be shared between engines'''
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # Lookup

    def get_fn(self, name: str, arg_types: Sequence[type]) -> Optional[NativeFunction]:
        '''Resolve by argument types

        An exact key wins. Otherwise an overload with Dynamic parameters in
        the mismatching positions is used, the one with the fewest Dynamic
        parameters first.
        '''
        overloads = self._functions.get(name)
        if not overloads:
            return None

        arg_types = tuple(arg_types)
        fn = overloads.get(arg_types)
        if fn is not None:
            return fn

        best = None
        best_wildcards = None
        for param_types, candidate in overloads.items():
            if len(param_types) != len(arg_types):
                continue

            if not all(p is Dynamic or p is a for p, a in zip(param_types, arg_types)):
                continue

            wildcards = sum(1 for p in param_types if p is Dynamic)
            if best is None or wildcards < best_wildcards:
                best, best_wildcards = candidate, wildcards

        return best

    def contains_fn(self, name: str, param_types: Sequence[type]) -> bool:
        return tuple(param_types) in self._functions.get(name, {})

    def keys(self) -> list[FnKey]:
        return [(name, types) for name, overloads in self._functions.items() for types in overloads]

    def names(self) -> list[str]:
        return list(self._functions)

    def iter_fn(self) -> Iterator[NativeFunction]:
        for overloads in self._functions.values():
            yield from overloads.values()

    def gen_fn_signatures(self) -> list[str]:
        return sorted(fn.signature() for fn in self.iter_fn())

    def __len__(self):
        return sum(len(overloads) for overloads in self._functions.values())

    def __iter__(self):
        return self.iter_fn()

    def __repr__(self):
        return f'<Module {self.name or "<anonymous>"}: {len(self)} function(s)>'
