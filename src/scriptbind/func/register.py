'''
Adapters for the registration shapes the engine and the type builder share

Each helper fixes the arity and call style of one shape, so a wrong callable
is rejected when it is registered rather than when a script calls it.
'''

from typing import Any, Callable, Optional

from ..constants import FN_IDX_GET, FN_IDX_SET, make_getter, make_setter
from .native import CallStyle, NativeFunction


def _checked(fn: NativeFunction, arity: int, what: str) -> NativeFunction:
    if fn.arity != arity:
        raise TypeError(f'{what} {fn.name!r} must take {arity} parameter(s), got {fn.arity}')

    return fn


def native_fn(
    name: str,
    func: Callable,
    *params: Any,
    fallible: bool = False,
    receiver: Optional[type] = None,
) -> NativeFunction:
    '''Plain function or method, shape inferred from the callable'''
    return NativeFunction.create(name, func, params or None, fallible = fallible, receiver = receiver)


def getter_fn(name: str, get_fn: Callable, *, fallible: bool = False, receiver: Optional[type] = None) -> NativeFunction:
    '''``obj.name`` - receiver only'''
    fn = NativeFunction.create(
        make_getter(name), get_fn,
        style = CallStyle.METHOD, fallible = fallible, receiver = receiver,
    )
    return _checked(fn, 1, 'Getter')


def setter_fn(name: str, set_fn: Callable, *, fallible: bool = False, receiver: Optional[type] = None) -> NativeFunction:
    '''``obj.name = value`` - receiver and new value'''
    fn = NativeFunction.create(
        make_setter(name), set_fn,
        style = CallStyle.METHOD, fallible = fallible, receiver = receiver,
    )
    return _checked(fn, 2, 'Setter')


def indexer_get_fn(get_fn: Callable, *, fallible: bool = False, receiver: Optional[type] = None) -> NativeFunction:
    '''``obj[key]`` - receiver and index'''
    fn = NativeFunction.create(
        FN_IDX_GET, get_fn,
        style = CallStyle.METHOD, fallible = fallible, receiver = receiver,
    )
    return _checked(fn, 2, 'Index getter')


def indexer_set_fn(set_fn: Callable, *, fallible: bool = False, receiver: Optional[type] = None) -> NativeFunction:
    '''``obj[key] = value`` - receiver, index and new value'''
    fn = NativeFunction.create(
        FN_IDX_SET, set_fn,
        style = CallStyle.METHOD, fallible = fallible, receiver = receiver,
    )
    return _checked(fn, 3, 'Index setter')
