'''
Native function adapters

Turns a Python callable of any supported shape into one uniform entry point
the runtime can call polymorphically:

    NativeFunction.invoke(args: Sequence[Dynamic]) -> Dynamic

A shape is arity x call style x fallibility. It is worked out once, at
registration time, from the callable's signature and annotations (or from
explicit parameter types), never at call time.

Parameter bindings:
    VALUE   - deep copy of the payload (by-value argument)
    DYNAMIC - the argument is handed over as a Dynamic (any type accepted)
    REF     - receiver only: the payload object itself, so mutations of a
              mutable object land in the caller's value
    MUT     - receiver only: a Mut handle that can also replace the payload
'''

import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar

from ..config import default_max_native_arity
from ..errors import ArgumentCountError, ArgumentTypeError, ErrorInFunctionCall, ScriptError
from ..types.dynamic import Dynamic, Unit, default_type_name

T = TypeVar('T')

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class CallStyle(Enum):
    '''How the first argument is passed'''
    PURE = auto()       # every argument by value
    METHOD = auto()     # first argument is the receiver, borrowed exclusively


class Binding(Enum):
    VALUE = auto()
    DYNAMIC = auto()
    REF = auto()
    MUT = auto()


class Mut(Generic[T]):
    '''Exclusive mutable handle onto the receiver of a call

    Reading ``value`` gives the payload; assigning ``value`` replaces the
    payload inside the caller's Dynamic, which is how receivers with
    immutable payloads (strings, numbers) are updated in place.
    '''

    __slots__ = ('_slot',)

    def __init__(self, slot: Dynamic):
        self._slot = slot

    @property
    def value(self) -> T:
        return self._slot.value

    @value.setter
    def value(self, new_value: T):
        self._slot._replace(new_value)

    def __repr__(self):
        return f'Mut({self._slot.value!r})'


@dataclass(frozen = True)
class Param:
    name: str
    type: type
    binding: Binding

    def type_text(self) -> str:
        text = default_type_name(self.type)
        if self.binding in (Binding.REF, Binding.MUT):
            return f'&mut {text}'

        return text


def normalize_type(annotation: Any) -> type:
    '''Map an annotation onto the type identity used for dispatch

    Unions (``Optional[int]``, ``int | None``) have no single type identity
    and are rejected.
    '''
    if annotation is None or annotation is Unit:
        return Unit

    if annotation is Any:
        return Dynamic

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        raise TypeError(f'Union parameter type {annotation!r} is not supported, use Dynamic')

    if origin is not None:
        annotation = origin

    if isinstance(annotation, type):
        return annotation

    raise TypeError(f'Unsupported parameter type {annotation!r}')


def _type_hints(func: Callable) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError):
        pass

    # One unresolvable forward reference fails the whole lookup; resolve
    # the annotations one by one so only that parameter stays a string
    globalns = getattr(inspect.unwrap(func), '__globals__', {})
    hints = {}
    for name, annotation in getattr(func, '__annotations__', {}).items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns)
            except (NameError, AttributeError, SyntaxError, TypeError):
                pass

        hints[name] = annotation

    return hints


class NativeFunction:
    '''One native callable behind the uniform invocation contract'''

    def __init__(
        self,
        name: str,
        func: Callable,
        params: Sequence[Param],
        *,
        fallible: bool = False,
        return_type: Optional[type] = None,
    ):
        self.name = name
        self.func = func
        self.params = tuple(params)
        self.fallible = fallible
        self.return_type = return_type

    @classmethod
    def create(
        cls,
        name: str,
        func: Callable,
        params: Optional[Sequence[Any]] = None,
        *,
        style: Optional[CallStyle] = None,
        fallible: bool = False,
        receiver: Optional[type] = None,
        max_arity: Optional[int] = None,
    ) -> 'NativeFunction':
        '''Infer the shape of ``func`` and wrap it

        Args:
            name: Name the function is registered under
            func: The callable
            params: Explicit parameter types, overriding annotations. ``None``
                entries fall back to the annotation of that position.
            style: Force PURE or METHOD; inferred when omitted
            fallible: ScriptErrors raised by ``func`` are declared failures
                and propagate unchanged
            receiver: Type of an unannotated first parameter, which then
                becomes a by-reference receiver (``self`` of a method)
            max_arity: Upper bound on the parameter count

        Raises:
            TypeError: The callable has a shape that cannot be adapted
            ValueError: Too many parameters
        '''
        if not callable(func):
            raise TypeError(f'{name}: {func!r} is not callable')

        signature = inspect.signature(func)
        positional = []
        for p in signature.parameters.values():
            if p.kind in _POSITIONAL:
                positional.append(p)
            elif p.kind is inspect.Parameter.VAR_POSITIONAL:
                raise TypeError(f'{name}: variadic parameter *{p.name} is not supported')
            elif p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is p.empty:
                raise TypeError(f'{name}: keyword-only parameter {p.name!r} has no default')

        if params is not None and len(params) != len(positional):
            raise TypeError(
                f'{name}: {len(params)} parameter type(s) given for {len(positional)} parameter(s)'
            )

        limit = default_max_native_arity() if max_arity is None else max_arity
        if len(positional) > limit:
            raise ValueError(f'{name}: {len(positional)} parameters exceed the maximum of {limit}')

        hints = _type_hints(func)
        bound = []
        for i, p in enumerate(positional):
            annotation = params[i] if params is not None else None
            if annotation is None:
                annotation = hints.get(p.name, p.annotation)

            bound.append(cls._make_param(name, i, p.name, annotation, receiver))

        if bound:
            first = bound[0]
            if style is CallStyle.PURE and first.binding is Binding.MUT:
                raise TypeError(f'{name}: a Mut receiver cannot be called in PURE style')

            if style is CallStyle.METHOD and first.binding in (Binding.VALUE, Binding.DYNAMIC):
                bound[0] = Param(first.name, first.type, Binding.REF)
        elif style is CallStyle.METHOD:
            raise TypeError(f'{name}: a METHOD style function needs a receiver parameter')

        return_type = None
        if 'return' in hints:
            try:
                return_type = normalize_type(hints['return'])
            except TypeError:
                # Unions and the like only lose their place in the signature text
                return_type = Dynamic

        return cls(name, func, bound, fallible = fallible, return_type = return_type)

    @staticmethod
    def _make_param(fn_name: str, index: int, name: str, annotation: Any, receiver: Optional[type]) -> Param:
        if index == 0 and typing.get_origin(annotation) is Mut:
            args = typing.get_args(annotation)
            if args:
                return Param(name, normalize_type(args[0]), Binding.MUT)

            if receiver is None:
                raise TypeError(f'{fn_name}: Mut receiver {name!r} needs a type, e.g. Mut[str]')

            return Param(name, receiver, Binding.MUT)

        if annotation is Mut:
            if index != 0:
                raise TypeError(f'{fn_name}: only the first parameter can be a Mut receiver')

            if receiver is None:
                raise TypeError(f'{fn_name}: Mut receiver {name!r} needs a type, e.g. Mut[str]')

            return Param(name, receiver, Binding.MUT)

        if typing.get_origin(annotation) is Mut:
            raise TypeError(f'{fn_name}: only the first parameter can be a Mut receiver')

        if annotation is inspect.Parameter.empty:
            if index == 0 and receiver is not None:
                return Param(name, receiver, Binding.REF)

            raise TypeError(f'{fn_name}: cannot infer the type of parameter {name!r}')

        if isinstance(annotation, str):
            raise TypeError(f'{fn_name}: unresolved annotation {annotation!r} on parameter {name!r}')

        param_type = normalize_type(annotation)
        if param_type is Dynamic:
            return Param(name, Dynamic, Binding.DYNAMIC)

        return Param(name, param_type, Binding.VALUE)

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def style(self) -> CallStyle:
        if self.params and self.params[0].binding in (Binding.REF, Binding.MUT):
            return CallStyle.METHOD

        return CallStyle.PURE

    @property
    def is_method(self) -> bool:
        return self.style is CallStyle.METHOD

    @property
    def param_types(self) -> tuple[type, ...]:
        return tuple(p.type for p in self.params)

    @property
    def key(self) -> tuple[str, tuple[type, ...]]:
        return self.name, self.param_types

    def signature(self) -> str:
        '''Human readable signature, e.g. ``append(&mut string, char) -> ()``'''
        text = f'{self.name}({", ".join(p.type_text() for p in self.params)})'
        if self.return_type is not None:
            text += f' -> {default_type_name(self.return_type)}'

        return text

    def invoke(self, args: Sequence[Dynamic]) -> Dynamic:
        '''Call the native function with runtime values

        Raises:
            ArgumentCountError: Wrong number of arguments
            ArgumentTypeError: An argument is not of the expected type
            ScriptError: Declared failure of a fallible function, unchanged
            ErrorInFunctionCall: Anything else escaping the native function
        '''
        if len(args) != self.arity:
            raise ArgumentCountError(self.name, self.arity, len(args))

        natives = [self._bind(i, param, arg) for i, (param, arg) in enumerate(zip(self.params, args))]

        try:
            result = self.func(*natives)
        except ScriptError as e:
            if self.fallible:
                raise

            raise ErrorInFunctionCall(self.name, e) from e
        except Exception as e:
            raise ErrorInFunctionCall(self.name, e) from e

        if isinstance(result, Dynamic):
            return result

        return Dynamic(result)

    def _bind(self, index: int, param: Param, arg: Any) -> Any:
        if not isinstance(arg, Dynamic):
            arg = Dynamic(arg)

        if not arg.is_type(param.type):
            raise ArgumentTypeError(self.name, index + 1, default_type_name(param.type), arg.type_name())

        binding = param.binding
        if binding is Binding.MUT:
            return Mut(arg)

        if binding is Binding.REF:
            return arg if param.type is Dynamic else arg.value

        if binding is Binding.DYNAMIC:
            return arg.clone()

        return arg.try_cast(param.type)

    def __repr__(self):
        kind = 'fallible' if self.fallible else 'infallible'
        return f'<NativeFunction {self.signature()} {self.style.name.lower()} {kind}>'
