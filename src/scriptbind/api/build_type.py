'''
Type builder - register a custom type and all its members in one go

Usage:
    class TestStruct(CustomType):
        def __init__(self):
            self.field = 1

        @classmethod
        def new(cls) -> 'TestStruct':
            return cls()

        def update(self, offset: int):
            self.field += offset

        def get_value(self) -> int:
            return self.field

        def set_value(self, value: int):
            self.field = value

        @classmethod
        def build(cls, builder):
            (builder
                .with_name('TestStruct')
                .with_fn('new_ts', cls.new)
                .with_fn('update', cls.update)
                .with_get_set('value', cls.get_value, cls.set_value))

    engine.build_type(TestStruct)

Members are collected while the builder is open and pushed into the engine,
followed by the type itself, when the ``with`` block is left - on every
exit path, exceptions included, and exactly once. Unannotated ``self``
parameters bind the instance held by the script value, so methods mutate
it in place.
'''

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Optional

from ..func.native import NativeFunction
from ..func.register import getter_fn, indexer_get_fn, indexer_set_fn, native_fn, setter_fn
from ..types.dynamic import default_type_name

if TYPE_CHECKING:
    from ..engine import Engine

logger = logging.getLogger(__name__)


class CustomType(ABC):
    '''A type that knows how to register itself with an engine'''

    @classmethod
    @abstractmethod
    def build(cls, builder: 'TypeBuilder'):
        '''Register the type's name, methods, accessors and indexers'''


class TypeBuilder:
    '''Collects the registrations of one type

    States: open (accepting ``with_*`` calls) -> finalized. Finalizing is
    irreversible; any later ``with_*`` call raises RuntimeError.
    '''

    def __init__(self, engine: 'Engine', t: type):
        self._engine = engine
        self._type = t
        self._name: Optional[str] = None
        self._pending: list[NativeFunction] = []
        self._finalized = False

    def __enter__(self) -> 'TypeBuilder':
        return self

    def __exit__(self, exc_type, exc, tb):
        self._finalize()
        return False

    @property
    def type(self) -> type:
        return self._type

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _add(self, fn: NativeFunction) -> 'TypeBuilder':
        if self._finalized:
            raise RuntimeError('Builder already finalized')

        self._pending.append(fn)
        return self

    def _finalize(self):
        if self._finalized:
            return

        self._finalized = True

        for fn in self._pending:
            self._engine.global_module.set_native_fn(fn)

        if self._name is not None:
            self._engine.register_type_with_name(self._type, self._name)
        else:
            self._engine.register_type(self._type)

        logger.info(
            'Built type %s with %d member(s)',
            self._engine.type_name(self._type), len(self._pending),
        )

    def with_name(self, name: str) -> 'TypeBuilder':
        '''Pretty name returned by ``type_of``; the last call wins'''
        if self._finalized:
            raise RuntimeError('Builder already finalized')

        self._name = name
        return self

    def with_fn(self, name: str, method: Callable) -> 'TypeBuilder':
        return self._add(native_fn(name, method, receiver = self._type))

    def with_result_fn(self, name: str, method: Callable) -> 'TypeBuilder':
        '''Register a method whose ScriptErrors reach the script unchanged'''
        return self._add(native_fn(name, method, fallible = True, receiver = self._type))

    def with_get(self, name: str, get_fn: Callable) -> 'TypeBuilder':
        '''Property read; ``get_fn`` takes only the receiver'''
        self._engine.require_feature('object_maps', 'with_get')
        return self._add(getter_fn(name, get_fn, receiver = self._type))

    def with_get_result(self, name: str, get_fn: Callable) -> 'TypeBuilder':
        self._engine.require_feature('object_maps', 'with_get_result')
        return self._add(getter_fn(name, get_fn, fallible = True, receiver = self._type))

    def with_set(self, name: str, set_fn: Callable) -> 'TypeBuilder':
        self._engine.require_feature('object_maps', 'with_set')
        return self._add(setter_fn(name, set_fn, receiver = self._type))

    def with_set_result(self, name: str, set_fn: Callable) -> 'TypeBuilder':
        self._engine.require_feature('object_maps', 'with_set_result')
        return self._add(setter_fn(name, set_fn, fallible = True, receiver = self._type))

    def with_get_set(self, name: str, get_fn: Callable, set_fn: Callable) -> 'TypeBuilder':
        return self.with_get(name, get_fn).with_set(name, set_fn)

    def with_indexer_get(self, get_fn: Callable) -> 'TypeBuilder':
        self._engine.require_indexing('with_indexer_get')
        return self._add(indexer_get_fn(get_fn, receiver = self._type))

    def with_indexer_get_result(self, get_fn: Callable) -> 'TypeBuilder':
        self._engine.require_indexing('with_indexer_get_result')
        return self._add(indexer_get_fn(get_fn, fallible = True, receiver = self._type))

    def with_indexer_set(self, set_fn: Callable) -> 'TypeBuilder':
        self._engine.require_indexing('with_indexer_set')
        return self._add(indexer_set_fn(set_fn, receiver = self._type))

    def with_indexer_set_result(self, set_fn: Callable) -> 'TypeBuilder':
        self._engine.require_indexing('with_indexer_set_result')
        return self._add(indexer_set_fn(set_fn, fallible = True, receiver = self._type))

    def with_indexer_get_set(self, get_fn: Callable, set_fn: Callable) -> 'TypeBuilder':
        return self.with_indexer_get(get_fn).with_indexer_set(set_fn)

    def __repr__(self):
        state = 'finalized' if self._finalized else 'open'
        return f'<TypeBuilder {default_type_name(self._type)} {state}: {len(self._pending)} member(s)>'
