'''
Engine - the host side of the function table

Only the registration surface and the call-site dispatch a script runtime
needs are implemented here; parsing and evaluation live elsewhere.

Usage:
    engine = Engine()
    engine.register_fn('add', lambda a, b: a + b, int, int)
    engine.call_fn('add', 40, 2)                # Dynamic(42)

    engine.build_type(TestStruct)               # see api.build_type
'''

import logging
from typing import Any, Callable, Optional, Sequence, Union

from .api.build_type import TypeBuilder
from .config import Features, default_features
from .constants import FN_IDX_GET, FN_IDX_SET, KEYWORD_DEBUG, KEYWORD_PRINT, make_getter, make_setter
from .errors import FeatureDisabledError, FunctionNotFoundError
from .func.native import NativeFunction
from .func.register import getter_fn, indexer_get_fn, indexer_set_fn, native_fn, setter_fn
from .module import Module
from .packages import Package
from .packages.string_basic import BasicStringPackage
from .types.dynamic import Dynamic, default_type_name

logger = logging.getLogger(__name__)


def _default_print(text: str):
    logger.info('%s', text)


def _default_debug(text: str):
    logger.debug('%s', text)


class Engine:
    '''Function table host

    Attributes:
        features: Optional parts of the value system this engine supports
        global_module: Functions registered directly on the engine
        packages: Shared package tables, searched after the global module
    '''

    def __init__(self, features: Optional[Features] = None, *, load_std: bool = True):
        self.features = features if features is not None else default_features()
        self.global_module = Module('global')
        self.packages: list[Module] = []
        self._types: dict[type, Optional[str]] = {}
        self._on_print: Callable[[str], None] = _default_print
        self._on_debug: Callable[[str], None] = _default_debug

        if load_std:
            self.load_package(BasicStringPackage(self.features))

    @classmethod
    def new_raw(cls, features: Optional[Features] = None) -> 'Engine':
        '''Engine with an empty function table'''
        return cls(features, load_std = False)

    # Types

    def register_type(self, t: type) -> 'Engine':
        '''Register ``t`` under its default name'''
        self._types[t] = None
        logger.debug('Registered type %s', default_type_name(t))
        return self

    def register_type_with_name(self, t: type, name: str) -> 'Engine':
        '''Register ``t`` under a pretty name shown by ``type_of``'''
        self._types[t] = name
        logger.debug('Registered type %s as %s', default_type_name(t), name)
        return self

    def is_registered(self, t: type) -> bool:
        return t in self._types

    def type_name(self, t: type) -> str:
        name = self._types.get(t)
        if name is not None:
            return name

        return default_type_name(t)

    def type_of(self, value: Any) -> str:
        return self.type_name(Dynamic(value).type_id)

    # Functions

    def register_fn(self, name: str, func: Callable, *params: Any, receiver: Optional[type] = None) -> 'Engine':
        self.global_module.set_native_fn(native_fn(name, func, *params, receiver = receiver))
        return self

    def register_result_fn(self, name: str, func: Callable, *params: Any, receiver: Optional[type] = None) -> 'Engine':
        '''Register a function whose ScriptErrors reach the script unchanged'''
        self.global_module.set_native_fn(native_fn(name, func, *params, fallible = True, receiver = receiver))
        return self

    def register_get(self, name: str, get_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_feature('object_maps', 'register_get')
        self.global_module.set_native_fn(getter_fn(name, get_fn, receiver = receiver))
        return self

    def register_get_result(self, name: str, get_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_feature('object_maps', 'register_get_result')
        self.global_module.set_native_fn(getter_fn(name, get_fn, fallible = True, receiver = receiver))
        return self

    def register_set(self, name: str, set_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_feature('object_maps', 'register_set')
        self.global_module.set_native_fn(setter_fn(name, set_fn, receiver = receiver))
        return self

    def register_set_result(self, name: str, set_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_feature('object_maps', 'register_set_result')
        self.global_module.set_native_fn(setter_fn(name, set_fn, fallible = True, receiver = receiver))
        return self

    def register_get_set(
        self, name: str, get_fn: Callable, set_fn: Callable, *, receiver: Optional[type] = None
    ) -> 'Engine':
        return self.register_get(name, get_fn, receiver = receiver).register_set(name, set_fn, receiver = receiver)

    def register_indexer_get(self, get_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_indexing('register_indexer_get')
        self.global_module.set_native_fn(indexer_get_fn(get_fn, receiver = receiver))
        return self

    def register_indexer_get_result(self, get_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_indexing('register_indexer_get_result')
        self.global_module.set_native_fn(indexer_get_fn(get_fn, fallible = True, receiver = receiver))
        return self

    def register_indexer_set(self, set_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_indexing('register_indexer_set')
        self.global_module.set_native_fn(indexer_set_fn(set_fn, receiver = receiver))
        return self

    def register_indexer_set_result(self, set_fn: Callable, *, receiver: Optional[type] = None) -> 'Engine':
        self.require_indexing('register_indexer_set_result')
        self.global_module.set_native_fn(indexer_set_fn(set_fn, fallible = True, receiver = receiver))
        return self

    def register_indexer_get_set(
        self, get_fn: Callable, set_fn: Callable, *, receiver: Optional[type] = None
    ) -> 'Engine':
        return self.register_indexer_get(get_fn, receiver = receiver).register_indexer_set(set_fn, receiver = receiver)

    def require_feature(self, feature: str, operation: str):
        if not getattr(self.features, feature):
            raise FeatureDisabledError(operation, feature)

    def require_indexing(self, operation: str):
        if not (self.features.arrays or self.features.object_maps):
            raise FeatureDisabledError(operation, 'arrays')

    # Packages

    def register_global_module(self, module: Module) -> 'Engine':
        '''Add a function table that is searched after the engine's own

        The table is shared, not copied.
        '''
        self.packages.append(module)
        return self

    def load_package(self, package: Union[Package, Module]) -> 'Engine':
        module = package.get() if isinstance(package, Package) else package
        logger.info('Loading package %s (%d function(s))', module.name or '<anonymous>', len(module))
        return self.register_global_module(module)

    # Types via builder

    def build_type(self, t: type) -> 'Engine':
        '''Register a CustomType: its members and then the type itself'''
        with TypeBuilder(self, t) as builder:
            t.build(builder)

        return self

    def type_builder(self, t: type):
        '''Builder for ``t``; use it as a context manager'''
        return TypeBuilder(self, t)

    # Call-site dispatch

    def resolve_fn(self, name: str, arg_types: Sequence[type]) -> Optional[NativeFunction]:
        '''Find the function a call with these argument types would run'''
        fn = self.global_module.get_fn(name, arg_types)
        if fn is not None:
            return fn

        for module in reversed(self.packages):
            fn = module.get_fn(name, arg_types)
            if fn is not None:
                return fn

        return None

    def call_fn(self, name: str, *args: Any) -> Dynamic:
        '''Call a registered function the way a script call would

        Arguments that are Dynamic are passed as they are, so receivers see
        in-place mutations; anything else is wrapped first.

        Raises:
            FunctionNotFoundError: No function matches the argument types
            ScriptError: Whatever the native function raised
        '''
        values = [arg if isinstance(arg, Dynamic) else Dynamic(arg) for arg in args]
        arg_types = [value.type_id for value in values]

        fn = self.resolve_fn(name, arg_types)
        if fn is None:
            raise FunctionNotFoundError(name, [self.type_name(t) for t in arg_types])

        return fn.invoke(values)

    def get_property(self, target: Dynamic, name: str) -> Dynamic:
        return self.call_fn(make_getter(name), target)

    def set_property(self, target: Dynamic, name: str, value: Any) -> Dynamic:
        return self.call_fn(make_setter(name), target, value)

    def get_index(self, target: Dynamic, index: Any) -> Dynamic:
        return self.call_fn(FN_IDX_GET, target, index)

    def set_index(self, target: Dynamic, index: Any, value: Any) -> Dynamic:
        return self.call_fn(FN_IDX_SET, target, index, value)

    # print / debug

    def on_print(self, callback: Callable[[str], None]) -> 'Engine':
        self._on_print = callback
        return self

    def on_debug(self, callback: Callable[[str], None]) -> 'Engine':
        self._on_debug = callback
        return self

    def print(self, *args: Any) -> str:
        '''Stringify through ``print`` and hand the text to the print callback'''
        text = self.call_fn(KEYWORD_PRINT, *args).value
        self._on_print(text)
        return text

    def debug(self, value: Any) -> str:
        text = self.call_fn(KEYWORD_DEBUG, value).value
        self._on_debug(text)
        return text

    # Metadata

    def iter_modules(self):
        yield self.global_module
        yield from reversed(self.packages)

    def gen_fn_signatures(self) -> list[str]:
        signatures = []
        for module in self.iter_modules():
            signatures.extend(module.gen_fn_signatures())

        return signatures
