'''
Packages - named, reusable bundles of native functions

A package builds its function table once, freezes it and hands the same
table to every engine that loads it. ``init`` can also populate any other
table directly; running it twice on one table leaves the same entries,
since identical keys are simply replaced.

Usage:
    @def_package('MathPackage', 'Basic arithmetic helpers.')
    def MathPackage(lib, features):
        lib.set_fn_2('max', lambda a, b: max(a, b), int, int)
        if features.floating_point:
            lib.set_fn_2('max', lambda a, b: max(a, b), float, float)

    engine.load_package(MathPackage())
'''

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..config import Features, default_features
from ..module import Module

logger = logging.getLogger(__name__)

InitFn = Callable[[Module, Features], None]

_registry: dict[str, type['Package']] = {}


class Package(ABC):
    '''Base class for packages

    Subclasses set NAME (the stable registration key) and DESCRIPTION and
    implement ``init``. Subclasses with a NAME are added to the package
    registry when the class is created.
    '''

    NAME: str = ''
    DESCRIPTION: str = ''

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.NAME:
            register_package(cls)

    def __init__(self, features: Optional[Features] = None):
        self.features = features if features is not None else default_features()

        lib = Module(self.NAME)
        self.init(lib)
        self._lib = lib.freeze()

        logger.info('Built package %s with %d function(s)', self.NAME, len(lib))

    @abstractmethod
    def init(self, lib: Module):
        '''Populate ``lib`` with this package's functions'''

    def get(self) -> Module:
        '''The shared, read-only function table of this package'''
        return self._lib

    def register_into(self, lib: Module) -> Module:
        '''Add this package's functions to another table'''
        self.init(lib)
        return lib

    def __repr__(self):
        return f'<Package {self.NAME}: {len(self._lib)} function(s)>'


def def_package(name: str, description: str) -> Callable[[InitFn], type[Package]]:
    '''Declare a package from a plain ``init(lib, features)`` function

    The decorated name becomes the Package subclass.
    '''

    def decorator(init_fn: InitFn) -> type[Package]:
        def init(self, lib: Module):
            init_fn(lib, self.features)

        return type(Package)(name, (Package,), {
            'NAME': name,
            'DESCRIPTION': description,
            'init': init,
            '__doc__': description,
            '__module__': init_fn.__module__,
        })

    return decorator


def register_package(cls: type[Package]):
    if cls.NAME in _registry and _registry[cls.NAME] is not cls:
        logger.debug('Replacing package %s', cls.NAME)

    _registry[cls.NAME] = cls


def get_package(name: str) -> type[Package]:
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f'Unknown package {name!r}') from None


def list_packages() -> list[type[Package]]:
    return [_registry[name] for name in sorted(_registry)]


# Built-in packages register themselves on import
from .string_basic import BasicStringPackage  # noqa: E402
