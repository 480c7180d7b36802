#!/usr/bin/env python3
'''Unit tests for package definitions'''

from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from scriptbind.config import Features
from scriptbind.engine import Engine
from scriptbind.errors import FunctionNotFoundError
from scriptbind.module import Module
from scriptbind.packages import Package, def_package, get_package, list_packages
import inspect
import unittest


@def_package('SampleMathPackage', 'Arithmetic helpers for tests.')
def SampleMathPackage(lib, features):
    lib.set_fn_2('max', lambda a, b: max(a, b), int, int)
    lib.set_fn_1('neg', lambda x: -x, int)

    if features.floating_point:
        lib.set_fn_2('max', lambda a, b: max(a, b), float, float)


class GreetingPackage(Package):
    NAME = 'GreetingPackage'
    DESCRIPTION = 'Greets by name.'

    def init(self, lib):
        lib.set_fn_1('greet', lambda name: f'hello {name}', str)


def snapshot(lib: Module) -> dict:
    return {fn.key: fn.func for fn in lib.iter_fn()}


class TestDefPackage(unittest.TestCase):
    '''Test declaring packages'''

    def test_decorator_builds_a_package_class(self):
        self.assertTrue(issubclass(SampleMathPackage, Package))
        self.assertEqual(SampleMathPackage.NAME, 'SampleMathPackage')
        self.assertEqual(SampleMathPackage.DESCRIPTION, 'Arithmetic helpers for tests.')
        self.assertEqual(SampleMathPackage.__doc__, 'Arithmetic helpers for tests.')

    def test_registry(self):
        self.assertIs(get_package('SampleMathPackage'), SampleMathPackage)
        self.assertIs(get_package('GreetingPackage'), GreetingPackage)
        self.assertIn(SampleMathPackage, list_packages())
        self.assertIn(get_package('BasicStringPackage'), list_packages())

        with self.assertRaises(KeyError):
            get_package('NoSuchPackage')

    def test_features_select_entries(self):
        full = SampleMathPackage(Features())
        no_float = SampleMathPackage(Features().without('floating_point'))

        self.assertEqual(len(full.get()), 3)
        self.assertEqual(len(no_float.get()), 2)
        self.assertFalse(no_float.get().contains_fn('max', (float, float)))

    def test_base_class_needs_init(self):
        with self.assertRaises(TypeError):
            Package()

        class Unfinished(Package):
            DESCRIPTION = 'No init.'

        with self.assertRaises(TypeError):
            Unfinished()

    def test_decorated_package_is_concrete(self):
        self.assertFalse(inspect.isabstract(SampleMathPackage))
        self.assertTrue(inspect.isabstract(Package))


class TestPackageUse(unittest.TestCase):
    '''Test merging packages into function tables'''

    def test_library_is_frozen(self):
        package = GreetingPackage()
        self.assertTrue(package.get().is_frozen)

        with self.assertRaises(RuntimeError):
            package.get().set_fn_1('greet', lambda name: name, str)

    def test_one_package_many_engines(self):
        package = SampleMathPackage()
        first = Engine.new_raw().load_package(package)
        second = Engine.new_raw().load_package(package)

        self.assertIs(first.packages[0], second.packages[0])
        self.assertEqual(first.call_fn('max', 3, 7).value, 7)
        self.assertEqual(second.call_fn('neg', 3).value, -3)

    def test_init_is_idempotent(self):
        package = SampleMathPackage()
        lib = Module('target')

        package.register_into(lib)
        once = snapshot(lib)

        package.register_into(lib)
        twice = snapshot(lib)

        self.assertEqual(len(lib), 3)
        self.assertEqual(once.keys(), twice.keys())

    def test_packages_merge_additively(self):
        lib = Module('target')
        SampleMathPackage().register_into(lib)
        GreetingPackage().register_into(lib)

        self.assertEqual(len(lib), 4)
        self.assertEqual(sorted(lib.names()), ['greet', 'max', 'neg'])

    def test_engine_without_package(self):
        engine = Engine.new_raw()
        with self.assertRaises(FunctionNotFoundError):
            engine.call_fn('greet', 'bob')

        engine.load_package(GreetingPackage())
        self.assertEqual(engine.call_fn('greet', 'bob').value, 'hello bob')


if __name__ == '__main__':
    unittest.main()
