'''Global configuration system supporting JSON5 files and command-line overrides'''

import argparse
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import json5


@dataclass(frozen = True)
class Features:
    '''Optional parts of the value system a package may register functions for

    Attributes:
        sized_integers: i8/u8/.../u128 integer widths
        floating_point: f64/f32 values
        arrays: dynamic arrays and indexing
        object_maps: object maps and property access
    '''

    sized_integers: bool = True
    floating_point: bool = True
    arrays: bool = True
    object_maps: bool = True

    @classmethod
    def names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> 'Features':
        '''Build from a config mapping, unknown keys are rejected'''
        if not data:
            return cls()

        unknown = set(data) - set(cls.names())
        if unknown:
            raise ValueError(f'Unknown feature(s): {", ".join(sorted(unknown))}')

        return cls(**{k: bool(v) for k, v in data.items()})

    def without(self, *names: str) -> 'Features':
        '''Copy with the named features switched off'''
        unknown = set(names) - set(self.names())
        if unknown:
            raise ValueError(f'Unknown feature(s): {", ".join(sorted(unknown))}')

        return replace(self, **{name: False for name in names})

    def to_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in self.names()}


class Config:
    '''Global configuration singleton'''

    _instance = None
    _initialized = False

    # Default configuration values
    _defaults = {
        'float_precision_decimals': 10,
        'max_native_arity': 20,
        'features': {},
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = dict(self._defaults)
            self._cli_overrides = {}
            self._initialized = True

    def load_file(self, filepath: str | Path) -> bool:
        '''Load configuration from JSON5 file'''
        filepath = Path(filepath)
        if not filepath.exists():
            return False

        with open(filepath, 'r', encoding = 'utf-8') as f:
            data = json5.loads(f.read())

        if not isinstance(data, dict):
            raise ValueError(f'{filepath}: top level of a config file must be an object')

        self._config.update(data)
        return True

    def load_defaults(self):
        '''Load user config from the current directory when present'''
        self.load_file(Path.cwd() / 'scriptbind.json5')

    def parse_args(self, args: list[str] = None):
        '''Parse command-line arguments and override config'''
        parser = argparse.ArgumentParser(
            description = 'scriptbind configuration',
            add_help = False
        )

        parser.add_argument(
            '--config',
            type = str,
            help = 'Path to config file'
        )

        parser.add_argument(
            '--disable',
            action = 'append',
            choices = Features.names(),
            default = [],
            help = 'Disable an optional feature (repeatable)'
        )

        parser.add_argument(
            '--max-native-arity',
            type = int,
            help = 'Maximum number of parameters a native function may take'
        )

        # Parse known args, ignore unknown
        parsed, _ = parser.parse_known_args(args)

        if parsed.config:
            self.load_file(parsed.config)

        if parsed.disable:
            self._cli_overrides['features'] = self.features.without(*parsed.disable).to_dict()

        if parsed.max_native_arity is not None:
            self._cli_overrides['max_native_arity'] = parsed.max_native_arity

    def get(self, key: str, default: Any = None) -> Any:
        '''Get configuration value'''
        # CLI overrides have highest priority
        if key in self._cli_overrides:
            return self._cli_overrides[key]

        if key in self._config:
            return self._config[key]

        return default

    def set(self, key: str, value: Any):
        '''Set configuration value at runtime'''
        self._config[key] = value

    def reset(self):
        '''Drop loaded files and overrides'''
        self._config = dict(self._defaults)
        self._cli_overrides = {}

    @property
    def features(self) -> Features:
        value = self.get('features')
        if isinstance(value, Features):
            return value

        return Features.from_mapping(value)

    @property
    def float_precision_decimals(self) -> int:
        '''Decimal places used when displaying floats'''
        return int(self.get('float_precision_decimals'))

    @property
    def max_native_arity(self) -> int:
        return int(self.get('max_native_arity'))


# Global config instance
_config = Config()


def get_config() -> Config:
    '''Get global config instance'''
    return _config


def default_features() -> Features:
    return _config.features


def default_float_precision_decimals() -> int:
    '''Get default decimal places for float rounding'''
    return _config.float_precision_decimals


def default_max_native_arity() -> int:
    return _config.max_native_arity


def init_config(args: list[str] = None):
    '''Initialize configuration system'''
    _config.load_defaults()
    if args is not None:
        _config.parse_args(args)
