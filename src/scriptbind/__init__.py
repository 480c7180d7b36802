"""
scriptbind: expose native Python types and functions to an embedded script runtime
"""

__version__ = "0.1.0"

from .api.build_type import CustomType, TypeBuilder
from .config import Features, get_config, init_config
from .engine import Engine
from .errors import *
from .func.native import CallStyle, Mut, NativeFunction
from .module import Module
from .packages import Package, def_package, get_package, list_packages
from .packages.string_basic import BasicStringPackage
from .types import *

__all__ = [
    "CustomType", "TypeBuilder", "Engine", "Module", "NativeFunction", "CallStyle", "Mut",
    "Package", "def_package", "get_package", "list_packages", "BasicStringPackage",
    "Features", "get_config", "init_config", "Dynamic", "Char",
    "ScriptError", "FunctionCallError", "ArgumentCountError", "ArgumentTypeError",
    "ErrorInFunctionCall", "FunctionNotFoundError", "RuntimeScriptError", "FeatureDisabledError",
]
