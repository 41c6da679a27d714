# service_kernel/autodiscover.py
from __future__ import annotations
import importlib
import pkgutil
from types import ModuleType
from typing import List, Union


def _iter_module_names(package: ModuleType) -> List[str]:
    """
    Dotted names of every module below package (recursively).
    Only the names are collected here; importing happens in discover_services().
    """
    path = getattr(package, "__path__", None)
    if path is None:
        return []
    return [info.name for info in pkgutil.walk_packages(path, prefix=package.__name__ + ".")]


def discover_services(package: Union[str, ModuleType]) -> List[str]:
    """
    Import every module under package so that class-level dependency
    declarations (decorators, BaseService subclasses) are recorded.
    Returns the imported module names, package first.
    """
    if isinstance(package, str):
        package = importlib.import_module(package)
    out: List[str] = [package.__name__]
    for name in _iter_module_names(package):
        importlib.import_module(name)
        out.append(name)
    return out
