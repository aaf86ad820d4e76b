from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class ModuleInfo:
    imported_ids: List[str] = field(default_factory=list)
    dynamically_imported_ids: List[str] = field(default_factory=list)


# lookup(id) -> ModuleInfo, or None for a module the host knows nothing about
ModuleLookup = Callable[[str], Optional[ModuleInfo]]


class ModuleInfoSource(ABC):
    @abstractmethod
    def get_module_info(self, module_id: str) -> Optional[ModuleInfo]:
        pass

    @abstractmethod
    def module_ids(self) -> List[str]:
        pass

    def __call__(self, module_id: str) -> Optional[ModuleInfo]:
        return self.get_module_info(module_id)


class InMemoryModuleInfo(ModuleInfoSource):
    """Module graph already resolved by the host, keyed by absolute module id."""

    def __init__(self, modules: Optional[Dict[str, ModuleInfo]] = None):
        self.modules: Dict[str, ModuleInfo] = dict(modules or {})

    def add(self, module_id: str, imported_ids=(), dynamically_imported_ids=()):
        self.modules[module_id] = ModuleInfo(list(imported_ids), list(dynamically_imported_ids))

    def get_module_info(self, module_id: str) -> Optional[ModuleInfo]:
        return self.modules.get(module_id)

    def module_ids(self) -> List[str]:
        return list(self.modules)
