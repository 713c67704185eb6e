"""
FastAPI dependency providers.

Each provider returns a process-wide singleton. Tests replace them via
``app.dependency_overrides``.
"""

from functools import lru_cache

from masterlabel.app.registry.registry import TEMPLATE_REGISTRY, TemplateRegistry
from masterlabel.app.storage.store import DesignStore, InMemoryDesignStore


@lru_cache(maxsize=1)
def get_design_store() -> DesignStore:
    return InMemoryDesignStore()


def get_template_registry() -> TemplateRegistry:
    return TEMPLATE_REGISTRY
