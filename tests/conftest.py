"""Shared fixtures: real YAML configuration, deterministic scheduler, services."""

import pytest

from engine.effect_registry import EffectRegistry, register_default_effects
from engine.scheduler import ManualScheduler
from lifecycle.task_registry import TaskRegistry
from managers import ConfigManager
from services.overlay_service import OverlayService
from services.parameter_resolver import ParameterResolver
from services.service_container import ServiceContainer


@pytest.fixture(scope="session")
def config_manager():
    manager = ConfigManager()
    manager.load()
    return manager


@pytest.fixture
def brand_manager(config_manager):
    return config_manager.brand_manager


@pytest.fixture
def preset_manager(config_manager):
    return config_manager.preset_manager


@pytest.fixture
def resolver(preset_manager):
    return ParameterResolver(preset_manager)


@pytest.fixture
def effects():
    return register_default_effects(EffectRegistry())


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def overlay_service(resolver, brand_manager, preset_manager, effects):
    return OverlayService(resolver, brand_manager, preset_manager, effects)


@pytest.fixture
def container(config_manager):
    return ServiceContainer.build(config_manager)


@pytest.fixture
def make_overlay(overlay_service, scheduler):
    """Build an unmounted overlay on the shared ManualScheduler."""
    def make(kind, raw=None, seed=None, **options):
        return overlay_service.create(kind, raw or {}, scheduler, seed=seed, **options)
    return make


@pytest.fixture
def task_registry():
    """Fresh TaskRegistry singleton for tests that track tasks."""
    TaskRegistry._instance = None
    registry = TaskRegistry.instance()
    yield registry
    TaskRegistry._instance = None
