"""Tests for the dependency injection container."""

from __future__ import annotations

import pytest

from isochrones.adapters.engine import NullIsochroneEngine, ValhallaIsochroneEngine
from isochrones.config import AppConfig, EngineConfig
from isochrones.container import Container
from isochrones.ports.engine import IsochroneEnginePort
from isochrones.services import IsochronesService


def test_resolve_unregistered_type_fails():
    with pytest.raises(KeyError):
        Container(config=AppConfig()).resolve(IsochronesService)


def test_singleton_and_transient_registrations():
    container = Container(config=AppConfig())
    container.register(IsochroneEnginePort, NullIsochroneEngine)
    container.register(NullIsochroneEngine, NullIsochroneEngine, singleton=False)

    assert container.resolve(IsochroneEnginePort) is container.resolve(IsochroneEnginePort)
    assert container.resolve(NullIsochroneEngine) is not container.resolve(NullIsochroneEngine)


def test_clear_all():
    container = Container(config=AppConfig())
    container.register(IsochroneEnginePort, NullIsochroneEngine)
    container.clear_all()
    assert not container.is_registered(IsochroneEnginePort)


def test_dry_run_binds_null_engine():
    config = AppConfig()
    container = Container.create_default(config, dry_run=True)
    service = container.resolve(IsochronesService)

    assert isinstance(service.engine, NullIsochroneEngine)
    assert service.limits is config.limits


def test_default_binds_valhalla_engine():
    config = AppConfig(engine=EngineConfig(base_url="http://valhalla:8002"))
    container = Container.create_default(config)
    engine = container.resolve(IsochroneEnginePort)

    assert isinstance(engine, ValhallaIsochroneEngine)
    assert engine.config.base_url == "http://valhalla:8002"
