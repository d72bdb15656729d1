"""Wiring of the engine and the service.

The service never looks its collaborators up itself: the container
builds the engine from the engine settings and hands it, together with
the policy limits, to the service.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class _Binding:
    factory: Callable[[], Any]
    shared: bool = True
    instance: Optional[Any] = None


@dataclass
class Container:
    """Maps port types to the factories that build them.

        container = Container.create_default(dry_run=True)
        service = container.resolve(IsochronesService)

    Tests can bind their own fakes:

        container = Container()
        container.register(IsochroneEnginePort, RecordingEngine)

    Attributes:
        config: Configuration the default bindings are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type, _Binding] = field(default_factory=dict, repr=False)
    _guard: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``port_type`` to ``factory``, replacing any earlier binding.

        With ``singleton`` the first resolved instance is reused.
        """
        with self._guard:
            self._bindings[port_type] = _Binding(factory, shared=singleton)

    def resolve(self, port_type: type) -> Any:
        """Build or return the instance bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the type.
        """
        with self._guard:
            binding = self._bindings.get(port_type)
            if binding is None:
                raise KeyError(f"No binding for {port_type!r}")
            if not binding.shared:
                return binding.factory()
            if binding.instance is None:
                binding.instance = binding.factory()
            return binding.instance

    def is_registered(self, port_type: type) -> bool:
        return port_type in self._bindings

    def clear_all(self) -> None:
        with self._guard:
            self._bindings.clear()

    @classmethod
    def create_default(
        cls, config: Optional[AppConfig] = None, dry_run: bool = False
    ) -> Container:
        """Bind the engine port and the isochrones service.

        Args:
            config: Settings to build from, the cached ones if omitted.
            dry_run: Bind the null engine instead of Valhalla.
        """
        from .adapters.engine import NullIsochroneEngine, ValhallaIsochroneEngine
        from .ports.engine import IsochroneEnginePort
        from .services import IsochronesService

        container = cls(config=config or get_config())
        settings = container.config

        if dry_run:
            container.register(IsochroneEnginePort, NullIsochroneEngine)
        else:
            container.register(
                IsochroneEnginePort, lambda: ValhallaIsochroneEngine(settings.engine)
            )
        container.register(
            IsochronesService,
            lambda: IsochronesService(
                engine=container.resolve(IsochroneEnginePort),
                limits=settings.limits,
            ),
        )
        return container

