"""Application skeleton: hardware, drivers and services run in a main loop."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar, TypeVar

D = TypeVar("D", bound="Driver")
S = TypeVar("S", bound="Service")


class Driver(ABC):
    """A hardware driver registered with an application under its name."""

    DRIVER_NAME: ClassVar[str] = ""

    @abstractmethod
    def name(self) -> str:
        """Name under which the driver is registered."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the driver."""

    @abstractmethod
    def loop(self) -> None:
        """Do one pass of the driver's periodic work."""


class Hardware(ABC):
    """Board-level setup run before anything else."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the board."""

    @abstractmethod
    def loop(self) -> None:
        """Do one pass of the board's periodic work."""


class Service(ABC):
    """A service registered with an application under its name."""

    SERVICE_NAME: ClassVar[str] = ""

    @abstractmethod
    def name(self) -> str:
        """Name under which the service is registered."""

    def depends_on(self) -> set[str]:
        """Names of services whose loop must run before this one's."""
        return set()

    @abstractmethod
    def init(self) -> None:
        """Prepare the service."""

    @abstractmethod
    def loop(self) -> None:
        """Do one pass of the service's periodic work."""


def _lookup(registry: dict[str, Any], key: Any, attribute: str) -> Any:
    name = getattr(key, attribute) if isinstance(key, type) else key
    return registry.get(name)


def _order_services(services: dict[str, Service]) -> list[Service]:
    """Order services by name, placing each after the services it depends on."""
    names = set(services)
    pending = [(name, services[name]) for name in sorted(services)]
    placed: set[str] = set()
    ordered: list[Service] = []
    while pending:
        entry = next(
            (
                item
                for item in pending
                if not (item[1].depends_on() & names) - placed
            ),
            pending[0],
        )
        pending.remove(entry)
        placed.add(entry[0])
        ordered.append(entry[1])
    return ordered


class Application(ABC):
    """Owns the hardware, drivers and services and runs their loops."""

    _current: ClassVar[Application | None] = None

    def __init__(self) -> None:
        self._drivers: dict[str, Driver] = {}
        self._driver_loop: list[Driver] = []
        self._services: dict[str, Service] = {}
        self._service_loop: list[Service] = []

    @abstractmethod
    def hardware(self) -> Hardware:
        """The board this application runs on."""

    @abstractmethod
    def init(self) -> None:
        """Application setup, run once after the hardware is ready."""

    @abstractmethod
    def loop(self) -> None:
        """Application work, run once per pass after drivers and services."""

    def handle_exception(self, exc: BaseException) -> None:
        """Called with an exception that escaped setup or the main loop."""

    def run_init(self) -> None:
        """Initialise hardware and application, then fix the loop orders."""
        self.hardware().init()
        self.init()
        self._driver_loop = [self._drivers[name] for name in sorted(self._drivers)]
        self._service_loop = _order_services(self._services)

    def run_loop(self) -> None:
        """Run one pass: hardware, drivers, services, then the application."""
        self.hardware().loop()
        for drv in self._driver_loop:
            drv.loop()
        for svc in self._service_loop:
            svc.loop()
        self.loop()

    def register_driver(self, driver_type: type[D], *args: Any, **kwargs: Any) -> D:
        """Create a driver and register it; an existing name keeps its driver."""
        driver = driver_type(*args, **kwargs)
        self._drivers.setdefault(driver.name(), driver)
        return driver

    def register_service(self, service_type: type[S], *args: Any, **kwargs: Any) -> S:
        """Create a service and register it; an existing name keeps its service."""
        service = service_type(*args, **kwargs)
        self._services.setdefault(service.name(), service)
        return service

    def driver(self, key: str | type[Driver]) -> Any:
        """The driver registered under a name or a driver class's DRIVER_NAME, or None."""
        return _lookup(self._drivers, key, "DRIVER_NAME")

    def service(self, key: str | type[Service]) -> Any:
        """The service registered under a name or a service class's SERVICE_NAME, or None."""
        return _lookup(self._services, key, "SERVICE_NAME")

    @classmethod
    def application(cls) -> Application | None:
        """The application started by :func:`setup`, if any."""
        return Application._current


def setup(factory: Callable[[], Application]) -> Application:
    """Create the application, make it current and initialise it."""
    app = factory()
    Application._current = app
    try:
        app.run_init()
    except Exception as exc:
        app.handle_exception(exc)
        raise
    return app


def loop() -> None:
    """Run one pass of the current application's loop."""
    app = Application.application()
    if app is None:
        raise RuntimeError("no application has been set up")
    try:
        app.run_loop()
    except Exception as exc:
        app.handle_exception(exc)
        raise