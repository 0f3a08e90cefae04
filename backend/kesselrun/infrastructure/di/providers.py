"""Service registration for the DI container."""
from __future__ import annotations

from kesselrun.infrastructure.di.container import Container
from kesselrun.infrastructure.di.scopes import Scope
from kesselrun.core.config import Settings, settings as app_settings
from kesselrun.infrastructure.cqrs import Dispatcher, HandlerRegistry, ValidatorRegistry
from kesselrun.domains.widgets.infrastructure.repositories import (
    InMemoryWidgetRepository,
    WidgetRepository,
)
from kesselrun.domains.widgets.registration import (
    register_widget_validators,
    widget_registrations,
)


def build_validator_registry(settings: Settings) -> ValidatorRegistry:
    validators = ValidatorRegistry()
    register_widget_validators(validators, settings.WIDGET_NAME_MAX_LENGTH)
    validators.freeze()
    return validators


def build_handler_registry() -> HandlerRegistry:
    """Build the registration table once; frozen before the first dispatch."""
    registry = HandlerRegistry()
    registry.register_all(widget_registrations())
    registry.freeze()
    return registry


def configure_container(container: Container, settings: Settings = app_settings) -> None:
    """Configure application dependencies."""

    container.register_instance(Settings, settings)

    # Infrastructure services
    container.register(WidgetRepository, lambda c: InMemoryWidgetRepository(), Scope.SINGLETON)

    # CQRS
    container.register(
        ValidatorRegistry,
        lambda c: build_validator_registry(c.resolve(Settings)),
        Scope.SINGLETON,
    )
    container.register(HandlerRegistry, lambda c: build_handler_registry(), Scope.SINGLETON)
    container.register(
        Dispatcher,
        lambda c: Dispatcher(c.resolve(HandlerRegistry), container),
        Scope.SINGLETON,
    )

    # Fail at startup rather than on the first request.
    container.resolve(ValidatorRegistry)
    container.resolve(HandlerRegistry)


def get_configured_container() -> Container:
    """Return a configured container instance."""
    container = Container.get_instance()
    if not container.is_registered(Dispatcher):
        configure_container(container)
    return container
