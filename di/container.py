from __future__ import annotations

import structlog
from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource


logger = structlog.get_logger("messaging")


class InfrastructureContainer(containers.DeclarativeContainer):
    config = providers.Configuration()
    settings = providers.Object(SETTINGS)
    logger = providers.Object(logger)

    # Database
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    # Users
    user_service = providers.Factory(
        "api.features.users.service.UserService",
        database=infrastructure.database,
    )

    identity_resolver = providers.Factory(
        "api.features.users.identity.IdentityResolver",
        user_service=user_service,
    )

    # Messages
    conversation_store = providers.Factory(
        "api.features.messages.store.ConversationStore",
        database=infrastructure.database,
    )

    conversation_enricher = providers.Factory(
        "api.features.messages.enricher.ConversationEnricher",
        user_service=user_service,
        concurrency=SETTINGS.MESSAGING.MESSAGING_ENRICHMENT_CONCURRENCY,
    )

    messaging_service = providers.Factory(
        "api.features.messages.service.MessagingService",
        store=conversation_store,
        enricher=conversation_enricher,
        identity_resolver=identity_resolver,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    messaging_controller = providers.Factory(
        "api.features.messages.controller.MessagingController",
        messaging_service=services.messaging_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.shared.context",
            "api.features.users.router",
            "api.features.session.router",
            "api.features.messages.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
