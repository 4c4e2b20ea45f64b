"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. The Firestore client is built once by the container and
handed to every repository; services receive their collaborators through
their constructors instead of reaching for globals.
"""

import logging
from typing import TYPE_CHECKING

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from google.cloud.firestore import Client
    from modules.admin.service import AdminService
    from modules.registration.interfaces import IRegistrationService
    from modules.stamps.interfaces import IStampService
    from modules.stamps.repository import RegistrantRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and cached
    as singletons within the container. A failed Firestore setup is not
    cached, so every request reports the ConfigurationError until the
    process is restarted with valid credentials.

    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._firestore: "Client | None" = None
        self._registrant_repository: "RegistrantRepository | None" = None
        self._stamp_service: "IStampService | None" = None
        self._registration_service: "IRegistrationService | None" = None
        self._admin_service: "AdminService | None" = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def firestore(self) -> "Client":
        """Get the Firestore client, creating it on first access."""
        if self._firestore is None:
            from shared.database import create_firestore_client
            self._firestore = create_firestore_client(self._settings)
        return self._firestore

    @property
    def registrant_repository(self) -> "RegistrantRepository":
        """Get the registrant repository instance."""
        if self._registrant_repository is None:
            from modules.stamps.repository import RegistrantRepository
            self._registrant_repository = RegistrantRepository(self.firestore)
        return self._registrant_repository

    @property
    def stamps(self) -> "IStampService":
        """Get the stamp service instance."""
        if self._stamp_service is None:
            from modules.stamps.service import StampService
            self._stamp_service = StampService(self.registrant_repository)
        return self._stamp_service

    @property
    def registration(self) -> "IRegistrationService":
        """Get the registration service instance."""
        if self._registration_service is None:
            from modules.registration.crypto import FormSGDecryptor
            from modules.registration.service import RegistrationService

            decryptor = None
            if self._settings.formsg_form_secret_key:
                decryptor = FormSGDecryptor(self._settings.formsg_form_secret_key)
            if not self._settings.formsg_webhook_secret:
                logger.info("FORMSG_WEBHOOK_SECRET not set, webhook signatures are not checked")

            self._registration_service = RegistrationService(
                repository=self.registrant_repository,
                domain=self._settings.domain,
                webhook_secret=self._settings.formsg_webhook_secret,
                decryptor=decryptor,
            )
        return self._registration_service

    @property
    def admin(self) -> "AdminService":
        """Get the admin service instance."""
        if self._admin_service is None:
            from modules.admin.service import AdminService
            self._admin_service = AdminService(self.registrant_repository)
        return self._admin_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._firestore = None
        self._registrant_repository = None
        self._stamp_service = None
        self._registration_service = None
        self._admin_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_registrant_repository() -> "RegistrantRepository":
    """FastAPI dependency for the registrant repository."""
    return get_container().registrant_repository


def get_stamp_service() -> "IStampService":
    """FastAPI dependency for stamp service."""
    return get_container().stamps


def get_registration_service() -> "IRegistrationService":
    """FastAPI dependency for registration service."""
    return get_container().registration


def get_admin_service() -> "AdminService":
    """FastAPI dependency for admin service."""
    return get_container().admin
