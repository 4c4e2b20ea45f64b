"""
Database client factory for Firestore.

Builds a Firestore client from the configured Firebase credentials. The
client is created once by the service container at process start and
passed to repositories; nothing here caches it.
"""

import json
import logging
import uuid
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore
from google.auth.exceptions import DefaultCredentialsError
from google.cloud.firestore import Client

from .config import Settings, get_settings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _load_credentials(settings: Settings) -> credentials.Base:
    """
    Resolve Firebase credentials from settings.

    Preference order: inline service-account JSON, key file path,
    application default credentials (only when a project id is set).
    """
    if settings.firebase_service_account:
        try:
            service_account: Any = json.loads(settings.firebase_service_account)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                "FIREBASE_SERVICE_ACCOUNT is not valid JSON",
                details={"reason": str(e)},
            ) from e
        return credentials.Certificate(service_account)

    if settings.google_application_credentials:
        return credentials.Certificate(settings.google_application_credentials)

    if settings.firebase_project_id:
        return credentials.ApplicationDefault()

    raise ConfigurationError(
        "Firestore configuration missing. "
        "Set FIREBASE_SERVICE_ACCOUNT, GOOGLE_APPLICATION_CREDENTIALS "
        "or FIREBASE_PROJECT_ID environment variables."
    )


def create_firestore_client(settings: Settings | None = None) -> Client:
    """
    Create a Firestore client.

    Each call initializes its own named Firebase app, so independent
    containers (and tests) never share a hidden default app.

    Args:
        settings: Settings to read credentials from. Defaults to get_settings().

    Returns:
        Firestore client bound to the configured project

    Raises:
        ConfigurationError: If credentials are missing or malformed
    """
    settings = settings or get_settings()

    try:
        cred = _load_credentials(settings)
        options = {}
        if settings.firebase_project_id:
            options["projectId"] = settings.firebase_project_id
        app = firebase_admin.initialize_app(
            cred,
            options=options,
            name=f"stampcard-{uuid.uuid4().hex[:12]}",
        )
        client = firestore.client(app=app)
    except ConfigurationError:
        raise
    except (ValueError, OSError, DefaultCredentialsError) as e:
        raise ConfigurationError(
            "Invalid Firestore credentials",
            details={"reason": str(e)},
        ) from e

    logger.info("Firestore client created for project %s", client.project)
    return client
