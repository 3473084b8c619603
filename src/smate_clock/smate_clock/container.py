from __future__ import annotations

from dataclasses import dataclass
from .auth.authenticator import AuthConfig, Authenticator, JwksAuthenticator
from .clock.mysql_clock_event_repository import MySQLClockEventRepository
from .clock.repository import ClockEventRepository
from .clock.service import ClockLedgerService
from .core.constants import DEFAULT_ROLE_CLAIM, DEFAULT_STORE_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationRegistry
from .reports.service import ReportingService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import IdentityResolver


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    locations_repo: LocationRepository
    events_repo: ClockEventRepository
    authenticator: Authenticator

    identity_resolver: IdentityResolver
    location_registry: LocationRegistry
    clock_service: ClockLedgerService
    reporting_service: ReportingService


def assemble_container(
    *,
    users_repo: UserRepository,
    locations_repo: LocationRepository,
    events_repo: ClockEventRepository,
    authenticator: Authenticator,
) -> Container:
    """Wire services over the given store and authenticator collaborators."""
    location_registry = LocationRegistry(locations_repo)
    return Container(
        users_repo=users_repo,
        locations_repo=locations_repo,
        events_repo=events_repo,
        authenticator=authenticator,
        identity_resolver=IdentityResolver(users_repo),
        location_registry=location_registry,
        clock_service=ClockLedgerService(events_repo, location_registry),
        reporting_service=ReportingService(events_repo),
    )


def build_container(
    *,
    db_config: dict,
    auth_config: dict,
    store_timeout: int = DEFAULT_STORE_TIMEOUT_SECONDS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        timeout_seconds=int(store_timeout),
    )
    conn = DatabaseConnection(config)

    authenticator = JwksAuthenticator(
        AuthConfig(
            issuer=str(auth_config["issuer"]),
            audience=str(auth_config["audience"]),
            role_claim=str(auth_config.get("role_claim") or DEFAULT_ROLE_CLAIM),
            timeout_seconds=int(store_timeout),
        )
    )

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        events_repo=MySQLClockEventRepository(conn),
        authenticator=authenticator,
    )
