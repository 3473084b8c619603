"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the clock rules live in the services.
"""

import importlib

from smate_clock.config import get_settings_module
from smate_clock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, auth_config=settings.AUTH_CONFIG)

    manager = container.users_repo.get_by_subject("auth0|manager-placeholder")
    report = container.reporting_service.build_hours_report(manager, window_days=7)
    print(report.to_dict())

    for event in container.clock_service.list_currently_clocked_in(manager):
        print(event.user.display_name, "since", event.timestamp.isoformat())


if __name__ == "__main__":
    main()
