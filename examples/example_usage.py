"""Example: use the service layer without Flask.

Controllers are a thin layer; the access rules live in the services.
"""

import importlib
import sys

from travel_desk.access.resolver import home_path_for, resolve_effective_role
from travel_desk.container import build_container
from travel_desk.settings import get_settings_module


def main(email: str):
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    user = container.users_repo.get_by_email(email.strip().lower())
    role = resolve_effective_role(user)
    print(f"{email}: effective_role={role.value if role else None} home={home_path_for(role)}")
    for path in ("/manager", "/pm", "/operations", "/admin"):
        print(path, container.access_controller.check(user, path).to_dict())


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "admin@example.com")
