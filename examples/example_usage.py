"""Example: drive a resource controller without Flask.

Controllers are thin; the create/refresh/feedback flow lives in the resources layer.
"""

import importlib

from config import get_settings_module

from src.sismog.sismog.container import build_container
from src.sismog.sismog.resources.feedback import FeedbackChannel


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    feedback = FeedbackChannel()
    companies = container.controller(container.companies, feedback)
    companies.mount()
    companies.open_create()
    companies.form.update("name", "Acme Ltda")
    companies.form.submit()

    print(feedback.current)
    companies.set_search("acme")
    for company in companies.rows():
        print(company)


if __name__ == "__main__":
    main()
