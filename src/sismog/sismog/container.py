from __future__ import annotations

from dataclasses import dataclass

from .companies.definition import CompanyDefinition
from .core.constants import MIN_PASSWORD_LENGTH
from .database.connection import DBConfig, DatabaseConnection
from .employees.definition import EmployeeDefinition
from .identity.mysql_credential_repository import MySQLCredentialRepository
from .identity.service import IdentityService
from .penalties.definition import PenaltyDefinition
from .profiles.definition import ProfileDefinition
from .remote.client import CollectionClient
from .remote.mysql_collection_client import MySQLCollectionClient
from .resources.controller import ResourceController
from .resources.definition import ResourceDefinition
from .resources.feedback import FeedbackChannel


@dataclass(frozen=True)
class Container:
    client: CollectionClient
    identity: IdentityService

    companies: ResourceDefinition
    employees: ResourceDefinition
    penalties: ResourceDefinition

    min_password_length: int = MIN_PASSWORD_LENGTH

    def controller(self, definition: ResourceDefinition, feedback: FeedbackChannel) -> ResourceController:
        """A fresh controller per page view; collaborators are passed in, never global."""
        return ResourceController(definition, self.client, feedback)

    def profile_controller(self, email: str, feedback: FeedbackChannel) -> ResourceController:
        definition = ProfileDefinition(self.identity, email, min_password_length=self.min_password_length)
        return ResourceController(definition, self.client, feedback)


def build_container(*, db_config: dict, min_password_length: int = MIN_PASSWORD_LENGTH) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    client = MySQLCollectionClient(conn)
    identity = IdentityService(MySQLCredentialRepository(conn), min_password_length=min_password_length)

    return Container(
        client=client,
        identity=identity,
        companies=CompanyDefinition(),
        employees=EmployeeDefinition(),
        penalties=PenaltyDefinition(),
        min_password_length=min_password_length,
    )
