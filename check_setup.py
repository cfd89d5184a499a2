# check_setup.py
"""
Operational check of the property store.

Verifies the database is reachable and holds the properties table, that the
image container exists and serves public reads, and tries to introspect
row-level security policies. Policy introspection is optional: backends
that do not support it only produce a warning.

Usage:
     python check_setup.py
"""
import logging
import sys
from dataclasses import dataclass, field
from typing import Optional

from azure.core.exceptions import AzureError
from sqlalchemy import func, inspect, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from azure_blob import get_image_storage
from config import settings
from database import check_connection, engine
from errors import ConfigurationError
from models import Property
from utils.logging import setup_logging

logger = logging.getLogger("check_setup")

POLICY_QUERY = text(
     "SELECT p.name FROM sys.security_policies p "
     "JOIN sys.security_predicates sp ON sp.object_id = p.object_id "
     "WHERE OBJECT_NAME(sp.target_object_id) = :table"
)


@dataclass
class SetupReport:
     """Outcome of a setup check run."""
     database_ok: bool = False
     table_exists: bool = False
     row_count: Optional[int] = None
     container_exists: bool = False
     container_public: Optional[bool] = None
     policies: Optional[list[str]] = None
     warnings: list[str] = field(default_factory=list)

     @property
     def ok(self) -> bool:
          return self.database_ok and self.table_exists and self.container_exists


def check_database(report: SetupReport, bind: Engine) -> None:
     report.database_ok = check_connection(bind)
     if not report.database_ok:
          return

     report.table_exists = inspect(bind).has_table(Property.__tablename__)
     if not report.table_exists:
          logger.error("properties table is missing; run `alembic upgrade head`")
          return

     with bind.connect() as conn:
          report.row_count = conn.execute(select(func.count()).select_from(Property.__table__)).scalar_one()
     logger.info("properties table present with %d rows", report.row_count)


def check_policies(report: SetupReport, bind: Engine) -> None:
     """Row-level security introspection; unsupported backends only warn."""
     try:
          with bind.connect() as conn:
               rows = conn.execute(POLICY_QUERY, {"table": Property.__tablename__}).all()
     except SQLAlchemyError as exc:
          message = f"Unable to inspect row-level security policies: {exc.__class__.__name__}"
          logger.warning(message)
          report.warnings.append(message)
          return
     report.policies = [row[0] for row in rows]
     logger.info("Row-level security policies: %s", report.policies or "none")


def check_container(report: SetupReport, storage) -> None:
     if storage is None:
          logger.error("Image storage is not configured")
          return
     try:
          report.container_exists = storage.exists()
          if not report.container_exists:
               logger.error("Container %s does not exist", storage.container_name)
               return
          props = storage.properties()
     except AzureError as exc:
          logger.error("Unable to inspect image container: %s", exc)
          report.container_exists = False
          return

     report.container_public = props["public_access"] in ("blob", "container")
     if not report.container_public:
          message = f"Container {storage.container_name} does not allow public reads"
          logger.warning(message)
          report.warnings.append(message)


def run_checks(bind: Engine = engine, storage=None) -> SetupReport:
     report = SetupReport()
     check_database(report, bind)
     if report.database_ok:
          check_policies(report, bind)
     check_container(report, storage)
     return report


def main() -> int:
     setup_logging(settings.log_level, settings.log_format)
     try:
          storage = get_image_storage()
     except ConfigurationError as exc:
          logger.error("%s", exc)
          storage = None

     report = run_checks(engine, storage)
     logger.info("Setup check %s", "passed" if report.ok else "failed")
     return 0 if report.ok else 1


if __name__ == "__main__":
     sys.exit(main())
