"""
Main entry point for the Coursebook platform.
"""

import argparse
import logging
from typing import Optional

from .config import CoursebookConfig, load_config
from .core.enums import GradeKind
from .core.exceptions import CoursebookException, ConfigurationError
from .services import CourseService
from .api.rest_api import CoursebookRestAPI

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


class CoursebookPlatform:
    """Wires the course service and its REST API from configuration."""

    def __init__(self, config: Optional[CoursebookConfig] = None):
        self._config = config or CoursebookConfig()
        self._service = CourseService(
            name=self._config.course_name,
            term=self._config.term,
            owner=self._config.owner
        )
        self._rest_api = CoursebookRestAPI(self._service)
        logger.info("Coursebook platform initialized for %s (%s)",
                    self._config.course_name, self._config.term)

    @property
    def config(self) -> CoursebookConfig:
        return self._config

    @property
    def service(self) -> CourseService:
        return self._service

    @property
    def app(self):
        return self._rest_api.app

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        """Serve the REST API until interrupted."""
        import uvicorn

        host = host or self._config.rest_host
        port = port or self._config.rest_port
        logger.info("REST API listening on http://%s:%s (docs at /docs)", host, port)
        uvicorn.run(self.app, host=host, port=port, log_level=self._config.log_level.lower())

    def run_demo(self) -> None:
        """Walk one course through its whole lifecycle."""
        service = self._service
        owner = self._config.owner

        service.set_coordinator(owner, "coordinator")
        service.add_teacher(owner, "teacher", "Ada Lovelace")
        service.enroll_by_admin(owner, "alice", "Alice", "DOC-001", "alice@example.edu")
        service.self_enroll("bob", "Bob", "DOC-002", "bob@example.edu")

        service.create_evaluation("teacher", "Midterm", 1767225600, 60, 5)
        service.create_evaluation("teacher", "Final exam", 1772323200, 40, 5)

        service.set_grade("teacher", "alice", 0, GradeKind.NUMERIC, 8)
        service.set_grade("teacher", "alice", 1, GradeKind.NUMERIC, 6)
        service.set_grade("teacher", "bob", 0, GradeKind.NUMERIC, 8)
        service.set_grade("teacher", "bob", 1, GradeKind.NOT_PRESENTED)

        service.close("coordinator")

        print("\n=== Course Statistics ===")
        print(service.get_statistics().to_dict())
        print("\n=== Final Grades ===")
        for identity in service.enrolled_students():
            final = service.compute_final_for(identity)
            print(f"{identity}: {final.display}")

        try:
            service.add_teacher(owner, "late", "Late Teacher")
        except CoursebookException as e:
            print(f"\nAfter closing, add_teacher fails with {e.error_code}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Coursebook course record service")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--host", type=str, help="REST server host")
    parser.add_argument("--port", type=int, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        parser.error(e.message)

    configure_logging(config.log_level)
    platform = CoursebookPlatform(config)

    if args.demo:
        platform.run_demo()
    else:
        platform.start_rest_server(args.host, args.port)


if __name__ == "__main__":
    main()
