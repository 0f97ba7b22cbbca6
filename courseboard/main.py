"""
Main entry point for the Courseboard platform.
"""

import logging
import signal
import threading
import time
from typing import Optional

from .core.config import PlatformConfig, load_config
from .core.exceptions import NetworkError
from .core.logging_config import setup_logging
from .persistence import SnapshotManager
from .services import CourseBoardService
from .api.rest_api import CourseBoardRestAPI

logger = logging.getLogger(__name__)


class CourseBoardPlatform:
    """Main platform class that wires the service, persistence and REST API."""

    def __init__(self, config: Optional[PlatformConfig] = None):
        self._config = config or PlatformConfig()
        self._service = None
        self._snapshot_manager = None
        self._rest_api = None
        self._rest_server = None
        self._rest_thread = None
        self._running = False

        # Initialize platform
        self._initialize_platform()

    @property
    def service(self) -> CourseBoardService:
        return self._service

    @property
    def snapshot_manager(self) -> Optional[SnapshotManager]:
        return self._snapshot_manager

    @property
    def app(self):
        return self._rest_api.app

    @property
    def is_running(self) -> bool:
        return self._running

    def _initialize_platform(self):
        """Initialize the platform with all services."""
        setup_logging(self._config.log_level, self._config.log_file)
        logger.info("Initializing Courseboard platform...")

        self._service = CourseBoardService(strict_references=self._config.strict_references)
        logger.info("Course board service initialized (strict_references=%s)",
                    self._config.strict_references)

        if self._config.snapshot_path:
            self._snapshot_manager = SnapshotManager(self._config.snapshot_path)
            self._snapshot_manager.load(self._service)
            # Every mutation is persisted before its caller sees the result.
            self._service.add_mutation_listener(self._on_mutation)
        else:
            logger.info("Snapshots disabled, state lives in memory only")

        self._rest_api = CourseBoardRestAPI(self._service)
        logger.info("Courseboard platform initialized")

    def _on_mutation(self, operation: str) -> None:
        logger.debug("Persisting state after %s", operation)
        self._snapshot_manager.save(self._service)

    def save_snapshot(self) -> bool:
        """Persist current state if snapshots are enabled."""
        if self._snapshot_manager is None:
            return False
        self._snapshot_manager.save(self._service)
        return True

    def start_rest_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """Start the REST server in a background thread.

        Blocks until the server accepts connections. Raises ``NetworkError``
        if the server thread dies first (for example when the port is taken)
        or does not come up within ``startup_timeout`` seconds.
        """
        if self._rest_thread is not None and self._rest_thread.is_alive():
            logger.warning("REST server already running")
            return

        import uvicorn

        host = host or self._config.host
        port = port or self._config.rest_port

        server = uvicorn.Server(uvicorn.Config(
            self._rest_api.app,
            host=host,
            port=port,
            log_level=self._config.log_level.lower()
        ))
        thread = threading.Thread(target=server.run, daemon=True)
        thread.start()

        deadline = time.monotonic() + self._config.startup_timeout
        while not server.started:
            if not thread.is_alive():
                raise NetworkError(f"REST server failed to start on {host}:{port}",
                                   error_code="SERVER_START_FAILED")
            if time.monotonic() > deadline:
                server.should_exit = True
                thread.join(timeout=5)
                raise NetworkError(f"REST server did not start on {host}:{port} "
                                   f"within {self._config.startup_timeout}s",
                                   error_code="SERVER_START_TIMEOUT")
            time.sleep(0.05)

        self._rest_server = server
        self._rest_thread = thread
        logger.info("REST server started on %s:%d", host, port)

    def stop_rest_server(self):
        """Ask the REST server to exit and wait for its thread."""
        if self._rest_server is None:
            return
        self._rest_server.should_exit = True
        self._rest_thread.join(timeout=10)
        self._rest_server = None
        self._rest_thread = None
        logger.info("REST server stopped")

    def start_platform(self, rest_port: Optional[int] = None):
        """Start the entire platform."""
        if self._running:
            logger.warning("Platform already running")
            return

        self.start_rest_server(port=rest_port)

        self._running = True
        port = rest_port or self._config.rest_port
        logger.info("Courseboard platform started: REST API http://localhost:%d (docs at /docs)", port)

    def stop_platform(self):
        """Stop the platform, writing a final snapshot."""
        if not self._running:
            logger.info("Platform not running")
            return

        logger.info("Stopping Courseboard platform...")
        self.stop_rest_server()
        if self.save_snapshot():
            logger.info("Final snapshot written")

        self._running = False
        logger.info("Courseboard platform stopped")

    def create_sample_data(self):
        """Create sample data for demonstration."""
        logger.info("Creating sample data...")

        math = self._service.create_course("Math", "intro")
        physics = self._service.create_course("Physics", "Mechanics and waves")

        vote = self._service.create_vote_request(physics.id)
        for _ in range(3):
            self._service.vote_up(vote.id)
        self._service.vote_down(vote.id)

        self._service.enroll_student("student-alice", math.id)
        self._service.enroll_student("student-bob", math.id)
        self._service.enroll_student("student-alice", physics.id)

        logger.info("Sample data created")

    def run_demo(self):
        """Run a demonstration of the platform."""
        logger.info("Running Courseboard demonstration...")

        self.create_sample_data()

        print("\n=== Courses ===")
        for course in self._service.get_courses():
            print(f"  [{course.id}] {course.title}: {course.description}")

        print("\n=== Vote Requests ===")
        for vote in self._service.get_vote_requests():
            print(f"  [{vote.id}] course {vote.course_id}: +{vote.upvotes} / -{vote.downvotes}")

        print("\n=== Enrollments ===")
        for enrollment in self._service.get_enrollments():
            print(f"  {enrollment.student_id} -> course {enrollment.course_id}")

        print(f"\nStatistics: {self._service.get_statistics()}")

        self.save_snapshot()
        logger.info("Demo completed")


def _exit_on_sigterm(signum, frame):
    raise SystemExit(0)


def install_signal_handlers():
    """Turn SIGTERM into ``SystemExit`` so shutdown code in ``finally`` runs."""
    signal.signal(signal.SIGTERM, _exit_on_sigterm)


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Courseboard course and enrollment service")
    parser.add_argument("--rest-port", type=int, default=None, help="REST server port")
    parser.add_argument("--demo", action="store_true", help="Run demo mode")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--snapshot", type=str, help="Snapshot file path (enables persistence)")

    args = parser.parse_args()

    # Load configuration
    config = load_config(args.config)
    if args.snapshot:
        config.snapshot_path = args.snapshot

    # Create and start platform
    platform = CourseBoardPlatform(config)
    install_signal_handlers()

    try:
        if args.demo:
            platform.run_demo()
        else:
            platform.start_platform(args.rest_port)

            # Keep running
            print("\nPlatform is running. Press Ctrl+C to stop.")
            while True:
                time.sleep(1)

    except KeyboardInterrupt:
        print("\nShutting down...")
    finally:
        platform.stop_platform()


if __name__ == "__main__":
    main()
