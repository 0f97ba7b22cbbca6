"""Tests for platform wiring."""

import signal
import socket

import pytest
import requests

from courseboard.core.config import PlatformConfig
from courseboard.core.exceptions import NetworkError
from courseboard.main import CourseBoardPlatform, install_signal_handlers


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestCourseBoardPlatform:

    def test_without_snapshots(self):
        platform = CourseBoardPlatform(PlatformConfig())
        assert platform.snapshot_manager is None
        assert platform.save_snapshot() is False

    def test_state_survives_restart(self, tmp_path):
        config = PlatformConfig(snapshot_path=str(tmp_path / "state.json"))

        first = CourseBoardPlatform(config)
        first.create_sample_data()
        assert first.save_snapshot() is True

        second = CourseBoardPlatform(config)
        assert [c.to_dict() for c in second.service.get_courses()] == \
            [c.to_dict() for c in first.service.get_courses()]
        assert second.service.get_vote_requests() == first.service.get_vote_requests()
        assert second.service.get_enrollments() == first.service.get_enrollments()

    def test_mutations_persist_without_clean_shutdown(self, tmp_path):
        config = PlatformConfig(snapshot_path=str(tmp_path / "state.json"))

        first = CourseBoardPlatform(config)
        course = first.service.create_course("Math", "intro")
        vote = first.service.create_vote_request(course.id)
        first.service.vote_up(vote.id)
        first.service.enroll_student("S", course.id)
        first.service.enroll_student("T", course.id)
        first.service.dropout_student("T", course.id)
        # No stop_platform or save_snapshot: the process just goes away.

        second = CourseBoardPlatform(config)
        assert second.service.get_courses() == [course]
        assert [v.to_dict() for v in second.service.get_vote_requests()] == [
            {'id': vote.id, 'course_id': course.id, 'upvotes': 1, 'downvotes': 0}
        ]
        assert [e.student_id for e in second.service.get_enrollments()] == ["S"]

    def test_strict_flag_reaches_service(self):
        platform = CourseBoardPlatform(PlatformConfig(strict_references=True))
        assert platform.service.strict_references is True

    def test_stop_when_not_running_is_harmless(self):
        platform = CourseBoardPlatform(PlatformConfig())
        platform.stop_platform()
        assert not platform.is_running


class TestRestServerLifecycle:

    def test_start_serves_requests_and_stops(self):
        port = _free_port()
        platform = CourseBoardPlatform(PlatformConfig(host="127.0.0.1", log_level="warning"))
        platform.start_platform(port)
        try:
            assert platform.is_running
            response = requests.get(f"http://127.0.0.1:{port}/health", timeout=5)
            assert response.status_code == 200
        finally:
            platform.stop_platform()
        assert not platform.is_running

    def test_port_in_use_is_reported(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
            blocker.bind(("127.0.0.1", 0))
            blocker.listen(1)
            port = blocker.getsockname()[1]

            platform = CourseBoardPlatform(PlatformConfig(host="127.0.0.1", log_level="critical"))
            with pytest.raises(NetworkError):
                platform.start_platform(port)
            assert not platform.is_running


class TestSignalHandling:

    def test_sigterm_raises_system_exit(self):
        previous = signal.getsignal(signal.SIGTERM)
        try:
            install_signal_handlers()
            handler = signal.getsignal(signal.SIGTERM)
            with pytest.raises(SystemExit):
                handler(signal.SIGTERM, None)
        finally:
            signal.signal(signal.SIGTERM, previous)
