"""Tests for the course, vote request and enrollment stores."""

from courseboard.core.entities import Enrollment
from courseboard.services.course_store import CourseStore
from courseboard.services.enrollment_store import EnrollmentStore
from courseboard.services.id_generator import SequentialIdGenerator
from courseboard.services.vote_request_store import VoteRequestStore


class TestCourseStore:

    def test_create_appends_in_order(self):
        store = CourseStore(SequentialIdGenerator())
        first = store.create("Math", "intro")
        second = store.create("", "")
        assert store.list() == [first, second]
        assert first.id != second.id

    def test_list_returns_a_copy(self):
        store = CourseStore(SequentialIdGenerator())
        store.create("Math", "intro")
        listing = store.list()
        listing.clear()
        assert len(store) == 1

    def test_find(self):
        store = CourseStore(SequentialIdGenerator())
        course = store.create("Math", "intro")
        assert store.find(course.id) == course
        assert store.find(course.id + 1) is None


class TestVoteRequestStore:

    def test_create_starts_at_zero(self):
        store = VoteRequestStore(SequentialIdGenerator())
        vote = store.create(course_id=999)
        assert (vote.course_id, vote.upvotes, vote.downvotes) == (999, 0, 0)

    def test_vote_on_unknown_id_is_noop(self):
        store = VoteRequestStore(SequentialIdGenerator())
        vote = store.create(course_id=1)
        assert store.upvote(vote.id + 100) is False
        assert store.downvote(vote.id + 100) is False
        assert store.list()[0].upvotes == 0
        assert store.list()[0].downvotes == 0

    def test_vote_reports_hit(self):
        store = VoteRequestStore(SequentialIdGenerator())
        vote = store.create(course_id=1)
        assert store.upvote(vote.id) is True
        assert store.downvote(vote.id) is True

    def test_listed_requests_do_not_track_later_votes(self):
        store = VoteRequestStore(SequentialIdGenerator())
        vote = store.create(course_id=1)
        before = store.list()
        store.upvote(vote.id)
        assert before[0].upvotes == 0
        assert store.list()[0].upvotes == 1

    def test_decline_removes_and_is_idempotent(self):
        store = VoteRequestStore(SequentialIdGenerator())
        keep = store.create(course_id=1)
        drop = store.create(course_id=2)
        assert store.decline(drop.id) == 1
        assert store.decline(drop.id) == 0
        assert [v.id for v in store.list()] == [keep.id]


class TestEnrollmentStore:

    def test_duplicates_permitted(self):
        store = EnrollmentStore()
        store.enroll("alice", 1)
        store.enroll("alice", 1)
        assert store.list() == [Enrollment("alice", 1), Enrollment("alice", 1)]

    def test_dropout_removes_every_copy(self):
        store = EnrollmentStore()
        store.enroll("alice", 1)
        store.enroll("bob", 1)
        store.enroll("alice", 1)
        store.enroll("alice", 2)
        assert store.dropout("alice", 1) == 2
        assert store.list() == [Enrollment("bob", 1), Enrollment("alice", 2)]

    def test_dropout_without_match_is_noop(self):
        store = EnrollmentStore()
        store.enroll("alice", 1)
        assert store.dropout("alice", 2) == 0
        assert store.dropout("bob", 1) == 0
        assert len(store) == 1

    def test_list_by_student_is_case_sensitive_and_ordered(self):
        store = EnrollmentStore()
        store.enroll("alice", 3)
        store.enroll("Alice", 1)
        store.enroll("alice", 1)
        store.enroll("bob", 2)
        assert store.list_by_student("alice") == [Enrollment("alice", 3), Enrollment("alice", 1)]
        assert store.list_by_student("Alice") == [Enrollment("Alice", 1)]
        assert store.list_by_student("carol") == []
