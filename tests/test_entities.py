"""Tests for the record types."""

import pytest

from courseboard.core.entities import Course, VoteRequest, Enrollment
from courseboard.core.enums import MAX_RECORD_ID, MAX_VOTE_COUNT, VoteDirection
from courseboard.core.exceptions import ValidationError


class TestCourse:

    def test_course_is_immutable(self):
        course = Course(id=1, title="Math", description="intro")
        with pytest.raises(AttributeError):
            course.title = "Physics"

    def test_from_dict_requires_all_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            Course.from_dict({"id": 1, "title": "Math"})
        assert exc_info.value.details["missing"] == ["description"]


class TestVoteRequest:

    def test_new_request_has_zero_counters(self):
        vote = VoteRequest(7, 3)
        assert (vote.upvotes, vote.downvotes) == (0, 0)

    def test_vote_increments_one_counter(self):
        vote = VoteRequest(7, 3)
        vote.vote(VoteDirection.UP)
        vote.vote(VoteDirection.UP)
        vote.vote(VoteDirection.DOWN)
        assert (vote.upvotes, vote.downvotes) == (2, 1)

    def test_counters_saturate_instead_of_wrapping(self):
        vote = VoteRequest(7, 3, upvotes=MAX_VOTE_COUNT, downvotes=MAX_VOTE_COUNT - 1)
        vote.vote(VoteDirection.UP)
        vote.vote(VoteDirection.DOWN)
        vote.vote(VoteDirection.DOWN)
        assert vote.upvotes == MAX_VOTE_COUNT
        assert vote.downvotes == MAX_VOTE_COUNT

    def test_copy_is_detached(self):
        vote = VoteRequest(7, 3)
        snapshot = vote.copy()
        vote.vote(VoteDirection.UP)
        assert snapshot.upvotes == 0

    def test_from_dict_rejects_out_of_range_counters(self):
        with pytest.raises(ValidationError):
            VoteRequest.from_dict({"id": 1, "course_id": 2, "upvotes": -1, "downvotes": 0})
        with pytest.raises(ValidationError):
            VoteRequest.from_dict({"id": 1, "course_id": 2, "upvotes": 0, "downvotes": MAX_VOTE_COUNT + 1})


class TestEnrollment:

    def test_matches_exact_pair_only(self):
        enrollment = Enrollment(student_id="alice", course_id=4)
        assert enrollment.matches("alice", 4)
        assert not enrollment.matches("Alice", 4)
        assert not enrollment.matches("alice", 5)

    def test_duplicates_compare_equal(self):
        assert Enrollment("alice", 4) == Enrollment("alice", 4)


class TestRecordParsing:

    @pytest.mark.parametrize("data", [
        {"id": 1, "title": None, "description": "intro"},
        {"id": 1, "title": "Math", "description": 42},
        {"id": True, "title": "Math", "description": "intro"},
        {"id": "1", "title": "Math", "description": "intro"},
        {"id": -1, "title": "Math", "description": "intro"},
        {"id": MAX_RECORD_ID + 1, "title": "Math", "description": "intro"},
    ])
    def test_course_rejects_wrong_types_and_ranges(self, data):
        with pytest.raises(ValidationError):
            Course.from_dict(data)

    def test_course_accepts_largest_id(self):
        assert Course.from_dict({"id": MAX_RECORD_ID, "title": "", "description": ""}).id == MAX_RECORD_ID

    @pytest.mark.parametrize("field,value", [
        ("id", MAX_RECORD_ID + 1),
        ("course_id", -5),
        ("course_id", None),
        ("upvotes", True),
        ("downvotes", 1.5),
    ])
    def test_vote_request_rejects_bad_fields(self, field, value):
        data = {"id": 1, "course_id": 2, "upvotes": 0, "downvotes": 0}
        data[field] = value
        with pytest.raises(ValidationError) as exc_info:
            VoteRequest.from_dict(data)
        assert exc_info.value.details["field"] == field

    @pytest.mark.parametrize("data", [
        {"student_id": None, "course_id": 1},
        {"student_id": 7, "course_id": 1},
        {"student_id": "alice", "course_id": False},
        {"student_id": "alice", "course_id": MAX_RECORD_ID + 1},
    ])
    def test_enrollment_rejects_wrong_types_and_ranges(self, data):
        with pytest.raises(ValidationError):
            Enrollment.from_dict(data)
