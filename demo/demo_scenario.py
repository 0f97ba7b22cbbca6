#!/usr/bin/env python3
"""
Demo scenario for the Courseboard service.
"""

import sys
import os
import tempfile

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from courseboard.main import CourseBoardPlatform
from courseboard.core.config import PlatformConfig
from courseboard.services import CourseBoardService
from courseboard.persistence import SnapshotManager


def run_demo():
    """Run a walk-through of every Courseboard operation."""
    print("=" * 60)
    print("COURSEBOARD - DEMO")
    print("=" * 60)

    snapshot_dir = tempfile.mkdtemp(prefix="courseboard-demo-")
    config = PlatformConfig(
        snapshot_path=os.path.join(snapshot_dir, "state.json"),
        log_level="WARNING"
    )

    platform = CourseBoardPlatform(config)

    print("\n1. Creating courses...")
    courses = create_courses(platform)

    print("\n2. Demonstrating community votes...")
    demonstrate_voting(platform, courses)

    print("\n3. Demonstrating enrollment...")
    demonstrate_enrollment(platform, courses)

    print("\n4. Demonstrating snapshots...")
    demonstrate_snapshots(platform, config)

    print("\n5. Statistics...")
    for key, value in platform.service.get_statistics().items():
        print(f"  {key}: {value}")

    print("\n" + "=" * 60)
    print("DEMO COMPLETED SUCCESSFULLY!")
    print("=" * 60)


def create_courses(platform):
    """Create a handful of courses."""
    service = platform.service
    courses = [
        service.create_course("Math", "intro"),
        service.create_course("Data Structures and Algorithms",
                              "Advanced programming concepts and data structures"),
        service.create_course("Linear Algebra", "Vector spaces and linear transformations"),
    ]
    for course in service.get_courses():
        print(f"  [{course.id}] {course.title}")
    return courses


def demonstrate_voting(platform, courses):
    """Vote on proposals, then decline one of them."""
    service = platform.service
    math_vote = service.create_vote_request(courses[0].id)
    algebra_vote = service.create_vote_request(courses[2].id)

    for _ in range(3):
        service.vote_up(math_vote.id)
    service.vote_down(math_vote.id)

    service.vote_down(algebra_vote.id)
    service.vote_down(algebra_vote.id)

    # Unknown ids are ignored
    service.vote_up(10 ** 9)

    for vote in service.get_vote_requests():
        print(f"  [{vote.id}] course {vote.course_id}: +{vote.upvotes} / -{vote.downvotes}")

    print(f"  Declining vote request {algebra_vote.id}...")
    service.decline_vote_request(algebra_vote.id)
    service.decline_vote_request(algebra_vote.id)
    print(f"  Remaining vote requests: {len(service.get_vote_requests())}")


def demonstrate_enrollment(platform, courses):
    """Enroll, enroll twice, and drop out."""
    service = platform.service
    service.enroll_student("S001", courses[0].id)
    service.enroll_student("S001", courses[0].id)
    service.enroll_student("S001", courses[1].id)
    service.enroll_student("s001", courses[1].id)

    print(f"  S001 enrollments: {len(service.get_enrollments_by_student('S001'))}")
    print(f"  s001 enrollments: {len(service.get_enrollments_by_student('s001'))}")

    service.dropout_student("S001", courses[0].id)
    remaining = service.get_enrollments_by_student("S001")
    print(f"  After dropout from course {courses[0].id}: "
          f"{[e.course_id for e in remaining]}")


def demonstrate_snapshots(platform, config):
    """Save state and restore it into a fresh service."""
    platform.save_snapshot()
    print(f"  Snapshot written to {config.snapshot_path}")

    restored = CourseBoardService()
    SnapshotManager(config.snapshot_path).load(restored)
    print(f"  Restored courses: {len(restored.get_courses())}, "
          f"vote requests: {len(restored.get_vote_requests())}, "
          f"enrollments: {len(restored.get_enrollments())}")

    course = restored.create_course("Physics", "Mechanics")
    print(f"  Next id after restore: {course.id}")


if __name__ == "__main__":
    run_demo()
