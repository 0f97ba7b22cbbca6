"""
Script to add sample data to the Courseboard service via REST API.
Make sure the server is running before executing this script.

Usage:
    python add_data.py
"""

import requests
import sys
import os


def _console_supports_utf8() -> bool:
    enc = getattr(sys.stdout, "encoding", None)
    return enc is not None and "utf" in enc.lower()


_OK_CHAR = "✓" if _console_supports_utf8() else "[OK]"
_FAIL_CHAR = "✗" if _console_supports_utf8() else "[FAIL]"


def _detect_base_url() -> str:
    """Determine a reachable BASE_URL.

    Priority: environment variable `COURSEBOARD_BASE_URL`, then common local ports.
    If nothing responds, fall back to http://127.0.0.1:8000.
    """
    env = os.environ.get("COURSEBOARD_BASE_URL")
    if env:
        return env

    candidates = [
        "http://127.0.0.1:8000",
        "http://127.0.0.1:8888",
        "http://localhost:8000",
        "http://localhost:8888",
    ]

    for c in candidates:
        try:
            resp = requests.get(f"{c}/health", timeout=0.5)
            if resp.status_code == 200:
                return c
        except requests.exceptions.RequestException:
            continue

    return candidates[0]


BASE_URL = _detect_base_url()

def check_server():
    """Check if the server is running."""
    try:
        response = requests.get(f"{BASE_URL}/health", timeout=2)
        if response.status_code == 200:
            print(f"{_OK_CHAR} Server is running")
            return True
    except requests.exceptions.RequestException:
        pass
    print(f"{_FAIL_CHAR} Server is not running!")
    print("\nPlease start the server first:")
    print("  python -m courseboard.main --rest-port 8888")
    return False

def _post(path, data=None, expected=200):
    """POST to the API, returning the decoded body or None on failure."""
    try:
        response = requests.post(f"{BASE_URL}{path}", json=data, timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error calling {path}: {e}")
        return None
    if response.status_code != expected:
        print(f"{_FAIL_CHAR} {path} failed: {response.text}")
        return None
    return response.json()

def create_course(title, description):
    """Create a new course."""
    course = _post("/courses", {"title": title, "description": description}, expected=201)
    if course:
        print(f"{_OK_CHAR} Created course [{course['id']}]: {title}")
    return course

def create_vote_request(course_id):
    """Open a vote request for a course."""
    vote = _post("/vote-requests", {"course_id": course_id}, expected=201)
    if vote:
        print(f"{_OK_CHAR} Opened vote request [{vote['id']}] for course {course_id}")
    return vote

def cast_votes(vote_id, up=0, down=0):
    """Cast a number of up- and downvotes on a vote request."""
    for _ in range(up):
        _post(f"/vote-requests/{vote_id}/upvote")
    for _ in range(down):
        _post(f"/vote-requests/{vote_id}/downvote")
    print(f"{_OK_CHAR} Vote request {vote_id}: +{up} / -{down}")

def enroll_student(student_id, course_id):
    """Enroll a student in a course."""
    enrollment = _post("/enrollments", {"student_id": student_id, "course_id": course_id}, expected=201)
    if enrollment:
        print(f"{_OK_CHAR} Enrolled {student_id} in course {course_id}")
    return enrollment

def _get(path):
    try:
        response = requests.get(f"{BASE_URL}{path}", timeout=5)
    except requests.exceptions.RequestException as e:
        print(f"{_FAIL_CHAR} Error calling {path}: {e}")
        return None
    if response.status_code != 200:
        print(f"{_FAIL_CHAR} {path} failed: {response.text}")
        return None
    return response.json()

def list_courses():
    """List all courses."""
    courses = _get("/courses") or []
    print(f"\n{'='*60}")
    print(f"Courses ({len(courses)})")
    print(f"{'='*60}")
    for course in courses:
        print(f"  {course['id']:>6} | {course['title']:25} | {course['description']}")
    return courses

def list_vote_requests():
    """List all vote requests."""
    votes = _get("/vote-requests") or []
    print(f"\n{'='*60}")
    print(f"Vote Requests ({len(votes)})")
    print(f"{'='*60}")
    for vote in votes:
        print(f"  {vote['id']:>6} | course {vote['course_id']:>6} | +{vote['upvotes']} / -{vote['downvotes']}")
    return votes

def get_statistics():
    """Get system statistics."""
    stats = _get("/statistics")
    if stats:
        print(f"\n{'='*60}")
        print("System Statistics")
        print(f"{'='*60}")
        for key, value in stats.get('statistics', {}).items():
            print(f"  {key:20}: {value}")
    return stats

def main():
    """Main execution."""
    print("="*60)
    print("Courseboard - Data Addition Script")
    print("="*60)
    print()

    # Check if server is running
    if not check_server():
        sys.exit(1)

    print("\n" + "="*60)
    print("Adding Sample Data...")
    print("="*60 + "\n")

    # Create courses
    print("Creating courses...")
    courses = []
    courses.append(create_course("Introduction to Programming", "Learn Python programming basics"))
    courses.append(create_course("Data Structures", "Advanced data structures and algorithms"))
    courses.append(create_course("Calculus I", "Differential calculus"))
    courses.append(create_course("English Composition", "Academic writing skills"))

    # Proposals put to a community vote
    print("\nOpening vote requests...")
    if courses[1]:
        vote = create_vote_request(courses[1]['id'])
        if vote:
            cast_votes(vote['id'], up=5, down=1)
    if courses[3]:
        vote = create_vote_request(courses[3]['id'])
        if vote:
            cast_votes(vote['id'], up=1, down=4)

    # Enroll students
    print("\nEnrolling students...")
    if courses[0]:
        enroll_student("S001", courses[0]['id'])
        enroll_student("S002", courses[0]['id'])
    if courses[2]:
        enroll_student("S001", courses[2]['id'])
        enroll_student("S003", courses[2]['id'])

    # Display results
    list_courses()
    list_vote_requests()
    get_statistics()

    print("\n" + "="*60)
    print(f"{_OK_CHAR} Sample data added successfully!")
    print("="*60)
    print("\nYou can now:")
    print(f"  - View API docs: {BASE_URL}/docs")
    print(f"  - List courses: curl {BASE_URL}/courses")
    print(f"  - List vote requests: curl {BASE_URL}/vote-requests")
    print(f"  - Get statistics: curl {BASE_URL}/statistics")
    print()

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n\n{_FAIL_CHAR} Interrupted by user")
        sys.exit(1)
