"""
Courseboard: course listings, community vote requests and enrollments

A small state service for an online-course platform. Courses are proposed,
put to a community vote, and students enroll in them. All records live in
memory and can optionally be snapshotted to disk between restarts.
"""

__version__ = "1.0.0"
__author__ = "Courseboard Development Team"
__description__ = "State service for course listings, vote requests and enrollments"
