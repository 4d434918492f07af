"""In-memory course operations.

Every function takes the current list of courses and returns new values;
the input list is never modified and nothing here touches the disk.
"""

import uuid

from .models import Course


def _new_course_id(existing_ids):
    # uuid4 collisions are practically impossible, but regenerate anyway.
    while True:
        course_id = str(uuid.uuid4())
        if course_id not in existing_ids:
            return course_id


def create_course(courses, title, price):
    """
    Append a new course with a fresh identifier.
    Returns (new_courses, course).
    """
    course_id = _new_course_id({c.id for c in courses})
    course = Course(id=course_id, title=title, price=price)
    return list(courses) + [course], course


def list_courses(courses):
    return list(courses)


def find_course_by_id(courses, course_id):
    """Return the first course whose id equals course_id, or None."""
    for course in courses:
        if course.id == course_id:
            return course
    return None


def update_course_by_id(courses, course_id, changes):
    """
    Apply a CourseUpdate to the course with the given id.
    Returns (new_courses, updated_course), or None if no course matches.
    """
    for idx, course in enumerate(courses):
        if course.id == course_id:
            updated = changes.apply(course)
            new_courses = list(courses)
            new_courses[idx] = updated
            return new_courses, updated
    return None


def delete_course_by_id(courses, course_id):
    """
    Remove the course with the given id.
    Returns (new_courses, removed). Removing an unknown id is a no-op.
    """
    new_courses = [c for c in courses if c.id != course_id]
    return new_courses, len(new_courses) != len(courses)
