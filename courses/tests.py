from io import StringIO

from django.core.management import call_command
from django.test import SimpleTestCase, TestCase

from courses.models import Course, CourseEnrollment, role_can_view_hidden_groups
from groups.models import Group, GroupMembership


class RoleTests(SimpleTestCase):
    def test_only_students_are_restricted(self):
        self.assertFalse(role_can_view_hidden_groups(CourseEnrollment.Role.STUDENT))
        self.assertTrue(role_can_view_hidden_groups(CourseEnrollment.Role.TEACHER))
        self.assertTrue(role_can_view_hidden_groups(CourseEnrollment.Role.NON_EDITING_TEACHER))
        self.assertTrue(role_can_view_hidden_groups("manager"))
        self.assertFalse(role_can_view_hidden_groups(None))


class SeedGroupVisibilityCourseTests(TestCase):
    def test_command_is_idempotent(self):
        call_command("seed_group_visibility_course", stdout=StringIO())
        call_command("seed_group_visibility_course", stdout=StringIO())

        course = Course.objects.get(slug="c1")
        self.assertEqual(course.enrollments.count(), 9)
        self.assertEqual(Group.objects.filter(course=course).count(), 6)
        self.assertEqual(GroupMembership.objects.filter(group__course=course).count(), 11)
        self.assertEqual(
            set(
                Group.objects.filter(course=course, participation=True).values_list(
                    "id_number", flat=True
                )
            ),
            {"VP", "MP"},
        )
