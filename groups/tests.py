"""Tests for the groups app."""

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse

from courses.models import CourseEnrollment
from participants.tests.factories import create_course, create_group, create_user, enroll

from .forms import GroupForm
from .models import Group, GroupMembership
from .services import add_member, remove_member
from .templatetags.group_description import render_description


class GroupModelTests(TestCase):
    def setUp(self):
        self.course = create_course()

    def test_own_and_none_groups_never_participate(self):
        for visibility in (Group.Visibility.OWN, Group.Visibility.NONE):
            with self.subTest(visibility=visibility):
                group = create_group(
                    course=self.course, visibility=visibility, participation=True
                )
                group.refresh_from_db()
                self.assertFalse(group.participation)

    def test_members_group_keeps_participation(self):
        group = create_group(course=self.course, visibility=Group.Visibility.MEMBERS)
        group.refresh_from_db()
        self.assertTrue(group.participation)

    def test_visibility_locked_once_group_has_members(self):
        student = create_user()
        enroll(course=self.course, user=student)
        group = create_group(course=self.course, members=[student])
        group.visibility = Group.Visibility.NONE
        with self.assertRaises(ValidationError):
            group.full_clean()

    def test_visibility_can_change_while_empty(self):
        group = create_group(course=self.course)
        group.visibility = Group.Visibility.MEMBERS
        group.full_clean()

    def test_id_number_unique_per_course(self):
        create_group(course=self.course, id_number="G1")
        create_group(course=create_course(), id_number="G1")
        create_group(course=self.course, id_number="")
        create_group(course=self.course, id_number="")
        with self.assertRaises(IntegrityError), transaction.atomic():
            create_group(course=self.course, id_number="G1")


class GroupMembershipServiceTests(TestCase):
    def setUp(self):
        self.course = create_course()
        self.group = create_group(course=self.course)
        self.student = create_user()

    def test_add_member_requires_enrolment(self):
        with self.assertRaises(ValidationError):
            add_member(self.group, self.student)
        self.assertFalse(GroupMembership.objects.exists())

    def test_add_member_is_idempotent(self):
        enroll(course=self.course, user=self.student)
        first = add_member(self.group, self.student)
        second = add_member(self.group, self.student)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(list(self.group.members.all()), [self.student])

    def test_remove_member(self):
        enroll(course=self.course, user=self.student)
        add_member(self.group, self.student)
        self.assertTrue(remove_member(self.group, self.student))
        self.assertFalse(remove_member(self.group, self.student))


class GroupFormTests(TestCase):
    def setUp(self):
        self.course = create_course()

    def test_form_forces_participation_off_for_hidden_groups(self):
        group = create_group(course=self.course)
        form = GroupForm(
            data={
                "name": group.name,
                "id_number": "",
                "description": "",
                "visibility": Group.Visibility.NONE,
                "participation": "on",
            },
            instance=group,
        )
        self.assertTrue(form.is_valid(), form.errors)
        self.assertFalse(form.save().participation)

    def test_form_rejects_duplicate_id_number(self):
        create_group(course=self.course, id_number="A")
        group = create_group(course=self.course)
        form = GroupForm(
            data={
                "name": group.name,
                "id_number": "A",
                "description": "",
                "visibility": Group.Visibility.ALL,
            },
            instance=group,
        )
        self.assertFalse(form.is_valid())
        self.assertIn("id_number", form.errors)

    def test_visibility_field_disabled_when_group_has_members(self):
        student = create_user()
        enroll(course=self.course, user=student)
        group = create_group(
            course=self.course, visibility=Group.Visibility.MEMBERS, members=[student]
        )
        form = GroupForm(
            data={
                "name": "Renamed",
                "id_number": "",
                "description": "",
                "visibility": Group.Visibility.ALL,
                "participation": "on",
            },
            instance=group,
        )
        self.assertTrue(form.is_valid(), form.errors)
        saved = form.save()
        self.assertEqual(saved.name, "Renamed")
        self.assertEqual(saved.visibility, Group.Visibility.MEMBERS)


class GroupViewTests(TestCase):
    def setUp(self):
        self.course = create_course()
        self.teacher = create_user("teacher")
        self.student = create_user("student", first_name="Student", last_name="One")
        enroll(course=self.course, user=self.teacher, role=CourseEnrollment.Role.TEACHER)
        enroll(course=self.course, user=self.student)
        self.group = create_group(
            course=self.course,
            name="Secret",
            visibility=Group.Visibility.NONE,
            description="**Bold** <script>alert(1)</script>",
            members=[self.student],
        )

    def test_teacher_sees_members_and_rendered_description(self):
        self.client.force_login(self.teacher)
        response = self.client.get(reverse("groups:group_detail", kwargs={"pk": self.group.pk}))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Student One")
        self.assertContains(response, "<strong>Bold</strong>", html=False)
        self.assertNotContains(response, "<script>", html=False)

    def test_student_is_forbidden(self):
        self.client.force_login(self.student)
        response = self.client.get(reverse("groups:group_detail", kwargs={"pk": self.group.pk}))
        self.assertEqual(response.status_code, 403)

    def test_outsider_is_forbidden(self):
        self.client.force_login(create_user("outsider"))
        response = self.client.get(reverse("groups:group_edit", kwargs={"pk": self.group.pk}))
        self.assertEqual(response.status_code, 403)

    def test_teacher_can_rename_group(self):
        self.client.force_login(self.teacher)
        url = reverse("groups:group_edit", kwargs={"pk": self.group.pk})
        response = self.client.post(
            url,
            {
                "name": "Renamed",
                "id_number": "",
                "description": "",
                "visibility": Group.Visibility.NONE,
            },
        )
        self.assertRedirects(
            response, reverse("groups:group_detail", kwargs={"pk": self.group.pk})
        )
        self.group.refresh_from_db()
        self.assertEqual(self.group.name, "Renamed")


class RenderDescriptionTests(TestCase):
    def test_empty(self):
        self.assertEqual(render_description(None), "")

    def test_markdown_is_sanitised(self):
        html = render_description("[x](javascript:alert) *hi*")
        self.assertIn("<em>hi</em>", html)
        self.assertNotIn("javascript:", html)
