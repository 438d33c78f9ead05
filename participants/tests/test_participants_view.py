from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse

from courses.models import CourseEnrollment
from groups.models import Group

from .factories import create_course, create_group, create_user, enroll

VP = "Visible to everyone/Participation"
VN = "Visible to everyone/Non-Participation"
MP = "Only visible to members/Participation"
MN = "Only visible to members/Non-Participation"
OWN = "Only see own membership"
HIDDEN = "Not visible"


class GroupVisibilityScenarioTests(TestCase):
    """Participants table of the seeded course seen by different users."""

    @classmethod
    def setUpTestData(cls):
        call_command("seed_group_visibility_course", stdout=StringIO())
        cls.url = reverse("participants:participants", kwargs={"course_slug": "c1"})

    def _groups_by_username(self, username: str) -> dict[str, str]:
        self.client.force_login(get_user_model().objects.get(username=username))
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        return {row.username: row.groups_label for row in response.context["roster"].rows}

    def test_student1_sees_all_groups_for_self_and_student5_only(self):
        groups = self._groups_by_username("student1")
        self.assertEqual(groups["student1"], f"{VN}, {VP}")
        self.assertEqual(groups["student5"], f"{VN}, {VP}")
        for username in ("student2", "student3", "student4", "student6", "student7", "student8"):
            with self.subTest(username=username):
                self.assertEqual(groups[username], "No groups")
        self.assertEqual(groups["teacher1"], "No groups")

    def test_teacher1_sees_every_group(self):
        groups = self._groups_by_username("teacher1")
        self.assertEqual(groups["student1"], f"{VN}, {VP}")
        self.assertEqual(groups["student2"], f"{MN}, {MP}")
        self.assertEqual(groups["student3"], MP)
        self.assertEqual(groups["student4"], OWN)
        self.assertEqual(groups["student5"], f"{VN}, {VP}")
        self.assertEqual(groups["student6"], OWN)
        self.assertEqual(groups["student7"], HIDDEN)
        self.assertEqual(groups["student8"], HIDDEN)

    def test_members_group_is_visible_between_members(self):
        groups = self._groups_by_username("student2")
        self.assertEqual(groups["student2"], f"{MN}, {MP}")
        self.assertEqual(groups["student3"], MP)
        self.assertEqual(groups["student1"], f"{VN}, {VP}")

    def test_own_membership_is_visible_only_to_self(self):
        groups = self._groups_by_username("student4")
        self.assertEqual(groups["student4"], OWN)
        self.assertEqual(groups["student6"], "No groups")

    def test_hidden_group_is_hidden_from_its_members(self):
        groups = self._groups_by_username("student7")
        self.assertEqual(groups["student7"], "No groups")
        self.assertEqual(groups["student8"], "No groups")

    def test_table_renders_labels(self):
        self.client.force_login(get_user_model().objects.get(username="student1"))
        response = self.client.get(self.url)
        self.assertContains(response, "Student 5")
        self.assertContains(response, VP)
        self.assertNotContains(response, HIDDEN)
        self.assertContains(response, "No groups")

    def test_teacher_table_links_groups(self):
        self.client.force_login(get_user_model().objects.get(username="teacher1"))
        response = self.client.get(self.url)
        hidden = Group.objects.get(id_number="N")
        self.assertContains(response, reverse("groups:group_detail", kwargs={"pk": hidden.pk}))
        self.assertContains(response, HIDDEN)


class ParticipantsGroupFilterTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        call_command("seed_group_visibility_course", stdout=StringIO())
        cls.url = reverse("participants:participants", kwargs={"course_slug": "c1"})

    def _login(self, username: str):
        self.client.force_login(get_user_model().objects.get(username=username))

    def test_group_options_for_student_without_member_groups(self):
        self._login("student1")
        response = self.client.get(self.url)
        names = [group.name for group in response.context["group_options"]]
        self.assertEqual(names, [VP])

    def test_group_options_include_members_group_for_member(self):
        self._login("student2")
        response = self.client.get(self.url)
        names = [group.name for group in response.context["group_options"]]
        self.assertEqual(names, [MP, VP])

    def test_filter_by_group_lists_only_its_members(self):
        self._login("teacher1")
        group = Group.objects.get(id_number="MP")
        response = self.client.get(self.url, {"group": group.pk})
        self.assertEqual(response.status_code, 200)
        usernames = [row.username for row in response.context["roster"].rows]
        self.assertEqual(usernames, ["student2", "student3"])
        self.assertEqual(response.context["selected_group"].id, group.pk)

    def test_filter_by_group_not_offered_is_404(self):
        self._login("student1")
        group = Group.objects.get(id_number="MP")
        response = self.client.get(self.url, {"group": group.pk})
        self.assertEqual(response.status_code, 404)

    def test_filter_by_non_participation_group_is_404(self):
        self._login("teacher1")
        group = Group.objects.get(id_number="N")
        response = self.client.get(self.url, {"group": group.pk})
        self.assertEqual(response.status_code, 404)

    def test_filter_by_garbage_is_404(self):
        self._login("teacher1")
        response = self.client.get(self.url, {"group": "abc"})
        self.assertEqual(response.status_code, 404)


class ParticipantsAccessTests(TestCase):
    def setUp(self):
        call_command("seed_group_visibility_course", stdout=StringIO())
        self.url = reverse("participants:participants", kwargs={"course_slug": "c1"})

    def test_login_required(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 302)
        self.assertIn("/accounts/login/", response.headers["Location"])

    def test_unenrolled_user_gets_404(self):
        outsider = get_user_model().objects.create_user(username="outsider", password="pass")
        self.client.force_login(outsider)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 404)

    def test_unknown_course_is_404(self):
        self.client.force_login(get_user_model().objects.get(username="teacher1"))
        response = self.client.get(
            reverse("participants:participants", kwargs={"course_slug": "missing"})
        )
        self.assertEqual(response.status_code, 404)

    def test_staff_without_enrolment_sees_hidden_groups(self):
        staff = get_user_model().objects.create_user(
            username="staff", password="pass", is_staff=True
        )
        self.client.force_login(staff)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, HIDDEN)


class EmptyRosterTests(TestCase):
    def setUp(self):
        self.course = create_course(slug="empty-group")
        self.teacher = create_user("teacher")
        self.student = create_user("student")
        enroll(course=self.course, user=self.teacher, role=CourseEnrollment.Role.TEACHER)
        enroll(course=self.course, user=self.student)
        self.group = create_group(course=self.course, name="Nobody yet")
        self.url = reverse("participants:participants", kwargs={"course_slug": self.course.slug})

    def test_empty_row_spans_status_column_for_teacher(self):
        self.client.force_login(self.teacher)
        response = self.client.get(self.url, {"group": self.group.pk})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '<td colspan="4">No participants found</td>', html=False)

    def test_empty_row_spans_three_columns_for_student(self):
        self.client.force_login(self.student)
        response = self.client.get(self.url, {"group": self.group.pk})
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, '<td colspan="3">No participants found</td>', html=False)
