from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from courses.models import CourseEnrollment
from participants.tests.factories import create_course, create_user, enroll

from .models import GradeItem
from .services import course_grade_items, search_grade_items


class SearchGradeItemsTests(SimpleTestCase):
    def setUp(self):
        self.items = [
            SimpleNamespace(name="Quiz 1"),
            SimpleNamespace(name="Essay"),
            SimpleNamespace(name="Final QUIZ"),
        ]

    def test_empty_term_returns_everything(self):
        self.assertEqual(search_grade_items(self.items, ""), self.items)
        self.assertEqual(search_grade_items(self.items, None), self.items)

    def test_match_is_case_insensitive_and_keeps_order(self):
        names = [item.name for item in search_grade_items(self.items, "qUiZ")]
        self.assertEqual(names, ["Quiz 1", "Final QUIZ"])

    def test_no_match(self):
        self.assertEqual(search_grade_items(self.items, "lab"), [])


class GradeItemEndpointsTests(TestCase):
    def setUp(self):
        self.course = create_course()
        self.teacher = create_user("teacher")
        self.student = create_user("student", first_name="Stu", last_name="Dent")
        enroll(course=self.course, user=self.teacher, role=CourseEnrollment.Role.TEACHER)
        enroll(course=self.course, user=self.student)
        GradeItem.objects.create(
            course=self.course, name="Course total", item_type=GradeItem.ItemType.COURSE
        )
        self.quiz = GradeItem.objects.create(
            course=self.course, name="Quiz 1", item_type=GradeItem.ItemType.MOD, sort_order=1
        )
        self.essay = GradeItem.objects.create(course=self.course, name="Essay", sort_order=2)
        self.api_url = reverse("grade-item-search", kwargs={"course_id": self.course.pk})
        self.report_url = reverse("grades:singleview")

    def test_course_grade_items_skip_totals(self):
        self.assertEqual(course_grade_items(self.course), [self.quiz, self.essay])

    def test_hidden_items_are_left_out(self):
        GradeItem.objects.create(
            course=self.course, name="Secret quiz", sort_order=3, is_hidden=True
        )
        with self.assertLogs("grades", level="DEBUG") as logs:
            items = course_grade_items(self.course)
        self.assertEqual(items, [self.quiz, self.essay])
        self.assertEqual(logs.records[0].items, 2)
        self.assertEqual(logs.records[0].course_id, self.course.pk)

        self.client.force_login(self.teacher)
        resp = self.client.get(self.api_url, {"search": "quiz"})
        self.assertEqual([item["name"] for item in resp.json()["gradeitems"]], ["Quiz 1"])

    def test_api_lists_and_filters_items(self):
        self.client.force_login(self.teacher)
        resp = self.client.get(self.api_url)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            resp.json(),
            {
                "gradeitems": [
                    {"id": self.quiz.pk, "name": "Quiz 1", "itemtype": "mod"},
                    {"id": self.essay.pk, "name": "Essay", "itemtype": "manual"},
                ]
            },
        )
        resp = self.client.get(self.api_url, {"search": "ESS"})
        self.assertEqual([item["name"] for item in resp.json()["gradeitems"]], ["Essay"])

    def test_api_forbidden_for_students(self):
        self.client.force_login(self.student)
        resp = self.client.get(self.api_url)
        self.assertEqual(resp.status_code, 403)

    def test_api_not_found_for_outsiders(self):
        self.client.force_login(create_user("outsider"))
        resp = self.client.get(self.api_url)
        self.assertEqual(resp.status_code, 404)

    def test_singleview_selects_item(self):
        self.client.force_login(self.teacher)
        resp = self.client.get(
            self.report_url, {"id": self.course.pk, "item": "grade", "itemid": self.quiz.pk}
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.context["selected_item"], self.quiz)
        self.assertContains(resp, "Stu Dent")

    def test_singleview_search(self):
        self.client.force_login(self.teacher)
        resp = self.client.get(self.report_url, {"id": self.course.pk, "search": "quiz"})
        self.assertEqual(resp.context["matching_items"], [self.quiz])

    def test_singleview_unknown_item_is_404(self):
        self.client.force_login(self.teacher)
        resp = self.client.get(self.report_url, {"id": self.course.pk, "itemid": 999999})
        self.assertEqual(resp.status_code, 404)

    def test_singleview_requires_course(self):
        self.client.force_login(self.teacher)
        self.assertEqual(self.client.get(self.report_url).status_code, 404)

    def test_singleview_forbidden_for_students(self):
        self.client.force_login(self.student)
        resp = self.client.get(self.report_url, {"id": self.course.pk})
        self.assertEqual(resp.status_code, 403)
