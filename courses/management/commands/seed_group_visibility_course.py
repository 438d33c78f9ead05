from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from courses.models import Course, CourseEnrollment
from groups.models import Group, GroupMembership

GROUPS = (
    # (name, id number, visibility, participation)
    ("Visible to everyone/Participation", "VP", Group.Visibility.ALL, True),
    ("Visible to everyone/Non-Participation", "VN", Group.Visibility.ALL, False),
    ("Only visible to members/Participation", "MP", Group.Visibility.MEMBERS, True),
    ("Only visible to members/Non-Participation", "MN", Group.Visibility.MEMBERS, False),
    ("Only see own membership", "O", Group.Visibility.OWN, False),
    ("Not visible", "N", Group.Visibility.NONE, False),
)

MEMBERS = {
    "student1": ("VP", "VN"),
    "student2": ("MP", "MN"),
    "student3": ("MP",),
    "student4": ("O",),
    "student5": ("VP", "VN"),
    "student6": ("O",),
    "student7": ("N",),
    "student8": ("N",),
}


class Command(BaseCommand):
    help = "Creates a course with one group per visibility level for checking the participants page"

    def add_arguments(self, parser):
        parser.add_argument(
            "--slug",
            default="c1",
            help="Course slug",
        )
        parser.add_argument(
            "--password",
            default="password",
            help="Password for created users",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        slug: str = options["slug"]
        password: str = options["password"]

        User = get_user_model()

        def get_user(username: str, first_name: str, last_name: str):
            user, created = User.objects.get_or_create(
                username=username,
                defaults={"first_name": first_name, "last_name": last_name, "is_active": True},
            )
            if created:
                user.set_password(password)
                user.save(update_fields=["password"])
            return user

        course, _ = Course.objects.update_or_create(
            slug=slug,
            defaults={"title": "Course 1", "short_name": slug.upper(), "is_active": True},
        )

        # Start from a clean slate so the command can be rerun.
        Group.objects.filter(course=course).delete()
        CourseEnrollment.objects.filter(course=course).delete()

        teacher = get_user("teacher1", "Teacher", "1")
        CourseEnrollment.objects.create(
            course=course, user=teacher, role=CourseEnrollment.Role.TEACHER
        )

        groups: dict[str, Group] = {}
        for name, id_number, visibility, participation in GROUPS:
            groups[id_number] = Group.objects.create(
                course=course,
                name=name,
                id_number=id_number,
                visibility=visibility,
                participation=participation,
            )

        for username, id_numbers in MEMBERS.items():
            student = get_user(username, "Student", username.removeprefix("student"))
            CourseEnrollment.objects.create(
                course=course, user=student, role=CourseEnrollment.Role.STUDENT
            )
            for id_number in id_numbers:
                GroupMembership.objects.create(group=groups[id_number], user=student)

        self.stdout.write(self.style.SUCCESS("Group visibility course is ready."))
        self.stdout.write(
            f"Course: {course.title} (/courses/{course.slug}/participants/) | "
            f"Groups: {len(groups)} | Students: {len(MEMBERS)}"
        )
