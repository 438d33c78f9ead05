from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("courses", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="GradeItem",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                (
                    "item_type",
                    models.CharField(
                        choices=[
                            ("course", "Course total"),
                            ("category", "Category total"),
                            ("manual", "Manual item"),
                            ("mod", "Activity"),
                        ],
                        default="manual",
                        max_length=20,
                    ),
                ),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("is_hidden", models.BooleanField(default=False)),
                (
                    "course",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="grade_items",
                        to="courses.course",
                    ),
                ),
            ],
            options={
                "ordering": ("course", "sort_order", "id"),
                "indexes": [
                    models.Index(
                        fields=["course", "sort_order"],
                        name="grades_item_course_sort_idx",
                    ),
                ],
            },
        ),
    ]
