from django.test import SimpleTestCase

from participants.exceptions import NotFoundError
from participants.visibility import (
    GroupInfo,
    Viewer,
    Visibility,
    VisibilityFilter,
    format_group_labels,
    is_group_visible,
    visible_groups_for,
)

TEACHER_ID = 1
ALICE_ID = 2
BOB_ID = 3
CAROL_ID = 4

EVERYONE = GroupInfo(id=10, name="Everyone", course_id=1, visibility=Visibility.ALL)
MEMBERS = GroupInfo(id=11, name="Members", course_id=1, visibility=Visibility.MEMBERS)
OWN = GroupInfo(
    id=12, name="Own", course_id=1, visibility=Visibility.OWN, participation=False
)
HIDDEN = GroupInfo(
    id=13, name="Hidden", course_id=1, visibility=Visibility.NONE, participation=False
)

GROUPS = (EVERYONE, MEMBERS, OWN, HIDDEN)
USERS = (TEACHER_ID, ALICE_ID, BOB_ID, CAROL_ID)

teacher = Viewer(user_id=TEACHER_ID, role="editingteacher", can_view_hidden_groups=True)
alice = Viewer(user_id=ALICE_ID, role="student")
bob = Viewer(user_id=BOB_ID, role="student")
carol = Viewer(user_id=CAROL_ID, role="student")


class IsGroupVisibleTests(SimpleTestCase):
    def test_all_is_visible_to_everyone(self):
        self.assertTrue(
            is_group_visible(EVERYONE, viewer=carol, target_user_id=ALICE_ID, viewer_group_ids=set())
        )

    def test_members_requires_viewer_membership(self):
        self.assertFalse(
            is_group_visible(MEMBERS, viewer=carol, target_user_id=ALICE_ID, viewer_group_ids=set())
        )
        self.assertTrue(
            is_group_visible(
                MEMBERS, viewer=bob, target_user_id=ALICE_ID, viewer_group_ids={MEMBERS.id}
            )
        )

    def test_own_is_visible_only_for_self(self):
        self.assertTrue(
            is_group_visible(OWN, viewer=alice, target_user_id=ALICE_ID, viewer_group_ids={OWN.id})
        )
        self.assertFalse(
            is_group_visible(OWN, viewer=bob, target_user_id=ALICE_ID, viewer_group_ids={OWN.id})
        )

    def test_none_is_hidden_from_members(self):
        self.assertFalse(
            is_group_visible(
                HIDDEN, viewer=alice, target_user_id=ALICE_ID, viewer_group_ids={HIDDEN.id}
            )
        )

    def test_teacher_sees_every_visibility(self):
        for group in GROUPS:
            with self.subTest(group=group.name):
                self.assertTrue(
                    is_group_visible(
                        group, viewer=teacher, target_user_id=ALICE_ID, viewer_group_ids=set()
                    )
                )


class VisibilityFilterTests(SimpleTestCase):
    def setUp(self):
        # Alice and Bob share every group; Carol is in none.
        memberships = [(user_id, group.id) for group in GROUPS for user_id in (ALICE_ID, BOB_ID)]
        self.filter = VisibilityFilter(GROUPS, memberships, user_ids=USERS)

    def test_member_sees_all_members_and_own_groups_for_self(self):
        self.assertEqual(
            self.filter.visible_groups_for(alice, ALICE_ID),
            {"Everyone", "Members", "Own"},
        )

    def test_member_sees_all_and_members_groups_for_other_member(self):
        self.assertEqual(
            self.filter.visible_groups_for(alice, BOB_ID),
            {"Everyone", "Members"},
        )

    def test_non_member_sees_only_all_groups(self):
        self.assertEqual(self.filter.visible_groups_for(carol, ALICE_ID), {"Everyone"})

    def test_teacher_sees_real_names_of_every_group(self):
        self.assertEqual(
            self.filter.visible_groups_for(teacher, BOB_ID),
            {"Everyone", "Members", "Own", "Hidden"},
        )

    def test_user_without_groups_has_empty_result(self):
        self.assertEqual(self.filter.visible_groups_for(teacher, CAROL_ID), frozenset())

    def test_records_are_sorted_by_name(self):
        names = [group.name for group in self.filter.visible_group_records(teacher, ALICE_ID)]
        self.assertEqual(names, ["Everyone", "Hidden", "Members", "Own"])

    def test_unknown_target_user_raises(self):
        with self.assertRaises(NotFoundError):
            self.filter.visible_groups_for(alice, 999)

    def test_unknown_viewer_raises(self):
        stranger = Viewer(user_id=999, role="student")
        with self.assertRaises(NotFoundError):
            self.filter.visible_groups_for(stranger, ALICE_ID)

    def test_unknown_group_raises(self):
        with self.assertRaises(NotFoundError):
            self.filter.get_group(999)
        with self.assertRaises(NotFoundError):
            self.filter.member_ids(999)

    def test_membership_in_unknown_group_raises(self):
        with self.assertRaises(NotFoundError):
            VisibilityFilter(GROUPS, [(ALICE_ID, 999)])

    def test_member_ids(self):
        self.assertEqual(self.filter.member_ids(MEMBERS.id), {ALICE_ID, BOB_ID})

    def test_participation_options(self):
        self.assertEqual(self.filter.participation_groups_for(carol), [EVERYONE])
        self.assertEqual(self.filter.participation_groups_for(alice), [EVERYONE, MEMBERS])
        self.assertEqual(self.filter.participation_groups_for(teacher), [EVERYONE, MEMBERS])


class VisibleGroupsForFunctionTests(SimpleTestCase):
    def test_function_form_matches_rule_table(self):
        memberships = [(ALICE_ID, EVERYONE.id), (ALICE_ID, HIDDEN.id), (ALICE_ID, OWN.id)]
        self.assertEqual(
            visible_groups_for(bob, ALICE_ID, GROUPS, memberships),
            {"Everyone"},
        )
        self.assertEqual(
            visible_groups_for(alice, ALICE_ID, GROUPS, memberships),
            {"Everyone", "Own"},
        )

    def test_function_form_checks_known_users(self):
        memberships = [(ALICE_ID, EVERYONE.id)]
        self.assertEqual(
            visible_groups_for(bob, ALICE_ID, GROUPS, memberships, user_ids=USERS),
            {"Everyone"},
        )
        with self.assertRaises(NotFoundError):
            visible_groups_for(bob, 424242, GROUPS, memberships, user_ids=USERS)
        with self.assertRaises(NotFoundError):
            visible_groups_for(Viewer(user_id=424242), ALICE_ID, GROUPS, memberships, user_ids=USERS)

    def test_function_form_without_user_ids_accepts_any_user(self):
        self.assertEqual(visible_groups_for(bob, 424242, GROUPS, []), frozenset())


class FormatGroupLabelsTests(SimpleTestCase):
    def test_empty_renders_no_groups(self):
        self.assertEqual(format_group_labels([]), "No groups")

    def test_labels_are_sorted_and_joined(self):
        self.assertEqual(format_group_labels(["B", "A"]), "A, B")
