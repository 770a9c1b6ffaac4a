import unittest
from datetime import date
from decimal import Decimal
from household.domain.errors import ValidationError
from household.utilities.validators import ChoreInput, ChorePatch, PayMemberInput, validate_payload


class TestChoreInput(unittest.TestCase):

    def test_defaults(self):
        values = validate_payload(ChoreInput, {"title": "  Wash dishes "})
        self.assertEqual(values["title"], "Wash dishes")
        self.assertEqual(values["priority"], "med")
        self.assertEqual(values["rewardAmount"], Decimal(0))
        self.assertEqual(values["rewardCurrency"], "USD")
        self.assertIsNone(values["assignedTo"])
        self.assertIsNone(values["dueDate"])
        self.assertTrue(values["active"])
        self.assertEqual(values["assignments"], [])

    def test_blank_title_rejected(self):
        for title in ("   ", "", None):
            with self.assertRaises(ValidationError):
                validate_payload(ChoreInput, {"title": title})
        with self.assertRaises(ValidationError):
            validate_payload(ChoreInput, {})

    def test_reward_amount_coercion(self):
        for raw, expected in (("5", Decimal(5)), (3.25, Decimal("3.25")), ("abc", Decimal(0)),
                              (-4, Decimal(0)), ("", Decimal(0)), (None, Decimal(0)), ("NaN", Decimal(0)),
                              ("1e5000", Decimal(0)), (1e308, Decimal(str(1e308)))):
            values = validate_payload(ChoreInput, {"title": "t", "rewardAmount": raw})
            self.assertEqual(values["rewardAmount"], expected, raw)

    def test_currency_normalized(self):
        values = validate_payload(ChoreInput, {"title": "t", "rewardCurrency": " mxn "})
        self.assertEqual(values["rewardCurrency"], "MXN")
        values = validate_payload(ChoreInput, {"title": "t", "rewardCurrency": "  "})
        self.assertEqual(values["rewardCurrency"], "USD")
        with self.assertRaises(ValidationError):
            validate_payload(ChoreInput, {"title": "t", "rewardCurrency": "$$"})

    def test_assigned_to_requires_name_or_role(self):
        values = validate_payload(ChoreInput, {"title": "t", "assignedTo": {"name": "  ", "role": ""}})
        self.assertIsNone(values["assignedTo"])
        values = validate_payload(ChoreInput, {"title": "t", "assignedTo": {"name": " Sofia ", "role": "Child "}})
        self.assertEqual((values["assignedTo"].name, values["assignedTo"].role), ("Sofia", "Child"))

    def test_priority_and_due_date(self):
        values = validate_payload(ChoreInput, {"title": "t", "priority": "HIGH", "dueDate": "2025-12-24T00:00:00Z"})
        self.assertEqual(values["priority"], "high")
        self.assertEqual(values["dueDate"], date(2025, 12, 24))
        with self.assertRaises(ValidationError):
            validate_payload(ChoreInput, {"title": "t", "priority": "urgent"})

    def test_assignments_without_member_dropped(self):
        values = validate_payload(ChoreInput, {"title": "t", "assignments": [
            {"memberId": ""}, {"memberId": "dad", "points": 3, "recurrence": {"freq": "WEEKLY", "byDay": [1, 1, 3]}}]})
        self.assertEqual(len(values["assignments"]), 1)
        self.assertEqual(values["assignments"][0].recurrence.byDay, [1, 3])


    def test_recurrence_frequency(self):
        values = validate_payload(ChoreInput, {"title": "t", "assignments": [
            {"memberId": "mom", "recurrence": {"freq": " daily "}}]})
        self.assertEqual(values["assignments"][0].recurrence.freq, "DAILY")
        with self.assertRaises(ValidationError):
            validate_payload(ChoreInput, {"title": "t", "assignments": [
                {"memberId": "mom", "recurrence": {"freq": "YEARLY"}}]})

    def test_assignment_points_out_of_range(self):
        with self.assertRaises(ValidationError):
            validate_payload(ChoreInput, {"title": "t", "assignments": [{"memberId": "mom", "points": "1e5000"}]})


class TestChorePatch(unittest.TestCase):

    def test_only_present_fields_returned(self):
        values = validate_payload(ChorePatch, {"rewardAmount": "7", "id": "ignored"}, partial=True)
        self.assertEqual(values, {"rewardAmount": Decimal(7)})

    def test_null_currency_is_kept_as_null(self):
        values = validate_payload(ChorePatch, {"rewardCurrency": None}, partial=True)
        self.assertEqual(values, {"rewardCurrency": None})
        values = validate_payload(ChorePatch, {"rewardCurrency": " "}, partial=True)
        self.assertEqual(values, {"rewardCurrency": "USD"})

    def test_blank_title_in_patch_rejected(self):
        with self.assertRaises(ValidationError):
            validate_payload(ChorePatch, {"title": " "}, partial=True)


class TestPayMemberInput(unittest.TestCase):

    def test_member_required(self):
        for member in ("", "   ", None):
            with self.assertRaises(ValidationError):
                validate_payload(PayMemberInput, {"memberId": member})
