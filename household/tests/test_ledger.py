import tempfile
import threading
import unittest
from decimal import Decimal
from pathlib import Path
from household.domain.errors import NotFoundError, ValidationError
from household.events.Event_Bus import EventBus, CHORE_COMPLETED, MEMBER_PAID
from household.infra.Chore_Repository import InMemoryChoreStore, JsonChoreStore
from household.infra.Member_Repository import InMemoryMemberRegistry
from household.logic.rewards.ledger import RewardLedger


class FailingSaveStore(InMemoryChoreStore):
    """Fails the save of one specific chore."""

    def __init__(self):
        super().__init__()
        self.fail_on = None

    def save(self, record):
        if record.id == self.fail_on:
            raise IOError("disk full")
        return super().save(record)


class TestRewardLedger(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryChoreStore()
        self.bus = EventBus()
        self.events = []
        self.bus.subscribe(CHORE_COMPLETED, lambda name, payload: self.events.append((name, payload)))
        self.bus.subscribe(MEMBER_PAID, lambda name, payload: self.events.append((name, payload)))
        self.ledger = RewardLedger(self.store, InMemoryMemberRegistry(["mom", "dad"]), event_bus=self.bus)

    def test_create_and_list(self):
        chore = self.ledger.create_chore({"title": "Wash dishes", "rewardAmount": "2"})
        self.assertTrue(chore.id)
        self.assertIn(chore.id, [c.id for c in self.store.find_all()])
        self.assertEqual(self.ledger.get_chore(chore.id).reward_amount, Decimal(2))

    def test_create_blank_title_fails_without_saving(self):
        with self.assertRaises(ValidationError):
            self.ledger.create_chore({"title": "   "})
        self.assertEqual(self.store.find_all(), [])

    def test_list_is_newest_first(self):
        first = self.ledger.create_chore({"title": "First"})
        second = self.ledger.create_chore({"title": "Second"})
        second.created_at = first.created_at.replace(year=first.created_at.year + 1)
        self.store.save(second)
        self.assertEqual([c.title for c in self.ledger.list_chores()], ["Second", "First"])

    def test_record_completion_appends_unpaid_entry(self):
        chore = self.ledger.create_chore({"title": "Trash", "rewardAmount": 1, "rewardCurrency": "eur"})
        updated = self.ledger.record_completion(chore.id, "mom")
        updated = self.ledger.record_completion(updated, "")
        self.assertEqual([(e.member_id, e.paid) for e in updated.completions], [("mom", False), (None, False)])
        self.assertEqual((updated.reward_amount, updated.reward_currency), (Decimal(1), "EUR"))
        self.assertEqual(len(self.store.find_by_id(chore.id).completions), 2)
        self.assertEqual(self.events[0][1]["member_id"], "mom")

    def test_record_completion_unknown_chore(self):
        other = self.ledger.create_chore({"title": "Other"})
        with self.assertRaises(NotFoundError):
            self.ledger.record_completion("nope", "mom")
        self.assertEqual(self.store.find_by_id(other.id).completions, [])

    def test_mark_chore_paid_is_idempotent(self):
        chore = self.ledger.create_chore({"title": "Laundry", "rewardAmount": 3})
        self.ledger.record_completion(chore.id, "mom")
        self.ledger.record_completion(chore.id, "dad")
        once = self.ledger.mark_chore_paid(chore.id)
        twice = self.ledger.mark_chore_paid(chore.id)
        self.assertTrue(all(e.paid for e in once.completions))
        self.assertEqual(once.to_dict()["completions"], twice.to_dict()["completions"])
        with self.assertRaises(NotFoundError):
            self.ledger.mark_chore_paid("missing")

    def test_totals_and_pay_member(self):
        ten = self.ledger.create_chore({"title": "Mow lawn", "rewardAmount": 10})
        five = self.ledger.create_chore({"title": "Dust", "rewardAmount": 5})
        self.ledger.record_completion(ten.id, "mom")
        self.ledger.record_completion(five.id, "mom")
        self.ledger.mark_chore_paid(five.id)
        self.assertEqual(self.ledger.member_totals(), {"mom": 10, "dad": 0})

        chores = self.ledger.pay_member("mom")
        self.assertEqual(len(chores), 2)
        self.assertEqual(self.ledger.member_totals(), {"mom": 0, "dad": 0})
        self.assertEqual(self.ledger.member_paid_totals()["mom"], 15)
        self.assertEqual(self.events[-1][1], {"member_id": "mom", "chores": 1, "entries": 1})

    def test_pay_member_leaves_other_members_unpaid(self):
        chore = self.ledger.create_chore({"title": "Dishes", "rewardAmount": 2})
        self.ledger.record_completion(chore.id, "mom")
        self.ledger.record_completion(chore.id, "dad")
        self.ledger.pay_member("mom")
        entries = self.store.find_by_id(chore.id).completions
        self.assertEqual([(e.member_id, e.paid) for e in entries], [("mom", True), ("dad", False)])

    def test_pay_member_requires_member_id(self):
        for member in ("", "  ", None):
            with self.assertRaises(ValidationError):
                self.ledger.pay_member(member)

    def test_update_chore(self):
        chore = self.ledger.create_chore({"title": "Walk dog", "assignedTo": {"name": "Sofia", "role": "Child"}})
        self.ledger.record_completion(chore.id, "dad")
        updated = self.ledger.update_chore(chore.id, {
            "title": " Walk the dog ", "rewardAmount": "oops", "assignedTo": {"name": "", "role": " "},
            "completions": [], "id": "other"})
        self.assertEqual(updated.id, chore.id)
        self.assertEqual(updated.title, "Walk the dog")
        self.assertEqual(updated.reward_amount, Decimal(0))
        self.assertIsNone(updated.assigned_to)
        self.assertEqual(len(updated.completions), 1)
        with self.assertRaises(ValidationError):
            self.ledger.update_chore(chore.id, {"title": ""})
        with self.assertRaises(NotFoundError):
            self.ledger.update_chore("missing", {"notes": "x"})

    def test_delete_chore(self):
        chore = self.ledger.create_chore({"title": "Vacuum"})
        self.ledger.delete_chore(chore.id)
        self.assertIsNone(self.store.find_by_id(chore.id))
        with self.assertRaises(NotFoundError):
            self.ledger.delete_chore(chore.id)
        with self.assertRaises(NotFoundError):
            self.ledger.record_completion(chore.id, "mom")

    def test_failed_lookups_leave_no_lock_entries(self):
        chore = self.ledger.create_chore({"title": "Feed fish"})
        for i in range(50):
            with self.assertRaises(NotFoundError):
                self.ledger.record_completion(f"bogus-{i}", "mom")
        for call in (self.ledger.mark_chore_paid, self.ledger.delete_chore,
                     lambda cid: self.ledger.update_chore(cid, {"notes": "x"})):
            with self.assertRaises(NotFoundError):
                call("bogus")
        self.ledger.record_completion(chore.id, "mom")
        self.ledger.pay_member("mom")
        self.assertEqual(self.store._locks, {})

    def _complete_concurrently(self, store, workers=20):
        ledger = RewardLedger(store, InMemoryMemberRegistry(["mom"]), event_bus=EventBus())
        chore = ledger.create_chore({"title": "Dishes", "rewardAmount": 1})
        start = threading.Barrier(workers)
        errors = []

        def complete():
            start.wait()
            try:
                ledger.record_completion(chore.id, "mom")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=complete) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(errors, [])
        self.assertEqual(len(store.find_by_id(chore.id).completions), workers)
        self.assertEqual(ledger.member_totals(), {"mom": workers})
        self.assertEqual(store._locks, {})

    def test_concurrent_completions_are_all_kept(self):
        self._complete_concurrently(InMemoryChoreStore())

    def test_concurrent_completions_are_all_kept_on_disk(self):
        with tempfile.TemporaryDirectory() as tmp:
            self._complete_concurrently(JsonChoreStore(Path(tmp) / 'chores.json'))

    def test_null_currency_in_patch_keeps_stored_code(self):
        chore = self.ledger.create_chore({"title": "Rake leaves", "rewardCurrency": "eur"})
        updated = self.ledger.update_chore(chore.id, {"rewardCurrency": None, "notes": "front yard"})
        self.assertEqual((updated.reward_currency, updated.notes), ("EUR", "front yard"))
        self.assertEqual(self.store.find_by_id(chore.id).reward_currency, "EUR")
        self.assertEqual(self.ledger.update_chore(chore.id, {"rewardCurrency": "mxn"}).reward_currency, "MXN")

    def test_out_of_range_reward_amount_is_zero(self):
        chore = self.ledger.create_chore({"title": "Big", "rewardAmount": "1e5000"})
        self.assertEqual(chore.reward_amount, Decimal(0))
        self.assertEqual(chore.to_dict()["rewardAmount"], 0)

    def test_member_summary(self):
        chore = self.ledger.create_chore({"title": "Cook", "rewardAmount": "1.5"})
        self.ledger.record_completion(chore.id, "dad")
        self.ledger.record_completion(chore.id, "dad")
        self.ledger.record_completion(chore.id, "stranger")
        summary = {row["memberId"]: row for row in self.ledger.member_summary()}
        self.assertEqual(summary["dad"]["outstanding"], 3)
        self.assertEqual(summary["dad"]["unpaidCount"], 2)
        self.assertEqual(summary["dad"]["currencies"], ["USD"])
        self.assertEqual(summary["mom"]["outstanding"], 0)
        self.assertNotIn("stranger", summary)


class TestPayMemberPartialFailure(unittest.TestCase):

    def test_failure_propagates_and_retry_pays_the_rest(self):
        store = FailingSaveStore()
        ledger = RewardLedger(store, InMemoryMemberRegistry(["mom"]), event_bus=EventBus())
        first = ledger.create_chore({"title": "A", "rewardAmount": 1})
        second = ledger.create_chore({"title": "B", "rewardAmount": 2})
        ledger.record_completion(first.id, "mom")
        ledger.record_completion(second.id, "mom")
        store.fail_on = second.id

        with self.assertRaises(IOError):
            ledger.pay_member("mom")
        self.assertTrue(all(e.paid for e in store.find_by_id(first.id).completions))
        self.assertEqual(ledger.member_totals(), {"mom": 2})

        store.fail_on = None
        ledger.pay_member("mom")
        self.assertEqual(ledger.member_totals(), {"mom": 0})
