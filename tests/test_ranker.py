import unittest

from agecensus.data import FrequencyTable, RankedEntry
from agecensus.ranker import format_entries, rank_frequencies


class TestRanker(unittest.TestCase):
    def test_empty_table(self):
        self.assertEqual(rank_frequencies(FrequencyTable()), [])

    def test_distinct_counts(self):
        ranked = rank_frequencies(FrequencyTable({0: 3, 1: 2, 2: 1}))
        self.assertEqual(
            ranked,
            [
                RankedEntry(position=1, value=0, count=3),
                RankedEntry(position=2, value=1, count=2),
                RankedEntry(position=3, value=2, count=1),
            ],
        )

    def test_keeps_three_tiers(self):
        table = FrequencyTable({10: 5, 20: 4, 30: 3, 40: 2, 50: 1})
        self.assertEqual(format_entries(rank_frequencies(table)), ["1:10=5", "2:20=4", "3:30=3"])

    def test_all_equal_counts_share_first_position(self):
        table = FrequencyTable({age: 7 for age in range(10)})
        ranked = rank_frequencies(table)
        self.assertEqual(len(ranked), 10)
        self.assertTrue(all(entry.position == 1 for entry in ranked))

    def test_tie_at_top_expands_result(self):
        table = FrequencyTable({1: 5, 2: 5, 3: 5, 4: 5, 9: 2})
        self.assertEqual(
            format_entries(rank_frequencies(table)),
            ["1:1=5", "1:2=5", "1:3=5", "1:4=5", "2:9=2"],
        )

    def test_tie_on_last_tier_is_included(self):
        table = FrequencyTable({138: 93, 10: 85, 35: 85, 90: 84, 7: 80})
        self.assertEqual(
            format_entries(rank_frequencies(table)),
            ["1:138=93", "2:10=85", "2:35=85", "3:90=84"],
        )

    def test_fewer_tiers_than_requested(self):
        self.assertEqual(format_entries(rank_frequencies(FrequencyTable({1: 1}))), ["1:1=1"])
        self.assertEqual(format_entries(rank_frequencies(FrequencyTable({1: 2, 4: 1}))), ["1:1=2", "2:4=1"])

    def test_custom_top_tiers(self):
        table = FrequencyTable({10: 5, 20: 4, 30: 3, 40: 2})
        self.assertEqual(format_entries(rank_frequencies(table, top_tiers=1)), ["1:10=5"])
        self.assertEqual(len(rank_frequencies(table, top_tiers=10)), 4)
        with self.assertRaises(ValueError):
            rank_frequencies(table, top_tiers=0)

    def test_positions_follow_counts(self):
        table = FrequencyTable({age: (age * 7) % 5 + 1 for age in range(40)})
        ranked = rank_frequencies(table, top_tiers=5)
        for current, following in zip(ranked, ranked[1:]):
            self.assertGreaterEqual(current.count, following.count)
            self.assertEqual(current.position == following.position, current.count == following.count)
            self.assertLessEqual(current.position, following.position)

    def test_deterministic_order_within_tier(self):
        a = FrequencyTable()
        for age in [5, 3, 9, 1]:
            a.record(age)
        b = FrequencyTable()
        for age in [1, 9, 3, 5]:
            b.record(age)
        self.assertEqual(rank_frequencies(a), rank_frequencies(b))
        self.assertEqual(format_entries(rank_frequencies(a)), ["1:1=1", "1:3=1", "1:5=1", "1:9=1"])
