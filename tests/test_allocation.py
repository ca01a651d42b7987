import unittest
from datetime import timedelta

from normalize.models import GitAction, ExtractedActivity
from scoring.allocation import accumulate_weights, allocate_duration, build_weight_grid

TICK = timedelta(microseconds=1)


def _activities(*pairs):
    return [ExtractedActivity(issue_key=key, action=action) for key, action in pairs]


class TestWeightGrid(unittest.TestCase):
    def test_get_weight_map(self):
        activities = _activities(
            ("1", GitAction.PUSHED_NEW),
            ("1", GitAction.COMMENTED_ON),
            ("2", GitAction.COMMENTED_ON),
        )
        grid = build_weight_grid(timedelta(hours=1), activities)
        self.assertEqual(grid.total_weight, 9)
        self.assertEqual(grid.total_duration, timedelta(hours=1))
        self.assertEqual(grid.items[0].issue_key, "1")
        self.assertEqual(grid.items[0].weight, 8)
        self.assertEqual(grid.items[1].issue_key, "2")
        self.assertEqual(grid.items[1].weight, 1)

    def test_empty_activities(self):
        grid = build_weight_grid(timedelta(days=8), [])
        self.assertEqual(grid.total_weight, 0)
        self.assertEqual(grid.items, [])
        self.assertEqual(grid.total_duration, timedelta(days=8))

    def test_accumulate_weights_keeps_first_seen_order(self):
        total, per_issue = accumulate_weights(_activities(
            ("ITS-2", GitAction.CREATED),
            ("ITS-1", GitAction.PUSHED_TO),
            ("ITS-2", GitAction.OPENED),
        ))
        self.assertEqual(total, 16)
        self.assertEqual(list(per_issue.items()), [("ITS-2", 11), ("ITS-1", 5)])

    def test_duration_percentage(self):
        # 9 working hours, 2/9 of them
        self.assertEqual(allocate_duration(timedelta(hours=9), 2, 9), timedelta(hours=2))

    def test_multiplies_before_dividing(self):
        # dividing first would give (11 // 3) * 2 = 6 microseconds
        self.assertEqual(allocate_duration(timedelta(microseconds=11), 2, 3), timedelta(microseconds=7))

    def test_allocation_sum_within_truncation_bound(self):
        distributions = [
            [("ITS-1", GitAction.CREATED), ("ITS-2", GitAction.PUSHED_TO), ("ITS-3", GitAction.COMMENTED_ON)],
            [("SBINV-1", GitAction.PUSHED_NEW)] * 3 + [("SBINV-2", GitAction.APPROVED)] * 5 + [("ITS-9", GitAction.OPENED)],
            [("ITS-%d" % n, GitAction.COMMENTED_ON) for n in range(7)],
        ]
        durations = [timedelta(hours=1), timedelta(days=8), timedelta(seconds=7, microseconds=3)]
        for pairs in distributions:
            for total in durations:
                grid = build_weight_grid(total, _activities(*pairs))
                allocated = sum((item.duration for item in grid.items), timedelta())
                self.assertLessEqual(allocated, total)
                self.assertLess((total - allocated) // TICK, len(grid.items))

    def test_durations_monotonic_in_weight(self):
        grid = build_weight_grid(timedelta(days=8), _activities(
            ("A-1", GitAction.COMMENTED_ON),
            ("ITS-1", GitAction.CREATED),
            ("ITS-2", GitAction.PUSHED_TO),
            ("ITS-3", GitAction.COMMENTED_ON),
        ))
        ranked = grid.ranked()
        for heavier, lighter in zip(ranked, ranked[1:]):
            self.assertGreaterEqual(heavier.duration, lighter.duration)

    def test_pipeline_is_idempotent(self):
        activities = _activities(
            ("ITS-1", GitAction.PUSHED_NEW),
            ("ITS-2", GitAction.COMMENTED_ON),
            ("ITS-1", GitAction.PUSHED_TO),
            ("SBINV-3", GitAction.CREATED),
        )
        first = build_weight_grid(timedelta(days=8), activities)
        second = build_weight_grid(timedelta(days=8), activities)
        self.assertEqual(first.total_weight, second.total_weight)
        self.assertEqual(
            {i.issue_key: (i.weight, i.duration) for i in first.items},
            {i.issue_key: (i.weight, i.duration) for i in second.items},
        )


def test_ranked_orders_by_weight_then_key():
    grid = build_weight_grid(timedelta(hours=1), _activities(
        ("ITS-2", GitAction.COMMENTED_ON),
        ("ITS-1", GitAction.COMMENTED_ON),
        ("ITS-3", GitAction.PUSHED_TO),
    ))
    assert [i.issue_key for i in grid.ranked()] == ["ITS-3", "ITS-1", "ITS-2"]
    assert grid.percentage(grid.items[2]) == 5 / 7 * 100


if __name__ == '__main__':
    unittest.main()
