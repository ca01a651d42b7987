import json
import unittest
from datetime import date, timedelta

from correlate.models import AllocationGrid, IssueAllocation
from models import ReportWindow
from normalize.models import JiraIssue
from report.renderer import format_allocation_line, render, render_csv, render_text
from worktime import WorkTime


def _grid():
    return AllocationGrid(
        total_weight=9,
        total_duration=timedelta(hours=9),
        items=[
            IssueAllocation('ITS-2', 1, timedelta(hours=1)),
            IssueAllocation('SBINV-1', 8, timedelta(hours=8)),
        ],
    )


class TestRenderer(unittest.TestCase):
    def test_allocation_line(self):
        grid = _grid()
        self.assertEqual(format_allocation_line(grid, grid.items[1]), 'SBINV-1: 88.89% of time (8 hours 0 minutes)')
        self.assertEqual(format_allocation_line(grid, grid.items[0]), 'ITS-2: 11.11% of time (1 hours 0 minutes)')

    def test_text_is_ranked(self):
        text = render_text(_grid(), user='Alice')
        lines = text.splitlines()
        self.assertEqual(lines[0], 'User: Alice')
        self.assertTrue(lines[1].startswith('SBINV-1:'))
        self.assertTrue(lines[2].startswith('ITS-2:'))

    def test_text_with_jira_issues(self):
        issues = [JiraIssue('ITS-2', 'Fix export', WorkTime.from_seconds(5400))]
        text = render(_grid(), fmt='text', jira_issues=issues)
        self.assertIn('Jira worklogs:', text)
        self.assertIn('ITS-2: Fix export, spent time: 1 hours 30 minutes', text)

    def test_empty_grid(self):
        text = render(AllocationGrid(0, timedelta(days=8), []), fmt='text')
        self.assertIn('No issue activity', text)

    def test_csv(self):
        out = render_csv(_grid())
        lines = out.strip().splitlines()
        self.assertEqual(lines[0], 'issue_key,weight,percentage,duration_seconds,work_hours,work_minutes')
        self.assertEqual(lines[1], 'SBINV-1,8,88.89,28800,8,0')

    def test_json(self):
        window = ReportWindow(date(2025, 1, 3), date(2025, 1, 11))
        doc = json.loads(render(_grid(), fmt='json', user='Alice', window=window))
        self.assertEqual(doc['total_weight'], 9)
        self.assertEqual(doc['scope'], '2025-01-03 to 2025-01-11')
        self.assertEqual([i['issue_key'] for i in doc['items']], ['SBINV-1', 'ITS-2'])
        self.assertEqual(doc['items'][0]['work_time'], '8 hours 0 minutes')

    def test_markdown(self):
        md = render(_grid(), fmt='md', user='Alice')
        self.assertIn('# Work Time Report', md)
        self.assertIn('| SBINV-1 | 8 | 88.89% | 8 hours 0 minutes |', md)

    def test_html(self):
        html = render(_grid(), fmt='html', user='<Alice>', generated_at='now')
        self.assertIn('<html', html)
        self.assertIn('SBINV-1', html)
        self.assertIn('88.89%', html)
        self.assertIn('&lt;Alice&gt;', html)

    def test_html_empty_grid(self):
        html = render(AllocationGrid(0, timedelta(days=8), []), fmt='html')
        self.assertIn('No issue activity', html)

    def test_unknown_format_falls_back_to_text(self):
        self.assertTrue(render(_grid(), fmt='yaml').startswith('SBINV-1:'))


if __name__ == '__main__':
    unittest.main()
