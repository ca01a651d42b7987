"""
Report renderer: generate text/Markdown/CSV/JSON/HTML summaries from an AllocationGrid.
HTML and Markdown are rendered with Jinja2 templates from report/templates.
"""

from typing import Optional, List, Dict, Any
import os
import io
import csv
import json

from jinja2 import Environment, FileSystemLoader, select_autoescape

from correlate.models import AllocationGrid, IssueAllocation
from models import ReportWindow
from normalize.models import JiraIssue
from worktime import WorkTime, DEFAULT_WORKDAY_HOURS

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), 'templates')
NO_ACTIVITY = "No issue activity found in the reporting window."


def _environment() -> Environment:
    return Environment(loader=FileSystemLoader(TEMPLATES_DIR), autoescape=select_autoescape(['html', 'xml', 'html.j2']))


def _rows(grid: AllocationGrid, workday_hours: int) -> List[Dict[str, Any]]:
    """Ranked per-issue rows with display values precomputed."""
    rows = []
    for item in grid.ranked():
        rows.append({
            'issue_key': item.issue_key,
            'weight': item.weight,
            'percentage': grid.percentage(item),
            'duration': item.duration,
            'work_time': WorkTime.from_duration(item.duration, workday_hours),
        })
    return rows


def format_allocation_line(grid: AllocationGrid, item: IssueAllocation, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> str:
    """Render `<key>: <pct>% of time (<work time>)`."""
    time = WorkTime.from_duration(item.duration, workday_hours)
    return f"{item.issue_key}: {grid.percentage(item):.2f}% of time ({time})"


def render_text(grid: AllocationGrid, jira_issues: Optional[List[JiraIssue]] = None, user: Optional[str] = None, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> str:
    """Render a plain-text summary, one issue per line."""
    lines = []
    if user:
        lines.append(f"User: {user}")
    if grid.items:
        lines.extend(format_allocation_line(grid, item, workday_hours) for item in grid.ranked())
    else:
        lines.append(NO_ACTIVITY)
    if jira_issues:
        lines.append("")
        lines.append("Jira worklogs:")
        lines.extend(str(issue) for issue in jira_issues)
    return "\n".join(lines)


def render_csv(grid: AllocationGrid, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> str:
    """Render one CSV row per issue with a header."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(['issue_key', 'weight', 'percentage', 'duration_seconds', 'work_hours', 'work_minutes'])
    for row in _rows(grid, workday_hours):
        wt = row['work_time']
        writer.writerow([
            row['issue_key'],
            row['weight'],
            f"{row['percentage']:.2f}",
            int(row['duration'].total_seconds()),
            wt.total_hours(),
            wt.minutes,
        ])
    return output.getvalue()


def render_json(grid: AllocationGrid, jira_issues: Optional[List[JiraIssue]] = None, user: Optional[str] = None,
                window: Optional[ReportWindow] = None, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> str:
    """Export the grid (and optional Jira worklogs) as JSON."""
    doc = {
        'user': user,
        'scope': str(window) if window else None,
        'total_weight': grid.total_weight,
        'total_duration_seconds': int(grid.total_duration.total_seconds()),
        'items': [
            {
                'issue_key': row['issue_key'],
                'weight': row['weight'],
                'percentage': round(row['percentage'], 2),
                'duration_seconds': int(row['duration'].total_seconds()),
                'work_time': str(row['work_time']),
            }
            for row in _rows(grid, workday_hours)
        ],
        'jira_issues': [
            {'key': issue.key, 'summary': issue.summary, 'spent_time': str(issue.spent_time)}
            for issue in (jira_issues or [])
        ],
    }
    return json.dumps(doc, indent=2, ensure_ascii=False)


def _template_context(grid, jira_issues, user, window, workday_hours, generated_at) -> Dict[str, Any]:
    return {
        'grid': grid,
        'rows': _rows(grid, workday_hours),
        'total_work_time': WorkTime.from_duration(grid.total_duration, workday_hours),
        'jira_issues': jira_issues or [],
        'user': user,
        'scope': str(window) if window else None,
        'generated_at': generated_at,
        'no_activity': NO_ACTIVITY,
    }


def render(
    grid: AllocationGrid,
    fmt: str = 'text',
    jira_issues: Optional[List[JiraIssue]] = None,
    user: Optional[str] = None,
    window: Optional[ReportWindow] = None,
    workday_hours: int = DEFAULT_WORKDAY_HOURS,
    generated_at: Optional[str] = None,
) -> str:
    """Main render function; unknown formats fall back to plain text."""
    fmt_l = (fmt or 'text').lower()
    if fmt_l in ('md', 'markdown', 'html', 'htm'):
        name = 'report.md.j2' if fmt_l in ('md', 'markdown') else 'report.html.j2'
        tmpl = _environment().get_template(name)
        return tmpl.render(**_template_context(grid, jira_issues, user, window, workday_hours, generated_at))
    if fmt_l == 'csv':
        return render_csv(grid, workday_hours)
    if fmt_l in ('json', 'js'):
        return render_json(grid, jira_issues, user, window, workday_hours)
    return render_text(grid, jira_issues, user, workday_hours)
