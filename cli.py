"""
CLI entry point for the work time report. Wires the pipeline: ingest -> extract -> weigh -> allocate -> report
"""

import argparse
import json
import logging
import os
import sys
import webbrowser
from datetime import datetime, timezone

from correlate.linker import link_events_to_issues
from correlate.models import AllocationGrid
from ingest.errors import IngestError
from ingest.gitlab import GitLabClient, raw_events_from_payload
from ingest.jira import JiraClient
from models import ReportWindow
from report.renderer import render
from scoring.allocation import build_weight_grid
from settings import Credentials, MissingCredentialsError, ReportSettings, load_env_file, load_settings

logger = logging.getLogger(__name__)


def _required_credentials(args) -> list:
    required = []
    if not args.skip_gitlab and not args.events_file:
        required.append('gitlab_token')
    if not args.skip_jira:
        required.extend(['jira_login', 'jira_password'])
    return required


def _resolve_credentials(args, parser) -> Credentials:
    """Resolve credentials from CLI args or environment variables.
    Calls parser.error() if any required credential is missing.
    """
    overrides = {
        'gitlab_token': args.gitlab_token,
        'jira_login': args.jira_login,
        'jira_password': args.jira_password,
    }
    try:
        return Credentials.resolve(overrides, required=_required_credentials(args))
    except MissingCredentialsError as ex:
        parser.error(str(ex))


def _load_json_file(path: str, description: str):
    """Load a JSON file; errors propagate to the caller."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except ValueError as ex:
            raise ValueError(f"Failed to parse {description} {path}: {ex}") from ex


def collect_gitlab_grid(args, settings: ReportSettings, credentials: Credentials, window: ReportWindow):
    """Return (user display name, AllocationGrid) from GitLab or from a saved events file."""
    if args.events_file:
        logger.info("Reading GitLab events from %s", args.events_file)
        events = raw_events_from_payload(_load_json_file(args.events_file, 'events file'))
        return None, build_weight_grid(window.duration, link_events_to_issues(events))

    logger.info("Collecting GitLab info...")
    gitlab = GitLabClient(credentials.gitlab_token, settings.gitlab_url, timeout=settings.timeout)
    user = gitlab.get_user()
    logger.info("User: %s", user.name)
    return user.name, gitlab.get_weight_grid(window, user.user_id)


def collect_jira_issues(settings: ReportSettings, credentials: Credentials, window: ReportWindow):
    logger.info("Collecting JIRA info...")
    jira = JiraClient(credentials.jira_login, credentials.jira_password, settings.jira_url,
                      timeout=settings.timeout, max_results=settings.jira_max_results)
    return jira.search_issues(window, settings.workday_hours)


def run_pipeline(args, settings: ReportSettings, credentials: Credentials):
    """Execute ingest -> allocate -> render and return (fmt, rendered)."""
    window = ReportWindow.last_days(settings.window_days)
    logger.debug("Reporting window: %s", window)

    user_name = None
    grid = AllocationGrid(0, window.duration, [])
    if not args.skip_gitlab or args.events_file:
        user_name, grid = collect_gitlab_grid(args, settings, credentials, window)

    jira_issues = [] if args.skip_jira else collect_jira_issues(settings, credentials, window)

    fmt = (args.output or 'text').lower()
    rendered = render(
        grid,
        fmt=fmt,
        jira_issues=jira_issues,
        user=user_name,
        window=window,
        workday_hours=settings.workday_hours,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
    return fmt, rendered


def _open_file_in_browser(path: str):
    """Open a file URL in the system default web browser."""
    webbrowser.open("file://" + os.path.abspath(path))


def _write_report_file(path_base: str, ext: str, content: str, open_html: bool = False) -> str:
    """Write the rendered content to a file and optionally open HTML in the browser."""
    out_path = path_base if path_base.lower().endswith(f".{ext}") else f"{path_base}.{ext}"
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    # newline='' is safe for CSV on Windows and harmless for other formats
    with open(out_path, 'w', encoding='utf-8', newline='') as fh:
        fh.write(content)
    print(f"Wrote report to {out_path}")
    if open_html:
        _open_file_in_browser(out_path)
    return out_path


def write_output(fmt: str, rendered: str, args):
    """Write output to --out-file when given, otherwise print it. HTML always goes to a file.
    Formats rendered as plain text are written with a .txt extension.
    """
    ext_map = {"html": "html", "htm": "html", "md": "md", "markdown": "md", "csv": "csv", "json": "json", "js": "json"}
    if args.out_file.strip() or fmt in ("html", "htm"):
        ext = ext_map.get(fmt, "txt")
        base = args.out_file.strip() or f"worktime_report_{datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%SZ')}"
        _write_report_file(base, ext, rendered, open_html=(args.open and ext == "html"))
    else:
        print(rendered)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weekly work time allocation across issues from GitLab activity and Jira worklogs")
    parser.add_argument("--days", type=int, default=None, help="Report the last N days up to today (default from settings, 7)")
    parser.add_argument("--workday-hours", type=int, default=None, help="Hours in one workday (default from settings, 8)")
    parser.add_argument("--output", type=str, default="text", help="Output format (text, md, csv, json, html)")
    parser.add_argument("--out-file", type=str, default="", help="Output file path. HTML always goes to a file; if omitted a default name is used")
    parser.add_argument("--open", action="store_true", help="Open the generated HTML report in the default browser")
    parser.add_argument("--config", type=str, default="", help="Path to a settings YAML file (default: bundled settings/settings.yaml); must exist when given")
    parser.add_argument("--gitlab-url", type=str, default=None, help="GitLab base URL")
    parser.add_argument("--jira-url", type=str, default=None, help="Jira base URL")
    parser.add_argument("--gitlab_token", type=str, help="GitLab private token (or set GITLAB_TOKEN env var)")
    parser.add_argument("--jira_login", type=str, help="Jira login (or set JIRA_LOGIN env var)")
    parser.add_argument("--jira_password", type=str, help="Jira password (or set JIRA_PASSWORD env var)")
    parser.add_argument("--skip-gitlab", action="store_true", help="Do not query GitLab")
    parser.add_argument("--skip-jira", action="store_true", help="Do not query Jira")
    parser.add_argument("--events-file", type=str, default="", help="Read GitLab events from a saved JSON array instead of the API")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    load_env_file()
    try:
        settings = load_settings(args.config or None, overrides={
            'gitlab_url': args.gitlab_url,
            'jira_url': args.jira_url,
            'workday_hours': args.workday_hours,
            'window_days': args.days,
        })
    except (OSError, ValueError) as ex:
        parser.error(str(ex))

    # Resolve credentials (CLI flags take precedence over environment variables)
    credentials = _resolve_credentials(args, parser)

    try:
        fmt, rendered = run_pipeline(args, settings, credentials)
    except (IngestError, OSError, ValueError) as ex:
        logger.error("%s", ex)
        sys.exit(1)
    write_output(fmt, rendered, args)


if __name__ == "__main__":
    main()
