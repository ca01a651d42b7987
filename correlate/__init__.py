"""
Correlate package: expose linker functionality for extracting issue activities from events.
"""

from .linker import extract_activities, link_events_to_issues

__all__ = ["extract_activities", "link_events_to_issues"]
