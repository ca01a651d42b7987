"""
Importance weights for GitLab actions.
Authoring work (creating, pushing) weighs far more than reviewing or commenting.
"""
from typing import Dict

from normalize.models import GitAction, ExtractedActivity

DEFAULT_ACTION_WEIGHT = 1

ACTION_WEIGHTS: Dict[GitAction, int] = {
    GitAction.CREATED: 10,
    GitAction.PUSHED_NEW: 7,
    GitAction.PUSHED_TO: 5,
}


def action_weight(action: GitAction) -> int:
    """Return the weight of an action; anything not listed in ACTION_WEIGHTS scores DEFAULT_ACTION_WEIGHT."""
    return ACTION_WEIGHTS.get(action, DEFAULT_ACTION_WEIGHT)


def activity_weight(activity: ExtractedActivity) -> int:
    return action_weight(activity.action)
