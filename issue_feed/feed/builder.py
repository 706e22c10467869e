"""Assembly of feed records from issues and their payloads."""

import logging
from collections.abc import Sequence
from typing import Any

from ..github_client.models import GitHubIssue, GitHubLabel
from ..utils.color import hex_to_hsl
from .models import DecoratedLabel, Record

logger = logging.getLogger(__name__)


def decorate_label(label: GitHubLabel) -> DecoratedLabel:
    """Attach HSL values to a label; a missing color gives zeros."""
    try:
        hsl = hex_to_hsl(label.color)
    except ValueError:
        logger.warning("Label %s has invalid color %r", label.name, label.color)
        hsl = None
    if hsl is None:
        return DecoratedLabel(name=label.name, color=label.color)
    return DecoratedLabel(
        name=label.name, color=label.color, h=hsl.h, s=hsl.s, l=hsl.l
    )


def build_record(
    issue: GitHubIssue,
    payload: dict[str, Any],
    labels: Sequence[GitHubLabel],
    icon: str,
) -> Record:
    """Combine a payload with the fields derived from its issue.

    The payload is copied, not modified. Derived fields win over payload
    keys of the same name.
    """
    data = dict(payload)
    data.update(
        issue_number=issue.number,
        labels=[decorate_label(label) for label in labels],
        icon=icon,
    )
    return Record.model_validate(data)
