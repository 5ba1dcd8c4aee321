"""Deterministic webhook payload builders for GitHub and Azure DevOps.

Timestamps default to 2023-11-14T22:13:20Z, which is epoch 1700000000.
"""

from __future__ import annotations

import typing as typ

CREATED_AT = "2023-11-14T22:13:20Z"
CREATED_AT_MS = "1700000000000"
RESOLVED_AT = "2023-11-15T00:13:20Z"
RESOLVED_AT_MS = "1700007200000"
FIXED_NOW_MS = "1700100000000"


def github_headers(event: str, *, header: str = "X-GitHub-Event") -> dict[str, str]:
    """Return headers announcing a GitHub event type."""
    return {header: event}


def pull_request_payload(
    *,
    action: str = "closed",
    merged: bool = True,
    merged_at: str | None = CREATED_AT,
    sha: str | None = "abc123",
    repo: str = "octo/reef",
) -> dict[str, typ.Any]:
    """Build a GitHub ``pull_request`` webhook body."""
    return {
        "action": action,
        "number": 17,
        "pull_request": {
            "id": 9001,
            "title": "Add release checklist",
            "merged": merged,
            "merged_at": merged_at if merged else None,
            "merge_commit_sha": sha,
        },
        "repository": {"full_name": repo},
    }


def issue_payload(  # noqa: PLR0913
    *,
    action: str = "opened",
    labels: tuple[str, ...] = ("incident",),
    changed_label: str | None = None,
    closed_at: str | None = None,
    updated_at: str | None = None,
    issue_id: int = 101,
    repo: str = "octo/reef",
) -> dict[str, typ.Any]:
    """Build a GitHub ``issues`` webhook body."""
    body: dict[str, typ.Any] = {
        "action": action,
        "issue": {
            "id": issue_id,
            "number": 5,
            "title": "Checkout is down",
            "labels": [{"name": name} for name in labels],
            "created_at": CREATED_AT,
            "closed_at": closed_at,
            "updated_at": updated_at or CREATED_AT,
        },
        "repository": {"full_name": repo},
    }
    if changed_label is not None:
        body["label"] = {"name": changed_label}
    return body


def azure_created_payload(
    *,
    tags: str = "incident",
    area_path: str = "Fabrikam",
    created_date: str | None = CREATED_AT,
) -> dict[str, typ.Any]:
    """Build an Azure DevOps ``workitem.created`` webhook body."""
    fields: dict[str, typ.Any] = {
        "System.AreaPath": area_path,
        "System.Title": "Payments outage",
        "System.Tags": tags,
    }
    if created_date is not None:
        fields["System.CreatedDate"] = created_date
    return {
        "eventType": "workitem.created",
        "createdDate": CREATED_AT,
        "resource": {"id": 5, "fields": fields},
    }


def azure_updated_payload(  # noqa: PLR0913
    *,
    reason: str = "Completed",
    revision_tags: str = "incident",
    old_tags: str | None = None,
    new_tags: str | None = None,
    area_path: str = "Fabrikam",
    resolved_date: str | None = RESOLVED_AT,
    resource_created_date: str | None = None,
) -> dict[str, typ.Any]:
    """Build an Azure DevOps ``workitem.updated`` webhook body.

    ``old_tags``/``new_tags`` populate the tag diff on ``resource.fields``;
    ``resource_created_date`` adds ``System.CreatedDate`` to that diff.
    """
    diff: dict[str, typ.Any] = {
        "System.Rev": {"oldValue": 1, "newValue": 2},
    }
    if old_tags is not None or new_tags is not None:
        diff["System.Tags"] = {"oldValue": old_tags, "newValue": new_tags}
    if resource_created_date is not None:
        diff["System.CreatedDate"] = resource_created_date
    body: dict[str, typ.Any] = {
        "eventType": "workitem.updated",
        "resource": {
            "id": 12,
            "workItemId": 5,
            "fields": diff,
            "revision": {
                "id": 5,
                "fields": {
                    "System.AreaPath": area_path,
                    "System.CreatedDate": CREATED_AT,
                    "System.Reason": reason,
                    "System.Tags": revision_tags,
                    "System.Title": "Payments outage",
                },
            },
        },
    }
    if resolved_date is not None:
        body["createdDate"] = resolved_date
    return body


def azure_deleted_payload(*, area_path: str = "Fabrikam") -> dict[str, typ.Any]:
    """Build an Azure DevOps ``workitem.deleted`` webhook body."""
    return {
        "eventType": "workitem.deleted",
        "createdDate": RESOLVED_AT,
        "resource": {
            "id": 5,
            "fields": {
                "System.AreaPath": area_path,
                "System.CreatedDate": CREATED_AT,
                "System.Title": "Payments outage",
                "System.Tags": "incident",
            },
        },
    }
