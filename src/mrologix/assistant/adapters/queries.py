"""Technical query board and user activity log queries."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import false, or_, select
from sqlalchemy.orm import Session, selectinload

from mrologix.assistant.adapters._query import attachment_summaries, build_conditions, contains_insensitive
from mrologix.db.models import (
    AuthUser,
    TechnicalQuery,
    TechnicalQueryResponse,
    TechnicalQueryTag,
    UserActivity,
)


RESPONSE_PREVIEW = 5
_SQLITE_MAX_INT = 2**63 - 1

_QUERY_CONTAINS = {
    "title": TechnicalQuery.title,
    "description": TechnicalQuery.description,
    "category": TechnicalQuery.category,
}
_QUERY_EXACT = {
    "priority": TechnicalQuery.priority,
    "status": TechnicalQuery.status,
}
_ACTIVITY_EXACT = {
    "action": UserActivity.action,
    "resourceType": UserActivity.resource_type,
}


def project_user(user: AuthUser | None) -> dict[str, Any] | None:
    if user is None:
        return None
    return {"firstName": user.first_name, "lastName": user.last_name, "username": user.username}


def project_response(response: TechnicalQueryResponse, *, include_attachments: bool = False) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": response.id,
        "content": response.content,
        "isAccepted": bool(response.is_accepted),
        "createdBy": project_user(response.created_by),
        "createdAt": response.created_at,
        "updatedAt": response.updated_at,
    }
    if include_attachments:
        out["attachments"] = attachment_summaries(response.attachments)
    return out


def project_technical_query(query: TechnicalQuery, *, detail: bool = False) -> dict[str, Any]:
    """Search results carry a preview of the first responses; ``detail`` adds everything."""

    out: dict[str, Any] = {
        "id": query.id,
        "title": query.title,
        "description": query.description,
        "category": query.category,
        "priority": query.priority,
        "status": query.status,
        "isResolved": bool(query.is_resolved),
        "viewCount": query.view_count,
        "upvotes": query.upvotes,
        "downvotes": query.downvotes,
        "tags": query.tag_names,
        "resolvedAt": query.resolved_at,
        "createdAt": query.created_at,
        "updatedAt": query.updated_at,
        "createdBy": project_user(query.created_by),
        "attachments": attachment_summaries(query.attachments),
    }
    if detail:
        out["updatedBy"] = project_user(query.updated_by)
        out["resolvedBy"] = project_user(query.resolved_by)
        out["responses"] = [project_response(r, include_attachments=True) for r in query.responses]
        out["votes"] = [{"userId": v.user_id, "voteType": v.vote_type} for v in query.votes]
    else:
        out["responses"] = [project_response(r) for r in query.responses[:RESPONSE_PREVIEW]]
    return out


def project_activity(activity: UserActivity) -> dict[str, Any]:
    return {
        "id": activity.id,
        "userId": activity.user_id,
        "action": activity.action,
        "resourceType": activity.resource_type,
        "resourceId": activity.resource_id,
        "resourceTitle": activity.resource_title,
        "metadata": activity.details,
        "createdAt": activity.created_at,
        "user": project_user(activity.user),
    }


def _created_by(value: str):
    return TechnicalQuery.created_by.has(
        or_(
            contains_insensitive(AuthUser.first_name, value),
            contains_insensitive(AuthUser.last_name, value),
            contains_insensitive(AuthUser.username, value),
        )
    )


def search_technical_queries(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        contains=_QUERY_CONTAINS,
        exact=_QUERY_EXACT,
        flags={"isResolved": TechnicalQuery.is_resolved},
        ranges=(("dateFrom", "dateTo", TechnicalQuery.created_at),),
    )
    if "createdBy" in args:
        conditions.append(_created_by(args["createdBy"]))
    if "tags" in args:
        conditions.append(TechnicalQuery.tags.any(TechnicalQueryTag.tag == args["tags"]))
    stmt = (
        select(TechnicalQuery)
        .where(*conditions)
        .options(
            selectinload(TechnicalQuery.created_by),
            selectinload(TechnicalQuery.tags),
            selectinload(TechnicalQuery.responses).selectinload(TechnicalQueryResponse.created_by),
            selectinload(TechnicalQuery.attachments),
        )
        .order_by(TechnicalQuery.created_at.desc(), TechnicalQuery.id.desc())
        .limit(args["limit"])
    )
    return [project_technical_query(q) for q in db.scalars(stmt).all()]


def get_technical_query_by_id(db: Session, args: Mapping[str, Any]) -> dict[str, Any] | None:
    query = db.get(TechnicalQuery, args["id"])
    return project_technical_query(query, detail=True) if query is not None else None


def _user_id_condition(value: str):
    # user ids are integers; anything else matches nobody
    if not (value.isascii() and value.isdigit()) or int(value) > _SQLITE_MAX_INT:
        return false()
    return UserActivity.user_id == int(value)


def search_user_activity(db: Session, args: Mapping[str, Any]) -> list[dict[str, Any]]:
    conditions = build_conditions(
        args,
        exact=_ACTIVITY_EXACT,
        ranges=(("dateFrom", "dateTo", UserActivity.created_at),),
    )
    if "userId" in args:
        conditions.append(_user_id_condition(args["userId"]))
    stmt = (
        select(UserActivity)
        .where(*conditions)
        .options(selectinload(UserActivity.user))
        .order_by(UserActivity.created_at.desc(), UserActivity.id.desc())
        .limit(args["limit"])
    )
    return [project_activity(a) for a in db.scalars(stmt).all()]
