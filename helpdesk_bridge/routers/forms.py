"""Form handling endpoints"""
from datetime import datetime, timezone
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException
import logging

from helpdesk_bridge.dependencies import get_submitter, get_supabase
from helpdesk_bridge.models.forms import (
    FeedMapping,
    FeedOutcome,
    FormInfo,
    FormSubmitRequest,
    FormSubmitResponse,
    Submission,
)
from helpdesk_bridge.services.feed_condition import is_condition_met
from helpdesk_bridge.services.submitter import ConversationSubmitter

logger = logging.getLogger(__name__)
router = APIRouter()


def feed_from_row(row: Dict[str, Any]) -> FeedMapping:
    """Build a FeedMapping from a helpdesk_feeds row (settings live in `meta`)"""
    meta = dict(row.get("meta") or {})
    meta.pop("id", None)
    meta.pop("is_active", None)
    meta.setdefault("name", row.get("name") or "")
    return FeedMapping(
        id=str(row["id"]) if row.get("id") is not None else None,
        is_active=row.get("is_active", True),
        **meta
    )


@router.post("/submit", response_model=FormSubmitResponse)
async def submit_form(
    form: FormSubmitRequest,
    supabase=Depends(get_supabase),
    submitter: ConversationSubmitter = Depends(get_submitter),
):
    """Handle form submission (PUBLIC endpoint)"""
    try:
        form_result = supabase.table("forms").select("id, title").eq(
            "id", form.form_id
        ).single().execute()

        if not form_result.data:
            raise HTTPException(status_code=404, detail="Form not found")

        form_info = FormInfo(id=str(form_result.data["id"]), title=form_result.data.get("title", ""))

        # Save submission
        submission_result = supabase.table("form_submissions").insert({
            "form_id": form.form_id,
            "source_url": form.source_url,
            "submitted_data": form.field_values
        }).execute()

        row = submission_result.data[0]
        submission = Submission(
            id=str(row["id"]),
            form_id=form.form_id,
            created_at=row.get("created_at") or datetime.now(timezone.utc),
            source_url=form.source_url,
            field_values=form.field_values
        )

        # Active helpdesk feeds for this form
        feeds_result = supabase.table("helpdesk_feeds").select("*").eq(
            "form_id", form.form_id
        ).eq("is_active", True).order("created_at").execute()

        outcomes: List[FeedOutcome] = []
        for feed_row in feeds_result.data or []:
            try:
                feed = feed_from_row(feed_row)
            except (TypeError, ValueError) as e:
                # pydantic.ValidationError is a ValueError
                logger.error(f"Feed row {feed_row.get('id')} has invalid settings: {e}")
                outcomes.append(FeedOutcome(
                    feed_id=str(feed_row["id"]) if feed_row.get("id") is not None else None,
                    feed_name=str(feed_row.get("name") or ""),
                    status="failed",
                    error_kind="invalid_feed",
                    error="Feed settings are invalid."
                ))
                continue

            if not feed.is_active:
                continue

            if not is_condition_met(feed.condition, submission, submitter.extractor):
                logger.info(f"Feed '{feed.name}' skipped for submission {submission.id}: condition not met")
                outcomes.append(FeedOutcome(feed_id=feed.id, feed_name=feed.name, status="skipped"))
                continue

            result = await submitter.process(feed, submission, form_info)
            if result.ok:
                outcomes.append(FeedOutcome(
                    feed_id=feed.id,
                    feed_name=feed.name,
                    status="created",
                    conversation_id=result.conversation_id
                ))
            else:
                outcomes.append(FeedOutcome(
                    feed_id=feed.id,
                    feed_name=feed.name,
                    status="failed",
                    error_kind=result.kind,
                    error=result.message
                ))

        return FormSubmitResponse(
            submission_id=submission.id,
            success=all(outcome.status != "failed" for outcome in outcomes),
            feeds=outcomes
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Form submission error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
