"""Main webhook handler for turning chat workout logs into Notion pages."""

import azure.functions as func
import json
import logging
from datetime import date
from typing import Any, Dict, Optional

import requests

from shared.logging_config import get_invocation_logger
from shared.validators import validate_request_size
from .credentials import (
    CredentialProviderError,
    get_credential_provider,
    load_notion_credentials,
)
from .message_parser import parse_message
from .notion_handler import (
    FAILURE_CREDENTIALS,
    Failed,
    Rejected,
    SubmissionOutcome,
    Submitted,
    submit_training_session,
)

NO_MESSAGE = "No message"


def _response(status_code: int, **body: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "body": json.dumps(body)
    }


def extract_user_message(body: Any) -> str:
    """Return ``events[0].message.text`` of a webhook body, or "No message"."""
    if not isinstance(body, dict):
        return NO_MESSAGE

    events = body.get("events")
    if not isinstance(events, list) or not events or not isinstance(events[0], dict):
        return NO_MESSAGE

    message = events[0].get("message")
    if not isinstance(message, dict) or message.get("text") is None:
        return NO_MESSAGE

    return str(message["text"])


def outcome_to_response(outcome: SubmissionOutcome) -> Dict[str, Any]:
    """Translate a submission outcome into the webhook response."""
    if isinstance(outcome, Submitted):
        return _response(200, message="✅ Sent to Notion", notion_response=outcome.preview)

    if isinstance(outcome, Rejected):
        return _response(
            outcome.status_code,
            message="❌ Failed to send to Notion",
            notion_response=outcome.body
        )

    if isinstance(outcome, Failed) and outcome.category == FAILURE_CREDENTIALS:
        return _response(500, message=f"SSM parameter retrieval error: {outcome.error}")

    error = outcome.error
    return _response(
        500,
        message="Internal Server Error",
        error=f"{type(error).__name__}: {error}"
    )


def handle_event(
    event: Dict[str, Any],
    provider=None,
    logger: Optional[logging.Logger] = None,
    today: Optional[date] = None,
    http=requests,
) -> Dict[str, Any]:
    """
    Process one webhook event.

    Args:
        event: Mapping whose ``body`` is the JSON-encoded webhook payload
        provider: Credential provider; chosen from CREDENTIAL_SOURCE if omitted
        logger: Invocation logger; configured here if omitted
        today: Workout date to record; defaults to the current date
        http: requests-compatible client used for the Notion call

    Returns:
        dict with ``statusCode`` and a JSON-encoded ``body``
    """
    logger = logger or get_invocation_logger()

    try:
        body = json.loads(event["body"])
        user_message = extract_user_message(body)
        logger.debug(f"Received user message: {user_message}")

        if provider is None:
            provider = get_credential_provider()

        try:
            credentials = load_notion_credentials(provider, logger)
        except CredentialProviderError as e:
            logger.error(f"SSM error: {str(e)}")
            return outcome_to_response(Failed(category=FAILURE_CREDENTIALS, error=e))

        if credentials is None:
            logger.warning("Missing parameters for Notion API.")
            return _response(
                200,
                message="🧪 Test mode: Notion API not called (missing env vars)",
                user_message=user_message
            )

        session = parse_message(user_message, workout_date=today, logger=logger)
        logger.info(
            f"Parsed training session: {session.training_type!r}, "
            f"{sum(1 for entry in session.entries if entry.menu)} exercises"
        )

        outcome = submit_training_session(session, credentials, logger=logger, http=http)
        return outcome_to_response(outcome)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, message="Invalid JSON format.")

    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return _response(
            500,
            message="Internal Server Error",
            error=f"{type(e).__name__}: {e}"
        )


def training_log_webhook(req: func.HttpRequest) -> func.HttpResponse:
    """
    Webhook endpoint receiving chat platform events.

    The raw request body is handed to handle_event as the event ``body``.
    """
    logger = get_invocation_logger()
    logger.info('Training webhook received.')

    is_valid, error_msg, status_code = validate_request_size(req.headers.get('Content-Length'))
    if not is_valid:
        logger.warning(f"Request rejected: {error_msg}")
        return func.HttpResponse(error_msg, status_code=status_code)

    event = {"body": req.get_body().decode("utf-8", errors="replace")}
    result = handle_event(event, logger=logger)

    return func.HttpResponse(
        result["body"],
        status_code=result["statusCode"],
        mimetype="application/json"
    )
