"""Notion database integration for training sessions."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from .credentials import NotionCredentials
from .message_parser import TrainingSession

NOTION_PAGES_URL = "https://api.notion.com/v1/pages"
NOTION_VERSION = "2022-06-28"
REQUEST_TIMEOUT = 10
PREVIEW_LENGTH = 200

# Notion property names for slots 1-4: (menu, weight, reps)
SLOT_PROPERTY_NAMES = (
    ("TrainingMenu1", "Weight1", "Reps1"),
    ("TrainingMenu2", "Weight2", "Reps2"),
    ("TrainingMenu3", "Weight3", "Reps3"),
    ("TrainingMenu4", "Weight4", "Reps4"),
)

FAILURE_CREDENTIALS = "credentials"
FAILURE_UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class Submitted:
    """Notion accepted the page (any 2xx)."""

    status_code: int
    preview: str


@dataclass(frozen=True)
class Rejected:
    """Notion answered with a non-2xx status."""

    status_code: int
    body: str


@dataclass(frozen=True)
class Failed:
    """No usable answer from Notion, or the call never happened."""

    category: str
    error: Exception


SubmissionOutcome = Union[Submitted, Rejected, Failed]


def _number(value: Optional[int]) -> Dict[str, Any]:
    # Notion keeps the property but clears it on null
    return {"number": value or None}


def build_properties(session: TrainingSession) -> Dict[str, Any]:
    """Map a TrainingSession onto the Notion database properties."""
    properties = {
        "TrainingType": {
            "title": [
                {
                    "text": {
                        "content": session.training_type
                    }
                }
            ]
        },
        "WorkoutDate": {
            "date": {
                "start": session.workout_date.isoformat()
            }
        }
    }

    for (menu_name, weight_name, reps_name), entry in zip(SLOT_PROPERTY_NAMES, session.entries):
        properties[menu_name] = {
            "rich_text": [
                {
                    "text": {
                        "content": entry.menu or ""
                    }
                }
            ]
        }
        properties[weight_name] = _number(entry.weight)
        properties[reps_name] = _number(entry.reps)

    return properties


def build_payload(session: TrainingSession, database_id: str) -> Dict[str, Any]:
    return {
        "parent": {
            "database_id": database_id
        },
        "properties": build_properties(session)
    }


def safe_text(response: requests.Response) -> str:
    """Decode a response body as UTF-8, replacing undecodable bytes."""
    content = response.content or b""
    return content.decode("utf-8", errors="replace")


def submit_training_session(
    session: TrainingSession,
    credentials: NotionCredentials,
    logger: Optional[logging.Logger] = None,
    http=requests,
) -> SubmissionOutcome:
    """
    Create one page for the session in the Notion database.

    Makes exactly one request and never retries. A repeated call creates a
    second page.

    Args:
        session: Parsed training session
        credentials: Notion API key and target database ID
        logger: Logger of the current invocation
        http: Object with a requests-compatible ``post``

    Returns:
        Submitted, Rejected or Failed
    """
    logger = logger or logging.getLogger(__name__)

    try:
        headers = {
            "Authorization": f"Bearer {credentials.api_key}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION
        }
        payload = build_payload(session, credentials.database_id)

        response = http.post(
            NOTION_PAGES_URL,
            headers=headers,
            json=payload,
            timeout=REQUEST_TIMEOUT
        )

        body = safe_text(response)
        if 200 <= response.status_code < 300:
            logger.info(f"Successfully sent to Notion: {body}")
            return Submitted(status_code=response.status_code, preview=body[:PREVIEW_LENGTH])

        logger.error(f"Notion API error: {response.status_code} - {body}")
        return Rejected(status_code=response.status_code, body=body)

    except Exception as e:
        logger.error(f"Error sending to Notion: {str(e)}", exc_info=True)
        return Failed(category=FAILURE_UNEXPECTED, error=e)
