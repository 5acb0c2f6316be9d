from __future__ import annotations

import logging
from typing import Any

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from .config import DEFAULT_NOTIFICATION_CONFIG, NotificationConfig
from .models import NotificationDeliveryError, NotificationRequest, NotificationResult

logger = logging.getLogger(__name__)

FCM_SCOPE = "https://www.googleapis.com/auth/firebase.messaging"
CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"


def build_message(request: NotificationRequest) -> dict[str, Any]:
    """Build the FCM v1 ``messages:send`` body for one device."""
    notification: dict[str, str] = {"title": request.title, "body": request.body}
    if request.image_url:
        notification["image"] = request.image_url

    return {
        "message": {
            "token": request.token,
            "notification": notification,
            "data": {
                "type": request.type or "general",
                "click_action": CLICK_ACTION,
                **request.data,
            },
            "android": {
                "priority": "high",
                "notification": {
                    "sound": "default",
                    "channel_id": request.type or "default",
                },
            },
            "apns": {
                "payload": {
                    "aps": {"sound": "default", "badge": 1},
                },
            },
        },
    }


def _credentials(config: NotificationConfig) -> service_account.Credentials:
    info = {
        "type": "service_account",
        "project_id": config.project_id,
        "client_email": config.client_email,
        "private_key": config.private_key,
        "token_uri": config.token_uri,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=[FCM_SCOPE])


def _error_reason(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "FCM send failed"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "FCM send failed"


def send_notification(
    request: NotificationRequest,
    config: NotificationConfig = DEFAULT_NOTIFICATION_CONFIG,
) -> NotificationResult:
    """
    Deliver one push notification through FCM.

    Raises ``NotificationDeliveryError`` carrying the upstream HTTP status
    when FCM rejects the message, or status 500 when the call never reached
    FCM (missing credentials, OAuth failure, network error).
    """
    if not config.is_configured:
        raise NotificationDeliveryError(500, "Firebase service account is not configured")

    try:
        session = AuthorizedSession(_credentials(config))
        response = session.post(
            config.send_url,
            json=build_message(request),
            timeout=config.timeout,
        )
    except (GoogleAuthError, requests.RequestException, ValueError) as exc:
        logger.error("FCM request failed before delivery", exc_info=True)
        raise NotificationDeliveryError(500, str(exc)) from exc

    if not response.ok:
        reason = _error_reason(response)
        logger.error("FCM error %s: %s", response.status_code, reason)
        raise NotificationDeliveryError(response.status_code, reason)

    try:
        message_id = response.json().get("name")
    except ValueError:
        message_id = None
    logger.info("FCM delivered message %s", message_id)
    return NotificationResult(success=True, message_id=message_id)
