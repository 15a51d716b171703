"""Slack notification adapter."""

import httpx

from connpass_notifier.core import DispatchError, NotificationPayload, NotificationService


class SlackNotifier(NotificationService):
    """Send notifications to Slack via webhook."""
    
    def __init__(self, webhook_url: str, timeout: float = 30.0) -> None:
        """Initialize Slack notifier.
        
        Args:
            webhook_url: Slack incoming webhook URL
            timeout: HTTP timeout in seconds
        """
        if not webhook_url:
            raise ValueError("webhook_url cannot be empty")
        self.webhook_url = webhook_url
        self.timeout = timeout
    
    async def send(self, payload: NotificationPayload) -> None:
        """Post one payload to the webhook.
        
        Raises:
            DispatchError: Slack rejected the message or could not be reached
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise DispatchError(
                    f"Slack webhook returned HTTP {e.response.status_code}: {e.response.text[:200]}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise DispatchError(f"Slack webhook request failed: {e}") from e
