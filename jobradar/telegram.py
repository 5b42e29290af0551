"""Send job cards and run status to a Telegram chat via the Bot API."""
from __future__ import annotations

import re

import requests

from jobradar.config import get_env
from jobradar.log import get_logger
from jobradar.models import ScoredRecord
from jobradar.retry import RateLimited, retry

log = get_logger(__name__)

API_BASE = "https://api.telegram.org"
_MARKDOWN_V2_SPECIAL = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")
# inside (...) of an inline link only these two need escaping
_LINK_TARGET_SPECIAL = re.compile(r"([)\\])")


class TelegramError(Exception):
    pass


class TelegramTransientError(TelegramError):
    """Network-level failure worth retrying."""


def escape_markdown(text: str) -> str:
    return _MARKDOWN_V2_SPECIAL.sub(r"\\\1", text or "")


def escape_link_target(url: str) -> str:
    return _LINK_TARGET_SPECIAL.sub(r"\\\1", url or "")


def format_job_card(scored: ScoredRecord) -> str:
    job = scored.record
    lines = [
        f"🏢 *{escape_markdown(job.company or 'Unknown company')}*",
        f"💼 {escape_markdown(job.title)}",
        f"🔗 [View Job]({escape_link_target(job.url)})" if job.url else "",
        f"💰 {escape_markdown(job.salary)}" if job.salary else "",
        f"📝 {escape_markdown(job.tech_stack or 'N/A')}",
        f"📍 {escape_markdown(job.location or 'N/A')}",
        f"📅 {escape_markdown(job.posted_date)}" if job.posted_date else "",
        f"🤖 Match Score: {escape_markdown(f'{scored.match_score}/10')}",
        f"🔖 Source: {escape_markdown(job.source)}",
    ]
    return "\n".join(line for line in lines if line)


class TelegramReporter:
    """Without a token and chat id every send is logged and reported as failed."""

    def __init__(self, token: str | None = None, chat_id: str | None = None) -> None:
        self.token = token if token is not None else get_env("TELEGRAM_BOT_TOKEN")
        self.chat_id = chat_id if chat_id is not None else get_env("TELEGRAM_CHAT_ID")
        if not self.enabled:
            log.warning("TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID not set — Telegram disabled")

    @property
    def enabled(self) -> bool:
        return bool(self.token and self.chat_id)

    @retry(max_attempts=3, base_delay=1.0, retryable=(TelegramTransientError,))
    def _send_message(self, text: str, parse_mode: str | None = None) -> None:
        payload: dict = {"chat_id": self.chat_id, "text": text, "disable_web_page_preview": True}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        try:
            r = requests.post(f"{API_BASE}/bot{self.token}/sendMessage", json=payload, timeout=15)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise TelegramTransientError(self._redact(exc)) from None
        if r.status_code == 429:
            retry_after = (r.json().get("parameters") or {}).get("retry_after")
            raise RateLimited("Telegram rate limit", retry_after=retry_after)
        if not r.ok:
            raise TelegramError(f"HTTP {r.status_code}: {r.text[:200]}")

    def _redact(self, exc: BaseException) -> str:
        return str(exc).replace(self.token, "***") if self.token else str(exc)

    def _deliver(self, text: str, parse_mode: str | None = None) -> bool:
        if not self.enabled:
            log.info("Telegram disabled, not sent: %s", text.splitlines()[0][:80] if text else "")
            return False
        try:
            self._send_message(text, parse_mode)
            return True
        except (TelegramError, RateLimited, requests.RequestException, ValueError) as exc:
            log.error("Telegram send failed: %s", self._redact(exc)[:150])
            return False

    def send_job_report(self, scored: ScoredRecord) -> bool:
        return self._deliver(format_job_card(scored), parse_mode="MarkdownV2")

    def send_status(self, message: str) -> bool:
        return self._deliver(f"ℹ️ {message}")

    def send_error(self, message: str) -> bool:
        return self._deliver(f"❌ Error: {message}")
