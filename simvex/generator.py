# simvex/generator.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .config import Settings
from .logging_config import log_latency

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "AI request failed: "

SYSTEM_PROMPT = (
    "당신은 'SIMVEX'라는 3D 공학 시뮬레이션 플랫폼의 AI 어시스턴트입니다.\n"
    "사용자가 선택한 기계 부품에 대해 공학적 원리, 재질, 역할 등을 전문적이면서도 알기 쉽게 설명해야 합니다.\n"
    "답변은 한국어로, 3문장 내외로 핵심만 요약해서 답변하세요.\n"
)

USER_TEMPLATE = "현재 선택된 부품: {part}\n사용자 질문: {question}"


class ResponseShapeError(ValueError):
    """The chat-completion body has no usable choices[0].message.content."""


@dataclass(frozen=True)
class AnswerResult:
    ok: bool
    text: str = ""
    error: Optional[str] = None
    status_code: Optional[int] = None

    @classmethod
    def success(cls, text: str, status_code: Optional[int] = None) -> "AnswerResult":
        return cls(ok=True, text=text, status_code=status_code)

    @classmethod
    def failure(cls, error: str, status_code: Optional[int] = None) -> "AnswerResult":
        return cls(ok=False, error=error, status_code=status_code)

    @property
    def answer(self) -> str:
        """Single string for the client: the text, or the marked error."""
        if self.ok:
            return self.text
        return FAILURE_PREFIX + (self.error or "unknown error")


# prompt #

def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def build_user_prompt(part_name: Optional[str], question: Optional[str]) -> str:
    return USER_TEMPLATE.format(part=part_name or "", question=question or "")


def extract_content(data) -> str:
    """
    Pull choices[0].message.content out of an OpenAI-style body:
      {"choices": [{"message": {"content": "..."}}]}
    The content is returned verbatim.
    """
    if not isinstance(data, dict):
        raise ResponseShapeError(f"expected a JSON object, got {type(data).__name__}")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ResponseShapeError("missing or empty 'choices'")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise ResponseShapeError("missing 'message' in choices[0]")
    content = message.get("content")
    if not isinstance(content, str):
        raise ResponseShapeError("missing 'content' in choices[0].message")
    return content


def _remote_error_message(resp: requests.Response) -> Optional[str]:
    # OpenAI errors look like {"error": {"message": "...", "type": "..."}}
    try:
        data = resp.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and isinstance(err.get("message"), str):
            return err["message"]
    return None


# main generator #

class Generator:
    def __init__(self, settings: Settings):
        self.url = settings.openai_url
        self.key = settings.openai_api_key
        self.model = settings.openai_model
        self.timeout = settings.request_timeout_sec

    def build_payload(self, part_name: Optional[str], question: Optional[str]) -> dict:
        # temperature is left to the remote default
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt()},
                {"role": "user", "content": build_user_prompt(part_name, question)},
            ],
        }

    def get_answer(self, part_name: Optional[str], question: Optional[str]) -> str:
        return self.generate(part_name, question).answer

    @log_latency("chat_completion")
    def generate(self, part_name: Optional[str], question: Optional[str]) -> AnswerResult:
        """
        1) Build the system + user messages.
        2) One POST to the chat-completion endpoint, no retries.
        3) Any transport, status or shape failure becomes AnswerResult.failure.
        """
        if not self.key:
            logger.error("OPENAI_API_KEY is not set, skipping chat completion")
            return AnswerResult.failure("missing OPENAI_API_KEY")

        payload = self.build_payload(part_name, question)
        return self._call_openai(payload)

    # low-level call #
    def _call_openai(self, payload: dict) -> AnswerResult:
        try:
            resp = requests.post(
                self.url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.key}",
                },
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.exception("chat completion transport failure")
            return AnswerResult.failure(str(e) or type(e).__name__)
        except Exception as e:
            # header encoding, urllib3 internals
            logger.exception("chat completion request could not be sent")
            return AnswerResult.failure(str(e) or type(e).__name__)

        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            detail = str(e)
            remote = _remote_error_message(resp)
            if remote:
                detail = f"{detail} - {remote}"
            logger.error("chat completion HTTP %s: %s", resp.status_code, detail)
            return AnswerResult.failure(detail, status_code=resp.status_code)

        try:
            content = extract_content(resp.json())
        except ValueError as e:
            # covers ResponseShapeError and JSON decode errors
            logger.exception("chat completion response could not be parsed")
            return AnswerResult.failure(f"unexpected response shape: {e}", status_code=resp.status_code)

        return AnswerResult.success(content, status_code=resp.status_code)
