# tests/test_mega.py
from __future__ import annotations

import re
from typing import Any, Dict

import requests

from .fakes import completion, make_response

# End-to-end scenarios against a faked chat-completion endpoint (extend as needed)
CASES = [
    {
        "name": "spur_gear",
        "body": {"question": "What is this gear for?", "currentPart": "Spur Gear"},
        "remote": lambda p: make_response(200, completion("This spur gear transmits rotational torque...")),
        "expect_answer": "This spur gear transmits rotational torque...",
    },
    {
        "name": "korean_whole_model",
        "body": {"question": "이 엔진은 어떻게 작동하나요?", "currentPart": "전체 모델"},
        "remote": lambda p: make_response(200, completion("4행정 사이클로 흡입, 압축, 폭발, 배기를 반복합니다.")),
        "expect_answer": "4행정 사이클로 흡입, 압축, 폭발, 배기를 반복합니다.",
    },
    {
        "name": "unauthorized",
        "body": {"question": "What is this gear for?", "currentPart": "Spur Gear"},
        "remote": lambda p: make_response(401, {"error": {"message": "Incorrect API key provided"}}, reason="Unauthorized"),
        "expect_answer_regex": r"^AI request failed: .*(401|Unauthorized)",
    },
    {
        "name": "quota",
        "body": {"question": "Why titanium?", "currentPart": "Turbine Blade"},
        "remote": lambda p: make_response(429, {"error": {"message": "You exceeded your current quota"}}, reason="Too Many Requests"),
        "expect_answer_regex": r"^AI request failed: 429 .*quota",
    },
    {
        "name": "empty_choices",
        "body": {"question": "?", "currentPart": "Nut"},
        "remote": lambda p: make_response(200, {"choices": []}),
        "expect_answer_regex": r"^AI request failed: unexpected response shape",
    },
]


def _raise(exc: Exception):
    def _handler(payload):
        raise exc
    return _handler


CASES.append({
    "name": "dns_failure",
    "body": {"question": "q", "currentPart": "p"},
    "remote": _raise(requests.ConnectionError("Name or service not known")),
    "expect_answer_regex": r"^AI request failed: Name or service not known$",
})


def _assert_answer_matches(answer: str, case: Dict[str, Any]) -> None:
    # Either an exact answer or a regex
    if "expect_answer" in case:
        assert answer == case["expect_answer"], f"answer mismatch: {answer!r}"
    if "expect_answer_regex" in case:
        rx = re.compile(case["expect_answer_regex"])
        assert rx.search(answer) is not None, f"answer regex mismatch: {answer!r}"


def _run_case(client, fake_openai, case: Dict[str, Any]) -> None:
    fake = fake_openai(case["remote"])
    resp = client.post("/api/ai/ask", json=case["body"])
    assert resp.status_code == 200, resp.text

    data = resp.json()
    assert list(data) == ["answer"]
    assert isinstance(data["answer"], str)
    _assert_answer_matches(data["answer"], case)
    assert fake.call_count == 1, case["name"]


def test_mega_suite(client, fake_openai):
    for case in CASES:
        _run_case(client, fake_openai, case)
