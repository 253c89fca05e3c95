# tests/conftest.py
from __future__ import annotations

from typing import Callable

import pytest
import requests
from fastapi.testclient import TestClient

from simvex import generator as generator_module
from simvex import main
from simvex.config import Settings
from simvex.generator import Generator

from .fakes import FakeOpenAI


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        openai_api_key="sk-test",
        openai_model="gpt-test",
        request_timeout_sec=7,
        _env_file=None,
    )


@pytest.fixture
def generator(test_settings) -> Generator:
    return Generator(test_settings)


@pytest.fixture
def fake_openai(monkeypatch) -> Callable[[Callable[[dict], requests.Response]], FakeOpenAI]:
    """Install a FakeOpenAI in place of requests.post and return it."""
    def _install(handler):
        fake = FakeOpenAI(handler)
        monkeypatch.setattr(generator_module.requests, "post", fake)
        return fake

    return _install


@pytest.fixture
def client(monkeypatch, generator) -> TestClient:
    # app-wide generator gets a key so the outbound path is exercised
    monkeypatch.setattr(main, "generator", generator)
    return TestClient(main.app)
