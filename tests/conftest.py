"""Shared fixtures: canned HTTP responses and a mocked requests session."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from calc_client.services import ServiceClient

BASE_URL = "http://calc.test:8080"


def make_response(status_code=200, body=None, raw=None):
    """Build a real requests.Response carrying a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body if body is not None else {}).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return ServiceClient(base_url=BASE_URL + "/", session=session)


class Recorder:
    """List-backed bindings standing in for the Streamlit display targets."""

    def __init__(self):
        self.notifications = []
        self.renders = []
        self.details = []

    def notify(self, message):
        self.notifications.append(message)

    def show_lines(self, lines):
        self.renders.append(list(lines))

    def show_detail(self, text):
        self.details.append(text)


@pytest.fixture
def recorder():
    return Recorder()
