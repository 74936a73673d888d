"""
tests/conftest.py — Shared fixtures.

FakeAdapter is mounted on a real requests.Session, so requests
are prepared and sent by requests itself and only the network
hop is replaced.
"""

import os
import sys
import json

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))


class FakeAdapter(BaseAdapter):
    """Records sent requests and answers with a canned response."""

    def __init__(self, status=200, body=None, exc=None, on_send=None):
        super().__init__()
        self.status = status
        self.body = body
        self.exc = exc
        self.on_send = on_send
        self.sent = []
        self.bodies = []
        self.timeouts = []

    def send(self, request, stream=False, timeout=None, verify=True,
             cert=None, proxies=None):
        self.sent.append(request)
        self.timeouts.append(timeout)
        body = request.body
        if hasattr(body, "read"):
            body = body.read()
        self.bodies.append(body)

        if self.on_send:
            self.on_send(request)
        if self.exc is not None:
            raise self.exc

        resp = requests.Response()
        resp.status_code = self.status
        if isinstance(self.body, (dict, list)):
            resp._content = json.dumps(self.body).encode()
        elif isinstance(self.body, str):
            resp._content = self.body.encode()
        else:
            resp._content = self.body or b""
        resp._content_consumed = True
        resp.headers = CaseInsensitiveDict(
            {"Content-Type": "application/json"}
        )
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass

    @property
    def last(self):
        return self.sent[-1]


def make_session(adapter):
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


@pytest.fixture
def adapter():
    return FakeAdapter(body={"saved": True})


@pytest.fixture
def session(adapter):
    return make_session(adapter)


@pytest.fixture
def client(session):
    from curator.chartmuseum import Client
    return Client("http://cm.example.com", session=session)


@pytest.fixture
def chart_dir(tmp_path):
    """A minimal Helm chart: demo 1.0.0."""
    d = tmp_path / "demo"
    (d / "templates").mkdir(parents=True)
    (d / "Chart.yaml").write_text(
        "apiVersion: v1\n"
        "name: demo\n"
        "version: 1.0.0\n"
        "description: Demo chart\n"
    )
    (d / "values.yaml").write_text("replicaCount: 1\n")
    (d / "templates" / "deployment.yaml").write_text(
        "kind: Deployment\nmetadata:\n  name: {{ .Release.Name }}\n"
    )
    return d


@pytest.fixture(autouse=True)
def curator_home(tmp_path, monkeypatch):
    """Point ~/.curator at tmp_path and clear CHARTMUSEUM_* vars."""
    home = tmp_path / ".curator"
    monkeypatch.setattr("curator.config.CURATOR_HOME", home)
    for var in ("CHARTMUSEUM_SERVER", "CHARTMUSEUM_ORG", "CHARTMUSEUM_REPO"):
        monkeypatch.delenv(var, raising=False)
    return home
