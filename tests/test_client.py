import requests

import client


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._body

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}")


def test_submit_contact_success(monkeypatch):
    calls = {}

    def fake_post(url, json=None, timeout=None):
        calls["url"] = url
        calls["json"] = json
        return FakeResponse(200, {"success": True, "message": "Contact saved"})

    monkeypatch.setattr(client.requests, "post", fake_post)
    result = client.submit_contact({"firstName": "A"}, base_url="http://api")

    assert result == {"ok": True, "response": {"success": True, "message": "Contact saved"}}
    assert calls == {"url": "http://api/api/contact", "json": {"firstName": "A"}}


def test_submit_contact_surfaces_server_error(monkeypatch):
    monkeypatch.setattr(
        client.requests, "post", lambda url, json=None, timeout=None: FakeResponse(400, {"error": "Missing email"})
    )
    assert client.submit_contact({}) == {"ok": False, "error": "Missing email"}


def test_submit_contact_connection_error(monkeypatch):
    def refuse(url, json=None, timeout=None):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(client.requests, "post", refuse)
    result = client.submit_contact({})
    assert result["ok"] is False
    assert "refused" in result["error"]


def test_submit_opportunity_sends_multipart(monkeypatch):
    calls = {}

    def fake_post(url, data=None, files=None, timeout=None):
        calls.update(url=url, data=data, files=files)
        return FakeResponse(200, {"success": True, "message": "Funding inquiry saved"})

    monkeypatch.setattr(client.requests, "post", fake_post)
    attachment = ("deck.pdf", b"%PDF", "application/pdf")
    result = client.submit_opportunity("investment", {"fundName": "F"}, "pitchDoc", attachment, base_url="http://api")

    assert result["ok"] is True
    assert calls["url"] == "http://api/api/opportunity/funding"
    assert calls["data"] == {"fundName": "F"}
    assert calls["files"] == {"pitchDoc": attachment}


def test_get_records_error_shape(monkeypatch):
    monkeypatch.setattr(client.requests, "get", lambda url, timeout=None: FakeResponse(500, {"error": "x"}))
    result = client.get_records("contacts")
    assert result["status"] == "error"


def test_get_health(monkeypatch):
    body = {"status": "OK", "dbConnected": False, "uptime": 1.5}
    monkeypatch.setattr(client.requests, "get", lambda url, timeout=None: FakeResponse(200, body))
    assert client.get_health() == body
