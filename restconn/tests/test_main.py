import json

import pytest

from restconn.main import main

BASE = "https://api.example.com/v1"


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "0.1.0"


def test_get_prints_json(requests_mock, capsys):
    requests_mock.get(BASE + "/user/self", json={"id": 1, "login": "me"})

    assert main(["get", "/user/self", "--url", BASE]) == 0
    assert json.loads(capsys.readouterr().out) == {"id": 1, "login": "me"}


def test_post_sends_data_headers_and_auth_from_env(requests_mock, capsys, monkeypatch):
    monkeypatch.setenv("RESTCONN_URL", BASE)
    monkeypatch.setenv("RESTCONN_PUBLIC_KEY", "pub")
    monkeypatch.setenv("RESTCONN_PRIVATE_KEY", "secret")
    requests_mock.post(BASE + "/zones", json={"id": 9}, status_code=201)

    rc = main(["post", "/zones", "--data", '{"name": "example.com"}', "--header", "X-Trace: 1"])

    assert rc == 0
    req = requests_mock.last_request
    assert req.json() == {"name": "example.com"}
    assert req.headers["X-Trace"] == "1"
    assert req.headers["Authorization"].startswith("Basic ")


def test_error_exits_nonzero(requests_mock, capsys):
    requests_mock.delete(BASE + "/zones/1", json={"message": "Zone not found"}, status_code=404)

    assert main(["delete", "/zones/1", "--url", BASE, "--no-persistent"]) == 1
    err = capsys.readouterr().err
    assert "not_found" in err
    assert "status=404" in err
    assert "Zone not found" in err


def test_missing_url_is_usage_error(monkeypatch):
    monkeypatch.delenv("RESTCONN_URL", raising=False)
    with pytest.raises(SystemExit) as exc_info:
        main(["get", "/x"])
    assert exc_info.value.code == 2


def test_invalid_data_is_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main(["post", "/x", "--url", BASE, "--data", "{not json"])
    assert exc_info.value.code == 2
