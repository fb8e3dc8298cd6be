from fastapi.testclient import TestClient

import app.main as main_module
from app import dependencies as deps
from app.main import app
from app.security import API_KEY_NAME
from app.settings import Settings
from tests.conftest import FakePostsService


class DummyThread:
    def __init__(self):
        self.join_called = False
        self.join_timeout = None

    def join(self, timeout=None):
        self.join_called = True
        self.join_timeout = timeout


def patch_lifespan(monkeypatch, thread=None):
    started = []
    stopped = []
    monkeypatch.setattr(main_module, "init_db", lambda: None)
    monkeypatch.setattr(
        main_module, "start_watcher", lambda interval: started.append(interval) or thread
    )
    monkeypatch.setattr(main_module, "stop_watcher", lambda: stopped.append(True))
    return started, stopped


def test_root_endpoint_runs_lifespan(monkeypatch):
    thread = DummyThread()
    started, stopped = patch_lifespan(monkeypatch, thread)

    with TestClient(app) as client:
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Blog Content API is running"}

    assert len(started) == 1
    assert stopped == [True]
    assert thread.join_called is True
    assert thread.join_timeout == 10


def test_lifespan_skips_stop_when_watcher_disabled(monkeypatch):
    started, stopped = patch_lifespan(monkeypatch, thread=None)

    with TestClient(app) as client:
        client.get("/")

    assert len(started) == 1
    assert stopped == []


def test_posts_are_public_but_content_routes_need_key(monkeypatch):
    patch_lifespan(monkeypatch)
    import app.security as security

    monkeypatch.setattr(security, "settings", Settings(CONTENT_API_KEY="secret"))
    app.dependency_overrides[deps.get_posts_service] = lambda: FakePostsService()
    try:
        with TestClient(app) as client:
            assert client.get("/posts").status_code == 200
            assert client.get("/content/check").status_code == 403
            res = client.get("/content/check", headers={API_KEY_NAME: "wrong"})
            assert res.status_code == 403
    finally:
        app.dependency_overrides.clear()
