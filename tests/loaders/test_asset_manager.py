"""Tests for asset requests and their completion events."""

import numpy as np

from meshwalk.core.events import EventType
from meshwalk.core.mesh import EMPTY_MESH, Mesh, Triangle, Vertex
from meshwalk.core.state import Dispatcher
from meshwalk.core.texture import TextureImage
from meshwalk.loaders.asset_manager import ASSET_MESH, ASSET_TEXTURE, AssetManager


def _mesh() -> Mesh:
    v = Vertex((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    return Mesh((Triangle(v, v, v),))


def _texture() -> TextureImage:
    return TextureImage(pixels=np.full((2, 2, 4), 255, dtype=np.uint8))


class _DeferredScheduler:
    """Collects callbacks until run() is called, like a queued event loop."""

    def __init__(self):
        self.callbacks = []

    def __call__(self, callback):
        self.callbacks.append(callback)

    def run(self):
        callbacks, self.callbacks = self.callbacks, []
        for cb in callbacks:
            cb()


def _failing(exc):
    def loader(path):
        raise exc
    return loader


def _events(dispatcher):
    seen = []
    dispatcher.event_bus.subscribe(
        EventType.STATE_CHANGED, lambda state, event_type: seen.append(event_type),
    )
    return seen


def test_requests_are_deferred():
    d = Dispatcher()
    sched = _DeferredScheduler()
    mgr = AssetManager(d, "m.txt", "t.png", schedule=sched,
                       mesh_loader=lambda p: _mesh(), texture_loader=lambda p: _texture())
    mgr.request_all()
    assert len(sched.callbacks) == 2
    assert d.pending == 0


def test_successful_loads_post_events():
    d = Dispatcher()
    seen = _events(d)
    mesh, tex = _mesh(), _texture()
    mgr = AssetManager(d, "m.txt", "t.png", schedule=lambda fn: fn(),
                       mesh_loader=lambda p: mesh, texture_loader=lambda p: tex)
    mgr.request_all()
    assert d.pending == 2
    d.process()
    assert seen == [EventType.MESH_LOADED, EventType.TEXTURE_LOADED]
    assert d.state.mesh is mesh
    assert d.state.texture is tex


def test_loaders_receive_configured_paths(tmp_path):
    d = Dispatcher()
    calls = []
    mgr = AssetManager(
        d, tmp_path / "a.txt", tmp_path / "b.png", schedule=lambda fn: fn(),
        mesh_loader=lambda p: calls.append(p) or _mesh(),
        texture_loader=lambda p: calls.append(p) or _texture(),
    )
    mgr.request_all()
    assert calls == [tmp_path / "a.txt", tmp_path / "b.png"]


def test_mesh_failure_posts_asset_failed():
    d = Dispatcher()
    posted = []
    d.event_bus.subscribe(EventType.STATE_CHANGED, lambda state, event_type: posted.append(event_type))
    err = FileNotFoundError("no mesh")
    mgr = AssetManager(d, "m.txt", "t.png", schedule=lambda fn: fn(),
                       mesh_loader=_failing(err), texture_loader=lambda p: _texture())
    mgr.request_all()
    queued = list(d._queue)
    assert queued[0] == (EventType.ASSET_FAILED, {"asset": ASSET_MESH, "error": err})
    d.process()
    assert posted == [EventType.ASSET_FAILED, EventType.TEXTURE_LOADED]
    assert d.state.mesh is EMPTY_MESH
    assert d.state.texture is not None


def test_texture_failure_keeps_texture_absent(caplog):
    d = Dispatcher()
    mgr = AssetManager(d, "m.txt", "t.png", schedule=lambda fn: fn(),
                       mesh_loader=lambda p: _mesh(),
                       texture_loader=_failing(ValueError("corrupt")))
    with caplog.at_level("WARNING"):
        mgr.request_texture()
    event_type, data = d._queue[0]
    assert event_type is EventType.ASSET_FAILED
    assert data["asset"] == ASSET_TEXTURE
    assert "corrupt" in caplog.text
    d.process()
    assert d.state.texture is None


def test_each_request_posts_exactly_once():
    d = Dispatcher()
    sched = _DeferredScheduler()
    mgr = AssetManager(d, "m.txt", "t.png", schedule=sched,
                       mesh_loader=lambda p: _mesh(), texture_loader=lambda p: _texture())
    mgr.request_mesh()
    sched.run()
    sched.run()
    assert d.pending == 1
