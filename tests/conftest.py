"""
Shared fixtures for Mask Geometry Editor tests.

Provides a store with a deterministic clock, sample masks and view states.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Sample outlines (image pixels) ──────────────────────────────────────

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]
TRIANGLE = [(0, 0), (20, 0), (0, 20)]
POLYLINE = [(0, 0), (30, 40), (60, 40)]


class FakeClock:
    """Epoch-millisecond clock advancing by a fixed step per call."""

    def __init__(self, start=1_700_000_000_000, step=1):
        self.now = start
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


class RecordingRemote:
    """Remote store double recording deletions and raising on demand."""

    def __init__(self, error=None):
        self.error = error
        self.deleted = []

    def delete_mask(self, mask_id):
        self.deleted.append(mask_id)
        if self.error is not None:
            raise self.error


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Fresh MaskStore with a deterministic clock"""
    from models.mask_store import MaskStore
    return MaskStore(clock=clock)


@pytest.fixture
def events(store):
    """List collecting every MaskEvent the store emits"""
    received = []
    store.add_listener(received.append)
    return received


@pytest.fixture
def square_mask(store):
    """10x10 area mask at the origin"""
    return store.create_mask(SQUARE, mask_id='square')


@pytest.fixture
def triangle_mask(store):
    return store.create_mask(TRIANGLE, mask_id='triangle')


@pytest.fixture
def line_mask(store):
    return store.create_mask(POLYLINE, 'linear', mask_id='line')


@pytest.fixture
def controller(store):
    from interaction import InteractionModeController
    return InteractionModeController(store)


@pytest.fixture
def identity_view():
    """ViewState where client pixels equal image pixels"""
    from models.transform import ViewState
    return ViewState()


@pytest.fixture
def hidpi_view():
    """Offset viewport, 2x dpr, zoomed and panned camera, scaled image"""
    from models.transform import ViewState, Viewport, Camera, ImageFit
    return ViewState(
        viewport=Viewport(left=40, top=25, width=800, height=600),
        camera=Camera(scale=1.5, pan_x=-120.0, pan_y=35.0),
        dpr=2.0,
        img_fit=ImageFit(origin_x=18.0, origin_y=-7.0, scale=0.4),
    )
