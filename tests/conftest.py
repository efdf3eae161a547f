import numpy as np
import pytest

from shader_tune.backends import GpuBackend
from shader_tune.compiler import CompileCoordinator
from shader_tune.completion import CompletionEngine
from shader_tune.files import FileStore
from shader_tune.models import CompileResult
from shader_tune.session import EditorSession


class FakeTimer:
    """threading.Timer stand-in that only fires when told to."""
    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        # a real Timer that was cancelled before its interval elapsed never calls back
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


class TimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args, kwargs)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]

    def live(self):
        return [t for t in self.timers if t.started and not t.cancelled]


class FakeBackend(GpuBackend):
    """Fails any source containing 'error' with the given message, otherwise returns a token."""
    name = "fake"

    def __init__(self, error_message="program_source:1:1: error: bad shader"):
        self.error_message = error_message
        self.compiled = []
        self.released = []

    def compile(self, source):
        self.compiled.append(source)
        if "error" in source:
            return CompileResult.failure(self.error_message)
        return CompileResult.success(("artifact", len(self.compiled)))

    def render(self, artifact, uniforms=None):
        return np.full((4, 4, 3), 128, dtype=np.uint8)

    def release(self, artifact):
        self.released.append(artifact)


@pytest.fixture
def timers():
    return TimerFactory()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def coordinator(backend, timers):
    return CompileCoordinator(backend, debounce_interval=1.0, timer_factory=timers)


@pytest.fixture
def session(coordinator):
    return EditorSession(coordinator, CompletionEngine(), FileStore())
