"""
Debounced compile pipeline.

The coordinator owns the compile state and the single pending debounce
timer. Every state change happens under one re-entrant lock, which is the
serialization context for timer hand-off, compile start and settlement.

A timer carries the token it was armed with; when it fires it only proceeds
if that token is still the pending one, so a cancelled timer never compiles
and a cancel arriving after the fire is a no-op.

Each compile attempt gets a sequence number. Results from an attempt older
than the latest started one are dropped, so a slow compile can never
overwrite the state of a newer one.
"""

import itertools
import logging
import threading
import time

from shader_tune.config import DEBOUNCE_INTERVAL, CompileStatus
from shader_tune.diagnostics import parse_diagnostics
from shader_tune.models import CompileResult, CompileState

log = logging.getLogger(__name__)


class PendingCompilation:
    """An armed debounce timer and the source it will compile."""
    def __init__(self, token, source, timer, deadline):
        self.token = token
        self.source = source
        self.timer = timer
        self.deadline = deadline

    def cancel(self):
        self.timer.cancel()


class CompileCoordinator:
    def __init__(self, backend, debounce_interval=DEBOUNCE_INTERVAL, auto_compile=True,
                 pattern=None, timer_factory=threading.Timer, clock=time.monotonic):
        """
        Args:
            backend: GpuBackend used to compile sources
            debounce_interval: quiet period in seconds before an edit compiles
            auto_compile: whether on_edit schedules compiles at all
            pattern: diagnostic regex, defaults to the backend's own
            timer_factory: threading.Timer compatible factory
            clock: monotonic clock used for pending deadlines
        """
        self.backend = backend
        self.debounce_interval = debounce_interval
        self.pattern = pattern if pattern is not None else backend.diagnostic_pattern
        self._auto_compile = auto_compile
        self._timer_factory = timer_factory
        self._clock = clock

        self._lock = threading.RLock()
        self._tokens = itertools.count(1)
        self._pending = None
        self._sequence = 0
        self._state = CompileState()
        self._observers = []

    @property
    def state(self):
        with self._lock:
            return self._state

    @property
    def is_compiling(self):
        return self.state.is_compiling

    @property
    def diagnostics(self):
        return self.state.diagnostics

    @property
    def artifact(self):
        return self.state.artifact

    @property
    def status(self):
        with self._lock:
            if self._state.is_compiling:
                return CompileStatus.COMPILING
            if self._pending is not None:
                return CompileStatus.PENDING
            return CompileStatus.IDLE

    @property
    def pending_deadline(self):
        """Monotonic time the pending compile fires at, or None."""
        with self._lock:
            return self._pending.deadline if self._pending is not None else None

    @property
    def auto_compile(self):
        return self._auto_compile

    @auto_compile.setter
    def auto_compile(self, enabled):
        with self._lock:
            self._auto_compile = bool(enabled)
            if not self._auto_compile:
                self._cancel_pending()

    def subscribe(self, callback):
        """Registers callback(CompileState) for every published state. Returns an unsubscribe function."""
        with self._lock:
            self._observers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)
        return unsubscribe

    def on_edit(self, source):
        """
        Schedules a compile of source after the debounce interval, replacing
        any compile still waiting. Returns True if a timer was armed.
        """
        if not self._auto_compile or not source:
            return False

        with self._lock:
            self._cancel_pending()
            token = next(self._tokens)
            timer = self._timer_factory(self.debounce_interval, self._fire, args=(token,))
            timer.daemon = True
            self._pending = PendingCompilation(token, source, timer, self._clock() + self.debounce_interval)
            timer.start()

        log.debug(f"Compile scheduled in {self.debounce_interval}s ({len(source)} chars)")
        return True

    def compile_now(self, source):
        """Cancels any pending compile and compiles source in the calling thread."""
        with self._lock:
            self._cancel_pending()
            sequence = self._begin()
        self._run(sequence, source)
        return self.state

    def close(self):
        with self._lock:
            self._cancel_pending()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            log.debug("Pending compile cancelled")
            self._pending = None

    def _fire(self, token):
        with self._lock:
            pending = self._pending
            if pending is None or pending.token != token:
                return
            self._pending = None
            sequence = self._begin()
        self._run(sequence, pending.source)

    def _begin(self):
        self._sequence += 1
        previous = self._state
        self._publish(CompileState(
            is_compiling=True,
            diagnostics=previous.diagnostics,
            artifact=previous.artifact,
            sequence=self._sequence,
        ))
        return self._sequence

    def _run(self, sequence, source):
        start = time.perf_counter()
        try:
            result = self.backend.compile(source)
        except Exception as e:
            log.exception(f"Backend raised while compiling (#{sequence}): {e}")
            result = CompileResult.failure(e)
        log.debug(f"Compile #{sequence} finished in {(time.perf_counter() - start) * 1000:.1f}ms")
        self._settle(sequence, result)

    def _settle(self, sequence, result):
        # backend.release is never called with the lock held
        dropped = None
        with self._lock:
            if sequence != self._sequence:
                log.info(f"Discarding result of compile #{sequence}, #{self._sequence} is newer")
                dropped = result.artifact
            else:
                previous = self._state.artifact
                if result.ok:
                    state = CompileState(is_compiling=False, diagnostics=(), artifact=result.artifact, sequence=sequence)
                    log.info(f"Compile #{sequence} succeeded")
                else:
                    diagnostics = tuple(parse_diagnostics(result.error, self.pattern))
                    state = CompileState(is_compiling=False, diagnostics=diagnostics, artifact=None, sequence=sequence)
                    log.info(f"Compile #{sequence} failed with {len(diagnostics)} diagnostic(s)")

                if previous is not result.artifact:
                    dropped = previous
                self._publish(state)

        if dropped is not None:
            self.backend.release(dropped)

    def _publish(self, state):
        self._state = state
        for callback in list(self._observers):
            try:
                callback(state)
            except Exception as e:
                log.exception(f"Compile state observer failed: {e}")
