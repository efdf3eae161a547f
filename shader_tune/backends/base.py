from abc import ABC, abstractmethod

import numpy as np

from shader_tune.diagnostics import METAL_DIAGNOSTIC_PATTERN


class DeviceUnavailableError(RuntimeError):
    """Raised when no GPU device or context can be obtained."""


class GpuBackend(ABC):
    """
    Abstract class to unify shader compilation and preview rendering.

    The compile artifact is opaque to the rest of the application; it is only
    ever handed back to render() of the backend that produced it.
    """
    name = "gpu"
    language = "metal"
    diagnostic_pattern = METAL_DIAGNOSTIC_PATTERN

    @abstractmethod
    def compile(self, source: str):
        """
        Compile shader source. Returns a CompileResult carrying either the
        artifact or the raw compiler error text.
        """
        raise NotImplementedError("subclasses should implement this method.")

    @abstractmethod
    def render(self, artifact, uniforms: dict) -> np.ndarray:
        """Render one frame of a compiled artifact as an HxWx3 uint8 image."""
        raise NotImplementedError("subclasses should implement this method.")

    def release(self, artifact):
        """Free GPU objects held by an artifact that is no longer needed."""
        pass

    def close(self):
        pass
