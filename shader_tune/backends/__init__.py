from shader_tune.backends.base import DeviceUnavailableError, GpuBackend
from shader_tune.backends.opengl import OpenGLBackend, ShaderProgram

__all__ = [
    "DeviceUnavailableError",
    "GpuBackend",
    "OpenGLBackend",
    "ShaderProgram",
]
