import concurrent.futures
import logging
import time

import cv2
import moderngl
import numpy as np

from shader_tune.backends.base import DeviceUnavailableError, GpuBackend
from shader_tune.config import HEIGHT, WIDTH
from shader_tune.diagnostics import GLSL_DIAGNOSTIC_PATTERN
from shader_tune.models import CompileResult

log = logging.getLogger(__name__)

VERTEX_SHADER = '''
    #version 330
    in vec2 in_vert;
    void main() {
        gl_Position = vec4(in_vert, 0.0, 1.0);
    }
'''


class ShaderProgram:
    """Compiled fragment program plus the full screen quad it draws with."""
    def __init__(self, prog, vao, source):
        self.prog = prog
        self.vao = vao
        self.source = source
        self.released = False

    def uniforms(self):
        return [name for name in self.prog]


class OpenGLBackend(GpuBackend):
    """
    moderngl backend: user source is compiled as a GLSL fragment shader over a
    full screen quad and rendered into an offscreen framebuffer.

    GL contexts are bound to the thread that created them, so the context
    lives on a single worker thread and every GL call is submitted to it.
    """
    name = "opengl"
    language = "glsl"
    diagnostic_pattern = GLSL_DIAGNOSTIC_PATTERN

    def __init__(self, width=WIDTH, height=HEIGHT, compile_timeout=None):
        self.width, self.height = width, height
        self.compile_timeout = compile_timeout
        self.time = time.time()
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="gl")
        try:
            self._executor.submit(self._init_context).result()
        except Exception as e:
            self._executor.shutdown(wait=False)
            raise DeviceUnavailableError(f"Could not create an OpenGL context: {e}") from e

    def _init_context(self):
        self.ctx = moderngl.create_context(standalone=True)
        vertices = np.array([-1, -1, 1, -1, -1, 1, 1, 1], dtype='f4')
        self.vbo = self.ctx.buffer(vertices)
        self.fbo_texture = self.ctx.texture((self.width, self.height), 3)
        self.fbo = self.ctx.framebuffer(color_attachments=[self.fbo_texture])
        log.info(f"OpenGL context ready: {self.device_info}")

    @property
    def device_info(self):
        info = self.ctx.info
        return f"{info.get('GL_RENDERER', 'unknown')} ({info.get('GL_VERSION', '?')})"

    def _compile(self, source):
        try:
            prog = self.ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=source)
        except moderngl.Error as e:
            return CompileResult.failure(e)
        vao = self.ctx.vertex_array(prog, [(self.vbo, '2f', 'in_vert')])
        return CompileResult.success(ShaderProgram(prog, vao, source))

    def compile(self, source):
        future = self._executor.submit(self._compile, source)
        try:
            return future.result(timeout=self.compile_timeout)
        except concurrent.futures.TimeoutError:
            log.error(f"Shader compilation exceeded {self.compile_timeout}s")
            future.add_done_callback(self._discard_late)
            return CompileResult.failure(f"compilation timed out after {self.compile_timeout}s")

    def _discard_late(self, future):
        """Releases the program of a compile that finished after its caller gave up."""
        if future.cancelled() or future.exception() is not None:
            return
        result = future.result()
        if result.ok:
            log.debug("Releasing program from timed out compile")
            self._executor.submit(self._release, result.artifact)

    def _render(self, artifact, uniforms):
        if artifact.released:
            return np.zeros((self.height, self.width, 3), dtype=np.uint8)

        prog = artifact.prog
        for name, value in uniforms.items():
            if name in prog:
                prog[name].value = value

        self.fbo.use()
        self.ctx.clear(0, 0, 0)
        artifact.vao.render(moderngl.TRIANGLE_STRIP)

        data = np.frombuffer(self.fbo.read(components=3), dtype=np.uint8)
        img = data.reshape((self.height, self.width, 3))
        return cv2.flip(img, 0)

    def default_uniforms(self, mouse=(0.0, 0.0), scale=1.0):
        return {
            'u_time': time.time() - self.time,
            'u_mouse': tuple(mouse),
            'u_resolution': (float(self.width), float(self.height)),
            'u_scale': float(scale),
        }

    def render(self, artifact, uniforms=None):
        """Renders an RGB frame, top row first. Missing uniforms use default_uniforms()."""
        values = self.default_uniforms()
        values.update(uniforms or {})
        return self._executor.submit(self._render, artifact, values).result()

    def _release(self, artifact):
        if artifact.released:
            return
        artifact.vao.release()
        artifact.prog.release()
        artifact.released = True

    def release(self, artifact):
        if isinstance(artifact, ShaderProgram):
            self._executor.submit(self._release, artifact).result()

    def close(self):
        def _close():
            self.fbo.release()
            self.fbo_texture.release()
            self.vbo.release()
            self.ctx.release()
        self._executor.submit(_close).result()
        self._executor.shutdown()
        log.info("OpenGL context released")
