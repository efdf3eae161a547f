"""
FastAPI server exposing an editor session over HTTP.
Lets a UI shell or an external tool drive editing, completion and compiles
and read back the published compile state.
"""

import logging
import threading
from typing import List, Optional

import cv2
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from shader_tune.templates import ALL_TEMPLATES, get_template

log = logging.getLogger(__name__)


class SourceEdit(BaseModel):
    """Request model for replacing the buffer."""
    text: str
    cursor: Optional[int] = None


class CompletionRequest(BaseModel):
    text: Optional[str] = None
    cursor: Optional[int] = None


class AcceptCompletion(BaseModel):
    text: str


class DiagnosticInfo(BaseModel):
    line: int
    column: Optional[int] = None
    severity: str
    message: str


class CompletionInfo(BaseModel):
    text: str
    kind: str
    description: str
    snippet: Optional[str] = None


class StateInfo(BaseModel):
    """Response model for the observable editor state."""
    is_compiling: bool
    status: str
    sequence: int
    has_artifact: bool
    diagnostics: List[DiagnosticInfo]
    completions: List[CompletionInfo]
    path: Optional[str] = None
    dirty: bool
    cursor: int
    source: str


class TemplateInfo(BaseModel):
    name: str
    description: str
    category: str


class APIServer:
    """FastAPI server for controlling an editor session."""

    def __init__(self, session, backend=None, host="127.0.0.1", port=8000):
        """
        Initialize API server.

        Args:
            session: EditorSession to drive
            backend: GpuBackend used for /snapshot (optional)
            host: Host to bind to (default: localhost)
            port: Port to bind to (default: 8000)
        """
        self.session = session
        self.backend = backend
        self.host = host
        self.port = port
        self.app = FastAPI(
            title="Shader Tune API",
            description="API for editing, completing and compiling shaders",
            version="1.0.0"
        )

        # route handlers run on the server threadpool; one request edits the session at a time
        self._session_lock = threading.Lock()

        self._setup_routes()
        self._server_thread = None
        self._server = None

    def state_info(self):
        session = self.session
        state = session.state
        return StateInfo(
            is_compiling=state.is_compiling,
            status=session.coordinator.status.name,
            sequence=state.sequence,
            has_artifact=state.artifact is not None,
            diagnostics=[
                DiagnosticInfo(line=d.line, column=d.column, severity=d.severity.value, message=d.message)
                for d in state.diagnostics
            ],
            completions=[
                CompletionInfo(text=c.text, kind=c.kind.value, description=c.description, snippet=c.snippet)
                for c in session.completions
            ],
            path=str(session.path) if session.path is not None else None,
            dirty=session.dirty,
            cursor=session.cursor,
            source=session.source,
        )

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/")
        async def root():
            """API root - returns basic info."""
            return {
                "name": "Shader Tune API",
                "version": "1.0.0",
                "endpoints": {
                    "GET /state": "Compile state, completions and buffer",
                    "PUT /source": "Replace the buffer (debounced compile)",
                    "POST /compile": "Compile immediately",
                    "POST /completions": "Request completions at the cursor",
                    "POST /completions/accept": "Insert a listed completion",
                    "GET /templates": "List starter templates",
                    "POST /templates/{name}": "Start a buffer from a template",
                    "POST /save": "Save the buffer to its file",
                    "GET /snapshot": "Render the compiled shader as PNG"
                }
            }

        # sync handlers, compile_now blocks until the backend settles

        @self.app.get("/state", response_model=StateInfo)
        def get_state():
            with self._session_lock:
                return self.state_info()

        @self.app.put("/source", response_model=StateInfo)
        def put_source(edit: SourceEdit):
            with self._session_lock:
                self.session.edit(edit.text, edit.cursor)
                return self.state_info()

        @self.app.post("/compile", response_model=StateInfo)
        def compile_now():
            with self._session_lock:
                source = self.session.source
            self.session.coordinator.compile_now(source)
            with self._session_lock:
                return self.state_info()

        @self.app.post("/completions", response_model=List[CompletionInfo])
        def request_completions(request: CompletionRequest):
            with self._session_lock:
                items = self.session.trigger_completion(request.text, request.cursor)
            return [
                CompletionInfo(text=c.text, kind=c.kind.value, description=c.description, snippet=c.snippet)
                for c in items
            ]

        @self.app.post("/completions/accept", response_model=StateInfo)
        def accept_completion(accept: AcceptCompletion):
            with self._session_lock:
                item = self.session.find_completion(accept.text)
                if item is None:
                    raise HTTPException(status_code=404, detail=f"Completion '{accept.text}' is not offered")
                self.session.accept_completion(item)
                log.info(f"API: accepted completion {item.text}")
                return self.state_info()

        @self.app.get("/templates", response_model=List[TemplateInfo])
        def list_templates():
            return [
                TemplateInfo(name=t.name, description=t.description, category=t.category.value)
                for t in ALL_TEMPLATES
            ]

        @self.app.post("/templates/{name}", response_model=StateInfo)
        def use_template(name: str):
            try:
                template = get_template(name)
            except KeyError:
                raise HTTPException(status_code=404, detail=f"Template '{name}' not found")
            with self._session_lock:
                self.session.new_from_template(template)
                return self.state_info()

        @self.app.post("/save", response_model=StateInfo)
        def save():
            with self._session_lock:
                if self.session.path is None:
                    raise HTTPException(status_code=409, detail="Buffer is not bound to a file")
                if not self.session.save():
                    raise HTTPException(status_code=409, detail=str(self.session.error))
                return self.state_info()

        @self.app.get("/snapshot")
        def get_snapshot():
            """Get the compiled shader's current frame as a PNG image."""
            artifact = self.session.state.artifact
            if self.backend is None or artifact is None:
                raise HTTPException(status_code=503, detail="No compiled shader available")

            frame = self.backend.render(artifact)
            success, buffer = cv2.imencode('.png', cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
            if not success:
                raise HTTPException(status_code=500, detail="Failed to encode frame")

            return Response(content=buffer.tobytes(), media_type="image/png")

    def start(self):
        """Start the API server in a background thread."""
        if self._server_thread is not None:
            log.warning("API server already running")
            return

        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_level="warning")
        self._server = uvicorn.Server(config)

        def run_server():
            log.info(f"Starting API server on {self.host}:{self.port}")
            self._server.run()

        self._server_thread = threading.Thread(target=run_server, daemon=True)
        self._server_thread.start()
        log.info(f"API server started at http://{self.host}:{self.port}")
        log.info(f"API docs available at http://{self.host}:{self.port}/docs")

    def stop(self):
        """Stop the API server."""
        if self._server is None:
            return
        self._server.should_exit = True
        self._server_thread.join(timeout=5)
        self._server_thread = None
        self._server = None
        log.info("API server stopped")
