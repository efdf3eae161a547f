"""
Entry point for the shader editor core.

Opens a shader file or folder, compiles it with the OpenGL backend, logs the
diagnostics and optionally writes a rendered preview frame or serves the
editor session over HTTP until interrupted.
"""

import argparse
import logging
import sys
import time

import cv2

from shader_tune.api import APIServer
from shader_tune.backends import DeviceUnavailableError, OpenGLBackend
from shader_tune.compiler import CompileCoordinator
from shader_tune.completion import CompletionEngine
from shader_tune.config import DEFAULT_SETTINGS_FILE, LOG_LEVELS, Severity
from shader_tune.files import FileStore
from shader_tune.keywords import completions_for
from shader_tune.session import EditorSession
from shader_tune.settings import EditorSettings, SettingsError

log = logging.getLogger(__name__)

SEVERITY_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
}


def parse_args(argv=None):
    """Creates ArgumentParser, configures arguments, returns parsed args"""
    parser = argparse.ArgumentParser(description='Live shader editor core')
    parser.add_argument(
        'file',
        nargs='?',
        help='Shader file to open and compile')
    parser.add_argument(
        '--folder',
        help='Folder to scan for shader files')
    parser.add_argument(
        '-c',
        '--config',
        default=DEFAULT_SETTINGS_FILE,
        help='YAML settings file')
    parser.add_argument(
        '-l',
        '--log-level',
        choices=LOG_LEVELS,
        help='Set the logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG)')
    parser.add_argument(
        '--no-auto-compile',
        action='store_true',
        help='Do not compile automatically after edits')
    parser.add_argument(
        '--debounce',
        type=float,
        help='Seconds of inactivity before an automatic compile')
    parser.add_argument(
        '--timeout',
        type=float,
        help='Give up on a compile after this many seconds')
    parser.add_argument(
        '-s',
        '--snapshot',
        help='Write the rendered preview frame to this image file')
    parser.add_argument(
        '--width',
        type=int,
        help='Preview width in pixels')
    parser.add_argument(
        '--height',
        type=int,
        help='Preview height in pixels')
    parser.add_argument(
        '--api',
        action='store_true',
        help='Serve the editor session over HTTP until interrupted')
    parser.add_argument(
        '--api-host',
        help='API bind address')
    parser.add_argument(
        '--api-port',
        type=int,
        help='API port')
    return parser.parse_args(argv)


def config_log(log_level):
    """Global logging module configuration"""
    logging.basicConfig(
        level=log_level,
        format='[%(asctime)s,%(msecs)03d] %(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def load_settings(args):
    settings = EditorSettings.load(args.config)
    return settings.updated(
        log_level=args.log_level,
        auto_compile=False if args.no_auto_compile else None,
        debounce_interval=args.debounce,
        compile_timeout=args.timeout,
        width=args.width,
        height=args.height,
        api_host=args.api_host,
        api_port=args.api_port,
    )


def build_session(settings, backend):
    coordinator = CompileCoordinator(
        backend,
        debounce_interval=settings.debounce_interval,
        auto_compile=settings.auto_compile,
    )
    engine = CompletionEngine(completions_for(settings.language))
    store = FileStore(settings.extensions)
    return EditorSession(coordinator, engine, store)


def log_diagnostics(diagnostics):
    for diagnostic in diagnostics:
        log.log(SEVERITY_LEVELS[diagnostic.severity], diagnostic.display_text)


def write_snapshot(backend, artifact, path):
    frame = backend.render(artifact)
    if not cv2.imwrite(path, cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)):
        log.error(f"Could not write snapshot to {path}")
        return False
    log.info(f"Wrote preview frame to {path}")
    return True


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = load_settings(args)
    except SettingsError as e:
        config_log(logging.INFO)
        log.critical(str(e))
        return 2

    config_log(settings.log_level)

    try:
        backend = OpenGLBackend(settings.width, settings.height, settings.compile_timeout)
    except DeviceUnavailableError as e:
        log.critical(f"No GPU available: {e}")
        return 1

    session = build_session(settings, backend)
    status = 0
    try:
        if args.folder and not session.open_folder(args.folder):
            status = 1

        if args.file:
            if not session.open_file(args.file):
                return 1
            state = session.state if session.auto_compile else session.compile_now()
            log_diagnostics(state.diagnostics)
            if state.has_errors:
                status = 1
            elif args.snapshot and state.artifact is not None:
                if not write_snapshot(backend, state.artifact, args.snapshot):
                    status = 1

        if args.api:
            server = APIServer(session, backend, settings.api_host, settings.api_port)
            server.start()
            log.info("Serving editor session, press Ctrl+C to quit")
            try:
                while True:
                    time.sleep(0.5)
            except KeyboardInterrupt:
                log.warning("Quit command detected, stopping server...")
            server.stop()
    finally:
        session.coordinator.close()
        backend.close()

    return status


if __name__ == "__main__":
    sys.exit(main())
