"""
Plain text shader file access and the shader file tree.

Every failure surfaces as a FileStoreError naming the kind of failure and the
path involved; callers decide how to report it.
"""

import logging
import os
import tempfile
from pathlib import Path

from shader_tune.config import SHADER_EXTENSIONS, FileErrorKind

log = logging.getLogger(__name__)


class FileStoreError(Exception):
    _VERBS = {
        FileErrorKind.NOT_FOUND: "File not found",
        FileErrorKind.PERMISSION_DENIED: "Permission denied",
        FileErrorKind.MALFORMED: "Could not decode file",
        FileErrorKind.SCAN_FAILED: "Failed to scan directory",
    }

    def __init__(self, kind, path, detail=None):
        self.kind = kind
        self.path = Path(path)
        self.detail = detail
        message = f"{self._VERBS[kind]}: {self.path}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class FileNode:
    """A file or directory entry in the shader tree. Files have children=None."""
    def __init__(self, name, path, is_directory, children=None):
        self.name = name
        self.path = Path(path)
        self.is_directory = is_directory
        self.children = children

    def __repr__(self):
        return f"FileNode({self.name!r}, is_directory={self.is_directory})"

    @property
    def sort_key(self):
        # directories first, then alphabetical
        return ("0_" if self.is_directory else "1_") + self.name.lower()

    def walk(self):
        """Yields this node and every descendant, depth first."""
        yield self
        for child in self.children or []:
            yield from child.walk()


def _classify(error):
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return FileErrorKind.NOT_FOUND
    if isinstance(error, PermissionError):
        return FileErrorKind.PERMISSION_DENIED
    return FileErrorKind.MALFORMED


class FileStore:
    def __init__(self, extensions=SHADER_EXTENSIONS, encoding="utf-8"):
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.encoding = encoding

    def is_shader_file(self, path):
        return Path(path).suffix.lower() in self.extensions

    def load(self, path):
        path = Path(path)
        try:
            with open(path, "r", encoding=self.encoding) as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise FileStoreError(FileErrorKind.MALFORMED, path, e.reason) from e
        except (OSError, ValueError) as e:
            raise FileStoreError(_classify(e), path) from e
        log.info(f"Loaded {path} ({len(text)} chars)")
        return text

    def save(self, path, text):
        """Writes text to a sibling temp file and renames it over path."""
        path = Path(path)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding=self.encoding) as f:
                f.write(text)
            os.replace(tmp_name, path)
        except UnicodeEncodeError as e:
            self._discard(tmp_name)
            raise FileStoreError(FileErrorKind.MALFORMED, path, e.reason) from e
        except OSError as e:
            self._discard(tmp_name)
            raise FileStoreError(_classify(e), path) from e
        log.info(f"Saved {path}")

    def _discard(self, tmp_name):
        if tmp_name and os.path.exists(tmp_name):
            os.remove(tmp_name)

    def scan(self, root):
        """
        Builds the shader tree under root. Hidden entries and non-shader
        files are skipped, directories with no shader files anywhere below
        them are pruned, and unreadable subdirectories count as empty.
        """
        root = Path(root)
        try:
            return self._build_tree(root)
        except OSError as e:
            raise FileStoreError(FileErrorKind.SCAN_FAILED, root) from e

    def _build_tree(self, directory):
        nodes = []
        for entry in os.scandir(directory):
            if entry.name.startswith("."):
                continue

            if entry.is_dir():
                try:
                    children = self._build_tree(entry.path)
                except OSError as e:
                    log.warning(f"Skipping unreadable directory {entry.path}: {e}")
                    children = []
                if not children:
                    continue
                nodes.append(FileNode(entry.name, entry.path, True, children))
            elif self.is_shader_file(entry.name):
                nodes.append(FileNode(entry.name, entry.path, False))

        return sorted(nodes, key=lambda node: node.sort_key)
