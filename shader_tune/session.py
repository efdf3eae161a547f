"""
Editor session: the buffer, its file binding and the wiring from user edits
to the completion engine (immediately) and the compile coordinator
(debounced).

File failures stop here. They are logged, kept on `error` and reported as a
False return so the UI can show them; compile and completion state are left
as they were.
"""

import logging
from pathlib import Path

from shader_tune.completion import CompletionEngine
from shader_tune.files import FileStore, FileStoreError

log = logging.getLogger(__name__)


class EditorSession:
    def __init__(self, coordinator, engine=None, store=None):
        self.coordinator = coordinator
        self.engine = engine if engine is not None else CompletionEngine()
        self.store = store if store is not None else FileStore()

        self.source = ""
        self.cursor = 0
        self.path = None
        self.dirty = False
        self.completions = ()

        self.root = None
        self.file_tree = []
        self.error = None

    @property
    def state(self):
        return self.coordinator.state

    @property
    def auto_compile(self):
        return self.coordinator.auto_compile

    @auto_compile.setter
    def auto_compile(self, enabled):
        self.coordinator.auto_compile = enabled

    # editing

    def edit(self, text, cursor=None):
        """Replaces the buffer. cursor defaults to the end of the new text."""
        previous = self.source
        self.source = text
        self.cursor = len(text) if cursor is None else max(0, min(cursor, len(text)))

        if self.path is not None:
            self.dirty = True

        if len(text) > len(previous):
            self.update_completions()
        self.coordinator.on_edit(text)

    def compile_now(self):
        return self.coordinator.compile_now(self.source)

    # completion

    def update_completions(self):
        """Refreshes completions while typing; closes the list when the trigger rule fails."""
        if self.engine.should_trigger(self.source, self.cursor):
            self.completions = self.engine.complete(self.source, self.cursor)
        else:
            self.completions = ()
        return self.completions

    def trigger_completion(self, text=None, cursor=None):
        """Explicit completion request, optionally against new text and cursor."""
        if text is not None:
            self.source = text
            self.cursor = len(text) if cursor is None else max(0, min(cursor, len(text)))
        elif cursor is not None:
            self.cursor = max(0, min(cursor, len(self.source)))
        self.completions = self.engine.complete(self.source, self.cursor)
        return self.completions

    def accept_completion(self, item):
        """Replaces the word under the cursor with the item's text."""
        span = self.engine.word_range(self.source, self.cursor)
        self.completions = ()
        if span is None:
            return False

        start, end = span
        text = self.source[:start] + item.text + self.source[end:]
        self.edit(text, start + len(item.text))
        self.completions = ()
        return True

    def find_completion(self, text):
        for item in self.completions:
            if item.text == text:
                return item
        return None

    # find / replace

    def replace_next(self, search, replacement):
        """Replaces the first occurrence at or after the cursor, wrapping to the start."""
        if not search:
            return False

        index = self.source.find(search, self.cursor)
        if index < 0:
            index = self.source.find(search)
        if index < 0:
            return False

        text = self.source[:index] + replacement + self.source[index + len(search):]
        self.edit(text, index + len(replacement))
        return True

    def replace_all(self, search, replacement):
        if not search:
            return 0

        count = self.source.count(search)
        if count:
            self.edit(self.source.replace(search, replacement), self.cursor)
        return count

    # templates

    def new_from_template(self, template):
        """Starts an unbound buffer from a template and compiles it right away."""
        self.close_file()
        self.edit(template.source)
        self.completions = ()
        return self.compile_now()

    # files

    def _fail(self, error):
        log.error(str(error))
        self.error = error
        return False

    def open_folder(self, root):
        root = Path(root)
        try:
            tree = self.store.scan(root)
        except FileStoreError as e:
            self.file_tree = []
            return self._fail(e)

        self.root = root
        self.file_tree = tree
        self.error = None
        count = sum(1 for node in tree for entry in node.walk() if not entry.is_directory)
        log.info(f"Opened folder {root} ({count} shader files)")
        return True

    def open_file(self, path):
        """
        Loads path into the buffer. A dirty current file is saved first and
        the new file is compiled at once when auto-compile is on. Opening the
        file that is already open does nothing.
        """
        path = Path(path)
        if self.path is not None and path == self.path:
            return True

        if self.dirty and self.path is not None:
            self.save()

        try:
            text = self.store.load(path)
        except FileStoreError as e:
            return self._fail(e)

        self.path = path
        self.source = text
        self.cursor = len(text)
        self.dirty = False
        self.completions = ()
        self.error = None

        if self.coordinator.auto_compile:
            self.compile_now()
        return True

    def save(self):
        if self.path is None:
            return False
        try:
            self.store.save(self.path, self.source)
        except FileStoreError as e:
            return self._fail(e)
        self.dirty = False
        self.error = None
        return True

    def save_as(self, path):
        previous = self.path
        self.path = Path(path)
        if self.save():
            return True
        self.path = previous
        return False

    def close_file(self):
        """Unbinds the buffer from its file and clears it."""
        self.coordinator.close()
        self.path = None
        self.source = ""
        self.cursor = 0
        self.dirty = False
        self.completions = ()
