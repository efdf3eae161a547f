from pathlib import Path

from shader_tune.config import FileErrorKind
from shader_tune.templates import GRADIENT


def test_edit_schedules_debounced_compile(session, backend, timers):
    session.edit("void main() {}")
    assert backend.compiled == []
    timers.last.fire()
    assert backend.compiled == ["void main() {}"]


def test_typing_updates_completions(session):
    session.edit("half4 c = flo")
    assert "float" in [item.text for item in session.completions]

    session.edit("half4 c = flo ")
    assert session.completions == ()


def test_deleting_text_leaves_completions_alone(session):
    session.edit("flo")
    offered = session.completions
    session.edit("fl")
    assert session.completions == offered


def test_trigger_completion_at_explicit_cursor(session):
    items = session.trigger_completion("saturate(x); clam", 17)
    assert [item.text for item in items] == ["clamp"]
    assert session.cursor == 17


def test_accept_completion_replaces_partial_word(session):
    session.edit("float4 c = sm")
    item = session.find_completion("smoothstep")
    assert item is not None

    assert session.accept_completion(item)
    assert session.source == "float4 c = smoothstep"
    assert session.cursor == len("float4 c = smoothstep")
    assert session.completions == ()


def test_accept_completion_inside_word_at_cursor(session):
    session.trigger_completion("x = norm(v);", 6)
    item = session.find_completion("normalize")
    session.accept_completion(item)
    assert session.source == "x = normalize(v);"
    assert session.cursor == len("x = normalize")


def test_accept_without_word_does_nothing(session):
    session.edit("x = ")
    item = session.engine.database[0]
    assert not session.accept_completion(item)
    assert session.source == "x = "


def test_unbound_buffer_is_never_dirty(session):
    session.edit("abc")
    assert not session.dirty


def test_open_file_loads_and_compiles(session, backend, tmp_path):
    shader = tmp_path / "a.metal"
    shader.write_text("kernel void k() {}", encoding="utf-8")

    assert session.open_file(shader)
    assert session.source == "kernel void k() {}"
    assert session.path == shader
    assert not session.dirty
    assert backend.compiled == ["kernel void k() {}"]
    assert session.state.artifact is not None


def test_open_file_without_auto_compile(session, backend, tmp_path):
    shader = tmp_path / "a.metal"
    shader.write_text("x", encoding="utf-8")
    session.auto_compile = False
    session.open_file(shader)
    assert backend.compiled == []


def test_reopening_current_file_is_a_no_op(session, backend, tmp_path):
    shader = tmp_path / "a.metal"
    shader.write_text("x", encoding="utf-8")
    session.open_file(shader)
    session.edit("changed")
    assert session.open_file(shader)
    assert session.source == "changed"
    assert session.dirty


def test_switching_files_saves_dirty_buffer(session, tmp_path):
    first = tmp_path / "first.metal"
    second = tmp_path / "second.metal"
    first.write_text("one", encoding="utf-8")
    second.write_text("two", encoding="utf-8")

    session.open_file(first)
    session.edit("one edited")
    assert session.dirty

    session.open_file(second)
    assert first.read_text(encoding="utf-8") == "one edited"
    assert session.source == "two"
    assert not session.dirty


def test_load_failure_keeps_buffer_and_compile_state(session, backend, tmp_path):
    session.edit("keep me")
    before = session.state

    assert not session.open_file(tmp_path / "missing.metal")
    assert session.error.kind == FileErrorKind.NOT_FOUND
    assert session.source == "keep me"
    assert session.path is None
    assert session.state is before


def test_save_writes_buffer(session, tmp_path):
    shader = tmp_path / "s.metal"
    shader.write_text("old", encoding="utf-8")
    session.open_file(shader)
    session.edit("new")

    assert session.save()
    assert shader.read_text(encoding="utf-8") == "new"
    assert not session.dirty


def test_save_without_file_is_refused(session):
    session.edit("abc")
    assert not session.save()


def test_save_failure_is_reported(session, tmp_path):
    target = tmp_path / "gone" / "s.metal"
    assert not session.save_as(target)
    assert session.error is not None
    assert session.path is None


def test_save_as_binds_buffer(session, tmp_path):
    session.edit("abc")
    target = tmp_path / "s.frag"
    assert session.save_as(target)
    assert session.path == Path(target)
    assert target.read_text(encoding="utf-8") == "abc"


def test_open_folder_builds_tree(session, tmp_path):
    (tmp_path / "shaders").mkdir()
    (tmp_path / "shaders" / "a.metal").write_text("", encoding="utf-8")
    assert session.open_folder(tmp_path)
    assert [node.name for node in session.file_tree] == ["shaders"]
    assert session.root == tmp_path


def test_open_missing_folder_reports_error(session, tmp_path):
    assert not session.open_folder(tmp_path / "nope")
    assert session.error.kind == FileErrorKind.SCAN_FAILED
    assert session.file_tree == []


def test_replace_next_from_cursor_and_wraps(session):
    session.edit("a b a b", 0)
    assert session.replace_next("b", "c")
    assert session.source == "a c a b"
    assert session.replace_next("b", "c")
    assert session.source == "a c a c"
    assert not session.replace_next("b", "c")
    session.edit("b a", 3)
    assert session.replace_next("b", "x")
    assert session.source == "x a"


def test_replace_all(session):
    session.edit("u_time + u_time")
    assert session.replace_all("u_time", "t") == 2
    assert session.source == "t + t"
    assert session.replace_all("", "x") == 0
    assert session.replace_all("missing", "x") == 0


def test_new_from_template(session, backend, tmp_path):
    shader = tmp_path / "s.frag"
    shader.write_text("old", encoding="utf-8")
    session.open_file(shader)

    state = session.new_from_template(GRADIENT)
    assert session.path is None
    assert session.source == GRADIENT.source
    assert backend.compiled[-1] == GRADIENT.source
    assert state.artifact is not None
