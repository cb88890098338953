import pytest
from pathlib import Path
from sidecar_organizer.exceptions import FileOperationError, UnhandledChoiceError
from sidecar_organizer.models import MovePlan, PromptState
from sidecar_organizer.organization import mover as mover_module
from sidecar_organizer.organization.mover import FileMover, choices_for, console_prompt


class ScriptedPrompter:
    """Answers prompts from a fixed list and records what it was asked."""
    def __init__(self, answers):
        self.answers = list(answers)
        self.asked = []

    def __call__(self, message, choices):
        self.asked.append((message, list(choices)))
        return self.answers.pop(0)


def test_move_without_prompt(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")
    dest = tmp_path / "subdir" / "foo.png"

    state, applied = FileMover().move("Action", src, dest, PromptState.AUTO_CONFIRM, 1, 1)

    assert applied
    assert state is PromptState.AUTO_CONFIRM
    assert not src.exists()
    assert dest.exists()

def test_move_two_subdirs_down(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")
    dest = tmp_path / "subdir1" / "subdir2" / "foo.png"

    FileMover().move("Action", src, dest, PromptState.AUTO_CONFIRM, 1, 1)

    assert not src.exists()
    assert dest.exists()

def test_move_missing_source_changes_nothing(tmp_path):
    (tmp_path / "foo.png").write_text("")

    # Extension is different
    with pytest.raises(FileOperationError):
        FileMover().run_batch("Move", [MovePlan(tmp_path / "foo.jpg", tmp_path / "target" / "foo.jpg")], prompt=False)

    assert (tmp_path / "foo.png").exists()
    assert not (tmp_path / "target").exists()

def test_move_refuses_to_overwrite(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("new")
    dest = tmp_path / "target" / "foo.png"
    dest.parent.mkdir()
    dest.write_text("old")

    with pytest.raises(FileOperationError):
        FileMover().move("Move", src, dest, PromptState.AUTO_CONFIRM, 1, 1)

    assert src.read_text() == "new"
    assert dest.read_text() == "old"

def test_confirm_moves_and_keeps_prompting(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")
    prompter = ScriptedPrompter(["Move"])

    state, applied = FileMover(prompter).move("Move", src, tmp_path / "t" / "foo.png", PromptState.PROMPT, 1, 1)

    assert applied
    assert state is PromptState.PROMPT
    assert prompter.asked == [("Move file?", ["Move", "Don't Move", "Move all (auto)"])]

def test_skip_leaves_file(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")

    state, applied = FileMover(ScriptedPrompter(["Don't Move"])).move(
        "Move", src, tmp_path / "t" / "foo.png", PromptState.PROMPT, 1, 1
    )

    assert not applied
    assert state is PromptState.PROMPT
    assert src.exists()
    # Target folder is prepared before asking
    assert (tmp_path / "t").is_dir()

def test_unhandled_choice(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")

    with pytest.raises(UnhandledChoiceError):
        FileMover(ScriptedPrompter(["Maybe"])).move("Move", src, tmp_path / "foo2.png", PromptState.PROMPT, 1, 1)

    assert src.exists()

def test_batch_confirm_all_stops_prompting(tmp_path):
    names = ["a.png", "b.png", "c.png", "d.png"]
    for n in names:
        (tmp_path / n).write_text("")
    plans = [MovePlan(tmp_path / n, tmp_path / "out" / n) for n in names]
    prompter = ScriptedPrompter(["Don't Rename", "Rename all (auto)"])

    summary = FileMover(prompter).run_batch("Rename", plans)

    # Asked for a and b only; c and d follow b automatically
    assert len(prompter.asked) == 2
    assert summary.applied == 3
    assert summary.skipped == 1
    assert (tmp_path / "a.png").exists()
    assert all((tmp_path / "out" / n).exists() for n in names[1:])

def test_batch_state_does_not_leak_between_batches(tmp_path):
    for n in ["a.png", "b.png"]:
        (tmp_path / n).write_text("")
    prompter = ScriptedPrompter(["Move all (auto)", "Don't Move"])
    mover = FileMover(prompter)

    mover.run_batch("Move", [MovePlan(tmp_path / "a.png", tmp_path / "out" / "a.png")])
    mover.run_batch("Move", [MovePlan(tmp_path / "b.png", tmp_path / "out" / "b.png")])

    assert len(prompter.asked) == 2
    assert (tmp_path / "b.png").exists()

def test_batch_dry_run(tmp_path):
    src = tmp_path / "foo.png"
    src.write_text("")

    summary = FileMover(ScriptedPrompter([])).run_batch(
        "Move", [MovePlan(src, tmp_path / "out" / "foo.png")], dry_run=True
    )

    assert summary.applied == 0
    assert src.exists()
    assert not (tmp_path / "out").exists()

def test_console_prompt_accepts_number_and_label(monkeypatch):
    answers = iter(["9", "2"])
    monkeypatch.setattr("builtins.input", lambda _: next(answers))
    assert console_prompt("Move file?", choices_for("Move")) == "Don't Move"

    monkeypatch.setattr("builtins.input", lambda _: "Move all (auto)")
    assert console_prompt("Move file?", choices_for("Move")) == "Move all (auto)"

def test_console_prompt_eof_declines(monkeypatch):
    def eof(_):
        raise EOFError
    monkeypatch.setattr("builtins.input", eof)
    assert console_prompt("Move file?", choices_for("Move")) == "Don't Move"
