"""Tests for the deletion coordinator."""

from __future__ import annotations

import pytest

from duview.core.deletion import DeletionCoordinator, build_prompt
from duview.core.scanner import scan
from duview.core.selection import Mode, SelectionState


class FakeConfirm:
    """Records prompts and answers them with a fixed reply."""

    def __init__(self, answer: bool | None = True) -> None:
        self.answer = answer
        self.prompts: list[str] = []
        self.pending = None

    def __call__(self, prompt, callback):
        self.prompts.append(prompt)
        if self.answer is None:
            self.pending = callback
        else:
            callback(self.answer)


@pytest.fixture
def directory(flat_dir):
    return scan(str(flat_dir))


def _visual(selection: SelectionState) -> SelectionState:
    selection.sync(3)
    selection.toggle_visual()
    selection.sync(1)
    return selection


class TestRequestDelete:
    def test_confirm_removes_and_prunes(self, directory, flat_dir):
        confirm = FakeConfirm(True)
        selection = SelectionState()
        done = []
        coordinator = DeletionCoordinator(confirm, selection)

        assert coordinator.request_delete(directory, ["a", "c"], on_done=lambda ok, res: done.append((ok, res)))

        assert sorted(p.name for p in flat_dir.iterdir()) == ["b", "d"]
        assert directory.file_names() == ["b", "d"]
        confirmed, result = done[0]
        assert confirmed
        assert result.errors == []
        assert result.removed == ["a", "c"]
        assert result.freed_bytes == 60

    def test_prompt_lists_every_name(self, directory):
        confirm = FakeConfirm(False)
        DeletionCoordinator(confirm, SelectionState()).request_delete(directory, ["a", "c"])
        prompt = confirm.prompts[0]
        assert "delete 2 files" in prompt
        assert directory.path in prompt
        assert " - a" in prompt and " - c" in prompt

    def test_cancel_leaves_everything(self, directory, flat_dir):
        confirm = FakeConfirm(False)
        selection = _visual(SelectionState())
        done = []
        coordinator = DeletionCoordinator(confirm, selection)

        coordinator.request_delete(directory, ["a"], on_done=lambda ok, res: done.append((ok, res)))

        assert sorted(p.name for p in flat_dir.iterdir()) == ["a", "b", "c", "d"]
        assert directory.file_names() == ["a", "b", "c", "d"]
        assert done == [(False, None)]
        assert selection.mode is Mode.NORMAL
        assert selection.anchor is None

    def test_selection_reset_after_confirm(self, directory):
        selection = _visual(SelectionState())
        DeletionCoordinator(FakeConfirm(True), selection).request_delete(directory, ["a", "b", "c"])
        assert selection.mode is Mode.NORMAL
        assert selection.anchor is None
        assert selection.current == 1

    def test_nothing_happens_before_answer(self, directory, flat_dir):
        confirm = FakeConfirm(None)
        DeletionCoordinator(confirm, SelectionState()).request_delete(directory, ["a"])
        assert (flat_dir / "a").exists()
        confirm.pending(True)
        assert not (flat_dir / "a").exists()

    def test_empty_target_is_noop(self, directory):
        confirm = FakeConfirm(True)
        assert not DeletionCoordinator(confirm, SelectionState()).request_delete(directory, [])
        assert confirm.prompts == []

    def test_confirmation_can_be_disabled(self, directory, flat_dir):
        confirm = FakeConfirm(False)
        coordinator = DeletionCoordinator(confirm, SelectionState(), confirm_required=False)
        coordinator.request_delete(directory, ["d"])
        assert confirm.prompts == []
        assert not (flat_dir / "d").exists()


class TestApply:
    def test_precision_independent_of_order(self, directory):
        directory.files.reverse()
        DeletionCoordinator(FakeConfirm(), SelectionState()).apply(directory, ["c", "a"])
        assert sorted(directory.file_names()) == ["b", "d"]

    def test_size_not_recomputed(self, directory):
        before = directory.size
        DeletionCoordinator(FakeConfirm(), SelectionState()).apply(directory, ["a"])
        assert directory.size == before

    def test_partial_failure_still_prunes(self, directory, flat_dir):
        (flat_dir / "b").unlink()
        result = DeletionCoordinator(FakeConfirm(), SelectionState()).apply(directory, ["a", "b", "c"])
        assert result.removed == ["a", "c"]
        assert len(result.errors) == 1
        assert result.errors
        assert directory.file_names() == ["d"]
        assert not (flat_dir / "c").exists()


class TestBuildPrompt:
    def test_format(self, directory):
        text = build_prompt(directory, ["x"])
        assert text.splitlines() == [
            "Do you really want to delete 1 files?",
            f"in {directory.path}",
            " - x",
        ]
