"""Confirmation and execution of file deletions inside one directory."""

from __future__ import annotations

import logging
from typing import Callable

from duview.core.selection import SelectionState
from duview.models.delete_result import DeleteResult
from duview.models.tree import DirectoryNode
from duview.utils import bytes_to_human, remove_files

log = logging.getLogger(__name__)

# (prompt, answer callback) -> None; the callback receives True for "Yes".
ConfirmFn = Callable[[str, Callable[[bool], None]], None]
DoneCallback = Callable[[bool, DeleteResult | None], None]


def build_prompt(directory: DirectoryNode, names: list[str]) -> str:
    """Confirmation text listing every file that would be removed."""
    lines = [
        f"Do you really want to delete {len(names)} files?",
        f"in {directory.path}",
    ]
    lines.extend(f" - {name}" for name in names)
    return "\n".join(lines)


class DeletionCoordinator:
    """Turns a finalized selection into filesystem removals.

    The confirmation itself is the presentation layer's business: it is
    reached through *confirm*, which must eventually call the callback it
    is given exactly once.
    """

    def __init__(
        self,
        confirm: ConfirmFn,
        selection: SelectionState,
        *,
        confirm_required: bool = True,
    ) -> None:
        self._confirm = confirm
        self._selection = selection
        self.confirm_required = confirm_required

    def request_delete(
        self,
        directory: DirectoryNode,
        names: list[str],
        on_done: DoneCallback | None = None,
    ) -> bool:
        """Ask for confirmation, then delete *names* from *directory*.

        Returns:
            False without prompting when *names* is empty, True once the
            request has been handed to the confirmation step.
        """
        if not names:
            return False
        names = list(names)

        def _answer(confirmed: bool) -> None:
            result = self.apply(directory, names) if confirmed else None
            if not confirmed:
                log.debug("Deletion of %d file(s) in %s cancelled", len(names), directory.path)
            self._selection.reset(len(directory.files))
            if on_done is not None:
                on_done(confirmed, result)

        if not self.confirm_required:
            _answer(True)
        else:
            self._confirm(build_prompt(directory, names), _answer)
        return True

    def apply(self, directory: DirectoryNode, names: list[str]) -> DeleteResult:
        """Remove the files and prune them from the directory's file list.

        Every removal is attempted even if earlier ones fail. The file
        list drops all requested names regardless of outcome; the
        directory's aggregate size is left untouched until a refresh.
        """
        targets = set(names)
        sizes = {f.name: f.size for f in directory.files}

        removed, errors = remove_files(directory.path, names)
        for error in errors:
            log.warning("Could not delete %s", error)

        directory.files = [f for f in directory.files if f.name not in targets]

        result = DeleteResult(
            directory=directory.path,
            requested=list(names),
            removed=removed,
            errors=errors,
            freed_bytes=sum(sizes.get(name, 0) for name in removed),
        )
        log.info(
            "Deleted %d/%d file(s) in %s, freed %s",
            len(removed),
            len(names),
            directory.path,
            bytes_to_human(result.freed_bytes),
        )
        return result
