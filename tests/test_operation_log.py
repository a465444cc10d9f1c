"""Tests for the undo/redo operation log."""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from atomic_notes.core.operation_log import OperationLog
from atomic_notes.core.vault_storage import VaultStorage
from atomic_notes.data_models import CreateOperation, ModifyOperation, OperationStatus


class RecordingStore:
    """In-memory file store that records calls and can fail on demand."""

    def __init__(self, files=None, failing=()):
        self.files = dict(files or {})
        self.failing = set(failing)
        self.calls = []

    def _check(self, action, path):
        self.calls.append((action, path))
        if path in self.failing:
            raise PermissionError(f"{action} denied for {path}")

    def exists(self, path):
        return path in self.files

    def read(self, path):
        self._check("read", path)
        return self.files[path]

    def write(self, path, content):
        self._check("write", path)
        self.files[path] = content

    def create(self, path, content):
        self._check("create", path)
        self.files[path] = content

    def delete(self, path):
        self._check("delete", path)
        del self.files[path]


class OperationLogRoundTripTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.root = Path(self.tmpdir.name).resolve()
        self.storage = VaultStorage(self.root)
        self.log = OperationLog(self.storage)

        # Forward transaction: create a.md, change b.md from X to Y
        self.storage.create("a.md", "card A")
        (self.root / "b.md").write_text("X", encoding="utf-8")
        self.storage.write("b.md", "Y")
        self.log.add_transaction([
            CreateOperation(path="a.md"),
            ModifyOperation(path="b.md", prior_content="X"),
        ])

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _read(self, name: str) -> str:
        return (self.root / name).read_text(encoding="utf-8")

    def test_undo_reverses_transaction(self) -> None:
        outcome = self.log.undo()

        self.assertEqual(outcome.count, 2)
        self.assertFalse((self.root / "a.md").exists())
        self.assertEqual(self._read("b.md"), "X")
        self.assertFalse(self.log.can_undo)
        self.assertTrue(self.log.can_redo)

    def test_redo_restores_forward_state(self) -> None:
        self.log.undo()
        outcome = self.log.redo()

        self.assertEqual(outcome.count, 2)
        self.assertEqual(self._read("a.md"), "card A")
        self.assertEqual(self._read("b.md"), "Y")
        self.assertTrue(self.log.can_undo)
        self.assertFalse(self.log.can_redo)

    def test_undo_redo_undo_cycle(self) -> None:
        self.log.undo()
        self.log.redo()
        outcome = self.log.undo()

        self.assertEqual(outcome.count, 2)
        self.assertFalse((self.root / "a.md").exists())
        self.assertEqual(self._read("b.md"), "X")

    def test_nested_create_is_deleted_and_recreated(self) -> None:
        self.storage.create("Cards/Deep/c.md", "card C")
        self.log.add_transaction([CreateOperation(path="Cards/Deep/c.md")])

        self.log.undo()
        self.assertFalse((self.root / "Cards/Deep/c.md").exists())
        self.log.redo()
        self.assertEqual(self._read("Cards/Deep/c.md"), "card C")

    def test_undecodable_file_fails_alone_and_keeps_history(self) -> None:
        (self.root / "b.md").write_bytes(b"\xff\xfe bad")

        outcome = self.log.undo()

        statuses = {result.operation.path: result.status for result in outcome.results}
        self.assertEqual(statuses, {"a.md": OperationStatus.SUCCEEDED, "b.md": OperationStatus.FAILED})
        self.assertFalse((self.root / "a.md").exists())
        self.assertEqual((self.root / "b.md").read_bytes(), b"\xff\xfe bad")
        self.assertEqual(self.log.redo_depth, 1)

        self.log.redo()
        self.assertEqual(self._read("a.md"), "card A")

    def test_messages(self) -> None:
        self.assertEqual(self.log.undo().message, "Undid 2 file operation(s)")
        self.assertEqual(self.log.redo().message, "Redid 2 file operation(s)")


class EmptyStackTests(unittest.TestCase):
    def test_undo_on_empty_log(self) -> None:
        log = OperationLog(RecordingStore())
        outcome = log.undo()

        self.assertEqual(outcome.count, 0)
        self.assertEqual(outcome.results, [])
        self.assertEqual(outcome.message, "Nothing to undo")

    def test_redo_on_empty_log(self) -> None:
        log = OperationLog(RecordingStore())
        outcome = log.redo()

        self.assertEqual(outcome.count, 0)
        self.assertEqual(outcome.message, "Nothing to redo")


class TransactionOrderingTests(unittest.TestCase):
    def test_undo_runs_last_operation_first_and_redo_runs_forward(self) -> None:
        store = RecordingStore({"one.md": "1", "two.md": "2", "src.md": "new"})
        log = OperationLog(store)
        log.add_transaction([
            CreateOperation(path="one.md"),
            CreateOperation(path="two.md"),
            ModifyOperation(path="src.md", prior_content="old"),
        ])

        log.undo()
        undo_writes = [call for call in store.calls if call[0] in ("delete", "write")]
        self.assertEqual(
            undo_writes,
            [("write", "src.md"), ("delete", "two.md"), ("delete", "one.md")],
        )

        store.calls.clear()
        log.redo()
        redo_writes = [call for call in store.calls if call[0] in ("create", "write")]
        self.assertEqual(
            redo_writes,
            [("create", "one.md"), ("create", "two.md"), ("write", "src.md")],
        )
        self.assertEqual(store.files, {"one.md": "1", "two.md": "2", "src.md": "new"})

    def test_add_transaction_ignores_empty_list(self) -> None:
        log = OperationLog(RecordingStore())
        log.add_transaction([])

        self.assertEqual(log.undo_depth, 0)

    def test_add_transaction_copies_input(self) -> None:
        store = RecordingStore({"a.md": "A"})
        log = OperationLog(store)
        operations = [CreateOperation(path="a.md")]
        log.add_transaction(operations)
        operations.append(CreateOperation(path="ghost.md"))

        self.assertEqual(len(log.undo().results), 1)


class RedoInvalidationTests(unittest.TestCase):
    def test_only_a_real_forward_transaction_clears_redo(self) -> None:
        store = RecordingStore({"a.md": "A"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="a.md")])

        log.undo()
        self.assertEqual(log.redo_depth, 1)

        log.add_transaction([])
        self.assertEqual(log.redo_depth, 1)

        store.files["b.md"] = "B"
        log.add_transaction([CreateOperation(path="b.md")])
        self.assertEqual(log.redo_depth, 0)
        self.assertEqual(log.undo_depth, 1)

    def test_clear_empties_both_stacks(self) -> None:
        store = RecordingStore({"a.md": "A", "b.md": "B"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="a.md")])
        log.add_transaction([CreateOperation(path="b.md")])
        log.undo()

        log.clear()

        self.assertFalse(log.can_undo)
        self.assertFalse(log.can_redo)


class SkipAndFailureTests(unittest.TestCase):
    def test_missing_created_file_is_skipped_and_not_redoable(self) -> None:
        store = RecordingStore({"kept.md": "K"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="gone.md"), CreateOperation(path="kept.md")])

        outcome = log.undo()

        self.assertEqual(outcome.count, 1)
        skipped = outcome.with_status(OperationStatus.SKIPPED)
        self.assertEqual([result.operation.path for result in skipped], ["gone.md"])

        redo = log.redo()
        self.assertEqual([result.operation.path for result in redo.results], ["kept.md"])
        self.assertEqual(store.files, {"kept.md": "K"})

    def test_transaction_of_only_skips_leaves_redo_empty(self) -> None:
        log = OperationLog(RecordingStore())
        log.add_transaction([ModifyOperation(path="missing.md", prior_content="old")])

        outcome = log.undo()

        self.assertEqual(outcome.count, 0)
        self.assertEqual(outcome.results[0].status, OperationStatus.SKIPPED)
        self.assertFalse(log.can_redo)

    def test_io_failure_does_not_stop_siblings(self) -> None:
        store = RecordingStore({"bad.md": "B", "good.md": "G"}, failing={"bad.md"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="good.md"), CreateOperation(path="bad.md")])

        outcome = log.undo()

        statuses = {result.operation.path: result.status for result in outcome.results}
        self.assertEqual(statuses, {"bad.md": OperationStatus.FAILED, "good.md": OperationStatus.SUCCEEDED})
        self.assertEqual(outcome.count, 1)
        self.assertNotIn("good.md", store.files)
        self.assertEqual(log.redo_depth, 1)

    def test_redo_skips_when_file_reappeared(self) -> None:
        store = RecordingStore({"a.md": "A"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="a.md")])
        log.undo()
        store.files["a.md"] = "someone else"

        outcome = log.redo()

        self.assertEqual(outcome.count, 0)
        self.assertEqual(outcome.results[0].status, OperationStatus.SKIPPED)
        self.assertEqual(store.files["a.md"], "someone else")
        self.assertFalse(log.can_undo)

    def test_redo_of_create_without_content_is_skipped(self) -> None:
        log = OperationLog(RecordingStore())
        log._redo_stack.append([CreateOperation(path="a.md")])

        outcome = log.redo()

        self.assertEqual(outcome.results[0].status, OperationStatus.SKIPPED)

    def test_payload_lists_each_operation(self) -> None:
        store = RecordingStore({"a.md": "A"})
        log = OperationLog(store)
        log.add_transaction([CreateOperation(path="a.md"), CreateOperation(path="b.md")])

        payload = log.undo().as_payload()

        self.assertEqual(payload["action"], "undo")
        self.assertEqual(payload["count"], 1)
        self.assertEqual(
            [(op["path"], op["type"], op["status"]) for op in payload["operations"]],
            [("b.md", "create", "skipped"), ("a.md", "create", "succeeded")],
        )


if __name__ == "__main__":
    unittest.main()
