import unittest
from yeeks.events.Event_Bus import NOTE_SAVED, NOTE_SAVE_FAILED, NOTES_LOAD_FAILED
from yeeks.infra.Note_Backends import InMemoryNoteBackend, year_key
from yeeks.infra.Note_Store import NoteStore
from yeeks.tests.helpers import StepClock, FailingBackend, RecordingBus


class TestNoteStore(unittest.TestCase):

    def setUp(self):
        self.backend = InMemoryNoteBackend()
        self.bus = RecordingBus()
        self.store = NoteStore(self.backend, bus=self.bus, clock=StepClock())

    def test_load_empty_year(self):
        self.assertEqual(self.store.load(2025), {})
        self.assertEqual(self.store.year, 2025)

    def test_save_then_load(self):
        self.store.save(2025, 3, "x")
        fresh = NoteStore(self.backend)
        mapping = fresh.load(2025)
        self.assertEqual(NoteStore.get(mapping, 3).content, "x")
        self.assertIsNone(NoteStore.get(mapping, 4))

    def test_persisted_layout(self):
        note = self.store.save(2025, 1, "first week")
        record = self.backend.read(2025)
        self.assertEqual(record, {"1": {"content": "first week", "lastModified": note.last_modified.isoformat()}})

    def test_saving_same_content_twice_updates_timestamp_only(self):
        first = self.store.save(2025, 2, "same")
        second = self.store.save(2025, 2, "same")
        self.assertGreater(second.last_modified, first.last_modified)
        mapping = NoteStore(self.backend).load(2025)
        self.assertEqual(NoteStore.get(mapping, 2).content, "same")
        self.assertEqual(NoteStore.get(mapping, 2).last_modified, second.last_modified)

    def test_save_overwrites_and_rewrites_whole_year(self):
        self.store.save(2025, 1, "a")
        self.store.save(2025, 2, "b")
        self.store.save(2025, 1, "c")
        record = self.backend.read(2025)
        self.assertEqual({k: v["content"] for k, v in record.items()}, {"1": "c", "2": "b"})

    def test_empty_content_keeps_the_record(self):
        self.store.save(2025, 5, "plans")
        self.store.save(2025, 5, "")
        note = NoteStore.get(NoteStore(self.backend).load(2025), 5)
        self.assertIsNotNone(note)
        self.assertEqual(note.content, "")
        self.assertFalse(note.has_content)

    def test_switching_years_replaces_the_mapping(self):
        self.store.save(2025, 1, "2025 note")
        self.assertEqual(self.store.load(2024), {})
        self.store.save(2024, 1, "2024 note")
        mapping = self.store.load(2025)
        self.assertEqual(list(mapping), [1])
        self.assertEqual(mapping[1].content, "2025 note")

    def test_save_for_another_year_loads_it_first(self):
        self.store.save(2024, 7, "old")
        self.store.load(2025)
        self.store.save(2024, 8, "new")
        self.assertEqual(set(self.backend.read(2024)), {"7", "8"})
        self.assertEqual(self.store.year, 2024)

    def test_malformed_payloads_load_empty(self):
        payloads = [
            "{broken",
            "[1, 2]",
            '{"1": "text"}',
            '{"0": {"content": "x", "lastModified": "2025-01-01T00:00:00+00:00"}}',
            '{"one": {"content": "x", "lastModified": "2025-01-01T00:00:00+00:00"}}',
            '{"1": {"content": "x", "lastModified": "not a date"}}',
        ]
        for raw in payloads:
            self.backend.raw[year_key(2025)] = raw
            self.assertEqual(self.store.load(2025), {}, raw)
        self.assertEqual(self.bus.names().count(NOTES_LOAD_FAILED), len(payloads))

    def test_failed_write_keeps_memory_authoritative(self):
        backend = FailingBackend()
        bus = RecordingBus()
        store = NoteStore(backend, bus=bus, clock=StepClock())
        store.load(2025)
        note = store.save(2025, 9, "unsaved")
        self.assertEqual(note.content, "unsaved")
        self.assertEqual(NoteStore.get(store.notes, 9).content, "unsaved")
        self.assertIsNone(backend.read(2025))
        self.assertIn(NOTE_SAVE_FAILED, bus.names())
        # The next successful write mirrors everything kept in memory
        backend.fail = False
        store.save(2025, 10, "later")
        self.assertEqual(set(backend.read(2025)), {"9", "10"})

    def test_ensure_keeps_the_loaded_year(self):
        backend = FailingBackend()
        store = NoteStore(backend, clock=StepClock())
        store.save(2025, 1, "memory only")
        self.assertIs(store.ensure(2025), store.notes)
        self.assertEqual(store.ensure(2025)[1].content, "memory only")
        # Another year is a full replace
        self.assertEqual(store.ensure(2024), {})
        self.assertEqual(store.year, 2024)

    def test_saved_event(self):
        self.store.save(2025, 1, "x")
        name, payload = self.bus.events[-1]
        self.assertEqual(name, NOTE_SAVED)
        self.assertEqual((payload["year"], payload["week"], payload["persisted"]), (2025, 1, True))

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            self.store.save(2025, 0, "x")
        with self.assertRaises(TypeError):
            self.store.save(2025, "1", "x")
        with self.assertRaises(TypeError):
            self.store.save(2025, 1, None)


if __name__ == '__main__':
    unittest.main()
