import threading

import pytest

from app.core.errors import NotFoundError, ValidationError
from app.models.todo import Todo
from app.schemas.todo import TodoUpdate
from app.services.todo_store import TodoStore, parse_todo_id


def test_seeded_with_three_open_todos(store):
    todos = store.list()
    assert [t.id for t in todos] == [1, 2, 3]
    assert [t.text for t in todos] == ["Learn React Testing", "Write API tests", "Deploy application"]
    assert not any(t.completed for t in todos)
    assert store.next_id == 4


def test_empty_seed_starts_counter_at_one():
    store = TodoStore(seed=[])
    assert store.list() == []
    assert store.create("first").id == 1


def test_counter_starts_above_highest_seed_id():
    store = TodoStore(seed=[Todo(id=7, text="a"), Todo(id=2, text="b")])
    assert store.create("c").id == 8


def test_create_trims_and_appends(store):
    todo = store.create("  buy milk  ")
    assert todo == Todo(id=4, text="buy milk", completed=False)
    assert store.list()[-1] == todo


def test_create_ids_strictly_increase(store):
    ids = [store.create(f"item {i}").id for i in range(5)]
    assert ids == sorted(ids)
    assert len(set(ids)) == 5
    assert ids[0] > 3


def test_create_same_text_twice_makes_two_records(store):
    a = store.create("same")
    b = store.create("same")
    assert a.id != b.id
    assert len(store) == 5


@pytest.mark.parametrize("text", ["", "   ", "\t\n", None, 42, ["x"]])
def test_create_rejects_missing_or_blank_text(store, text):
    with pytest.raises(ValidationError) as exc:
        store.create(text)
    assert exc.value.message == "Todo text is required"
    assert exc.value.status_code == 400
    assert len(store) == 3
    assert store.next_id == 4


def test_update_completed_only_keeps_text(store):
    todo = store.update(2, TodoUpdate(completed=True))
    assert todo == Todo(id=2, text="Write API tests", completed=True)


def test_update_text_only_keeps_completed(store):
    store.update(2, TodoUpdate(completed=True))
    todo = store.update(2, TodoUpdate(text="X"))
    assert todo.text == "X"
    assert todo.completed is True


def test_update_completed_false_is_applied(store):
    store.update(1, TodoUpdate(completed=True))
    assert store.update(1, TodoUpdate(completed=False)).completed is False


def test_update_with_no_fields_is_noop(store):
    before = store.get(3)
    assert store.update(3, TodoUpdate()) == before


def test_update_accepts_blank_text(store):
    assert store.update(1, TodoUpdate(text="   ")).text == "   "


def test_update_keeps_position(store):
    store.update(2, TodoUpdate(text="moved?"))
    assert [t.id for t in store.list()] == [1, 2, 3]


def test_update_accepts_string_id(store):
    assert store.update("3", TodoUpdate(completed=True)).id == 3


@pytest.mark.parametrize("todo_id", [99999, "99999", "abc", "1.5", "", None, "2x"])
def test_update_unknown_id_raises_not_found(store, todo_id):
    before = store.list()
    with pytest.raises(NotFoundError) as exc:
        store.update(todo_id, TodoUpdate(text="nope"))
    assert exc.value.message == "Todo not found"
    assert store.list() == before


def test_returned_records_are_copies(store):
    todo = store.list()[0]
    todo.text = "mutated"
    assert store.get(1).text == "Learn React Testing"


def test_delete_removes_exactly_one(store):
    removed = store.delete(2)
    assert removed == Todo(id=2, text="Write API tests", completed=False)
    assert [t.id for t in store.list()] == [1, 3]


def test_delete_twice_raises_not_found(store):
    store.delete(1)
    with pytest.raises(NotFoundError):
        store.delete(1)


def test_delete_malformed_id_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.delete("one")
    assert len(store) == 3


def test_ids_not_reused_after_deleting_newest(store):
    todo = store.create("temp")
    store.delete(todo.id)
    assert store.create("next").id == todo.id + 1


def test_get_unknown_raises(store):
    with pytest.raises(NotFoundError):
        store.get(42)


def test_reset_restores_seed_and_counter(store):
    store.create("extra")
    store.delete(1)
    store.reset()
    assert [t.id for t in store.list()] == [1, 2, 3]
    assert store.next_id == 4


def test_concurrent_creates_get_unique_ids():
    store = TodoStore(seed=[])
    ids = []
    ids_lock = threading.Lock()

    def worker():
        for _ in range(50):
            todo = store.create("x")
            with ids_lock:
                ids.append(todo.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(ids) == list(range(1, 401))
    assert store.next_id == 401


@pytest.mark.parametrize(
    "raw, expected",
    [(4, 4), ("4", 4), (" 12 ", 12), ("-1", -1), ("+1", 1), ("4abc", None), ("1_0", None), ("", None), (True, None), (None, None)],
)
def test_parse_todo_id(raw, expected):
    assert parse_todo_id(raw) == expected
