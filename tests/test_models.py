from todo_tracker.defaults import WORK_PROCESSES, default_processes, sample_buckets
from todo_tracker.models import DailyBucket, Priority, Task, WorkProcess


def test_task_from_dict_reads_stored_layout():
    t = Task.from_dict({
        "id": "1", "title": "Call", "completed": True, "priority": "HIGH",
        "estimatedTime": "20m", "fixed": True, "order": 15,
    })
    assert (t.completed, t.priority, t.estimated_time, t.fixed, t.order) == (True, Priority.HIGH, "20m", True, 15)
    assert t.to_dict()["estimatedTime"] == "20m"


def test_task_from_dict_tolerates_bad_fields():
    t = Task.from_dict({"id": 7, "title": None, "priority": "urgent", "order": True})
    assert t.id == "7"
    assert t.title == ""
    assert t.priority == Priority.NONE
    assert t.order is None
    assert t.sort_key == 0


def test_task_to_dict_omits_unset_optionals():
    data = Task(id="1", title="Plain").to_dict()
    assert data == {"id": "1", "title": "Plain", "description": "", "completed": False, "priority": "none"}


def test_clone_resets_completion_only():
    t = Task(id="1", title="A", description="d", completed=True, priority=Priority.LOW, order=30)
    c = t.clone("2")
    assert (c.id, c.completed) == ("2", False)
    assert (c.title, c.description, c.priority, c.order) == ("A", "d", Priority.LOW, 30)
    assert t.completed is True


def test_bucket_sorting_is_stable():
    bucket = DailyBucket("p", "2024-01-15", [
        Task(id="a", title="A", order=20),
        Task(id="b", title="B"),
        Task(id="c", title="C", order=20),
        Task(id="d", title="D", order=5),
    ])
    assert [t.id for t in bucket.sorted_todos()] == ["b", "d", "a", "c"]
    assert [t.id for t in bucket.todos] == ["a", "b", "c", "d"]


def test_bucket_round_trip_uses_process_id_key():
    bucket = DailyBucket("p", "fixed", [Task(id="a", title="A")])
    data = bucket.to_dict()
    assert data["processId"] == "p"
    again = DailyBucket.from_dict(data)
    assert again.is_fixed
    assert again.find("a").title == "A"
    assert again.find("zzz") is None


def test_default_processes_are_copies():
    procs = default_processes()
    procs[0].title = "Changed"
    assert WORK_PROCESSES[0].title == "Daily To Do's"


def test_work_process_from_dict_fills_gradient():
    p = WorkProcess.from_dict({"id": "x", "title": "X", "color": "#111111"})
    assert p.color == "#111111"
    assert len(p.gradient) == 2


def test_sample_buckets_dates():
    buckets = sample_buckets("2024-03-01")
    assert {b.date for b in buckets} == {"2024-03-01", "2024-02-29"}
    ids = [t.id for b in buckets for t in b.todos]
    assert len(ids) == len(set(ids))
