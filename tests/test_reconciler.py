# tests/test_reconciler.py

import gc
import threading
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from core import reconciler, state, store
from core.errors import InvalidInput
from models import Blog


T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def count_blogs(db):
    return db.scalar(select(func.count()).select_from(Blog))


def assert_status_invariant(blog):
    assert (blog.status == "published") == (blog.published_at is not None)


@pytest.mark.parametrize("tags, expected", [
    ("a, b ,,c", ["a", "b", "c"]),
    ("", []),
    (" , ,", []),
    (None, []),
    (["x", "y"], ["x", "y"]),
    ("single", ["single"]),
])
def test_normalize_tags(tags, expected):
    assert reconciler.normalize_tags(tags) == expected


@pytest.mark.parametrize("title, content", [
    ("", "body"),
    ("Title", ""),
    ("   ", "body"),
    ("Title", "\n\t "),
    (None, "body"),
])
def test_blank_title_or_content_is_rejected_before_store(db, title, content):
    with pytest.raises(InvalidInput, match="Title and content are required"):
        reconciler.save_draft(db, title=title, content=content)
    assert count_blogs(db) == 0


def test_first_draft_creates_one_post(db):
    blog, created = reconciler.save_draft(db, title="Hello", content="World", tags="a,b")
    assert created
    assert count_blogs(db) == 1
    assert blog.status == "draft"
    assert blog.published_at is None
    assert blog.tags == ["a", "b"]
    assert store.is_valid_id(blog.id)


def test_second_draft_with_same_title_updates(db):
    first, _ = reconciler.save_draft(db, title="Hello", content="v1")
    second, created = reconciler.save_draft(db, title="Hello", content="v2", tags=["t"])
    assert not created
    assert second.id == first.id
    assert second.content == "v2"
    assert second.tags == ["t"]
    assert count_blogs(db) == 1


def test_update_by_id_can_rename(db):
    blog, _ = reconciler.save_draft(db, title="Old", content="body")
    renamed, created = reconciler.save_draft(db, post_id=blog.id, title="New", content="body")
    assert not created
    assert renamed.id == blog.id
    assert renamed.title == "New"
    assert store.find_blog_by_title(db, "Old") is None


def test_id_takes_precedence_over_title(db):
    target, _ = reconciler.save_draft(db, title="Target", content="t")
    other, _ = reconciler.save_draft(db, title="Other", content="o")

    updated, created = reconciler.save_draft(db, post_id=target.id, title="Other", content="changed")
    assert not created
    assert updated.id == target.id
    db.refresh(other)
    assert other.content == "o"


def test_unknown_id_falls_back_to_title_upsert(db):
    existing, _ = reconciler.save_draft(db, title="Hello", content="v1")

    updated, created = reconciler.save_draft(db, post_id="0" * 24, title="Hello", content="v2")
    assert not created
    assert updated.id == existing.id

    fresh, created = reconciler.save_draft(db, post_id="f" * 24, title="Brand new", content="x")
    assert created
    assert fresh.id != "f" * 24


def test_malformed_id_falls_back_to_title_upsert(db):
    blog, created = reconciler.publish(db, post_id="not-an-id", title="Hello", content="x")
    assert created
    assert blog.status == "published"


def test_publish_stamps_published_at(db):
    blog, created = reconciler.publish(db, title="Hello", content="World", now=T0)
    assert created
    assert blog.status == "published"
    assert blog.published_at == T0
    assert_status_invariant(blog)


def test_republish_bumps_published_at(db):
    blog, _ = reconciler.publish(db, title="Hello", content="v1", now=T0)
    first = blog.published_at

    again, created = reconciler.publish(db, post_id=blog.id, title="Hello", content="v2", now=T0 + timedelta(hours=1))
    assert not created
    assert again.published_at > first

    second = again.published_at

    by_title, _ = reconciler.publish(db, title="Hello", content="v3", now=T0 + timedelta(hours=2))
    assert by_title.id == blog.id
    assert by_title.published_at > second


def test_draft_after_publish_clears_published_at(db):
    blog, _ = reconciler.publish(db, title="Hello", content="v1", now=T0)
    draft, _ = reconciler.save_draft(db, post_id=blog.id, title="Hello", content="v2", now=T0 + timedelta(minutes=5))
    assert draft.status == "draft"
    assert draft.published_at is None


def test_status_invariant_holds_after_every_call(db):
    calls = [
        (reconciler.save_draft, {"title": "A", "content": "1"}),
        (reconciler.publish, {"title": "A", "content": "2"}),
        (reconciler.save_draft, {"title": "A", "content": "3"}),
        (reconciler.publish, {"title": "B", "content": "4"}),
        (reconciler.publish, {"title": "B", "content": "5"}),
    ]
    for action, fields in calls:
        action(db, **fields)
        for blog in store.list_all_blogs(db):
            assert_status_invariant(blog)


def test_concurrent_publish_on_same_title_keeps_one_post(session_factory):
    barrier = threading.Barrier(2)
    results, errors = [], []

    def worker(content):
        session = session_factory()
        try:
            barrier.wait()
            results.append(reconciler.publish(session, title="Race", content=content))
        except Exception as e:  # surfaced through `errors`
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=worker, args=(f"v{i}",)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert sorted(created for _, created in results) == [False, True]

    with session_factory() as session:
        blogs = session.scalars(select(Blog)).all()
        assert len(blogs) == 1
        # The insert wins the title lock first, so the update is the last write.
        last_write = next(blog for blog, created in results if not created)
        assert blogs[0].content == last_write.content
        assert blogs[0].status == "published"


def test_list_all_breaks_updated_at_ties_by_published_at(db):
    reconciler.save_draft(db, title="Draft", content="d", now=T0)
    reconciler.publish(db, title="Pub", content="p", now=T0)

    assert [blog.title for blog in store.list_all_blogs(db)] == ["Pub", "Draft"]


def test_title_locks_are_released_when_unused():
    lock = state.with_title_lock("Transient title")
    assert state.with_title_lock("Transient title") is lock

    with lock:
        pass
    del lock
    gc.collect()

    assert "Transient title" not in state._title_locks
