from util.sync_status import remote_status_fragments

LABELS = {"syncing": "syncing…", "pending": "2 pending", "failed": "1 failed"}


def test_idle_queue_shows_ok_marker():
    assert remote_status_fragments(0, 0, False, LABELS) == [("class:status.ok", "■")]


def test_busy_queue_lists_each_state():
    frags = remote_status_fragments(2, 1, True, LABELS)

    assert [style for style, _ in frags] == ["class:status.warn", "class:status.warn", "class:status.fail"]
    assert [text for _, text in frags] == ["syncing…", "2 pending", "1 failed"]


def test_missing_labels_use_english_defaults():
    frags = remote_status_fragments(3, 0, False, {})

    assert frags == [("class:status.warn", "3 pending")]
