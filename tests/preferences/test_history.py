"""Tests for the deduplicating gadget run history."""

import json

import pytest
from pydantic import ValidationError

from env_prefs.preferences.history import GADGET_HISTORY_KEY, GadgetRunRequest, History


@pytest.fixture
def history(accessor):
    return History(accessor)


def run(image, params=None, timestamp=None, **extra):
    return {"image": image, "params": params if params is not None else {}, "timestamp": timestamp, **extra}


def images(records):
    return [record.image for record in records]


def test_empty_by_default(history):
    assert history.get_history("e1") == []


def test_new_record_goes_first(history):
    history.add_record("e1", run("a", timestamp=1))
    history.add_record("e1", run("b", timestamp=2))

    assert images(history.get_history("e1")) == ["b", "a"]


def test_same_identity_different_timestamp_is_one_record(history):
    history.add_record("e1", run("a", {"x": 1}, timestamp=1000))
    history.add_record("e1", run("a", {"x": 1}, timestamp=2000))

    records = history.get_history("e1")
    assert len(records) == 1
    assert records[0].timestamp == 2000


def test_repeat_moves_to_front(history):
    for image in ["a", "b", "c"]:
        history.add_record("e1", run(image))
    history.add_record("e1", run("a", timestamp=99))

    records = history.get_history("e1")
    assert images(records) == ["a", "c", "b"]
    assert records[0].timestamp == 99


def test_repeat_keeps_fields_of_stored_record(history):
    """Only the timestamp of the existing entry is refreshed."""
    history.add_record("e1", run("a", {"x": 1}, timestamp=1, label="first run"))
    history.add_record("e1", run("a", {"x": 1}, timestamp=2, label="second run"))

    stored = history.get_history("e1")[0].model_dump()
    assert stored["label"] == "first run"
    assert stored["timestamp"] == 2


def test_params_key_order_is_ignored(history):
    history.add_record("e1", run("a", {"filter": {"ns": "default", "pod": "web"}, "n": 1}))
    history.add_record("e1", run("a", {"n": 1, "filter": {"pod": "web", "ns": "default"}}))

    assert len(history.get_history("e1")) == 1


def test_list_order_in_params_matters(history):
    history.add_record("e1", run("a", {"args": [1, 2]}))
    history.add_record("e1", run("a", {"args": [2, 1]}))

    assert len(history.get_history("e1")) == 2


def test_different_image_same_params_are_distinct(history):
    history.add_record("e1", run("a", {"x": 1}))
    history.add_record("e1", run("b", {"x": 1}))

    assert images(history.get_history("e1")) == ["b", "a"]


def test_cap_keeps_most_recent(history):
    max_entries = 5
    for index in range(max_entries + 5):
        history.add_record("e1", run(f"img-{index}", timestamp=index), max_entries=max_entries)

    records = history.get_history("e1")
    assert len(records) == max_entries
    assert images(records) == [f"img-{index}" for index in range(9, 4, -1)]


def test_touched_record_survives_cap(history):
    for index in range(3):
        history.add_record("e1", run(f"img-{index}"), max_entries=3)
    history.add_record("e1", run("img-0"), max_entries=3)
    history.add_record("e1", run("img-3"), max_entries=3)

    assert images(history.get_history("e1")) == ["img-3", "img-0", "img-2"]


def test_default_cap_is_fifty(history):
    for index in range(55):
        history.add_record("e1", run(f"img-{index}"))

    assert len(history.get_history("e1")) == 50


def test_custom_identity_fields(history):
    history.add_record("e1", run("a", {"x": 1}), identity_fields=("image",))
    history.add_record("e1", run("a", {"x": 2}), identity_fields=("image",))

    records = history.get_history("e1")
    assert len(records) == 1
    assert records[0].params == {"x": 1}


def test_accepts_model_instances(history):
    history.add_record("e1", GadgetRunRequest(image="a", params={"x": 1}, timestamp=5))
    assert history.get_history("e1")[0].params == {"x": 1}


def test_empty_record_is_noop(history, recorder):
    history.add_record("e1", None)
    history.add_record("e1", {})

    assert history.get_history("e1") == []
    assert recorder.get_changes() == []


def test_invalid_record_raises(history):
    with pytest.raises(ValidationError):
        history.add_record("e1", {"params": {"x": 1}})


def test_stored_as_json_list(history, backend):
    history.add_record("e1", run("a", {"x": 1}, timestamp=1))

    raw = backend.get_item(f"env:e1:{GADGET_HISTORY_KEY}")
    assert raw is not None
    assert raw.startswith("[")


def test_malformed_history_reads_empty_and_recovers(history, backend):
    backend.set_item(f"env:e1:{GADGET_HISTORY_KEY}", '[{"no_image": true}]')

    assert history.get_history("e1") == []

    history.add_record("e1", run("a"))
    assert images(history.get_history("e1")) == ["a"]


def test_invalid_record_is_skipped_and_others_kept(history, backend):
    """One bad stored record does not cost the valid ones."""
    for index in range(3):
        history.add_record("e1", run(f"img{index}", timestamp=index))
    key = f"env:e1:{GADGET_HISTORY_KEY}"
    stored = json.loads(backend.get_item(key))
    backend.set_item(key, json.dumps([*stored, {"image": 7}, "not-a-record"]))

    assert images(history.get_history("e1")) == ["img2", "img1", "img0"]

    history.add_record("e1", run("new", timestamp=9))
    assert images(history.get_history("e1")) == ["new", "img2", "img1", "img0"]


def test_non_list_history_reads_empty(history, backend):
    backend.set_item(f"env:e1:{GADGET_HISTORY_KEY}", '{"image": "a"}')
    assert history.get_history("e1") == []


def test_clear_history(history):
    history.add_record("e1", run("a"))
    history.clear_history("e1")

    assert history.get_history("e1") == []
