"""Tests for the EnvironmentPreferences facade."""

from env_prefs.preferences.facade import EnvironmentPreferences


def test_k8s_recents_scenario(prefs):
    prefs.save_k8s_recent("e1", "namespace", "kube-system")
    prefs.save_k8s_recent("e1", "namespace", "default")
    prefs.save_k8s_recent("e1", "namespace", "kube-system")

    assert prefs.get_k8s_recents("e1", "namespace") == ["kube-system", "default"]


def test_k8s_recents_are_per_resource_type(prefs):
    prefs.save_k8s_recent("e1", "namespace", "default")
    prefs.save_k8s_recent("e1", "pod", "web-0")

    assert prefs.get_k8s_recents("e1", "namespace") == ["default"]
    assert prefs.get_k8s_recents("e1", "pod") == ["web-0"]
    assert prefs.list_environment_keys("e1") == {
        "env:e1:k8s-recent:namespace",
        "env:e1:k8s-recent:pod",
    }


def test_k8s_recents_cap_at_eight(prefs):
    for index in range(10):
        prefs.save_k8s_recent("e1", "pod", f"pod-{index}")

    assert len(prefs.get_k8s_recents("e1", "pod")) == 8


def test_clear_k8s_recents(prefs):
    prefs.save_k8s_recent("e1", "pod", "web-0")
    prefs.clear_k8s_recents("e1", "pod")

    assert prefs.get_k8s_recents("e1", "pod") == []


def test_gadget_url_recents_cap_at_ten(prefs):
    for index in range(12):
        prefs.save_gadget_url_recent("e1", f"ghcr.io/inspektor-gadget/gadget/g{index}:latest")

    urls = prefs.get_gadget_url_recents("e1")
    assert len(urls) == 10
    assert urls[0].endswith("g11:latest")


def test_gadget_history(prefs):
    prefs.add_gadget_to_history("e1", {"image": "trace_exec", "params": {"a": 1}, "timestamp": 1})
    prefs.add_gadget_to_history("e1", {"image": "trace_exec", "params": {"a": 1}, "timestamp": 2})

    records = prefs.get_gadget_history("e1")
    assert len(records) == 1
    assert records[0].timestamp == 2


def test_gadget_history_uses_configured_limit(accessor):
    prefs = EnvironmentPreferences(accessor, gadget_history_max_entries=3)
    for index in range(5):
        prefs.add_gadget_to_history("e1", {"image": f"g{index}"})

    assert [r.image for r in prefs.get_gadget_history("e1")] == ["g4", "g3", "g2"]


def test_gadget_history_explicit_limit(prefs):
    for index in range(5):
        prefs.add_gadget_to_history("e1", {"image": f"g{index}"}, max_entries=2)

    assert len(prefs.get_gadget_history("e1")) == 2


def test_gadget_history_zero_limit_keeps_nothing(prefs):
    prefs.add_gadget_to_history("e1", {"image": "g0"})

    assert prefs.add_gadget_to_history("e1", {"image": "g1"}, max_entries=0) == []
    assert prefs.get_gadget_history("e1") == []


def test_generic_get_set(prefs):
    prefs.set("e1", "layout", {"split": 0.5})
    assert prefs.get("e1", "layout") == {"split": 0.5}


def test_cleanup_environment_isolation(prefs):
    prefs.save_k8s_recent("envA", "namespace", "default")
    prefs.save_gadget_url_recent("envA", "ghcr.io/x")
    prefs.add_gadget_to_history("envA", {"image": "x"})
    prefs.save_k8s_recent("envB", "namespace", "default")

    assert prefs.cleanup_environment("envA") == 3

    assert prefs.list_environment_keys("envA") == set()
    assert prefs.get_k8s_recents("envB", "namespace") == ["default"]
