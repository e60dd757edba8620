from sales_tracker.dev_launcher import Handler, Restarter


def test_only_source_files_trigger_restart():
    assert Handler.is_relevant("/app/sales_tracker/main.py")
    assert not Handler.is_relevant("/app/sales_tracker/__pycache__/main.cpython-312.py")
    assert not Handler.is_relevant("/app/.git/hooks/pre-commit.py")
    assert not Handler.is_relevant("/app/sales_tracker/data/sales_tracker.json")


def test_restarts_are_debounced(qapp, tmp_path):
    r = Restarter(str(tmp_path), debounce_time=1.0)
    try:
        r.last_restart = 100.0
        assert not r.should_restart(100.5)
        assert r.should_restart(101.5)
    finally:
        r.stop()
