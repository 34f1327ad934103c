from formcheck.core.stores import ErrorStore, MemoryErrorStore, SessionErrorStore, error_key
from formcheck.core.validation import messages
from formcheck.engines import ValidationEngine


def test_error_count_zero_when_nothing_failed(make_engine, error_store):
    engine = make_engine({"name": "alice", "age": "30"})
    engine.required("name")
    engine.valid_int("age")

    assert engine.error_count() == 0
    assert error_store.sets() == []


def test_error_count_counts_distinct_fields_and_flushes(make_engine, error_store):
    engine = make_engine({"name": "", "age": "x", "pw": "abcd"})
    engine.required("name")
    engine.valid_int("age")
    engine.valid_string("pw", min_size=5)
    engine.valid_string("pw", max_size=2)

    assert engine.error_count() == 3
    assert sorted(error_store.sets()) == sorted([
        ("set", "validator_error_name", f" * {messages.REQUIRED}"),
        ("set", "validator_error_age", f" * {messages.INVALID_VALUE}"),
        ("set", "validator_error_pw", f" * {messages.too_long(2)}"),
    ])


def test_error_count_flushes_each_message_once_per_call(make_engine, error_store):
    engine = make_engine({"name": ""})
    engine.required("name")

    engine.error_count()
    engine.error_count()

    assert error_store.sets() == [
        ("set", "validator_error_name", f" * {messages.REQUIRED}"),
        ("set", "validator_error_name", f" * {messages.REQUIRED}"),
    ]


def test_native_failures_are_staged_until_error_count(make_engine, error_store):
    engine = make_engine({"name": ""})
    engine.required("name")

    assert error_store.sets() == []
    assert engine.errors == {"name": messages.REQUIRED}


def test_set_error_writes_immediately(make_engine, error_store):
    engine = make_engine({})
    engine.set_error("captcha", "Captcha failed")

    assert error_store.data == {"validator_error_captcha": " * Captcha failed"}
    assert engine.errors == {"captcha": "Captcha failed"}
    assert engine.error_count() == 1


def test_success_forgets_previous_message(error_store, mx_resolver):
    error_store.set("validator_error_name", " * old")
    engine = ValidationEngine({"name": "alice"}, error_store=error_store, mx_resolver=mx_resolver)

    engine.required("name")

    assert "validator_error_name" not in error_store.data


def test_success_does_not_clear_in_memory_error(make_engine):
    engine = make_engine({"name": ""})
    engine.required("name")
    engine.values["name"] = "alice"
    engine.required("name")

    assert engine.errors == {"name": messages.REQUIRED}


def test_custom_key_prefix(make_engine, error_store):
    engine = make_engine({"name": ""}, key_prefix="signup.")
    engine.required("name")
    engine.error_count()

    assert list(error_store.data) == ["signup.name"]


def test_default_store_is_memory():
    engine = ValidationEngine({"name": ""})
    engine.required("name")
    engine.error_count()

    assert isinstance(engine.error_store, MemoryErrorStore)
    assert engine.error_store.error_for("name") == f" * {messages.REQUIRED}"


def test_session_store_over_plain_dict():
    session = {"other": 1}
    store = SessionErrorStore(session)

    store.set(error_key("email"), " * bad")
    assert session["validator_error_email"] == " * bad"
    assert store.error_for("email") == " * bad"

    store.delete(error_key("email"))
    store.delete(error_key("email"))
    assert session == {"other": 1}


def test_stores_satisfy_protocol():
    assert isinstance(MemoryErrorStore(), ErrorStore)
    assert isinstance(SessionErrorStore({}), ErrorStore)


def test_memory_store_helpers():
    store = MemoryErrorStore()
    store.set("k", "v")

    assert "k" in store
    assert len(store) == 1
    store.clear()
    assert len(store) == 0
