from services.events import DATA_CHANGED, EventBus


def test_emit_calls_subscribers_with_payload():
    bus = EventBus()
    seen = []
    bus.subscribe(DATA_CHANGED, lambda **payload: seen.append(payload))

    assert bus.emit(DATA_CHANGED, entity="player", action="created") == 1
    assert seen == [{"entity": "player", "action": "created"}]


def test_failing_subscriber_is_isolated():
    bus = EventBus()
    seen = []

    def broken(**_):
        raise RuntimeError("boom")

    bus.subscribe(DATA_CHANGED, broken)
    bus.subscribe(DATA_CHANGED, lambda **payload: seen.append(payload))

    assert bus.emit(DATA_CHANGED, entity="match") == 1
    assert seen == [{"entity": "match"}]


def test_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(DATA_CHANGED, lambda **payload: seen.append(payload))

    unsubscribe()
    unsubscribe()

    assert bus.emit(DATA_CHANGED) == 0
    assert seen == []


def test_emit_without_subscribers():
    assert EventBus().emit("nothing") == 0
