"""Property tests: dispatch invariants of CustomEvent.fire().

For an arbitrary list of subscriber behaviours (return normally, veto,
raise) the pass must:

- call subscribers in subscribe order up to and including the first veto
  (LIST) or the first veto/raise (FLAT);
- under LIST, collect every failure that happened before the stop, in
  call order, into one ChainedError;
- return False iff the pass was vetoed.
"""

import pytest
from hypothesis import given, settings, strategies as st

from custom_event.core.enums import Signature
from custom_event.core.errors import ChainedError
from custom_event.core.ids import CounterIdAllocator
from custom_event.event.custom_event import CustomEvent

OK, VETO, RAISE = "ok", "veto", "raise"

behaviours = st.lists(st.sampled_from([OK, VETO, RAISE]), max_size=12)


def _build(signature: Signature, plan: list[str]):
    event = CustomEvent(
        "prop", silent=True, signature=signature, id_allocator=CounterIdAllocator()
    )
    calls: list[int] = []

    def make(index: int, behaviour: str):
        def listener(context, *args):
            calls.append(index)
            if behaviour == RAISE:
                raise ValueError(str(index))
            if behaviour == VETO:
                return False
            return True

        return listener

    for i, b in enumerate(plan):
        event.subscribe(make(i, b))
    return event, calls


@given(plan=behaviours)
@settings(max_examples=200)
def test_list_pass(plan):
    event, calls = _build(Signature.LIST, plan)

    stop = plan.index(VETO) + 1 if VETO in plan else len(plan)
    expected_calls = list(range(stop))
    expected_errors = [str(i) for i in expected_calls if plan[i] == RAISE]

    if expected_errors:
        with pytest.raises(ChainedError) as info:
            event.fire()
        assert [str(e) for e in info.value] == expected_errors
    else:
        assert event.fire() is (VETO not in plan)

    assert calls == expected_calls
    assert event.fired is True


@given(plan=behaviours)
@settings(max_examples=200)
def test_flat_pass(plan):
    event, calls = _build(Signature.FLAT, plan)

    stops = [i for i, b in enumerate(plan) if b != OK]
    stop = stops[0] + 1 if stops else len(plan)

    if stops and plan[stops[0]] == RAISE:
        with pytest.raises(ValueError):
            event.fire()
    else:
        assert event.fire() is (not stops)

    assert calls == list(range(stop))


@given(
    n_before=st.integers(min_value=0, max_value=6),
    n_added=st.integers(min_value=1, max_value=6),
)
@settings(max_examples=50)
def test_subscribers_added_mid_fire_wait_for_next_pass(n_before, n_added):
    event = CustomEvent("prop", silent=True, id_allocator=CounterIdAllocator())
    calls: list[str] = []

    def late(context, *args):
        calls.append("late")

    def adder(context, *args):
        calls.append("adder")
        for _ in range(n_added):
            event.subscribe(late)

    for _ in range(n_before):
        event.subscribe(lambda context, *args: calls.append("before"))
    event.subscribe(adder)

    event.fire()
    assert calls.count("late") == 0
    assert calls.count("before") == n_before

    calls.clear()
    event.unsubscribe(adder)
    event.fire()
    assert calls.count("late") == n_added


@given(n=st.integers(min_value=0, max_value=20))
def test_unsubscribe_all_count(n):
    event = CustomEvent("prop", silent=True)
    for _ in range(n):
        event.subscribe(lambda context, *args: None)
    assert event.unsubscribe_all() == n
    assert event.fire() is True
