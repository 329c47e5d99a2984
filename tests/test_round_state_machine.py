"""
回合状态机测试
Round State Machine Tests
"""
from gesture_rps.game.state_machine import RoundState, RoundStateMachine


def test_happy_path_transitions():
    machine = RoundStateMachine()
    for state in (RoundState.COUNTDOWN, RoundState.CAPTURING, RoundState.RESOLVING,
                  RoundState.SHOWING_RESULT, RoundState.IDLE):
        assert machine.transition_to(state)
    assert machine.get_current_state() is RoundState.IDLE
    assert machine.get_previous_state() is RoundState.SHOWING_RESULT


def test_invalid_transition_is_rejected():
    machine = RoundStateMachine()
    assert not machine.transition_to(RoundState.RESOLVING)
    assert machine.is_in_state(RoundState.IDLE)
    assert not machine.can_transition_to(RoundState.SHOWING_RESULT)


def test_showing_result_can_start_a_new_countdown():
    machine = RoundStateMachine(initial_state=RoundState.SHOWING_RESULT)
    assert machine.can_transition_to(RoundState.COUNTDOWN)


def test_failures_can_return_to_idle_from_every_active_state():
    for state in (RoundState.COUNTDOWN, RoundState.CAPTURING, RoundState.RESOLVING):
        machine = RoundStateMachine(initial_state=state)
        assert machine.transition_to(RoundState.IDLE)


def test_reset_forces_state_and_notifies_listeners():
    machine = RoundStateMachine(initial_state=RoundState.CAPTURING)
    seen = []
    machine.add_listener(lambda old, new: seen.append((old, new)))

    machine.reset()

    assert machine.is_in_state(RoundState.IDLE)
    assert seen == [(RoundState.CAPTURING, RoundState.IDLE)]


def test_reset_in_same_state_is_silent():
    machine = RoundStateMachine()
    seen = []
    machine.add_listener(lambda old, new: seen.append(new))
    machine.reset()
    assert seen == []


def test_listener_errors_do_not_block_transition():
    machine = RoundStateMachine()

    def broken(old, new):
        raise RuntimeError("listener failed")

    machine.add_listener(broken)
    assert machine.transition_to(RoundState.COUNTDOWN)
    assert machine.is_in_state(RoundState.COUNTDOWN)
