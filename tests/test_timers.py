"""Tests for the timer controller."""

from chipcore import tick, sound_active


def test_tick_decrements_both(fresh_state):
    """Both nonzero timers count down by one."""
    state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 5, sound_timer=fresh_state.sound_timer + 2)

    state = tick(state)

    assert state.delay_timer == 4
    assert state.sound_timer == 1


def test_tick_stops_at_zero(fresh_state):
    """A zero timer stays at zero."""
    state = tick(fresh_state)

    assert state.delay_timer == 0
    assert state.sound_timer == 0


def test_timers_independent(fresh_state):
    """One timer reaching zero does not affect the other."""
    state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 3, sound_timer=fresh_state.sound_timer + 1)

    state = tick(tick(state))

    assert state.delay_timer == 1
    assert state.sound_timer == 0


def test_sound_active(fresh_state):
    """Sound plays while the sound timer is nonzero."""
    state = fresh_state.replace(sound_timer=fresh_state.sound_timer + 1)
    assert sound_active(state)
    assert not sound_active(tick(state))
