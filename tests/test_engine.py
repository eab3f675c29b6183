"""Tests for the WodTimer engine.

Covers: start / stop / reset / select_mode transitions, the five
protocols driven through the engine, parameter handling, signals, and
the run_ended payload.
"""

import pytest

from wodtimer.timer.config import (
    ConfigError, TimerConfig, TimerMode, DEFAULT_CONFIGS,
)
from wodtimer.timer.engine import TimerEngine
from wodtimer.timer.state import Phase, TimerState, TimerStatus, initial_state

from helpers import SignalCollector, deliver_ticks


AMRAP_60 = TimerConfig(TimerMode.AMRAP, target_seconds=60)
EMOM_60 = TimerConfig(TimerMode.EMOM, interval_seconds=60)
TABATA = TimerConfig(TimerMode.TABATA, work_seconds=20, rest_seconds=10, total_rounds=8)
FOR_TIME = TimerConfig(TimerMode.FOR_TIME)


# ═══════════════════════════════════════════════════════════════════════════
#  STATE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state_is_idle(self, engine):
        assert engine.status == TimerStatus.IDLE
        assert engine.mode == TimerMode.AMRAP
        assert engine.state.remaining_seconds == DEFAULT_CONFIGS[TimerMode.AMRAP].target_seconds
        assert engine.is_running is False

    def test_start_with_config_runs(self, engine):
        engine.start(AMRAP_60)
        assert engine.status == TimerStatus.RUNNING
        assert engine.config == AMRAP_60
        assert engine.state.remaining_seconds == 60
        assert engine._clock.is_active

    def test_stop_pauses_and_keeps_counters(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 5)
        engine.stop()
        assert engine.status == TimerStatus.PAUSED
        assert engine.state.elapsed_seconds == 5
        assert engine.state.remaining_seconds == 55
        assert not engine._clock.is_active

    def test_ticks_while_paused_are_ignored(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 5)
        engine.stop()
        deliver_ticks(engine, 5)
        assert engine.state.remaining_seconds == 55

    def test_start_without_config_resumes(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 5)
        engine.stop()
        engine.start()
        assert engine.status == TimerStatus.RUNNING
        assert engine.state.remaining_seconds == 55
        assert engine.state.elapsed_seconds == 5

    def test_start_with_config_while_paused_restarts(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 5)
        engine.stop()
        engine.start(TimerConfig(TimerMode.AMRAP, target_seconds=120))
        assert engine.state.remaining_seconds == 120
        assert engine.state.elapsed_seconds == 0

    def test_start_is_noop_when_already_running(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 3)
        engine.start()
        assert engine.state.remaining_seconds == 57

    def test_start_from_idle_uses_stored_config(self, engine):
        engine.start()
        assert engine.state.remaining_seconds == 600
        assert engine.status == TimerStatus.RUNNING

    def test_start_after_finish_begins_fresh(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 60)
        engine.start()
        assert engine.status == TimerStatus.RUNNING
        assert engine.state.remaining_seconds == 60
        assert engine.state.finished is False

    def test_stop_when_idle_is_noop(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.stop()
        assert engine.status == TimerStatus.IDLE
        assert len(c) == 0

    def test_state_changed_fires_on_operations(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.start(AMRAP_60)
        assert c.last.status == TimerStatus.RUNNING
        engine.stop()
        assert c.last.status == TimerStatus.PAUSED
        engine.reset()
        assert c.last.status == TimerStatus.IDLE

    def test_stop_before_first_tick_is_paused(self, engine):
        engine.start(AMRAP_60)
        engine.stop()
        assert engine.status == TimerStatus.PAUSED
        engine.start()
        assert engine.status == TimerStatus.RUNNING
        assert engine.state.remaining_seconds == 60

    def test_display_follows_state(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 1)
        assert engine.display == "00:59"
        deliver_ticks(engine, 59)
        assert engine.display == "TIME!"


# ═══════════════════════════════════════════════════════════════════════════
#  PROTOCOL SCENARIOS
# ═══════════════════════════════════════════════════════════════════════════


class TestScenarios:

    def test_amrap_60_ticks(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 60)
        assert engine.state.remaining_seconds == 0
        assert engine.state.finished is True
        assert engine.state.running is False
        assert not engine._clock.is_active

    def test_amrap_stops_taking_ticks(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 60)
        finished_state = engine.state
        deliver_ticks(engine, 5)
        assert engine.state == finished_state

    def test_emom_130_ticks(self, engine):
        engine.start(EMOM_60)
        deliver_ticks(engine, 130)
        assert engine.state.round == 3
        assert engine.state.remaining_seconds == 50
        assert engine.state.finished is False
        assert engine.is_running

    def test_tabata_finishes_on_tick_240(self, engine):
        engine.start(TABATA)
        deliver_ticks(engine, 239)
        assert engine.state.finished is False
        deliver_ticks(engine, 1)
        assert engine.state.finished is True
        assert engine.state.running is False

    def test_fortime_125_ticks(self, engine):
        engine.start(FOR_TIME)
        deliver_ticks(engine, 125)
        assert engine.state.elapsed_seconds == 125
        assert engine.state.finished is False
        assert engine.state.running is True
        assert engine.display == "02:05"

    def test_fortime_frozen_after_stop(self, engine):
        engine.start(FOR_TIME)
        deliver_ticks(engine, 30)
        engine.stop()
        deliver_ticks(engine, 30)
        assert engine.state.elapsed_seconds == 30
        assert engine.state.finished is False

    def test_tabata_reset_mid_run(self, engine):
        engine.start(TABATA)
        deliver_ticks(engine, 100)
        engine.reset()
        assert engine.state == TimerState(
            mode=TimerMode.TABATA,
            running=False,
            elapsed_seconds=0,
            remaining_seconds=20,
            phase=Phase.WORK,
            round=1,
            finished=False,
        )


# ═══════════════════════════════════════════════════════════════════════════
#  RESET / MODE SWITCH
# ═══════════════════════════════════════════════════════════════════════════


class TestReset:

    @pytest.mark.parametrize("ticks,pause", [(0, False), (100, False), (100, True), (240, False)])
    def test_reset_from_any_state(self, engine, ticks, pause):
        engine.start(TABATA)
        deliver_ticks(engine, ticks)
        if pause:
            engine.stop()
        engine.reset()
        assert engine.state == initial_state(TABATA)
        assert engine.status == TimerStatus.IDLE
        assert not engine._clock.is_active

    def test_reset_twice_is_identical(self, engine):
        engine.start(EMOM_60)
        deliver_ticks(engine, 75)
        engine.reset()
        first = engine.state
        engine.reset()
        assert engine.state == first


class TestSelectMode:

    def test_switch_clears_progress(self, engine):
        engine.start(TABATA)
        deliver_ticks(engine, 45)
        assert engine.state.round == 2
        engine.select_mode(TimerMode.AMRAP)
        state = engine.state
        assert state.mode == TimerMode.AMRAP
        assert state.elapsed_seconds == 0
        assert state.round == 1
        assert state.phase == Phase.WORK
        assert state.finished is False
        assert state.running is False
        assert not engine._clock.is_active

    def test_switch_from_finished(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 60)
        engine.select_mode(TimerMode.TABATA)
        assert engine.state == initial_state(DEFAULT_CONFIGS[TimerMode.TABATA])

    def test_reselecting_same_mode_resets(self, engine):
        engine.start(FOR_TIME)
        deliver_ticks(engine, 10)
        engine.select_mode(TimerMode.FOR_TIME)
        assert engine.state.elapsed_seconds == 0
        assert engine.status == TimerStatus.IDLE

    def test_switch_uses_stored_config(self, engine):
        engine.set_config(TimerConfig(TimerMode.EMOM, interval_seconds=45))
        engine.select_mode(TimerMode.EMOM)
        assert engine.config.interval_seconds == 45
        assert engine.state.remaining_seconds == 45


# ═══════════════════════════════════════════════════════════════════════════
#  CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════


class TestConfiguration:

    def test_invalid_config_rejected_at_start(self, engine):
        with pytest.raises(ConfigError):
            engine.start(TimerConfig(TimerMode.EMOM, interval_seconds=0))
        assert engine.status == TimerStatus.IDLE
        assert engine.mode == TimerMode.AMRAP
        assert not engine._clock.is_active

    def test_invalid_config_leaves_running_run_alone(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 3)
        with pytest.raises(ConfigError):
            engine.start(TimerConfig(TimerMode.TABATA, work_seconds=20))
        assert engine.status == TimerStatus.RUNNING
        assert engine.state.remaining_seconds == 57

    def test_set_config_refreshes_idle_display(self, engine):
        engine.set_config(TimerConfig(TimerMode.AMRAP, target_seconds=90))
        assert engine.state.remaining_seconds == 90
        assert engine.display == "01:30"

    def test_set_config_does_not_touch_running_run(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 10)
        engine.set_config(TimerConfig(TimerMode.AMRAP, target_seconds=300))
        assert engine.config == AMRAP_60
        assert engine.state.remaining_seconds == 50
        assert engine.config_for(TimerMode.AMRAP).target_seconds == 300

    def test_parameters_changed_while_paused_apply_after_reset(self, engine):
        engine.start(AMRAP_60)
        deliver_ticks(engine, 10)
        engine.stop()
        engine.set_config(TimerConfig(TimerMode.AMRAP, target_seconds=300))
        assert engine.state.remaining_seconds == 50
        engine.reset()
        assert engine.state.remaining_seconds == 300

    def test_set_config_after_stop_before_first_tick(self, engine):
        engine.start(AMRAP_60)
        engine.stop()
        engine.set_config(TimerConfig(TimerMode.AMRAP, target_seconds=300))
        assert engine.config == AMRAP_60
        assert engine.state.remaining_seconds == 60
        assert engine.status == TimerStatus.PAUSED

    def test_set_config_for_other_mode_is_stored_only(self, engine):
        engine.set_config(TimerConfig(TimerMode.EMOM, interval_seconds=30))
        assert engine.mode == TimerMode.AMRAP
        assert engine.config_for(TimerMode.EMOM).interval_seconds == 30

    def test_set_config_rejects_invalid(self, engine):
        with pytest.raises(ConfigError):
            engine.set_config(TimerConfig(TimerMode.AMRAP, target_seconds=0))
        assert engine.config_for(TimerMode.AMRAP) == DEFAULT_CONFIGS[TimerMode.AMRAP]

    def test_constructor_configs(self, qapp):
        engine = TimerEngine(
            mode=TimerMode.EMOM,
            configs={TimerMode.EMOM: TimerConfig(TimerMode.EMOM, interval_seconds=90)},
        )
        assert engine.state.remaining_seconds == 90

    def test_constructor_rejects_invalid_configs(self, qapp):
        with pytest.raises(ConfigError):
            TimerEngine(configs={
                TimerMode.EMOM: TimerConfig(TimerMode.EMOM, interval_seconds=-1),
            })


# ═══════════════════════════════════════════════════════════════════════════
#  SIGNALS / RUN REPORTING
# ═══════════════════════════════════════════════════════════════════════════


class TestSignals:

    def test_tick_signal_emits_state(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)
        engine.start(AMRAP_60)
        deliver_ticks(engine, 2)
        assert len(c) == 2
        assert c.last == engine.state

    def test_finished_fires_once(self, engine):
        c = SignalCollector()
        engine.finished.connect(c)
        engine.start(AMRAP_60)
        deliver_ticks(engine, 70)
        assert len(c) == 1
        assert c.last.finished is True

    def test_emom_never_fires_finished(self, engine):
        c = SignalCollector()
        engine.finished.connect(c)
        engine.start(EMOM_60)
        deliver_ticks(engine, 600)
        assert len(c) == 0

    def test_run_ended_on_finish(self, engine):
        c = SignalCollector()
        engine.run_ended.connect(c)
        engine.start(TABATA)
        deliver_ticks(engine, 240)

        assert len(c) == 1
        data = c.last
        assert data["mode"] == "tabata"
        assert data["finished"] is True
        assert data["elapsed_seconds"] == 240
        assert data["round_number"] == 8
        assert data["config"]["total_rounds"] == 8
        assert data["start_time"] is not None
        assert data["end_time"] >= data["start_time"]

    def test_run_ended_on_reset(self, engine):
        c = SignalCollector()
        engine.run_ended.connect(c)
        engine.start(FOR_TIME)
        deliver_ticks(engine, 42)
        engine.stop()
        engine.reset()

        assert len(c) == 1
        assert c.last["mode"] == "fortime"
        assert c.last["finished"] is False
        assert c.last["elapsed_seconds"] == 42

    def test_run_ended_on_mode_switch(self, engine):
        c = SignalCollector()
        engine.run_ended.connect(c)
        engine.start(EMOM_60)
        deliver_ticks(engine, 125)
        engine.select_mode(TimerMode.TABATA)
        assert len(c) == 1
        assert c.last["round_number"] == 3

    def test_no_run_ended_without_progress(self, engine):
        c = SignalCollector()
        engine.run_ended.connect(c)
        engine.start(AMRAP_60)
        engine.reset()
        engine.reset()
        assert len(c) == 0

    def test_reset_after_finish_does_not_report_twice(self, engine):
        c = SignalCollector()
        engine.run_ended.connect(c)
        engine.start(AMRAP_60)
        deliver_ticks(engine, 60)
        engine.reset()
        assert len(c) == 1
