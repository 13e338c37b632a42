"""Tests for the host-facing saturatable reaction wheel."""

import logging

import numpy as np
import pytest

from rwsat import (
    ClampPolicy,
    MomentumState,
    SaturatableReactionWheel,
    WheelConfig,
    WheelSettings,
    WheelState,
)

PITCH_ONLY = (1.0, 0.0, 0.0)


class TestInitialization:
    def test_derived_quantities(self, wheel_config):
        wheel = SaturatableReactionWheel(wheel_config)
        assert wheel.saturation_limit == pytest.approx(10.0)
        assert np.array_equal(wheel.momentum, np.zeros(3))
        assert wheel.state is WheelState.ACTIVE
        assert not wheel.can_force_discharge

    def test_default_config(self):
        wheel = SaturatableReactionWheel()
        assert wheel.saturation_limit == pytest.approx(1.0)

    def test_starts_disabled_in_atmosphere_when_configured(self, wheel_config):
        cfg = wheel_config.model_copy(
            update={"settings": WheelSettings(default_state_is_active=False)}
        )
        assert SaturatableReactionWheel(cfg, atmospheric_density=0.01).state is WheelState.DISABLED
        assert SaturatableReactionWheel(cfg, atmospheric_density=0.0).state is WheelState.ACTIVE

    def test_instances_do_not_share_configuration_state(self, wheel_config):
        a = SaturatableReactionWheel(wheel_config)
        b = SaturatableReactionWheel(wheel_config)
        a.step(0.1, np.eye(3), PITCH_ONLY)
        assert b.store.is_empty


class TestStep:
    def test_first_step_uses_current_store_for_available_torque(self, wheel_config, aligned_orientation):
        wheel = SaturatableReactionWheel(wheel_config)

        effective = wheel.step(0.1, aligned_orientation, PITCH_ONLY)

        assert np.allclose(wheel.momentum, [1.0, 0.0, 0.0])
        assert np.allclose(effective, [9.0, 10.0, 10.0])

    def test_growth_uses_previous_tick_torque(self, wheel_config, aligned_orientation):
        wheel = SaturatableReactionWheel(wheel_config)
        wheel.step(0.1, aligned_orientation, PITCH_ONLY)
        wheel.step(0.1, aligned_orientation, PITCH_ONLY)
        # second tick grows at 9 N*m
        assert wheel.momentum[0] == pytest.approx(1.9)

    def test_disabled_wheel_neither_grows_nor_delivers(self, wheel_config, aligned_orientation):
        wheel = SaturatableReactionWheel(wheel_config)
        wheel.set_active(False)

        effective = wheel.step(0.1, aligned_orientation, (1.0, 1.0, 1.0))

        assert wheel.store.is_empty
        assert np.array_equal(effective, np.zeros(3))
        assert np.allclose(wheel.available_torque, [10.0, 10.0, 10.0])

    def test_non_positive_dt_leaves_wheel_untouched(self, wheel_config, aligned_orientation):
        wheel = SaturatableReactionWheel(wheel_config)
        wheel.step(0.0, aligned_orientation, PITCH_ONLY)
        assert wheel.store.is_empty
        assert wheel.sim_time == 0.0

    def test_invalid_inputs_raise(self, wheel_config):
        wheel = SaturatableReactionWheel(wheel_config)
        with pytest.raises(ValueError):
            wheel.step(0.1, np.eye(2), PITCH_ONLY)
        with pytest.raises(ValueError):
            wheel.step(0.1, np.eye(3), (1.0, 0.0))
        with pytest.raises(ValueError):
            wheel.step("soon", np.eye(3), PITCH_ONLY)

    def test_clamp_policy_from_config(self, wheel_config, aligned_orientation):
        cfg = WheelConfig(
            max_torque=wheel_config.max_torque,
            momentum_clamp=ClampPolicy.SATURATION_LIMIT,
        )
        wheel = SaturatableReactionWheel(cfg)
        for _ in range(20):
            wheel.step(0.1, aligned_orientation, PITCH_ONLY)
        assert wheel.momentum[0] == pytest.approx(10.0)

    def test_decay_toggle_stops_bleed(self, aligned_orientation):
        cfg = WheelConfig(max_torque=(10.0, 10.0, 10.0), bleed_curve={"keys": [[0.0, 0.1]]})
        wheel = SaturatableReactionWheel(cfg, state=MomentumState(momentum_a=5.0))

        assert wheel.toggle_decay() is False
        wheel.step(0.1, aligned_orientation)
        assert wheel.momentum[0] == 5.0

        wheel.toggle_decay()
        wheel.step(0.1, aligned_orientation)
        assert wheel.momentum[0] == pytest.approx(4.9)


class TestDischarge:
    def test_engaged_discharge_suppresses_growth_and_torque(
        self, discharge_config, aligned_orientation, mono_pool
    ):
        wheel = SaturatableReactionWheel(discharge_config, state=MomentumState(momentum_a=1.0))
        assert wheel.set_discharge(True)

        effective = wheel.step(0.1, aligned_orientation, PITCH_ONLY, supply=mono_pool)

        assert wheel.momentum[0] == pytest.approx(0.9)
        assert np.array_equal(effective, np.zeros(3))
        assert wheel.last_discharge is not None
        assert mono_pool.total("Mono") < 100.0

    def test_discharge_without_supply_disengages(self, discharge_config, aligned_orientation):
        wheel = SaturatableReactionWheel(discharge_config, state=MomentumState(momentum_a=1.0))
        wheel.toggle_discharge()

        wheel.step(0.1, aligned_orientation)

        assert not wheel.discharge_engaged
        assert wheel.momentum[0] == 1.0

    def test_toggle_without_capability(self, wheel_config):
        wheel = SaturatableReactionWheel(wheel_config)
        assert wheel.toggle_discharge() is False
        assert not wheel.discharge_engaged

    def test_toggle_twice_disengages(self, discharge_config):
        wheel = SaturatableReactionWheel(discharge_config)
        assert wheel.toggle_discharge() is True
        assert wheel.toggle_discharge() is False


class TestPersistence:
    def test_save_and_restore(self, wheel_config, aligned_orientation):
        wheel = SaturatableReactionWheel(wheel_config)
        wheel.step(0.1, aligned_orientation, (1.0, -1.0, 0.5))
        wheel.toggle_decay()

        state = MomentumState.model_validate_json(wheel.save_state().model_dump_json())
        restored = SaturatableReactionWheel(wheel_config, state=state)

        assert np.array_equal(restored.momentum, wheel.momentum)
        assert restored.decay_enabled is False

    def test_load_state_updates_shared_store(self, wheel_config, aligned_orientation):
        cfg = WheelConfig(
            max_torque=wheel_config.max_torque,
            torque_curve=wheel_config.torque_curve,
            momentum_clamp=ClampPolicy.SATURATION_LIMIT,
        )
        wheel = SaturatableReactionWheel(cfg)
        wheel.load_state(MomentumState(momentum_a=15.0, decay_enabled=False))

        assert wheel.momentum[0] == 15.0
        assert wheel.decay_enabled is False
        assert wheel.limiter.store is wheel.store
        wheel.step(0.1, aligned_orientation)
        assert wheel.available_torque[0] == 0.0

    def test_telemetry_caps_display_fraction(self, wheel_config):
        wheel = SaturatableReactionWheel(wheel_config, state=MomentumState(momentum_a=-20.0))
        snap = wheel.telemetry()
        assert snap.saturation_fraction[0] == pytest.approx(2.0)
        assert snap.saturation_fraction_display[0] == 1.0
        assert snap.momentum == (-20.0, 0.0, 0.0)
        assert snap.state == "ACTIVE"


class TestReporting:
    def test_describe_capacity_and_constant_bleed(self, wheel_config):
        text = SaturatableReactionWheel(wheel_config).describe()
        assert "Capacity: 10.0 N*m*s" in text
        assert "Bleed Rate: 0.0%" in text
        assert "Requires:" not in text

    def test_describe_lists_axis_torques_in_control_order(self):
        text = SaturatableReactionWheel(WheelConfig(max_torque=(1.0, 2.0, 3.0))).describe()
        lines = text.splitlines()
        assert lines[:3] == [
            "Pitch Torque: 1.0 N*m",
            "Yaw Torque: 2.0 N*m",
            "Roll Torque: 3.0 N*m",
        ]

    def test_describe_bleed_range_and_resources(self, discharge_config):
        cfg = WheelConfig(
            max_torque=discharge_config.max_torque,
            recovery_rate=discharge_config.recovery_rate,
            bleed_curve={"keys": [[0.0, 0.01], [1.0, 0.1]]},
            resources="Mono,0.5;Xenon,2",
        )
        text = SaturatableReactionWheel(cfg).describe()
        assert "Min: 1.0%" in text
        assert "Max: 10.0%" in text
        assert "Discharge Rate: 10.0% / s" in text
        assert " - Mono: 30.0 /min" in text
        assert " - Xenon: 2.0 /s" in text

    def test_log_dump_follows_interval(self, wheel_config, aligned_orientation, caplog):
        cfg = wheel_config.model_copy(
            update={"settings": WheelSettings(log_dump=True, log_interval=1.0)}
        )
        wheel = SaturatableReactionWheel(cfg)

        with caplog.at_level(logging.INFO, logger="rwsat.simulation.reaction_wheel"):
            for _ in range(4):
                wheel.step(0.5, aligned_orientation)

        dumps = [r for r in caplog.records if "test_wheel t=" in r.getMessage()]
        assert len(dumps) == 2

    @pytest.mark.parametrize("display", [True, False])
    def test_log_line_shows_available_torque_when_enabled(
        self, wheel_config, aligned_orientation, caplog, display
    ):
        cfg = wheel_config.model_copy(
            update={
                "settings": WheelSettings(log_dump=True, display_current_torque=display)
            }
        )
        wheel = SaturatableReactionWheel(cfg)

        with caplog.at_level(logging.INFO, logger="rwsat.simulation.reaction_wheel"):
            wheel.step(0.5, aligned_orientation)

        assert wheel.telemetry().display_current_torque is display
        assert ("avail(p/y/r)=[10.000, 10.000, 10.000]" in caplog.text) is display
