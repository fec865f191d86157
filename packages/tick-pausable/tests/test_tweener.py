"""Tests for the Tweener primitive and easing curves."""

from dataclasses import dataclass

import pytest
from tick_pausable import EASINGS, ManualClock, Tweener
from tick_pausable.easing import resolve_easing


@dataclass
class Sprite:
    """Test object with animatable attributes."""

    x: float = 0.0
    y: float = 0.0


class TestInterpolation:
    """Values move from their start toward the targets."""

    def test_linear_midpoint(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        tweener.animate(sprite, {"x": 100.0, "y": -50.0}, 1000)

        clock.advance(500)
        tweener.update()
        assert sprite.x == pytest.approx(50.0)
        assert sprite.y == pytest.approx(-25.0)

    def test_reaches_exact_target_and_completes(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite(x=10.0)
        done = []
        booking = tweener.animate(sprite, {"x": 20.0}, 100, done.append)

        clock.advance(150)
        assert tweener.update() == 1
        assert sprite.x == 20.0
        assert done == [sprite]
        assert not tweener.is_active(booking)
        assert tweener.pending == 0

    def test_start_value_captured_at_animate(self):
        """Interpolation starts from the value the object had when animate() ran."""
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite(x=40.0)
        tweener.animate(sprite, {"x": 60.0}, 200)

        clock.advance(100)
        tweener.update()
        assert sprite.x == pytest.approx(50.0)

    def test_mapping_objects(self):
        """Mutable mappings are animated through their items."""
        clock = ManualClock()
        tweener = Tweener(clock)
        props = {"alpha": 0.0}
        tweener.animate(props, {"alpha": 1.0}, 100)

        clock.advance(25)
        tweener.update()
        assert props["alpha"] == pytest.approx(0.25)

    def test_zero_duration_completes_on_next_update(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        done = []
        tweener.animate(sprite, {"x": 5.0}, 0, done.append)

        tweener.update()
        assert sprite.x == 5.0
        assert len(done) == 1

    def test_easing_applied(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        tweener.animate(sprite, {"x": 100.0}, 1000, easing="ease_in")

        clock.advance(500)
        tweener.update()
        assert sprite.x == pytest.approx(25.0)

    def test_callable_easing(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        tweener.animate(sprite, {"x": 100.0}, 1000, easing=lambda t: 0.0)

        clock.advance(999)
        tweener.update()
        assert sprite.x == 0.0

    def test_unknown_easing_rejected(self):
        tweener = Tweener(ManualClock())
        with pytest.raises(KeyError):
            tweener.animate(Sprite(), {"x": 1.0}, 100, easing="wobble")


class TestTweenerLifecycle:
    """Cancellation and re-entrant animation."""

    def test_cancel_freezes_value(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        done = []
        booking = tweener.animate(sprite, {"x": 100.0}, 1000, done.append)

        clock.advance(300)
        tweener.update()
        tweener.cancel(booking)
        clock.advance(1000)
        tweener.update()

        assert sprite.x == pytest.approx(30.0)
        assert done == []

    def test_cancel_is_idempotent(self):
        tweener = Tweener(ManualClock())
        booking = tweener.animate(Sprite(), {"x": 1.0}, 100)
        tweener.cancel(booking)
        tweener.cancel(booking)
        tweener.cancel(None)
        assert tweener.pending == 0

    def test_animate_from_completion_starts_at_finish_time(self):
        """A tween started inside on_complete begins where the last one ended."""
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()

        def again(obj):
            obj.x = 0.0
            tweener.animate(obj, {"x": 100.0}, 100)

        tweener.animate(sprite, {"x": 100.0}, 100, again)
        clock.advance(100)
        tweener.update()
        assert sprite.x == 0.0
        assert tweener.pending == 1

        clock.advance(50)
        tweener.update()
        assert sprite.x == pytest.approx(50.0)


class TestEasings:
    """Easing curves start at 0 and end at 1."""

    @pytest.mark.parametrize("name", sorted(EASINGS))
    def test_endpoints(self, name):
        fn = EASINGS[name]
        assert fn(0.0) == pytest.approx(0.0)
        assert fn(1.0) == pytest.approx(1.0)

    def test_ease_in_out_is_symmetric_at_midpoint(self):
        assert EASINGS["ease_in_out"](0.5) == pytest.approx(0.5)
        assert EASINGS["ease_in_out_cubic"](0.5) == pytest.approx(0.5)

    def test_ease_out_back_overshoots(self):
        assert max(EASINGS["ease_out_back"](t / 100) for t in range(101)) > 1.0

    def test_resolve_passes_callables_through(self):
        fn = lambda t: t  # noqa: E731
        assert resolve_easing(fn) is fn
        assert resolve_easing("linear") is EASINGS["linear"]


class TestTweenerCatchUp:
    """Chained tweens start where the previous one finished."""

    def test_chain_catches_up_in_one_update(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        restarts = []

        def again(obj):
            restarts.append(tweener.now())
            obj.x = 0.0
            tweener.animate(obj, {"x": 100.0}, 100, again)

        tweener.animate(sprite, {"x": 100.0}, 100, again)
        clock.advance(250)
        assert tweener.update() == 2
        assert restarts == [100.0, 200.0]
        assert sprite.x == pytest.approx(50.0)
        assert tweener.now() == 250.0

    def test_zero_length_chain_waits_for_next_update(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        done = []

        def again(obj):
            done.append(1)
            tweener.animate(obj, {"x": 1.0}, 0, again)

        tweener.animate(Sprite(), {"x": 1.0}, 0, again)
        tweener.update()
        tweener.update()
        assert done == [1, 1]

    def test_none_targets_are_skipped(self):
        clock = ManualClock()
        tweener = Tweener(clock)
        sprite = Sprite()
        tweener.animate(sprite, {"x": None, "y": 5.0}, 100)

        clock.advance(50)
        tweener.update()
        assert sprite.x == 0.0
        assert sprite.y == pytest.approx(2.5)

        clock.advance(50)
        tweener.update()
        assert sprite.x == 0.0
        assert sprite.y == 5.0
